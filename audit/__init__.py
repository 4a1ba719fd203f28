"""
Change Tracking

Records who created, updated or deleted which bookkeeping record, with
before/after snapshots, and serves that history back per owner.
"""
