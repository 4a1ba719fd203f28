from django.contrib import admin

# Customize admin site
admin.site.site_header = "Ledgerbook - Admin Panel"
admin.site.site_title = "Ledgerbook Admin"
admin.site.index_title = "Bookkeeping Administration"
