"""
AuditDispatcher queueing and draining, with an in-memory sink.
"""
import pytest

from audit.dispatch import AuditDispatcher, MODE_ASYNC, MODE_SYNC
from core.dto import AuditRecord


def _record(n):
    return AuditRecord(
        owner_id=1, action='CREATE', entity_type='expense', entity_id=str(n),
        new={'id': n}, description=f'Created expense with ID {n}',
    )


class ListSink:
    def __init__(self, fail_on=()):
        self.saved = []
        self.fail_on = set(fail_on)

    def __call__(self, record):
        if record.entity_id in self.fail_on:
            raise RuntimeError(f'cannot write {record.entity_id}')
        self.saved.append(record)


@pytest.fixture
def sink():
    return ListSink()


@pytest.fixture
def queued(sink, monkeypatch):
    """Async dispatcher whose background job never starts"""
    dispatcher = AuditDispatcher(sink=sink, maxsize=3, mode=MODE_ASYNC)
    monkeypatch.setattr(dispatcher, '_ensure_started', lambda: None)
    return dispatcher


def test_sync_mode_writes_inline(sink):
    dispatcher = AuditDispatcher(sink=sink, mode=MODE_SYNC)

    assert dispatcher.submit(_record(1)) is True
    assert [r.entity_id for r in sink.saved] == ['1']
    assert dispatcher.written == 1


def test_mode_defaults_to_setting(settings, sink):
    settings.AUDIT_DISPATCH_MODE = MODE_ASYNC
    assert AuditDispatcher(sink=sink).mode == MODE_ASYNC

    settings.AUDIT_DISPATCH_MODE = MODE_SYNC
    assert AuditDispatcher(sink=sink).mode == MODE_SYNC


def test_async_submit_queues_until_flush(queued, sink):
    assert queued.submit(_record(1)) is True
    assert queued.submit(_record(2)) is True

    assert sink.saved == []
    assert queued.pending == 2

    assert queued.flush() == 2
    assert [r.entity_id for r in sink.saved] == ['1', '2']
    assert queued.pending == 0


def test_full_queue_drops_newest(queued, sink):
    for n in range(1, 4):
        assert queued.submit(_record(n)) is True

    assert queued.submit(_record(4)) is False
    assert queued.dropped == 1

    queued.flush()
    assert [r.entity_id for r in sink.saved] == ['1', '2', '3']


def test_flush_respects_batch_size(queued, sink):
    for n in range(1, 4):
        queued.submit(_record(n))

    assert queued.flush(max_items=2) == 2
    assert queued.pending == 1


def test_failed_write_does_not_stop_drain(sink, monkeypatch):
    sink.fail_on.add('2')
    dispatcher = AuditDispatcher(sink=sink, maxsize=10, mode=MODE_ASYNC)
    monkeypatch.setattr(dispatcher, '_ensure_started', lambda: None)
    for n in range(1, 4):
        dispatcher.submit(_record(n))

    assert dispatcher.flush() == 2
    assert [r.entity_id for r in sink.saved] == ['1', '3']
    assert dispatcher.failed == 1
    assert dispatcher.written == 2


def test_sync_failure_returns_false(audit_log):
    dispatcher = AuditDispatcher(sink=ListSink(fail_on={'1'}), mode=MODE_SYNC)

    assert dispatcher.submit(_record(1)) is False
    assert dispatcher.failed == 1
    assert 'cannot write 1' in audit_log.text


@pytest.mark.django_db
def test_stop_writes_remaining_entries(queued, sink):
    queued.submit(_record(1))
    queued.submit(_record(2))

    queued.stop()

    assert len(sink.saved) == 2
    assert queued.pending == 0


@pytest.mark.django_db
def test_default_sink_persists_to_store(owner):
    from audit.models import AuditEntry

    dispatcher = AuditDispatcher(mode=MODE_SYNC)
    record = _record(5)
    record.owner_id = owner.pk

    assert dispatcher.submit(record) is True

    entry = AuditEntry.objects.get()
    assert entry.entity_id == '5'
    assert entry.changes_new == {'id': 5}
    assert entry.timestamp is not None
