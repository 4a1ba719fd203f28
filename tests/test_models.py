import pytest
from django.core.exceptions import PermissionDenied, ValidationError

from audit.models import AuditEntry
from core.dto import AuditRecord

pytestmark = pytest.mark.django_db


@pytest.fixture
def entry(owner):
    return AuditEntry.objects.append(AuditRecord(
        owner_id=owner.pk, action='CREATE', entity_type='expense', entity_id='1',
        new={'id': 1, 'amount': '10.00'}, description='Created expense with ID 1',
    ))


def test_entries_cannot_be_modified(entry):
    entry.description = 'edited'
    with pytest.raises(PermissionDenied):
        entry.save()

    with pytest.raises(PermissionDenied):
        AuditEntry.objects.filter(pk=entry.pk).update(description='edited')

    assert AuditEntry.objects.get(pk=entry.pk).description == 'Created expense with ID 1'


def test_entries_cannot_be_deleted(entry):
    with pytest.raises(PermissionDenied):
        entry.delete()

    with pytest.raises(PermissionDenied):
        AuditEntry.objects.all().delete()

    assert AuditEntry.objects.count() == 1


@pytest.mark.parametrize('overrides', [
    {'entity_id': ''},
    {'new': None},
    {'action': 'READ'},
    {'entity_type': 'invoice'},
])
def test_invalid_entries_are_rejected(owner, overrides):
    fields = dict(
        owner_id=owner.pk, action='UPDATE', entity_type='expense', entity_id='1',
        new={'id': 1}, description='Updated expense with ID 1',
    )
    fields.update(overrides)

    with pytest.raises(ValidationError):
        AuditEntry.objects.append(AuditRecord(**fields))

    assert AuditEntry.objects.count() == 0


def test_owner_deletion_cascades(entry, owner):
    owner.delete()

    assert AuditEntry.objects.count() == 0


def test_queryset_filters(owner, entry):
    AuditEntry.objects.append(AuditRecord(
        owner_id=owner.pk, action='UPDATE', entity_type='income', entity_id='2',
        old={'id': 2}, new={'id': 2}, description='Updated income with ID 2',
    ))
    entries = AuditEntry.objects.for_owner(owner)

    assert entries.for_entity_type('income').count() == 1
    assert entries.for_entity_id(1).get() == entry
    assert entries.for_action('UPDATE').get().entity_id == '2'
    assert entries.matching('CREATED EXPENSE').get() == entry
    assert entries.between(start=entry.timestamp, end=entry.timestamp).filter(pk=entry.pk).exists()
    assert entries.between().count() == 2
