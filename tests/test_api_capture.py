"""
End-to-end change capture through the bookkeeping API.
"""
from decimal import Decimal

import pytest

from audit.models import AuditEntry
from core.constants import EntityType

pytestmark = pytest.mark.django_db


def _create_expense(api, project, amount='5000'):
    response = api.post('/api/expenses/', {
        'project': project.id, 'amount': amount, 'date': '2024-02-10',
        'category': 'construction', 'subcategory': 'cement',
        'description': 'Cement', 'payment_mode': 'cash',
    })
    assert response.status_code == 201
    return response.data['expense']['id']


@pytest.mark.parametrize('entity_type', EntityType.ALL)
def test_successful_create_records_one_entry_per_entity_type(api, owner, create_payloads, entity_type):
    url, payload = create_payloads[entity_type]

    response = api.post(url, payload)

    assert response.status_code == 201
    entries = AuditEntry.objects.filter(entity_type=entity_type)
    assert entries.count() == 1
    entry = entries.get()
    assert entry.owner == owner
    assert entry.action == 'CREATE'
    assert entry.changes_old is None

    body = response.json()
    entity = body if entity_type == EntityType.INCOME else next(
        value for key, value in body.items() if key != 'message'
    )
    assert entry.entity_id == str(entity['id'])
    assert entry.changes_new == entity
    assert entry.description == f"Created {entity_type} with ID {entity['id']}"
    assert entry.user_agent == 'pytest-agent'
    assert entry.ip_address == '10.0.0.7'


def test_expense_lifecycle_scenario(api, project):
    # Scenario A: create
    expense_id = _create_expense(api, project)

    response = api.get('/api/audit-logs/', {'entityId': expense_id})
    assert response.status_code == 200
    logs = response.data['auditLogs']
    assert len(logs) == 1
    created = logs[0]
    assert created['action'] == 'CREATE'
    assert created['entityId'] == str(expense_id)
    assert created['changes']['old'] is None
    assert Decimal(created['changes']['new']['amount']) == Decimal('5000')

    # Scenario B: update
    response = api.patch(f'/api/expenses/{expense_id}/', {'amount': '6000'})
    assert response.status_code == 200

    logs = api.get('/api/audit-logs/', {'entityId': expense_id}).data['auditLogs']
    assert [log['action'] for log in logs] == ['UPDATE', 'CREATE']
    updated = logs[0]
    assert Decimal(updated['changes']['old']['amount']) == Decimal('5000')
    assert Decimal(updated['changes']['new']['amount']) == Decimal('6000')
    assert updated['timestamp'] >= created['timestamp']
    assert updated['metadata']['description'] == f'Updated expense with ID {expense_id}'

    # Scenario C: delete
    response = api.delete(f'/api/expenses/{expense_id}/')
    assert response.status_code == 200

    logs = api.get('/api/audit-logs/', {'entityId': expense_id}).data['auditLogs']
    assert [log['action'] for log in logs] == ['DELETE', 'UPDATE', 'CREATE']
    deleted = logs[0]
    assert Decimal(deleted['changes']['old']['amount']) == Decimal('6000')
    assert deleted['changes']['new'] is None


def test_update_old_state_matches_record_before_call(api, project):
    expense_id = _create_expense(api, project)
    before = api.get(f'/api/expenses/{expense_id}/').json()

    api.put(f'/api/expenses/{expense_id}/', {
        **{k: v for k, v in before.items() if k not in ('id', 'created_at', 'updated_at')},
        'description': 'Cement, 50 bags',
    })

    entry = AuditEntry.objects.filter(action='UPDATE').get()
    assert entry.changes_old == before
    assert entry.changes_new['description'] == 'Cement, 50 bags'


def test_bare_income_body_is_captured_on_update(api):
    response = api.post('/api/incomes/', {
        'amount': '100', 'date': '2024-02-11', 'description': 'Rent',
        'payment_mode': 'cash', 'source': 'Site office', 'payee': 'Tenant',
    })
    income_id = response.data['id']

    api.patch(f'/api/incomes/{income_id}/', {'amount': '150'})

    entry = AuditEntry.objects.get(action='UPDATE', entity_type='income')
    assert entry.entity_id == str(income_id)
    assert entry.changes_old['amount'] == '100.00'
    assert entry.changes_new['amount'] == '150.00'


def test_failed_calls_record_nothing(api, project):
    # Validation failure on create
    response = api.post('/api/expenses/', {'project': project.id, 'amount': '10'})
    assert response.status_code == 400

    # Cheque payment without cheque number
    response = api.post('/api/incomes/', {
        'amount': '10', 'date': '2024-02-11', 'description': 'x',
        'payment_mode': 'cheque', 'source': 's', 'payee': 'p',
    })
    assert response.status_code == 400

    # Missing record on update and delete
    assert api.patch('/api/expenses/999999/', {'amount': '1'}).status_code == 404
    assert api.delete('/api/expenses/999999/').status_code == 404

    # Delete blocked by related records
    _create_expense(api, project)
    entries_before = AuditEntry.objects.count()
    assert api.delete(f'/api/projects/{project.id}/').status_code == 409

    assert AuditEntry.objects.count() == entries_before == 1


def test_cannot_touch_or_audit_other_owners_records(api, other_api, project):
    expense_id = _create_expense(api, project)

    assert other_api.patch(f'/api/expenses/{expense_id}/', {'amount': '1'}).status_code == 404
    assert other_api.delete(f'/api/expenses/{expense_id}/').status_code == 404

    assert AuditEntry.objects.count() == 1
    assert AuditEntry.objects.get().action == 'CREATE'


def test_reads_are_not_captured(api, project):
    expense_id = _create_expense(api, project)

    api.get('/api/expenses/')
    api.get(f'/api/expenses/{expense_id}/')

    assert AuditEntry.objects.count() == 1


def test_audit_failure_does_not_affect_response(api, project, monkeypatch):
    from audit.dispatch import dispatcher

    def broken_sink(record):
        raise RuntimeError('database is down')

    monkeypatch.setattr(dispatcher, '_sink', broken_sink)

    response = api.post('/api/expenses/', {
        'project': project.id, 'amount': '5000', 'date': '2024-02-10',
        'category': 'construction', 'subcategory': 'cement',
        'description': 'Cement', 'payment_mode': 'cash',
    })

    assert response.status_code == 201
    assert response.data['message'] == 'Expense created successfully'
    assert AuditEntry.objects.count() == 0


def test_tenant_isolation_scenario(api, other_api, project, owner, other_owner):
    # Scenario D
    _create_expense(api, project)

    other_project = other_api.post('/api/projects/', {
        'name': 'Lake Side', 'color': '#123456', 'location': 'East',
        'commence_date': '2024-01-05',
    }).data['project']
    other_api.patch(f"/api/projects/{other_project['id']}/", {'name': 'Lake Side II'})
    other_entry = AuditEntry.objects.filter(owner=other_owner).first()

    logs = api.get('/api/audit-logs/').data['auditLogs']
    assert {log['owner']['id'] for log in logs} == {owner.pk}
    assert all(log['entityType'] == 'expense' for log in logs)

    response = api.get(f'/api/audit-logs/{other_entry.pk}/')
    assert response.status_code == 404

    response = api.get('/api/audit-logs/', {'entityId': other_project['id'], 'entityType': 'project'})
    assert response.data['auditLogs'] == []
    assert response.data['pagination']['totalCount'] == 0
