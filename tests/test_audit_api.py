"""
The /api/audit-logs/ endpoints.
"""
from datetime import timedelta

import pytest
from django.utils import timezone

from audit.models import AuditEntry
from core.dto import AuditRecord

pytestmark = pytest.mark.django_db


def _add(owner, n, action='CREATE', entity_type='expense'):
    return AuditEntry.objects.append(AuditRecord(
        owner_id=owner.pk, action=action, entity_type=entity_type, entity_id=str(n),
        old={'id': n} if action != 'CREATE' else None,
        new={'id': n} if action != 'DELETE' else None,
        user_agent='agent/2.0', ip_address='10.1.1.1',
        description=f'Entry {n}',
    ))


def test_requires_authentication():
    from rest_framework.test import APIClient

    assert APIClient().get('/api/audit-logs/').status_code in (401, 403)


def test_list_shape(api, owner):
    entry = _add(owner, 3)

    response = api.get('/api/audit-logs/')

    assert response.status_code == 200
    assert response.data['pagination'] == {
        'currentPage': 1, 'totalPages': 1, 'totalCount': 1,
        'hasNext': False, 'hasPrev': False,
    }
    log = response.data['auditLogs'][0]
    assert log['id'] == entry.pk
    assert log['owner'] == {'id': owner.pk, 'username': 'u1', 'email': 'u1@example.com'}
    assert log['entityType'] == 'expense'
    assert log['entityId'] == '3'
    assert log['changes'] == {'old': None, 'new': {'id': 3}}
    assert log['metadata'] == {
        'userAgent': 'agent/2.0', 'ipAddress': '10.1.1.1', 'description': 'Entry 3',
    }


def test_list_filters_and_paging(api, owner):
    for n in range(1, 6):
        _add(owner, n)
    _add(owner, 6, action='UPDATE', entity_type='income')

    response = api.get('/api/audit-logs/', {'page': 2, 'limit': 2, 'entityType': 'expense'})
    assert response.data['pagination']['totalCount'] == 5
    assert response.data['pagination']['totalPages'] == 3
    assert [log['entityId'] for log in response.data['auditLogs']] == ['3', '2']

    response = api.get('/api/audit-logs/', {'entityType': 'all', 'action': 'all'})
    assert response.data['pagination']['totalCount'] == 6

    response = api.get('/api/audit-logs/', {'action': 'UPDATE'})
    assert [log['entityType'] for log in response.data['auditLogs']] == ['income']


@pytest.mark.parametrize('params', [
    {'page': 0},
    {'limit': 'ten'},
    {'entityType': 'invoice'},
    {'action': 'READ'},
    {'startDate': 'yesterday'},
    {'startDate': '2024-02-01', 'endDate': '2024-01-01'},
])
def test_invalid_query_params(api, params):
    assert api.get('/api/audit-logs/', params).status_code == 400


def test_retrieve(api, other_api, owner):
    entry = _add(owner, 8)

    response = api.get(f'/api/audit-logs/{entry.pk}/')
    assert response.status_code == 200
    assert response.data['entityId'] == '8'
    assert response.data['owner'] == {'id': owner.pk, 'username': 'u1', 'email': 'u1@example.com'}

    assert other_api.get(f'/api/audit-logs/{entry.pk}/').status_code == 404
    assert api.get('/api/audit-logs/999999/').status_code == 404


def test_stats(api, other_api, owner, other_owner):
    _add(owner, 1)
    _add(owner, 1, action='UPDATE')
    _add(other_owner, 2)

    response = api.get('/api/audit-logs/stats/')

    assert response.status_code == 200
    assert response.data['total'] == 2
    assert response.data['actionBreakdown'] == {'CREATE': 1, 'UPDATE': 1}
    assert response.data['entityBreakdown'] == {'expense': 2}
    assert len(response.data['dailyActivity']) == 1
    assert response.data['dailyActivity'][0]['count'] == 2


def test_bare_end_date_includes_entries_later_that_day(api, owner):
    _add(owner, 1)
    _add(owner, 2, action='UPDATE')
    today = timezone.localdate().isoformat()
    day_range = {'startDate': today, 'endDate': today}

    listed = api.get('/api/audit-logs/', day_range)
    stats = api.get('/api/audit-logs/stats/', day_range)

    assert listed.status_code == 200
    assert listed.data['pagination']['totalCount'] == 2
    assert stats.data['total'] == 2


def test_end_date_before_today_excludes_todays_entries(api, owner):
    _add(owner, 1)
    yesterday = (timezone.localdate() - timedelta(days=1)).isoformat()

    response = api.get('/api/audit-logs/', {'endDate': yesterday})

    assert response.data['pagination']['totalCount'] == 0
    assert api.get('/api/audit-logs/stats/', {'endDate': yesterday}).data['total'] == 0


def test_stats_rejects_bad_range(api):
    response = api.get('/api/audit-logs/stats/', {'endDate': 'not-a-date'})

    assert response.status_code == 400
    assert 'endDate' in response.data


def test_trail_is_read_only(api, owner):
    entry = _add(owner, 1)

    assert api.post('/api/audit-logs/', {}).status_code == 405
    assert api.delete(f'/api/audit-logs/{entry.pk}/').status_code == 405
    assert AuditEntry.objects.count() == 1
