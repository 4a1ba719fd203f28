"""
Audit Helper Functions

Request metadata, description text and query date parsing for audit entries.
"""

from datetime import datetime, time

from django.core.exceptions import ValidationError
from django.core.validators import validate_ipv46_address
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from core.constants import AuditAction

USER_AGENT_MAX_LENGTH = 500

_ACTION_VERBS = {
    AuditAction.CREATE: 'Created',
    AuditAction.UPDATE: 'Updated',
    AuditAction.DELETE: 'Deleted',
}


def get_client_ip(request):
    """
    Extract client IP address from request.
    Handles proxies and load balancers.
    """
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    
    if x_forwarded_for:
        # X-Forwarded-For can contain multiple IPs, get the first one
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')
    
    if not ip:
        return None
    
    try:
        validate_ipv46_address(ip)
    except ValidationError:
        return None
    return ip


def get_user_agent(request):
    return request.META.get('HTTP_USER_AGENT', '')[:USER_AGENT_MAX_LENGTH]


def describe_action(action, entity_type, entity_id):
    """Fixed description template, e.g. "Updated expense with ID 42" """
    verb = _ACTION_VERBS.get(action, action.title())
    return f"{verb} {entity_type} with ID {entity_id}"


def parse_range_bound(value, end_of_day=False):
    """
    Parse a ``startDate``/``endDate`` query value into an aware datetime.
    
    Accepts ISO dates and datetimes. A bare date covers the whole day, so
    as an upper bound it means the last instant of that day. Raises
    ValueError for anything else.
    """
    if value is None or not str(value).strip():
        return None
    value = str(value).strip()
    
    # Bare dates first: parse_datetime also accepts them, as midnight
    day = parse_date(value)
    if day is not None:
        parsed = datetime.combine(day, time.max if end_of_day else time.min)
    else:
        parsed = parse_datetime(value)
        if parsed is None:
            raise ValueError(f"Invalid date: {value}")
    
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed
