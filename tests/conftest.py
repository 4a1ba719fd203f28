"""
Shared fixtures: two owners, authenticated API clients, and one sample
record of each audited type.
"""
import logging
from datetime import date

import pytest
from rest_framework.test import APIClient

from bookkeeping.models import Customer, Project


@pytest.fixture(autouse=True)
def sync_audit(settings):
    """Write audit entries inline so tests can read them back at once"""
    settings.AUDIT_DISPATCH_MODE = 'sync'


@pytest.fixture
def owner(django_user_model):
    return django_user_model.objects.create_user(username='u1', email='u1@example.com', password='secret-pass-1')


@pytest.fixture
def other_owner(django_user_model):
    return django_user_model.objects.create_user(username='u2', email='u2@example.com', password='secret-pass-2')


def _client_for(user):
    client = APIClient(HTTP_USER_AGENT='pytest-agent', REMOTE_ADDR='10.0.0.7')
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def api(owner):
    return _client_for(owner)


@pytest.fixture
def other_api(other_owner):
    return _client_for(other_owner)


@pytest.fixture
def project(owner):
    return Project.objects.create(
        owner=owner,
        name='Green Valley',
        color='#22aa44',
        location='Plot 7, Ring Road',
        commence_date=date(2024, 1, 1),
    )


@pytest.fixture
def customer(owner, project):
    return Customer.objects.create(
        owner=owner,
        project=project,
        name='Asha Rao',
        plot_number='A-12',
        plot_size='200.00',
        built_up_area='1500.00',
        sale_price='2500000.00',
        price_per_yard='12500.00',
        construction_price='1800000.00',
        construction_price_per_sqft='1200.00',
    )


@pytest.fixture
def create_payloads(project, customer):
    """Valid create payload and URL for each audited entity type"""
    return {
        'project': ('/api/projects/', {
            'name': 'Hill View', 'color': '#abc', 'location': 'North block',
            'commence_date': '2024-03-01',
        }),
        'category': ('/api/categories/', {
            'slug': 'materials', 'name': 'Materials', 'icon': 'brick',
            'subcategories': [{'id': 'cement', 'name': 'Cement', 'icon': 'bag'}],
        }),
        'expense': ('/api/expenses/', {
            'project': project.id, 'amount': '5000', 'date': '2024-02-10',
            'category': 'construction', 'subcategory': 'cement',
            'description': 'Cement', 'payment_mode': 'cash',
        }),
        'income': ('/api/incomes/', {
            'amount': '12000', 'date': '2024-02-11', 'description': 'Scrap sale',
            'payment_mode': 'online', 'transaction_id': 'TX-991',
            'source': 'Scrap', 'payee': 'Metal Traders',
        }),
        'customer': ('/api/customers/', {
            'name': 'Vikram Shah', 'project': project.id, 'plot_number': 'B-4',
            'plot_size': '180', 'built_up_area': '1400', 'sale_price': '2100000',
            'price_per_yard': '11000', 'construction_price': '1600000',
            'construction_price_per_sqft': '1150',
        }),
        'customer-payment': ('/api/customer-payments/', {
            'customer': customer.id, 'amount': '250000', 'date': '2024-02-12',
            'description': 'Booking amount', 'payment_mode': 'cheque',
            'cheque_number': '004512', 'payment_category': 'booking',
        }),
        'employee': ('/api/employees/', {
            'employee_code': 'EMP-01', 'name': 'Ravi Kumar', 'job_title': 'Site engineer',
            'salary': '45000', 'phone': '9876543210', 'address': 'Sector 4',
            'joining_date': '2023-11-01',
        }),
        'landlord': ('/api/landlords/', {
            'name': 'Meena Devi', 'phone': '9123456780', 'properties': ['Survey 112'],
            'preferred_payment_method': 'bank',
        }),
    }


@pytest.fixture
def audit_log(caplog):
    """caplog wired to the 'audit' logger, which does not propagate"""
    logger = logging.getLogger('audit')
    logger.addHandler(caplog.handler)
    yield caplog
    logger.removeHandler(caplog.handler)
