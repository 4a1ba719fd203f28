"""
Audit Log URLs
"""

from django.urls import path, include
from rest_framework.routers import SimpleRouter
from audit import views

app_name = 'audit'

# REST Framework router
router = SimpleRouter()
router.register(r'audit-logs', views.AuditLogViewSet, basename='auditlog')

urlpatterns = [
    path('', include(router.urls)),
]
