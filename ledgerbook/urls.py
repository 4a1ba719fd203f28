"""
URL configuration for ledgerbook project.
"""
from django.contrib import admin
from django.urls import path, include

# Import admin customization (just to apply it, not to use)
from ledgerbook import admin as admin_customization  # noqa: F401

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('api.urls')),  # API routes
]
