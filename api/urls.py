"""
API URLs for Ledgerbook
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from bookkeeping.views import (
    CategoryViewSet,
    CustomerPaymentViewSet,
    CustomerViewSet,
    EmployeeViewSet,
    ExpenseViewSet,
    IncomeViewSet,
    LandlordViewSet,
    ProjectViewSet,
)

# Create router
router = DefaultRouter()
router.register(r'projects', ProjectViewSet, basename='project')
router.register(r'categories', CategoryViewSet, basename='category')
router.register(r'expenses', ExpenseViewSet, basename='expense')
router.register(r'incomes', IncomeViewSet, basename='income')
router.register(r'customers', CustomerViewSet, basename='customer')
router.register(r'customer-payments', CustomerPaymentViewSet, basename='customer-payment')
router.register(r'employees', EmployeeViewSet, basename='employee')
router.register(r'landlords', LandlordViewSet, basename='landlord')

urlpatterns = [
    # JWT Authentication
    path('auth/login/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    
    # Audit logs
    path('', include('audit.urls')),
    
    # API routes
    path('', include(router.urls)),
]
