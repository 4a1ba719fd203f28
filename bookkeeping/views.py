import logging

from django.db import transaction
from django.db.models import ProtectedError
from rest_framework import filters, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from api.filters import OwnerFilterBackend
from api.permissions import IsRecordOwner
from audit.capture import AuditCaptureMixin
from core.constants import EntityType
from core.repositories import BaseRepository
from .models import (
    Category,
    Customer,
    CustomerPayment,
    Employee,
    Expense,
    Income,
    Landlord,
    Project,
)
from .serializers import (
    CategorySerializer,
    CustomerPaymentSerializer,
    CustomerSerializer,
    EmployeeSerializer,
    ExpenseSerializer,
    IncomeSerializer,
    LandlordSerializer,
    ProjectSerializer,
)

logger = logging.getLogger(__name__)


class OwnedRecordViewSet(AuditCaptureMixin, viewsets.ModelViewSet):
    """
    CRUD for one kind of owned record.
    
    - Owner isolation: every query goes through the owner filter
    - create answers 201, update 200, destroy 200 with a message
    - create/update responses are wrapped as {message, <envelope_key>: record}
      unless ``envelope_key`` is None
    - create/update/destroy pass through change capture
    """
    permission_classes = [IsAuthenticated, IsRecordOwner]
    filter_backends = [OwnerFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    ordering_fields = ['created_at']
    
    model = None
    label = None
    envelope_key = None
    
    def get_queryset(self):
        return BaseRepository(self.model).for_owner(self.request.user)
    
    def wrap(self, data, verb):
        if self.envelope_key is None:
            return data
        return {
            'message': f'{self.label} {verb} successfully',
            self.envelope_key: data,
        }
    
    @transaction.atomic
    def create(self, request, *args, **kwargs):
        """Create record with atomic transaction"""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save(owner=request.user)
        logger.info(f"{self.label} #{serializer.instance.pk} created by {request.user.username}")
        return Response(self.wrap(serializer.data, 'created'), status=status.HTTP_201_CREATED)
    
    @transaction.atomic
    def update(self, request, *args, **kwargs):
        """Update record with atomic transaction and row-level locking"""
        instance = self.get_queryset().select_for_update().filter(
            pk=kwargs.get('pk')
        ).first()
        
        if not instance:
            return Response(
                {'detail': f'{self.label} not found'},
                status=status.HTTP_404_NOT_FOUND
            )
        
        serializer = self.get_serializer(instance, data=request.data, partial=kwargs.get('partial', False))
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(self.wrap(serializer.data, 'updated'))
    
    def partial_update(self, request, *args, **kwargs):
        """Handle PATCH requests"""
        kwargs['partial'] = True
        return self.update(request, *args, **kwargs)
    
    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        try:
            instance.delete()
        except ProtectedError:
            return Response(
                {'detail': f'{self.label} is still referenced by other records and cannot be deleted'},
                status=status.HTTP_409_CONFLICT
            )
        logger.info(f"{self.label} #{kwargs.get('pk')} deleted by {request.user.username}")
        return Response({'message': f'{self.label} deleted successfully'}, status=status.HTTP_200_OK)


class ProjectViewSet(OwnedRecordViewSet):
    model = Project
    serializer_class = ProjectSerializer
    label = 'Project'
    envelope_key = 'project'
    audit_entity_type = EntityType.PROJECT
    search_fields = ['name', 'location']
    ordering_fields = ['name', 'commence_date', 'created_at']


class CategoryViewSet(OwnedRecordViewSet):
    model = Category
    serializer_class = CategorySerializer
    label = 'Category'
    envelope_key = 'category'
    audit_entity_type = EntityType.CATEGORY
    search_fields = ['name', 'slug']
    ordering_fields = ['name', 'created_at']


class ExpenseViewSet(OwnedRecordViewSet):
    model = Expense
    serializer_class = ExpenseSerializer
    label = 'Expense'
    envelope_key = 'expense'
    audit_entity_type = EntityType.EXPENSE
    search_fields = ['description', 'category', 'subcategory', 'cheque_number', 'transaction_id']
    ordering_fields = ['date', 'amount', 'created_at']
    
    def get_queryset(self):
        return super().get_queryset().select_related('project')


class IncomeViewSet(OwnedRecordViewSet):
    """Income responses are the bare record, without an envelope"""
    model = Income
    serializer_class = IncomeSerializer
    label = 'Income'
    envelope_key = None
    audit_entity_type = EntityType.INCOME
    search_fields = ['description', 'source', 'payee']
    ordering_fields = ['date', 'amount', 'created_at']


class CustomerViewSet(OwnedRecordViewSet):
    model = Customer
    serializer_class = CustomerSerializer
    label = 'Customer'
    envelope_key = 'customer'
    audit_entity_type = EntityType.CUSTOMER
    search_fields = ['name', 'plot_number', 'phone', 'email']
    ordering_fields = ['name', 'created_at']


class CustomerPaymentViewSet(OwnedRecordViewSet):
    model = CustomerPayment
    serializer_class = CustomerPaymentSerializer
    label = 'Customer payment'
    envelope_key = 'payment'
    audit_entity_type = EntityType.CUSTOMER_PAYMENT
    search_fields = ['description', 'customer__name', 'invoice_number']
    ordering_fields = ['date', 'amount', 'created_at']
    
    def get_queryset(self):
        return super().get_queryset().select_related('customer')


class EmployeeViewSet(OwnedRecordViewSet):
    model = Employee
    serializer_class = EmployeeSerializer
    label = 'Employee'
    envelope_key = 'employee'
    audit_entity_type = EntityType.EMPLOYEE
    search_fields = ['name', 'employee_code', 'job_title', 'phone']
    ordering_fields = ['name', 'joining_date', 'salary', 'created_at']


class LandlordViewSet(OwnedRecordViewSet):
    model = Landlord
    serializer_class = LandlordSerializer
    label = 'Landlord'
    envelope_key = 'landlord'
    audit_entity_type = EntityType.LANDLORD
    search_fields = ['name', 'phone', 'email']
    ordering_fields = ['name', 'created_at']


AUDITED_VIEWSETS = [
    ProjectViewSet,
    CategoryViewSet,
    ExpenseViewSet,
    IncomeViewSet,
    CustomerViewSet,
    CustomerPaymentViewSet,
    EmployeeViewSet,
    LandlordViewSet,
]
