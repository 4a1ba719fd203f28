from rest_framework import serializers

from core.exceptions import ValidationError as AppValidationError
from core.validators import PaymentValidator, ProjectValidator
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


class OwnedPrimaryKeyRelatedField(serializers.PrimaryKeyRelatedField):
    """Related-object field that only accepts records of the requesting owner"""

    def get_queryset(self):
        request = self.context.get('request')
        queryset = super().get_queryset()
        if request is None or not request.user.is_authenticated:
            return queryset.none()
        return queryset.filter(owner=request.user)


class PaymentReferenceMixin:
    """Cheque/online reference checks shared by money-movement serializers"""

    def validate(self, attrs):
        attrs = super().validate(attrs)

        def current(name):
            if name in attrs:
                return attrs[name]
            return getattr(self.instance, name, '') if self.instance else ''

        try:
            PaymentValidator.validate_amount(current('amount'))
            PaymentValidator.validate_payment_reference(
                current('payment_mode'),
                current('cheque_number'),
                current('transaction_id'),
            )
        except AppValidationError as e:
            raise serializers.ValidationError({e.details.get('field', 'non_field_errors'): e.message})
        return attrs


class ProjectSerializer(serializers.ModelSerializer):
    """Serializer for Project"""

    class Meta:
        model = Project
        fields = ['id', 'name', 'color', 'location', 'commence_date', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_color(self, value):
        try:
            ProjectValidator.validate_color(value)
        except AppValidationError as e:
            raise serializers.ValidationError(e.message)
        return value


class CategorySerializer(serializers.ModelSerializer):
    """Serializer for Category"""

    class Meta:
        model = Category
        fields = ['id', 'slug', 'name', 'icon', 'subcategories', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_subcategories(self, value):
        if not isinstance(value, list):
            raise serializers.ValidationError("Subcategories must be a list")
        for item in value:
            if not isinstance(item, dict) or not item.get('id') or not item.get('name'):
                raise serializers.ValidationError("Each subcategory needs an id and a name")
        return value


class ExpenseSerializer(PaymentReferenceMixin, serializers.ModelSerializer):
    """Serializer for Expense"""
    project = OwnedPrimaryKeyRelatedField(queryset=Project.objects.all())
    employee = OwnedPrimaryKeyRelatedField(queryset=Employee.objects.all(), required=False, allow_null=True)
    landlord = OwnedPrimaryKeyRelatedField(queryset=Landlord.objects.all(), required=False, allow_null=True)

    class Meta:
        model = Expense
        fields = [
            'id', 'project', 'amount', 'date', 'category', 'subcategory',
            'description', 'payment_mode', 'cheque_number', 'transaction_id',
            'employee', 'salary_month', 'landlord', 'land_details',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class IncomeSerializer(PaymentReferenceMixin, serializers.ModelSerializer):
    """Serializer for Income"""

    class Meta:
        model = Income
        fields = [
            'id', 'amount', 'date', 'description', 'payment_mode',
            'cheque_number', 'transaction_id', 'source', 'payee',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class CustomerSerializer(serializers.ModelSerializer):
    """Serializer for Customer"""
    project = OwnedPrimaryKeyRelatedField(queryset=Project.objects.all())

    class Meta:
        model = Customer
        fields = [
            'id', 'name', 'project', 'plot_number', 'plot_size', 'built_up_area',
            'sale_price', 'price_per_yard', 'construction_price',
            'construction_price_per_sqft', 'phone', 'email', 'address',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class CustomerPaymentSerializer(PaymentReferenceMixin, serializers.ModelSerializer):
    """Serializer for CustomerPayment"""
    customer = OwnedPrimaryKeyRelatedField(queryset=Customer.objects.all())
    customer_name = serializers.CharField(source='customer.name', read_only=True)

    class Meta:
        model = CustomerPayment
        fields = [
            'id', 'customer', 'customer_name', 'amount', 'date', 'description',
            'payment_mode', 'cheque_number', 'transaction_id', 'invoice_number',
            'payment_category', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'customer_name', 'created_at', 'updated_at']


class EmployeeSerializer(serializers.ModelSerializer):
    """Serializer for Employee"""

    class Meta:
        model = Employee
        fields = [
            'id', 'employee_code', 'name', 'job_title', 'salary', 'phone',
            'email', 'address', 'joining_date', 'status',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class LandlordSerializer(serializers.ModelSerializer):
    """Serializer for Landlord"""

    class Meta:
        model = Landlord
        fields = [
            'id', 'name', 'phone', 'email', 'address', 'properties',
            'bank_name', 'account_number', 'account_title',
            'preferred_payment_method', 'notes', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
