"""
Bookkeeping records.

Every record belongs to exactly one owner (the authenticated user); all
reads and writes are scoped by that owner.
"""

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from core.constants import (
    EmployeeStatus,
    LandlordPaymentMethod,
    PaymentCategory,
    PaymentMode,
)


class OwnedModel(models.Model):
    """Abstract base for records isolated per owner"""
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='+',
        help_text="User this record belongs to"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Project(OwnedModel):
    """Construction project that expenses and sales are booked against"""
    name = models.CharField(max_length=100)
    color = models.CharField(max_length=7, help_text="Hex colour used in charts")
    location = models.CharField(max_length=500)
    commence_date = models.DateField()

    class Meta:
        ordering = ['name']
        indexes = [
            models.Index(fields=['owner', 'name'], name='project_owner_name_idx'),
        ]

    def __str__(self):
        return self.name


class Category(OwnedModel):
    """Expense category with a flat list of subcategories"""
    slug = models.CharField(max_length=100, help_text="Stable identifier used by expenses")
    name = models.CharField(max_length=100)
    icon = models.CharField(max_length=50)
    subcategories = models.JSONField(default=list, blank=True)

    class Meta:
        ordering = ['name']
        verbose_name_plural = "Categories"
        constraints = [
            models.UniqueConstraint(fields=['owner', 'slug'], name='unique_category_slug_per_owner'),
        ]

    def __str__(self):
        return self.name


class Expense(OwnedModel):
    """Money spent on a project"""
    project = models.ForeignKey(Project, on_delete=models.PROTECT, related_name='expenses')
    amount = models.DecimalField(max_digits=14, decimal_places=2, validators=[MinValueValidator(0)])
    date = models.DateField()
    category = models.CharField(max_length=100)
    subcategory = models.CharField(max_length=100)
    description = models.TextField()
    payment_mode = models.CharField(max_length=10, choices=PaymentMode.CHOICES)
    cheque_number = models.CharField(max_length=50, blank=True, default='')
    transaction_id = models.CharField(max_length=100, blank=True, default='')
    # Salary expenses
    employee = models.ForeignKey(
        'Employee', on_delete=models.SET_NULL, null=True, blank=True, related_name='salary_expenses'
    )
    salary_month = models.CharField(max_length=7, blank=True, default='', help_text="YYYY-MM")
    # Land purchase expenses
    landlord = models.ForeignKey(
        'Landlord', on_delete=models.SET_NULL, null=True, blank=True, related_name='land_expenses'
    )
    land_details = models.TextField(blank=True, default='')

    class Meta:
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['owner', '-date'], name='expense_owner_date_idx'),
            models.Index(fields=['owner', 'category'], name='expense_owner_category_idx'),
            models.Index(fields=['owner', 'project'], name='expense_owner_project_idx'),
        ]

    def __str__(self):
        return f"{self.description} ({self.amount})"


class Income(OwnedModel):
    """Money received outside of customer plot sales"""
    amount = models.DecimalField(max_digits=14, decimal_places=2, validators=[MinValueValidator(0)])
    date = models.DateField()
    description = models.TextField()
    payment_mode = models.CharField(max_length=10, choices=PaymentMode.CHOICES)
    cheque_number = models.CharField(max_length=50, blank=True, default='')
    transaction_id = models.CharField(max_length=100, blank=True, default='')
    source = models.CharField(max_length=200)
    payee = models.CharField(max_length=200)

    class Meta:
        ordering = ['-date', '-created_at']
        verbose_name_plural = "Income"
        indexes = [
            models.Index(fields=['owner', '-date'], name='income_owner_date_idx'),
        ]

    def __str__(self):
        return f"{self.source} ({self.amount})"


class Customer(OwnedModel):
    """Buyer of a plot in a project"""
    name = models.CharField(max_length=200)
    project = models.ForeignKey(Project, on_delete=models.PROTECT, related_name='customers')
    plot_number = models.CharField(max_length=50)
    plot_size = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    built_up_area = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    sale_price = models.DecimalField(max_digits=14, decimal_places=2, validators=[MinValueValidator(0)])
    price_per_yard = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0)])
    construction_price = models.DecimalField(max_digits=14, decimal_places=2, validators=[MinValueValidator(0)])
    construction_price_per_sqft = models.DecimalField(
        max_digits=12, decimal_places=2, validators=[MinValueValidator(0)]
    )
    phone = models.CharField(max_length=20, blank=True, default='')
    email = models.EmailField(blank=True, default='')
    address = models.TextField(blank=True, default='')

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['owner', 'plot_number'], name='unique_plot_per_owner'),
        ]

    def __str__(self):
        return f"{self.name} - Plot {self.plot_number}"


class CustomerPayment(OwnedModel):
    """Instalment received from a customer against a plot"""
    customer = models.ForeignKey(Customer, on_delete=models.PROTECT, related_name='payments')
    amount = models.DecimalField(max_digits=14, decimal_places=2, validators=[MinValueValidator(0)])
    date = models.DateField()
    description = models.TextField()
    payment_mode = models.CharField(max_length=10, choices=PaymentMode.CHOICES)
    cheque_number = models.CharField(max_length=50, blank=True, default='')
    transaction_id = models.CharField(max_length=100, blank=True, default='')
    invoice_number = models.CharField(max_length=50, blank=True, default='')
    payment_category = models.CharField(max_length=20, choices=PaymentCategory.CHOICES)

    class Meta:
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['owner', '-date'], name='custpay_owner_date_idx'),
            models.Index(fields=['owner', 'payment_category'], name='custpay_owner_category_idx'),
        ]

    def __str__(self):
        return f"{self.customer.name} - {self.amount}"


class Employee(OwnedModel):
    """Staff member paid through salary expenses"""
    employee_code = models.CharField(max_length=50)
    name = models.CharField(max_length=200)
    job_title = models.CharField(max_length=100)
    salary = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0)])
    phone = models.CharField(max_length=20)
    email = models.EmailField(blank=True, default='')
    address = models.TextField()
    joining_date = models.DateField()
    status = models.CharField(max_length=10, choices=EmployeeStatus.CHOICES, default=EmployeeStatus.ACTIVE)

    class Meta:
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(fields=['owner', 'employee_code'], name='unique_employee_code_per_owner'),
        ]
        indexes = [
            models.Index(fields=['owner', 'status'], name='employee_owner_status_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.employee_code})"


class Landlord(OwnedModel):
    """Seller of land bought for projects"""
    name = models.CharField(max_length=200)
    phone = models.CharField(max_length=20, blank=True, default='')
    email = models.EmailField(blank=True, default='')
    address = models.TextField(blank=True, default='')
    properties = models.JSONField(default=list, blank=True)
    bank_name = models.CharField(max_length=100, blank=True, default='')
    account_number = models.CharField(max_length=50, blank=True, default='')
    account_title = models.CharField(max_length=100, blank=True, default='')
    preferred_payment_method = models.CharField(
        max_length=10, choices=LandlordPaymentMethod.CHOICES, default=LandlordPaymentMethod.CASH
    )
    notes = models.TextField(blank=True, default='')

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name
