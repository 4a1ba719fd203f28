from django.contrib import admin

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


class OwnedAdmin(admin.ModelAdmin):
    list_filter = [('owner', admin.RelatedOnlyFieldListFilter)]
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Project)
class ProjectAdmin(OwnedAdmin):
    list_display = ['name', 'location', 'commence_date', 'owner']
    search_fields = ['name', 'location']


@admin.register(Category)
class CategoryAdmin(OwnedAdmin):
    list_display = ['name', 'slug', 'icon', 'owner']
    search_fields = ['name', 'slug']


@admin.register(Expense)
class ExpenseAdmin(OwnedAdmin):
    list_display = ['date', 'description', 'amount', 'category', 'project', 'payment_mode', 'owner']
    search_fields = ['description', 'category', 'subcategory']
    list_select_related = ['project', 'owner']


@admin.register(Income)
class IncomeAdmin(OwnedAdmin):
    list_display = ['date', 'source', 'payee', 'amount', 'payment_mode', 'owner']
    search_fields = ['description', 'source', 'payee']


@admin.register(Customer)
class CustomerAdmin(OwnedAdmin):
    list_display = ['name', 'plot_number', 'project', 'sale_price', 'owner']
    search_fields = ['name', 'plot_number', 'phone', 'email']


@admin.register(CustomerPayment)
class CustomerPaymentAdmin(OwnedAdmin):
    list_display = ['date', 'customer', 'amount', 'payment_category', 'payment_mode', 'owner']
    search_fields = ['customer__name', 'invoice_number', 'description']
    list_select_related = ['customer', 'owner']


@admin.register(Employee)
class EmployeeAdmin(OwnedAdmin):
    list_display = ['employee_code', 'name', 'job_title', 'salary', 'status', 'owner']
    search_fields = ['name', 'employee_code', 'phone']


@admin.register(Landlord)
class LandlordAdmin(OwnedAdmin):
    list_display = ['name', 'phone', 'preferred_payment_method', 'owner']
    search_fields = ['name', 'phone', 'email']
