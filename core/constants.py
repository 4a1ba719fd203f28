"""
Application-wide constants.
Centralized constants following DRY principle.
"""


# Audit actions
class AuditAction:
    CREATE = 'CREATE'
    UPDATE = 'UPDATE'
    DELETE = 'DELETE'

    CHOICES = [
        (CREATE, 'Create'),
        (UPDATE, 'Update'),
        (DELETE, 'Delete'),
    ]

    # Status code a handler must answer with for the action to count as done
    SUCCESS_STATUS = {
        CREATE: 201,
        UPDATE: 200,
        DELETE: 200,
    }


# Entity-type tags for business records
class EntityType:
    EXPENSE = 'expense'
    INCOME = 'income'
    CUSTOMER_PAYMENT = 'customer-payment'
    CUSTOMER = 'customer'
    EMPLOYEE = 'employee'
    LANDLORD = 'landlord'
    PROJECT = 'project'
    CATEGORY = 'category'

    CHOICES = [
        (EXPENSE, 'Expense'),
        (INCOME, 'Income'),
        (CUSTOMER_PAYMENT, 'Customer Payment'),
        (CUSTOMER, 'Customer'),
        (EMPLOYEE, 'Employee'),
        (LANDLORD, 'Landlord'),
        (PROJECT, 'Project'),
        (CATEGORY, 'Category'),
    ]

    ALL = [value for value, _ in CHOICES]


# Payment Modes
class PaymentMode:
    CASH = 'cash'
    ONLINE = 'online'
    CHEQUE = 'cheque'

    CHOICES = [
        (CASH, 'Cash'),
        (ONLINE, 'Online'),
        (CHEQUE, 'Cheque'),
    ]


# Customer payment categories
class PaymentCategory:
    TOKEN = 'token'
    ADVANCE = 'advance'
    BOOKING = 'booking'
    CONSTRUCTION = 'construction'
    DEVELOPMENT = 'development'
    CLUBHOUSE = 'clubhouse'
    FINAL = 'final'

    CHOICES = [
        (TOKEN, 'Token'),
        (ADVANCE, 'Advance'),
        (BOOKING, 'Booking'),
        (CONSTRUCTION, 'Construction'),
        (DEVELOPMENT, 'Development'),
        (CLUBHOUSE, 'Clubhouse'),
        (FINAL, 'Final'),
    ]


# Employee Status
class EmployeeStatus:
    ACTIVE = 'active'
    INACTIVE = 'inactive'

    CHOICES = [
        (ACTIVE, 'Active'),
        (INACTIVE, 'Inactive'),
    ]


# Landlord preferred payment methods
class LandlordPaymentMethod:
    BANK = 'bank'
    CASH = 'cash'
    CHECK = 'check'
    OTHER = 'other'

    CHOICES = [
        (BANK, 'Bank'),
        (CASH, 'Cash'),
        (CHECK, 'Check'),
        (OTHER, 'Other'),
    ]


# Pagination
class Pagination:
    DEFAULT_PAGE_SIZE = 20
    MAX_PAGE_SIZE = 100


# Audit query window for daily activity
class AuditStats:
    DAILY_ACTIVITY_DAYS = 30
