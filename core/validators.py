"""
Validation utilities and validators.
Centralized validation logic following single responsibility principle.
"""
import re
from decimal import Decimal
from core.constants import PaymentMode
from core.exceptions import ValidationError as AppValidationError


HEX_COLOR_RE = re.compile(r'^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$')


class PaymentValidator:
    """Validates payment details shared by expenses, income and customer payments"""
    
    @staticmethod
    def validate_amount(amount: Decimal, field_name: str = "amount"):
        """Validate amount is not negative"""
        if amount is not None and amount < 0:
            raise AppValidationError(
                message=f"{field_name} cannot be negative",
                code="NEGATIVE_AMOUNT",
                details={"field": field_name}
            )
    
    @staticmethod
    def validate_payment_reference(payment_mode: str, cheque_number: str = "", transaction_id: str = ""):
        """Cheque payments need a cheque number, online payments a transaction ID"""
        if payment_mode == PaymentMode.CHEQUE and not (cheque_number or "").strip():
            raise AppValidationError(
                message="Cheque number is required when payment mode is cheque",
                code="CHEQUE_NUMBER_REQUIRED",
                details={"field": "chequeNumber"}
            )
        if payment_mode == PaymentMode.ONLINE and not (transaction_id or "").strip():
            raise AppValidationError(
                message="Transaction ID is required when payment mode is online",
                code="TRANSACTION_ID_REQUIRED",
                details={"field": "transactionId"}
            )


class ProjectValidator:
    """Validates project fields"""
    
    @staticmethod
    def validate_color(color: str):
        """Validate hex colour code"""
        if not HEX_COLOR_RE.match(color or ""):
            raise AppValidationError(
                message="Color must be a valid hex color code",
                code="INVALID_COLOR",
                details={"field": "color"}
            )
