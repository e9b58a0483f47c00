"""
Validation rule implementations.

Provides validators for required contact fields and email shape.
"""

from .base_validator import BaseValidator, ValidationError
from .email_validator import EMAIL_PATTERN, EmailFormatValidator, is_valid_email
from .required_fields_validator import RequiredFieldsValidator

# Applied in order; the first failure wins
DEFAULT_VALIDATORS: tuple[BaseValidator, ...] = (
    RequiredFieldsValidator(),
    EmailFormatValidator(),
)

__all__ = [
    "BaseValidator",
    "ValidationError",
    "RequiredFieldsValidator",
    "EmailFormatValidator",
    "EMAIL_PATTERN",
    "DEFAULT_VALIDATORS",
    "is_valid_email",
]
