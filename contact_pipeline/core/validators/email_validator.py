"""
EmailFormatValidator - checks an email against a basic local@domain.tld shape.
"""

import re
from typing import Any

from .base_validator import BaseValidator, ValidationError

# No whitespace, one "@", at least one "." after it
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class EmailFormatValidator(BaseValidator):
    """
    Validates that the email field has a local@domain.tld shape.

    Missing values are left to RequiredFieldsValidator.
    """

    MESSAGE = "Invalid email format"

    def __init__(self, field_name: str = "email"):
        super().__init__((field_name,))
        self.field_name = field_name

    def validate(self, record: dict[str, Any]) -> None:
        value = record.get(self.field_name)
        if value is None:
            return

        if not is_valid_email(str(value)):
            raise ValidationError(
                rule_name=self.rule_type,
                field_name=self.field_name,
                message=self.MESSAGE,
            )

    @property
    def rule_type(self) -> str:
        return "invalid_email_format"


def is_valid_email(email: str) -> bool:
    """Return True when the email matches the basic local@domain.tld shape."""
    return EMAIL_PATTERN.match(email) is not None
