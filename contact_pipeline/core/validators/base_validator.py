"""
Base validator interface for contact record rules.

All validators must inherit from BaseValidator and implement the validate() method.
"""

from abc import ABC, abstractmethod
from typing import Any


class ValidationError(Exception):
    """Raised when a validation rule fails."""

    def __init__(self, rule_name: str, field_name: str, message: str):
        self.rule_name = rule_name
        self.field_name = field_name
        self.message = message
        super().__init__(message)


class BaseValidator(ABC):
    """
    Abstract base class for all validators.

    Each validator checks one admission condition of a raw contact record.
    """

    def __init__(self, field_names: tuple[str, ...]):
        """
        Initialize validator.

        Args:
            field_names: Names of the fields this rule inspects
        """
        self.field_names = field_names

    @abstractmethod
    def validate(self, record: dict[str, Any]) -> None:
        """
        Validate a record against this rule.

        Args:
            record: The raw record

        Raises:
            ValidationError: If validation fails
        """
        pass

    @property
    @abstractmethod
    def rule_type(self) -> str:
        """Return the rule type identifier."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(fields={self.field_names})"
