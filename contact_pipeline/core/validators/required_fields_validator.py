"""
RequiredFieldsValidator - ensures every required field is present and non-empty.
"""

from typing import Any

from .base_validator import BaseValidator, ValidationError


class RequiredFieldsValidator(BaseValidator):
    """
    Validates that all required fields are present and not empty.

    Fields are checked together: a single failure is raised no matter how
    many of them are missing.

    Fails if any field is:
    - missing from the record
    - None
    - an empty string
    - a whitespace-only string, for fields listed in ``strip_fields``

    Other fields keep their whitespace so that a value such as ``"   "``
    reaches the format rules instead.
    """

    MESSAGE = "Missing required fields"

    def __init__(
        self,
        field_names: tuple[str, ...] = ("name", "email"),
        strip_fields: tuple[str, ...] = ("name",),
    ):
        super().__init__(field_names)
        self.strip_fields = frozenset(strip_fields)

    def validate(self, record: dict[str, Any]) -> None:
        missing = [name for name in self.field_names if self._is_blank(name, record.get(name))]
        if missing:
            raise ValidationError(
                rule_name=self.rule_type,
                field_name=",".join(missing),
                message=self.MESSAGE,
            )

    def _is_blank(self, field_name: str, value: Any) -> bool:
        if value is None:
            return True
        if not isinstance(value, str):
            return False
        if field_name in self.strip_fields:
            value = value.strip()
        return value == ""

    @property
    def rule_type(self) -> str:
        return "missing_required_fields"
