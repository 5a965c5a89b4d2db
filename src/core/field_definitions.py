"""
Field Definitions

Pydantic types describing a single editable restaurant setting.
"""

from enum import StrEnum
from re import Pattern
from typing import Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

SettingValue = Union[bool, int, float, str, None]
SettingsRecord = Dict[str, SettingValue]


class FieldType(StrEnum):
    """Input kind shown by admin forms. Descriptive only."""

    TEXT = "text"
    EMAIL = "email"
    PHONE = "phone"
    URL = "url"
    TEXTAREA = "textarea"
    TIME = "time"
    SELECT = "select"
    BOOLEAN = "boolean"
    NUMBER = "number"


class FieldCategory(StrEnum):
    """Built-in categories. Registries may declare others."""

    GENERAL = "general"
    CONTACT = "contact"
    HOURS = "hours"
    SOCIAL = "social"


class FieldOption(BaseModel):
    """One choice of a select field."""

    model_config = ConfigDict(frozen=True)

    value: str
    label: str


class FieldValidation(BaseModel):
    """Constraints checked on write. Absent constraints are not checked."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    pattern: Optional[Pattern[str]] = Field(
        None, description="Regex a string value must match"
    )
    min_length: Optional[int] = Field(None, alias="minLength", ge=0)
    max_length: Optional[int] = Field(None, alias="maxLength", ge=0)
    min: Optional[float] = Field(None, description="Lower bound for numeric values")
    max: Optional[float] = Field(None, description="Upper bound for numeric values")


class FieldDefinition(BaseModel):
    """Static description of one setting, defined at startup and never mutated."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique setting key")
    label: str = Field(..., description="Human-readable name used in error messages")
    type: FieldType = Field(..., description="Input kind")
    required: bool = Field(False, description="Empty values are rejected")
    placeholder: Optional[str] = Field(None, description="Admin form hint")
    validation: Optional[FieldValidation] = None
    options: Tuple[FieldOption, ...] = Field(
        (), description="Choices for select fields (not enforced on write)"
    )
    default_value: SettingValue = Field(
        None, description="UI hint only; never written by the service"
    )
    editable: bool = Field(True, description="Whether external callers may write it")
    category: str = Field(..., description="Category used to scope reads and writes")


__all__ = [
    "FieldCategory",
    "FieldDefinition",
    "FieldOption",
    "FieldType",
    "FieldValidation",
    "SettingValue",
    "SettingsRecord",
]
