"""
Settings Response Schemas

API response models for restaurant settings endpoints.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from src.core.field_definitions import SettingValue


class SettingsResponse(BaseModel):
    """Response model for a full settings record."""

    restaurant_id: str = Field(..., description="Restaurant ID")
    settings: Dict[str, SettingValue] = Field(..., description="Field id to value")


class CategorySettingsResponse(BaseModel):
    """Response model for the editable fields of one category."""

    restaurant_id: str = Field(..., description="Restaurant ID")
    category: str = Field(..., description="Category name", examples=["hours"])
    settings: Dict[str, SettingValue] = Field(..., description="Field id to value")


class FieldOptionResponse(BaseModel):
    """One choice of a select field."""

    value: str = Field(..., description="Stored value")
    label: str = Field(..., description="Display label")


class FieldValidationResponse(BaseModel):
    """Constraints attached to a field."""

    pattern: Optional[str] = Field(None, description="Regular expression source")
    min_length: Optional[int] = Field(None, description="Minimum string length")
    max_length: Optional[int] = Field(None, description="Maximum string length")
    min: Optional[float] = Field(None, description="Minimum numeric value")
    max: Optional[float] = Field(None, description="Maximum numeric value")


class FieldDefinitionResponse(BaseModel):
    """Response model for one editable field."""

    id: str = Field(..., description="Field id")
    label: str = Field(..., description="Display label")
    type: str = Field(..., description="Input type", examples=["tel"])
    required: bool = Field(False, description="Whether an empty value is rejected")
    placeholder: Optional[str] = Field(None, description="Input placeholder")
    validation: Optional[FieldValidationResponse] = Field(
        None, description="Validation rules"
    )
    options: List[FieldOptionResponse] = Field(
        default_factory=list, description="Choices for select fields"
    )
    default_value: Optional[SettingValue] = Field(None, description="Default value")
    editable: bool = Field(True, description="Whether the field accepts updates")
    category: str = Field(..., description="Category the field belongs to")


class SettingsValidationResponse(BaseModel):
    """Response model for a validation preview."""

    valid: bool = Field(..., description="True when no field has an error")
    errors: Dict[str, str] = Field(
        default_factory=dict, description="Field id to error message"
    )


class HoursDisplayItemResponse(BaseModel):
    """One day of the opening-hours listing."""

    day: str = Field(..., description="Day name", examples=["Friday"])
    hours: str = Field(..., description="Display string", examples=["5:00 PM - 2:00 AM"])


class HoursDisplayResponse(BaseModel):
    """Response model for the opening-hours listing."""

    restaurant_id: str = Field(..., description="Restaurant ID")
    hours: List[HoursDisplayItemResponse] = Field(
        ..., description="Monday to Sunday, in order"
    )
