"""
Settings Request Schemas

API request models for restaurant settings endpoints.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from src.core.field_definitions import SettingValue


class SettingsUpdateRequest(BaseModel):
    """Request model for a batch of settings changes."""

    changes: Dict[str, SettingValue] = Field(
        ...,
        description="Field id to new value",
        examples=[{"phone": "(212) 555-9999", "monday_closed": True}],
    )


class ApplyDayHoursRequest(BaseModel):
    """Request model for copying one day's hours onto other days."""

    source_day: str = Field(..., min_length=1, description="Day to copy, e.g. monday")
    target_days: Optional[List[str]] = Field(
        None, description="Days to overwrite; defaults to the other weekdays"
    )
