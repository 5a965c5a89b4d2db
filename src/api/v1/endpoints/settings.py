"""
Restaurant Settings API

REST API endpoints for reading and editing a restaurant's settings.
Service exceptions propagate to the global exception handler, which maps
them to the standard error envelope.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query

from src.api.v1.converters import (
    convert_category_settings_to_response,
    convert_field_definition_to_response,
    convert_hours_display_to_response,
    convert_settings_to_response,
    convert_validation_errors_to_response,
)
from src.api.v1.schemas.requests import ApplyDayHoursRequest, SettingsUpdateRequest
from src.api.v1.schemas.responses import (
    CategorySettingsResponse,
    FieldDefinitionResponse,
    HoursDisplayResponse,
    SettingsResponse,
    SettingsValidationResponse,
)
from src.core.logger import get_logger, set_restaurant_id
from src.services.settings_service import SettingsService
from src.stores.settings_store import create_settings_store

logger = get_logger(__name__)

router = APIRouter(prefix="/restaurants/{restaurant_id}/settings", tags=["settings"])
settings_store = create_settings_store()


async def get_settings_service(
    restaurant_id: str = Path(..., min_length=1, max_length=100),
) -> SettingsService:
    """Build the service for the restaurant in the path and tag logs with it."""
    set_restaurant_id(restaurant_id)
    return SettingsService(restaurant_id=restaurant_id, store=settings_store)


@router.get("", response_model=SettingsResponse)
def get_settings(service: SettingsService = Depends(get_settings_service)):
    """Return the full settings record."""
    return convert_settings_to_response(service.restaurant_id, service.get_settings())


@router.put("", response_model=SettingsResponse)
def update_settings(
    request: SettingsUpdateRequest,
    service: SettingsService = Depends(get_settings_service),
):
    """
    Apply a batch of changes atomically.

    Returns 400 with code FIELD_NOT_EDITABLE or a validation code when any
    key is rejected; nothing is saved in that case.
    """
    logger.info("API: Updating %d setting(s)", len(request.changes))
    record = service.update_settings(request.changes)
    return convert_settings_to_response(service.restaurant_id, record)


@router.get("/fields", response_model=List[FieldDefinitionResponse])
def get_editable_fields(
    category: Optional[str] = Query(None, description="Restrict to one category"),
    service: SettingsService = Depends(get_settings_service),
):
    """List editable field definitions for building the admin form."""
    fields = service.registry.get_editable_fields(category)
    return [convert_field_definition_to_response(field) for field in fields]


@router.post("/validate", response_model=SettingsValidationResponse)
def validate_settings(
    request: SettingsUpdateRequest,
    service: SettingsService = Depends(get_settings_service),
):
    """Report every problem in a batch without saving anything."""
    errors = service.validate_settings(request.changes)
    return convert_validation_errors_to_response(errors)


@router.get("/hours/display", response_model=HoursDisplayResponse)
def get_hours_display(service: SettingsService = Depends(get_settings_service)):
    """Opening hours formatted for the public site."""
    entries = service.format_hours_for_display(service.get_settings())
    return convert_hours_display_to_response(service.restaurant_id, entries)


@router.post("/hours/apply", response_model=CategorySettingsResponse)
def apply_day_hours(
    request: ApplyDayHoursRequest,
    service: SettingsService = Depends(get_settings_service),
):
    """Copy one day's hours onto other days."""
    logger.info("API: Applying %s hours", request.source_day)
    hours = service.apply_day_hours(request.source_day, request.target_days)
    return convert_category_settings_to_response(service.restaurant_id, "hours", hours)


@router.get("/{category}", response_model=CategorySettingsResponse)
def get_category_settings(
    category: str, service: SettingsService = Depends(get_settings_service)
):
    """Editable fields of one category; unknown categories are empty."""
    record = service.get_settings_by_category(category)
    return convert_category_settings_to_response(service.restaurant_id, category, record)


@router.put("/{category}", response_model=CategorySettingsResponse)
def update_category_settings(
    category: str,
    request: SettingsUpdateRequest,
    service: SettingsService = Depends(get_settings_service),
):
    """Apply changes to one category, ignoring keys from other categories."""
    logger.info("API: Updating '%s' settings", category)
    record = service.update_settings_by_category(category, request.changes)
    return convert_category_settings_to_response(service.restaurant_id, category, record)


__all__ = ["router", "get_settings_service"]
