"""Business logic for reading, validating and updating restaurant settings."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Pattern

from pydantic import BaseModel, Field

from src.core.config import settings
from src.core.error_codes import (
    ConfigurationErrorCode,
    SettingsErrorCode,
    ValidationErrorCode,
)
from src.core.exceptions import (
    ConfigurationException,
    FieldNotEditableException,
    FieldValidationException,
)
from src.core.field_catalog import DEFAULT_RESTAURANT_SETTINGS, WEEKDAYS
from src.core.field_definitions import (
    FieldDefinition,
    FieldType,
    SettingsRecord,
    SettingValue,
)
from src.core.field_registry import SettingsRegistry, get_settings_registry
from src.core.logger import get_logger
from src.stores.settings_store import InMemorySettingsStore, SettingsStore

logger = get_logger(__name__)

DEFAULT_OPEN_TIME = "17:00"
DEFAULT_CLOSE_TIME = "23:00"


class FieldValidationError(BaseModel):
    """Outcome of a failed single-field check."""

    field_id: str = Field(..., description="Field that failed")
    message: str = Field(..., description="Human-readable message for end users")
    code: ValidationErrorCode = Field(..., description="Machine-readable reason")

    def to_exception(self) -> FieldValidationException:
        return FieldValidationException(self.message, self.code, field_id=self.field_id)


class HoursDisplayEntry(BaseModel):
    """One line of the public opening-hours listing."""

    day: str = Field(..., description="Day name, e.g. Monday")
    hours: str = Field(..., description="'Closed' or '5:00 PM - 11:00 PM'")


def _is_number(value: SettingValue) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_empty(value: SettingValue, field: FieldDefinition) -> bool:
    if value is None or value == "":
        return True
    if _is_number(value):
        return value == 0 or value != value
    # False is a real answer for a checkbox, but "missing" anywhere else
    return value is False and field.type != FieldType.BOOLEAN


def _matches_pattern(pattern: Pattern[str], value: str) -> bool:
    match = pattern.search(value)
    if match is None:
        return False
    # a closing "$" also matches before a trailing newline; require the real end
    if pattern.pattern.endswith("$") and not pattern.pattern.endswith("\\$"):
        return match.end() == len(value)
    return True


def _format_bound(bound: float) -> str:
    return str(int(bound)) if float(bound).is_integer() else str(bound)


def format_time_12h(value: str) -> str:
    """
    Render a wall-clock "HH:MM" value on a 12-hour clock.

    "00:00" -> "12:00 AM", "12:30" -> "12:30 PM", "02:00" -> "2:00 AM".
    Values whose hour is not a number are returned unchanged.
    """
    hours, _, minutes = value.partition(":")
    try:
        hour = int(hours or "0")
    except ValueError:
        return value
    suffix = "PM" if hour >= 12 else "AM"
    if hour == 0:
        display_hour = 12
    elif hour > 12:
        display_hour = hour - 12
    else:
        display_hour = hour
    return f"{display_hour}:{minutes} {suffix}"


class SettingsService:
    """
    Settings for a single restaurant.

    Reads return copies of the stored record. Updates are all-or-nothing:
    every key is checked for editability, then every value is validated,
    and only then is the batch merged and saved. The whole sequence runs
    under the store's per-restaurant lock.
    """

    def __init__(
        self,
        restaurant_id: Optional[str] = None,
        store: Optional[SettingsStore] = None,
        registry: Optional[SettingsRegistry] = None,
        initial_settings: Optional[Mapping[str, SettingValue]] = None,
    ) -> None:
        self.restaurant_id = restaurant_id or settings.restaurant__default_id
        self.store = store or InMemorySettingsStore()
        self.registry = registry or get_settings_registry()
        self.initial_settings: SettingsRecord = dict(
            DEFAULT_RESTAURANT_SETTINGS if initial_settings is None else initial_settings
        )
        self._check_initial_settings()

    def _check_initial_settings(self) -> None:
        """
        Reject a seed record that an update could never have produced.

        Read-only fields may be seeded; unknown keys, invalid values and
        missing required fields may not.

        Raises:
            ConfigurationException: With every problem under details["errors"]
        """
        errors: Dict[str, str] = {}
        for field_id, value in self.initial_settings.items():
            if self.registry.get_field_config(field_id) is None:
                errors[field_id] = f"Unknown field {field_id}"
                continue
            problem = self.validate_field(field_id, value)
            if problem is not None:
                errors[field_id] = problem.message
        for field in self.registry.get_all_fields():
            if field.required and field.id not in self.initial_settings:
                errors[field.id] = f"{field.label} is required"

        if errors:
            raise ConfigurationException(
                f"Invalid initial settings for restaurant '{self.restaurant_id}': "
                + "; ".join(errors.values()),
                ConfigurationErrorCode.INVALID_CONFIG,
                {"errors": errors},
            )

    def _missing_required(self, record: Mapping[str, SettingValue]) -> Optional[FieldDefinition]:
        for field in self.registry.get_all_fields():
            if field.required and _is_empty(record.get(field.id), field):
                return field
        return None

    def _load(self) -> SettingsRecord:
        record = self.store.get(self.restaurant_id)
        if record is not None:
            return record
        with self.store.lock(self.restaurant_id):
            record = self.store.get(self.restaurant_id)
            if record is None:
                logger.info("Seeding settings for restaurant '%s'", self.restaurant_id)
                record = self.store.save(self.restaurant_id, self.initial_settings)
        return record

    def _category_view(self, record: Mapping[str, SettingValue], category: str) -> SettingsRecord:
        # read-only fields are deliberately left out of category views
        return {
            field.id: record[field.id]
            for field in self.registry.get_editable_fields(category)
            if field.id in record
        }

    def _field_category(self, field_id: str) -> Optional[str]:
        field = self.registry.get_field_config(field_id)
        return field.category if field is not None else None

    def get_settings(self) -> SettingsRecord:
        """Return a copy of the full settings record."""
        return self._load()

    def get_settings_by_category(self, category: str) -> SettingsRecord:
        """Return the editable fields of one category that have a stored value."""
        return self._category_view(self._load(), category)

    def validate_field(
        self, field_id: str, value: SettingValue
    ) -> Optional[FieldValidationError]:
        """
        Check one value against its field's constraints without touching state.

        Unknown fields pass; rejecting them is the job of the update methods.
        The required check always wins over pattern/length/range checks.
        Pattern and length checks apply to strings only, range checks to
        numbers only.
        """
        field = self.registry.get_field_config(field_id)
        if field is None:
            return None

        def error(code: ValidationErrorCode, message: str) -> FieldValidationError:
            return FieldValidationError(field_id=field_id, message=message, code=code)

        empty = _is_empty(value, field)
        if field.required and empty:
            return error(ValidationErrorCode.MISSING_FIELD, f"{field.label} is required")

        rules = field.validation
        if empty or rules is None:
            return None

        if isinstance(value, str):
            if rules.pattern is not None and not _matches_pattern(rules.pattern, value):
                return error(
                    ValidationErrorCode.INVALID_FORMAT, f"{field.label} format is invalid"
                )
            if rules.min_length is not None and len(value) < rules.min_length:
                return error(
                    ValidationErrorCode.VALUE_OUT_OF_RANGE,
                    f"{field.label} must be at least {rules.min_length} characters",
                )
            if rules.max_length is not None and len(value) > rules.max_length:
                return error(
                    ValidationErrorCode.VALUE_OUT_OF_RANGE,
                    f"{field.label} must be no more than {rules.max_length} characters",
                )

        if _is_number(value):
            if rules.min is not None and value < rules.min:
                return error(
                    ValidationErrorCode.VALUE_OUT_OF_RANGE,
                    f"{field.label} must be at least {_format_bound(rules.min)}",
                )
            if rules.max is not None and value > rules.max:
                return error(
                    ValidationErrorCode.VALUE_OUT_OF_RANGE,
                    f"{field.label} must be no more than {_format_bound(rules.max)}",
                )

        return None

    def validate_settings(self, changes: Mapping[str, SettingValue]) -> Dict[str, str]:
        """
        Preview a batch: every problem keyed by field id, nothing saved.

        Admin forms use this to show an error next to each input instead of
        only the first failure.
        """
        errors: Dict[str, str] = {}
        for field_id, value in changes.items():
            if not self.registry.is_field_editable(field_id):
                errors[field_id] = FieldNotEditableException(field_id).message
                continue
            problem = self.validate_field(field_id, value)
            if problem is not None:
                errors[field_id] = problem.message
        return errors

    def _apply_changes(self, changes: Mapping[str, SettingValue]) -> SettingsRecord:
        # Caller holds the restaurant lock.
        for field_id in changes:
            if not self.registry.is_field_editable(field_id):
                logger.warning(
                    "Rejected settings update for '%s': field %s is not editable",
                    self.restaurant_id,
                    field_id,
                )
                raise FieldNotEditableException(field_id)

        for field_id, value in changes.items():
            problem = self.validate_field(field_id, value)
            if problem is not None:
                logger.warning(
                    "Rejected settings update for '%s': %s",
                    self.restaurant_id,
                    problem.message,
                )
                raise problem.to_exception()

        record = self._load()
        if not changes:
            return record

        record.update(changes)
        # a stored record may predate a required field
        missing = self._missing_required(record)
        if missing is not None:
            logger.warning(
                "Rejected settings update for '%s': %s has no value",
                self.restaurant_id,
                missing.id,
            )
            raise FieldValidationException(
                f"{missing.label} is required",
                ValidationErrorCode.MISSING_FIELD,
                field_id=missing.id,
            )

        saved = self.store.save(self.restaurant_id, record)
        logger.info(
            "Updated settings for '%s': %s", self.restaurant_id, ", ".join(changes)
        )
        return saved

    def update_settings(self, changes: Mapping[str, SettingValue]) -> SettingsRecord:
        """
        Validate and merge a batch of changes, returning the full record.

        Raises:
            FieldNotEditableException: A key is unknown or read-only
            FieldValidationException: The first value that fails validation
        """
        with self.store.lock(self.restaurant_id):
            return self._apply_changes(changes)

    def update_settings_by_category(
        self, category: str, changes: Mapping[str, SettingValue]
    ) -> SettingsRecord:
        """
        Like update_settings, restricted to one category.

        Keys belonging to other categories (or to no known field) are dropped
        silently rather than rejected. Returns the category view after the
        merge.
        """
        scoped = {
            field_id: value
            for field_id, value in changes.items()
            if self._field_category(field_id) == category
        }
        dropped = [field_id for field_id in changes if field_id not in scoped]
        if dropped:
            logger.debug(
                "Ignoring fields outside category '%s' for '%s': %s",
                category,
                self.restaurant_id,
                ", ".join(dropped),
            )

        with self.store.lock(self.restaurant_id):
            record = self._apply_changes(scoped)
        return self._category_view(record, category)

    def apply_day_hours(
        self, source_day: str, target_days: Optional[Iterable[str]] = None
    ) -> SettingsRecord:
        """
        Copy one day's open/close/closed values onto other days.

        Without target_days the source is copied to the other weekdays
        (Monday to Friday). Returns the hours view after the update.

        Raises:
            FieldValidationException: A day name is not a weekday name
        """
        source = source_day.strip().lower()
        if target_days is None:
            targets = [day for day in WEEKDAYS[:5] if day != source]
        else:
            targets = [day.strip().lower() for day in target_days]

        for day in [source, *targets]:
            if day not in WEEKDAYS:
                raise FieldValidationException(
                    f"Unknown day: {day}", SettingsErrorCode.UNKNOWN_DAY
                )

        with self.store.lock(self.restaurant_id):
            record = self._load()
            changes: SettingsRecord = {}
            for suffix in ("open", "close", "closed"):
                source_key = f"{source}_{suffix}"
                if source_key not in record:
                    continue
                for day in targets:
                    changes[f"{day}_{suffix}"] = record[source_key]
            return self.update_settings_by_category("hours", changes)

    def format_hours_for_display(
        self, settings_record: Mapping[str, SettingValue]
    ) -> List[HoursDisplayEntry]:
        """
        Monday-to-Sunday opening hours as display strings.

        A day flagged closed shows "Closed" whatever its times say. Times are
        wall-clock values, so a close time after midnight is shown as is
        ("5:00 PM - 2:00 AM"). Missing times fall back to 17:00 and 23:00.
        """
        entries: List[HoursDisplayEntry] = []
        for day in WEEKDAYS:
            label = day.capitalize()
            if settings_record.get(f"{day}_closed"):
                entries.append(HoursDisplayEntry(day=label, hours="Closed"))
                continue
            open_time = settings_record.get(f"{day}_open") or DEFAULT_OPEN_TIME
            close_time = settings_record.get(f"{day}_close") or DEFAULT_CLOSE_TIME
            entries.append(
                HoursDisplayEntry(
                    day=label,
                    hours=f"{format_time_12h(str(open_time))} - {format_time_12h(str(close_time))}",
                )
            )
        return entries


__all__ = [
    "DEFAULT_CLOSE_TIME",
    "DEFAULT_OPEN_TIME",
    "FieldValidationError",
    "HoursDisplayEntry",
    "SettingsService",
    "format_time_12h",
]
