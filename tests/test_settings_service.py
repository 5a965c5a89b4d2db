import re
import threading

import pytest

from src.core.error_codes import SettingsErrorCode, ValidationErrorCode
from src.core.exceptions import (
    ConfigurationException,
    FieldNotEditableException,
    FieldValidationException,
)
from src.core.field_catalog import DEFAULT_RESTAURANT_SETTINGS, FIELD_CATALOG
from src.core.field_definitions import (
    FieldDefinition,
    FieldType,
    FieldValidation,
)
from src.core.field_registry import SettingsRegistry
from src.services.settings_service import SettingsService, format_time_12h
from src.stores.settings_store import InMemorySettingsStore


def _service(**kwargs) -> SettingsService:
    kwargs.setdefault("store", InMemorySettingsStore())
    return SettingsService(restaurant_id="pave46", **kwargs)


def _custom_registry() -> SettingsRegistry:
    fields = (
        FieldDefinition(
            id="seats",
            label="Seats",
            type=FieldType.NUMBER,
            category="capacity",
            validation=FieldValidation(min=1, max=500),
        ),
        FieldDefinition(
            id="deposit",
            label="Deposit",
            type=FieldType.NUMBER,
            required=True,
            category="capacity",
            validation=FieldValidation(min=0.5),
        ),
        FieldDefinition(
            id="slug",
            label="Slug",
            type=FieldType.TEXT,
            editable=False,
            category="capacity",
        ),
        FieldDefinition(
            id="accepts_walkins",
            label="Accepts Walk-ins",
            type=FieldType.BOOLEAN,
            required=True,
            category="capacity",
        ),
    )
    return SettingsRegistry({**FIELD_CATALOG, "capacity": fields})


CAPACITY_SEED = {
    **DEFAULT_RESTAURANT_SETTINGS,
    "seats": 40,
    "deposit": 25,
    "slug": "pave-46",
    "accepts_walkins": True,
}


def _capacity_service() -> SettingsService:
    return _service(registry=_custom_registry(), initial_settings=CAPACITY_SEED)


def test_get_settings_returns_default_record():
    settings = _service().get_settings()

    assert settings["name"] == "Pavé46"
    assert settings["phone"] == "(212) 555-0123"
    assert settings["email"] == "info@pave46.com"
    assert settings["monday_open"] == "17:00"
    assert settings["monday_closed"] is False


def test_get_settings_returns_copy():
    service = _service()

    settings = service.get_settings()
    settings["name"] = "Mutated"

    assert service.get_settings()["name"] == "Pavé46"


def test_update_settings_persists_editable_fields():
    service = _service()

    updated = service.update_settings(
        {"name": "Updated Restaurant", "phone": "(212) 555-9999", "tagline": "New Tagline"}
    )

    assert updated["name"] == "Updated Restaurant"
    assert updated["phone"] == "(212) 555-9999"
    assert updated["tagline"] == "New Tagline"
    assert service.get_settings()["name"] == "Updated Restaurant"
    assert updated["email"] == "info@pave46.com"


def test_update_settings_rejects_unknown_field():
    service = _service()

    with pytest.raises(FieldNotEditableException) as exc_info:
        service.update_settings({"nonExistentField": "value"})

    assert str(exc_info.value) == "Field nonExistentField is not editable"
    assert exc_info.value.error_code == SettingsErrorCode.FIELD_NOT_EDITABLE
    assert exc_info.value.http_status == 400


def test_update_settings_rejects_read_only_field():
    service = _capacity_service()

    with pytest.raises(FieldNotEditableException, match="Field slug is not editable"):
        service.update_settings({"slug": "pave-46"})


@pytest.mark.parametrize(
    "changes, message",
    [
        ({"name": ""}, "Restaurant Name is required"),
        ({"name": None}, "Restaurant Name is required"),
        ({"phone": "123-456-7890"}, "Phone Number format is invalid"),
        ({"state": "NEW YORK"}, "State must be no more than 2 characters"),
        ({"zip": "123"}, "ZIP Code format is invalid"),
        ({"name": "P"}, "Restaurant Name must be at least 2 characters"),
        ({"tagline": "x" * 151}, "Tagline must be no more than 150 characters"),
    ],
)
def test_update_settings_validation_messages(changes, message):
    service = _service()

    with pytest.raises(FieldValidationException) as exc_info:
        service.update_settings(changes)

    assert str(exc_info.value) == message
    assert exc_info.value.field_id == next(iter(changes))
    assert exc_info.value.http_status == 400


def test_failed_update_leaves_record_untouched():
    service = _service()
    before = service.get_settings()

    with pytest.raises(FieldValidationException):
        service.update_settings({"tagline": "Fresh", "zip": "123"})

    assert service.get_settings() == before


def test_editability_checked_before_validation():
    service = _service()

    # the invalid zip comes first, but the unknown key wins
    with pytest.raises(FieldNotEditableException):
        service.update_settings({"zip": "123", "bogus": "x"})


def test_update_with_no_changes_returns_record():
    service = _service()

    assert service.update_settings({}) == dict(DEFAULT_RESTAURANT_SETTINGS)


def test_update_settings_is_idempotent():
    service = _service()
    changes = {"phone": "(212) 555-9999", "monday_closed": True}

    first = service.update_settings(changes)
    second = service.update_settings(changes)

    assert first == second


def test_get_settings_by_category_filters_fields():
    service = _service()

    hours = service.get_settings_by_category("hours")
    assert "monday_open" in hours
    assert "monday_closed" in hours
    assert "friday_open" in hours
    assert "name" not in hours
    assert "phone" not in hours

    contact = service.get_settings_by_category("contact")
    assert set(contact) == {"phone", "email", "address", "city", "state", "zip"}

    social = service.get_settings_by_category("social")
    assert set(social) == {"instagram", "facebook"}


def test_get_settings_by_unknown_category_is_empty():
    assert _service().get_settings_by_category("menu") == {}


def test_update_by_category_drops_other_categories():
    service = _service()

    updated = service.update_settings_by_category(
        "hours",
        {
            "monday_open": "18:00",
            "tuesday_open": "18:00",
            "name": "Should Not Update",
            "phone": "Should Not Update",
            "nonExistentField": "ignored",
        },
    )

    assert updated["monday_open"] == "18:00"
    assert updated["tuesday_open"] == "18:00"
    assert "name" not in updated
    assert "phone" not in updated

    settings = service.get_settings()
    assert settings["name"] == "Pavé46"
    assert settings["phone"] == "(212) 555-0123"


def test_update_by_category_still_validates_in_scope_fields():
    service = _service()

    with pytest.raises(FieldValidationException, match="ZIP Code format is invalid"):
        service.update_settings_by_category("contact", {"zip": "1", "name": ""})


def test_validate_field_unknown_field_passes():
    assert _service().validate_field("nope", "anything") is None


def test_validate_field_optional_empty_passes():
    service = _service()

    assert service.validate_field("tagline", "") is None
    assert service.validate_field("instagram", None) is None


def test_validate_field_reports_code():
    error = _service().validate_field("phone", "555")

    assert error is not None
    assert error.field_id == "phone"
    assert error.code == ValidationErrorCode.INVALID_FORMAT


def test_required_check_takes_precedence():
    error = _service().validate_field("phone", "")

    assert error.message == "Phone Number is required"
    assert error.code == ValidationErrorCode.MISSING_FIELD


def test_false_counts_as_empty_except_for_booleans():
    service = _capacity_service()

    assert service.validate_field("name", False).message == "Restaurant Name is required"
    assert service.validate_field("accepts_walkins", False) is None


def test_numeric_range_checks():
    service = _capacity_service()

    assert service.validate_field("seats", -3).message == "Seats must be at least 1"
    assert service.validate_field("seats", 501).message == "Seats must be no more than 500"
    assert service.validate_field("seats", 80) is None
    assert service.validate_field("deposit", 0.25).message == "Deposit must be at least 0.5"


def test_zero_counts_as_empty():
    service = _capacity_service()

    assert service.validate_field("deposit", 0).message == "Deposit is required"
    assert service.validate_field("deposit", 0.0).code == ValidationErrorCode.MISSING_FIELD
    # optional and empty: the range check is skipped
    assert service.validate_field("seats", 0) is None
    with pytest.raises(FieldValidationException, match="^Deposit is required$"):
        service.update_settings({"deposit": 0})


def test_range_checks_ignore_booleans_and_strings():
    service = _capacity_service()

    assert service.validate_field("seats", True) is None
    assert service.validate_field("seats", "0") is None


def test_validate_settings_collects_every_error():
    errors = _service().validate_settings(
        {"phone": "bad", "zip": "1", "name": "Ok Name", "bogus": 1}
    )

    assert errors == {
        "phone": "Phone Number format is invalid",
        "zip": "ZIP Code format is invalid",
        "bogus": "Field bogus is not editable",
    }


def test_validate_settings_does_not_save():
    service = _service()

    service.validate_settings({"tagline": "Preview only"})

    assert service.get_settings()["tagline"] == DEFAULT_RESTAURANT_SETTINGS["tagline"]


def test_format_hours_for_display_defaults():
    service = _service()

    formatted = service.format_hours_for_display(service.get_settings())

    assert len(formatted) == 7
    assert [entry.day for entry in formatted] == [
        "Monday",
        "Tuesday",
        "Wednesday",
        "Thursday",
        "Friday",
        "Saturday",
        "Sunday",
    ]
    assert re.fullmatch(
        r"\d{1,2}:\d{2} (AM|PM) - \d{1,2}:\d{2} (AM|PM)", formatted[0].hours
    )
    assert formatted[0].hours == "5:00 PM - 11:00 PM"
    assert formatted[4].hours == "5:00 PM - 2:00 AM"
    assert formatted[6].hours == "4:00 PM - 10:00 PM"


def test_format_hours_shows_closed_days():
    service = _service()

    service.update_settings({"monday_closed": True})
    formatted = service.format_hours_for_display(service.get_settings())

    assert formatted[0].model_dump() == {"day": "Monday", "hours": "Closed"}


def test_format_hours_midnight_and_late_night():
    service = _service()

    service.update_settings({"thursday_close": "00:00", "friday_close": "02:00"})
    formatted = {
        entry.day: entry.hours
        for entry in service.format_hours_for_display(service.get_settings())
    }

    assert formatted["Thursday"] == "5:00 PM - 12:00 AM"
    assert formatted["Friday"] == "5:00 PM - 2:00 AM"


def test_format_hours_fills_missing_times():
    formatted = _service().format_hours_for_display({"monday_closed": False})

    assert formatted[0].hours == "5:00 PM - 11:00 PM"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("00:00", "12:00 AM"),
        ("00:30", "12:30 AM"),
        ("09:05", "9:05 AM"),
        ("12:00", "12:00 PM"),
        ("13:15", "1:15 PM"),
        ("23:59", "11:59 PM"),
        ("late", "late"),
    ],
)
def test_format_time_12h(value, expected):
    assert format_time_12h(value) == expected


def test_apply_day_hours_copies_to_weekdays():
    service = _service()
    service.update_settings({"monday_open": "11:30", "monday_close": "22:00"})

    hours = service.apply_day_hours("Monday")

    for day in ("tuesday", "wednesday", "thursday", "friday"):
        assert hours[f"{day}_open"] == "11:30"
        assert hours[f"{day}_close"] == "22:00"
        assert hours[f"{day}_closed"] is False
    assert hours["saturday_close"] == "02:00"
    assert hours["sunday_open"] == "16:00"


def test_apply_day_hours_explicit_targets():
    service = _service()
    service.update_settings({"sunday_closed": True})

    hours = service.apply_day_hours("sunday", ["saturday"])

    assert hours["saturday_closed"] is True
    assert hours["saturday_open"] == "16:00"
    assert hours["friday_closed"] is False


def test_apply_day_hours_rejects_unknown_day():
    service = _service()

    with pytest.raises(FieldValidationException) as exc_info:
        service.apply_day_hours("funday")

    assert exc_info.value.error_code == SettingsErrorCode.UNKNOWN_DAY


def test_services_share_store_per_restaurant():
    store = InMemorySettingsStore()
    first = SettingsService(restaurant_id="pave46", store=store)
    other = SettingsService(restaurant_id="noreetuh", store=store)

    first.update_settings({"city": "Brooklyn"})

    reloaded = SettingsService(restaurant_id="pave46", store=store)
    assert reloaded.get_settings()["city"] == "Brooklyn"
    assert other.get_settings()["city"] == "New York"


def test_initial_settings_seed_new_restaurant():
    seed = {**DEFAULT_RESTAURANT_SETTINGS, "name": "Noreetuh", "cuisine": "american"}
    service = _service(initial_settings=seed)

    assert service.get_settings() == seed


def test_initial_settings_missing_required_fields_rejected():
    with pytest.raises(ConfigurationException) as exc_info:
        _service(initial_settings={"name": "Noreetuh"})

    errors = exc_info.value.details["errors"]
    assert errors["phone"] == "Phone Number is required"
    assert errors["zip"] == "ZIP Code is required"
    assert "name" not in errors
    assert exc_info.value.http_status == 500


def test_initial_settings_unknown_or_invalid_values_rejected():
    seed = {**DEFAULT_RESTAURANT_SETTINGS, "bogus": 1, "zip": "1", "city": ""}

    with pytest.raises(ConfigurationException) as exc_info:
        _service(initial_settings=seed)

    assert exc_info.value.details["errors"] == {
        "bogus": "Unknown field bogus",
        "zip": "ZIP Code format is invalid",
        "city": "City is required",
    }


def test_update_rejected_when_stored_record_lacks_required_field():
    store = InMemorySettingsStore()
    partial = {key: value for key, value in DEFAULT_RESTAURANT_SETTINGS.items() if key != "email"}
    store.save("pave46", partial)
    service = _service(store=store)

    with pytest.raises(FieldValidationException) as exc_info:
        service.update_settings({"tagline": "New Tagline"})

    assert str(exc_info.value) == "Email is required"
    assert exc_info.value.field_id == "email"
    assert service.get_settings() == partial

    updated = service.update_settings({"tagline": "New Tagline", "email": "hi@pave46.com"})
    assert updated["email"] == "hi@pave46.com"


def test_category_view_hides_read_only_fields():
    service = _capacity_service()

    assert service.get_settings()["slug"] == "pave-46"
    assert service.get_settings_by_category("capacity") == {
        "seats": 40,
        "deposit": 25,
        "accepts_walkins": True,
    }


def test_update_by_category_rejects_read_only_field_in_category():
    service = _capacity_service()

    with pytest.raises(FieldNotEditableException, match="^Field slug is not editable$"):
        service.update_settings_by_category("capacity", {"seats": 60, "slug": "renamed"})

    settings = service.get_settings()
    assert settings["slug"] == "pave-46"
    assert settings["seats"] == 40


@pytest.mark.parametrize(
    "changes, message",
    [
        ({"zip": "10013\n"}, "ZIP Code format is invalid"),
        ({"phone": "(212) 555-9999\n"}, "Phone Number format is invalid"),
    ],
)
def test_pattern_rejects_trailing_newline(changes, message):
    service = _service()

    with pytest.raises(FieldValidationException, match=f"^{re.escape(message)}$"):
        service.update_settings(changes)

    assert service.get_settings()["zip"] == "10013"
    assert service.validate_field("zip", "10013") is None


def test_concurrent_updates_do_not_lose_writes():
    store = InMemorySettingsStore()
    service = SettingsService(restaurant_id="pave46", store=store)
    days = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

    threads = [
        threading.Thread(target=service.update_settings, args=({f"{day}_open": "12:00"},))
        for day in days
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    settings = service.get_settings()
    assert all(settings[f"{day}_open"] == "12:00" for day in days)


def test_format_hours_is_idempotent_and_closed_wins():
    service = _service()
    record = {**service.get_settings(), "saturday_closed": True, "saturday_open": "09:00"}

    first = service.format_hours_for_display(record)
    second = service.format_hours_for_display(record)

    assert first == second
    assert first[5].hours == "Closed"


def test_every_required_field_rejects_empty_string():
    service = _service()
    before = service.get_settings()

    for field in service.registry.get_editable_fields():
        if not field.required:
            continue
        with pytest.raises(FieldValidationException, match=f"^{re.escape(field.label)} is required$"):
            service.update_settings({field.id: ""})

    assert service.get_settings() == before
