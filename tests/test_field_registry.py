import pytest

from src.core.exceptions import ConfigurationException
from src.core.field_catalog import FIELD_CATALOG, WEEKDAYS
from src.core.field_definitions import FieldDefinition, FieldType
from src.core.field_registry import SettingsRegistry, get_settings_registry


def test_categories_in_declaration_order():
    assert SettingsRegistry().get_categories() == ["general", "contact", "hours", "social"]


def test_catalog_field_counts():
    registry = SettingsRegistry()

    assert len(registry.get_editable_fields("general")) == 4
    assert len(registry.get_editable_fields("contact")) == 6
    assert len(registry.get_editable_fields("hours")) == 21
    assert len(registry.get_editable_fields("social")) == 5
    assert len(registry.get_editable_fields()) == 36


def test_hours_fields_list_times_before_closed_flags():
    ids = [field.id for field in SettingsRegistry().get_editable_fields("hours")]

    assert ids[:2] == ["monday_open", "monday_close"]
    assert ids[14:] == [f"{day}_closed" for day in WEEKDAYS]


def test_unknown_category_yields_no_fields():
    assert SettingsRegistry().get_editable_fields("menu") == []


def test_get_field_config():
    registry = SettingsRegistry()

    phone = registry.get_field_config("phone")
    assert phone.label == "Phone Number"
    assert phone.required is True
    assert phone.validation.pattern.search("(212) 555-0123")
    assert registry.get_field_config("missing") is None


def test_cuisine_options():
    cuisine = SettingsRegistry().get_field_config("cuisine")

    assert cuisine.type == FieldType.SELECT
    assert cuisine.default_value == "french"
    assert len(cuisine.options) == 6


def test_is_field_editable_fails_closed():
    read_only = FieldDefinition(
        id="slug", label="Slug", type=FieldType.TEXT, editable=False, category="general"
    )
    registry = SettingsRegistry(
        {**FIELD_CATALOG, "general": (*FIELD_CATALOG["general"], read_only)}
    )

    assert registry.is_field_editable("name") is True
    assert registry.is_field_editable("slug") is False
    assert registry.is_field_editable("unknown") is False
    assert "slug" not in [field.id for field in registry.get_editable_fields("general")]
    assert registry.get_field_config("slug") is read_only


def test_duplicate_field_ids_rejected():
    duplicate = FieldDefinition(
        id="phone", label="Phone", type=FieldType.PHONE, category="social"
    )

    with pytest.raises(ConfigurationException, match="Duplicate field id"):
        SettingsRegistry({**FIELD_CATALOG, "social": (duplicate,)})


def test_category_mismatch_rejected():
    misplaced = FieldDefinition(
        id="yelp", label="Yelp", type=FieldType.URL, category="social"
    )

    with pytest.raises(ConfigurationException, match="listed under 'general'"):
        SettingsRegistry({"general": (misplaced,)})


def test_shared_registry_is_cached():
    assert get_settings_registry() is get_settings_registry()


def test_get_all_fields_includes_read_only():
    read_only = FieldDefinition(
        id="slug", label="Slug", type=FieldType.TEXT, editable=False, category="social"
    )
    registry = SettingsRegistry({**FIELD_CATALOG, "social": (*FIELD_CATALOG["social"], read_only)})

    fields = registry.get_all_fields()
    assert len(fields) == 37
    assert fields[0].id == "name"
    assert fields[-1] is read_only
