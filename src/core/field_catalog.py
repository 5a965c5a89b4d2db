"""
Field Catalog

Declarative list of the restaurant settings editable from the admin panel,
grouped by category, plus the record a restaurant starts with.

Category order and declaration order within a category are significant:
they are the order admin forms render fields and the order the registry
returns them.
"""

from types import MappingProxyType
from typing import List, Mapping, Tuple

from src.core.field_definitions import (
    FieldCategory,
    FieldDefinition,
    FieldOption,
    FieldType,
    FieldValidation,
    SettingsRecord,
)

WEEKDAYS: Tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

PHONE_PATTERN = r"^\(\d{3}\) \d{3}-\d{4}$"
ZIP_PATTERN = r"^\d{5}$"

_DEFAULT_OPEN = {day: "17:00" for day in WEEKDAYS} | {"sunday": "16:00"}
_DEFAULT_CLOSE = {day: "23:00" for day in WEEKDAYS} | {
    "thursday": "00:00",
    "friday": "02:00",
    "saturday": "02:00",
    "sunday": "22:00",
}


GENERAL_FIELDS: Tuple[FieldDefinition, ...] = (
    FieldDefinition(
        id="name",
        label="Restaurant Name",
        type=FieldType.TEXT,
        required=True,
        placeholder="Pavé46",
        category=FieldCategory.GENERAL,
        validation=FieldValidation(min_length=2, max_length=100),
    ),
    FieldDefinition(
        id="tagline",
        label="Tagline",
        type=FieldType.TEXT,
        placeholder="French Bistro in Hudson Square",
        category=FieldCategory.GENERAL,
        validation=FieldValidation(max_length=150),
    ),
    FieldDefinition(
        id="description",
        label="Description",
        type=FieldType.TEXTAREA,
        placeholder="A brief description of your restaurant...",
        category=FieldCategory.GENERAL,
        validation=FieldValidation(max_length=500),
    ),
    FieldDefinition(
        id="cuisine",
        label="Cuisine Type",
        type=FieldType.SELECT,
        required=True,
        category=FieldCategory.GENERAL,
        options=tuple(
            FieldOption(value=value, label=value.capitalize())
            for value in (
                "french",
                "italian",
                "american",
                "asian",
                "mediterranean",
                "other",
            )
        ),
        default_value="french",
    ),
)

CONTACT_FIELDS: Tuple[FieldDefinition, ...] = (
    FieldDefinition(
        id="phone",
        label="Phone Number",
        type=FieldType.PHONE,
        required=True,
        placeholder="(212) 555-0123",
        category=FieldCategory.CONTACT,
        validation=FieldValidation(pattern=PHONE_PATTERN),
    ),
    FieldDefinition(
        id="email",
        label="Email",
        type=FieldType.EMAIL,
        required=True,
        placeholder="info@pave46.com",
        category=FieldCategory.CONTACT,
    ),
    FieldDefinition(
        id="address",
        label="Street Address",
        type=FieldType.TEXT,
        required=True,
        placeholder="46 Hudson Square",
        category=FieldCategory.CONTACT,
    ),
    FieldDefinition(
        id="city",
        label="City",
        type=FieldType.TEXT,
        required=True,
        placeholder="New York",
        category=FieldCategory.CONTACT,
    ),
    FieldDefinition(
        id="state",
        label="State",
        type=FieldType.TEXT,
        required=True,
        placeholder="NY",
        category=FieldCategory.CONTACT,
        validation=FieldValidation(max_length=2),
    ),
    FieldDefinition(
        id="zip",
        label="ZIP Code",
        type=FieldType.TEXT,
        required=True,
        placeholder="10013",
        category=FieldCategory.CONTACT,
        validation=FieldValidation(pattern=ZIP_PATTERN),
    ),
)


def _hours_fields() -> Tuple[FieldDefinition, ...]:
    # open/close pairs for every day first, then the closed flags
    fields: List[FieldDefinition] = []
    for day in WEEKDAYS:
        for kind, defaults in (("open", _DEFAULT_OPEN), ("close", _DEFAULT_CLOSE)):
            fields.append(
                FieldDefinition(
                    id=f"{day}_{kind}",
                    label=f"{day.capitalize()} {kind.capitalize()}",
                    type=FieldType.TIME,
                    category=FieldCategory.HOURS,
                    default_value=defaults[day],
                )
            )
    for day in WEEKDAYS:
        fields.append(
            FieldDefinition(
                id=f"{day}_closed",
                label=f"{day.capitalize()} Closed",
                type=FieldType.BOOLEAN,
                category=FieldCategory.HOURS,
                default_value=False,
            )
        )
    return tuple(fields)


HOURS_FIELDS: Tuple[FieldDefinition, ...] = _hours_fields()

SOCIAL_FIELDS: Tuple[FieldDefinition, ...] = tuple(
    FieldDefinition(
        id=field_id,
        label=label,
        type=FieldType.URL,
        placeholder=placeholder,
        category=FieldCategory.SOCIAL,
    )
    for field_id, label, placeholder in (
        ("instagram", "Instagram", "https://instagram.com/pave46"),
        ("facebook", "Facebook", "https://facebook.com/pave46"),
        ("twitter", "Twitter/X", "https://twitter.com/pave46"),
        ("yelp", "Yelp", "https://yelp.com/biz/pave46"),
        ("opentable", "OpenTable", "https://opentable.com/pave46"),
    )
)

FIELD_CATALOG: Mapping[str, Tuple[FieldDefinition, ...]] = MappingProxyType(
    {
        FieldCategory.GENERAL.value: GENERAL_FIELDS,
        FieldCategory.CONTACT.value: CONTACT_FIELDS,
        FieldCategory.HOURS.value: HOURS_FIELDS,
        FieldCategory.SOCIAL.value: SOCIAL_FIELDS,
    }
)


def _default_hours() -> SettingsRecord:
    record: SettingsRecord = {}
    for day in WEEKDAYS:
        record[f"{day}_open"] = _DEFAULT_OPEN[day]
        record[f"{day}_close"] = _DEFAULT_CLOSE[day]
        record[f"{day}_closed"] = False
    return record


# Starting record for a restaurant with nothing stored yet
DEFAULT_RESTAURANT_SETTINGS: Mapping[str, object] = MappingProxyType(
    {
        "name": "Pavé46",
        "tagline": "French Bistro in Hudson Square",
        "description": (
            "An intimate neighborhood cocktail bar in Hudson Square blending "
            "Parisian charm with New York sophistication."
        ),
        "cuisine": "french",
        "phone": "(212) 555-0123",
        "email": "info@pave46.com",
        "address": "46 Hudson Square",
        "city": "New York",
        "state": "NY",
        "zip": "10013",
        **_default_hours(),
        "instagram": "https://instagram.com/pave46",
        "facebook": "https://facebook.com/pave46",
    }
)


__all__ = [
    "CONTACT_FIELDS",
    "DEFAULT_RESTAURANT_SETTINGS",
    "FIELD_CATALOG",
    "GENERAL_FIELDS",
    "HOURS_FIELDS",
    "SOCIAL_FIELDS",
    "WEEKDAYS",
]
