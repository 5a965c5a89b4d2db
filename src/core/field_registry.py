"""
Settings Field Registry

Read-only lookups over the field catalog. The registry knows nothing about
current values; it only answers questions about field metadata.

Usage:
    from src.core.field_registry import get_settings_registry

    registry = get_settings_registry()
    registry.get_editable_fields("hours")   # hours fields, declaration order
    registry.get_field_config("phone")      # FieldDefinition or None
    registry.is_field_editable("unknown")   # False
"""

from functools import lru_cache
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from src.core.error_codes import ConfigurationErrorCode
from src.core.exceptions import ConfigurationException
from src.core.field_catalog import FIELD_CATALOG
from src.core.field_definitions import FieldDefinition


class SettingsRegistry:
    """Immutable catalog of setting definitions grouped by category."""

    def __init__(
        self, catalog: Optional[Mapping[str, Sequence[FieldDefinition]]] = None
    ) -> None:
        catalog = FIELD_CATALOG if catalog is None else catalog

        self._categories: Tuple[str, ...] = tuple(catalog.keys())
        self._fields: Tuple[FieldDefinition, ...] = tuple(
            field for fields in catalog.values() for field in fields
        )

        by_id: Dict[str, FieldDefinition] = {}
        for category, fields in catalog.items():
            for field in fields:
                if field.category != category:
                    raise ConfigurationException(
                        f"Field {field.id} declares category '{field.category}' "
                        f"but is listed under '{category}'",
                        ConfigurationErrorCode.INVALID_CONFIG,
                    )
                if field.id in by_id:
                    raise ConfigurationException(
                        f"Duplicate field id in catalog: {field.id}",
                        ConfigurationErrorCode.INVALID_CONFIG,
                    )
                by_id[field.id] = field
        self._by_id = by_id

    def get_categories(self) -> List[str]:
        """Category names in declaration order."""
        return list(self._categories)

    def get_all_fields(self) -> List[FieldDefinition]:
        """Every field, editable or not, in declaration order."""
        return list(self._fields)

    def get_editable_fields(self, category: Optional[str] = None) -> List[FieldDefinition]:
        """
        Editable fields, optionally restricted to one category.

        An unknown category yields an empty list.
        """
        return [
            field
            for field in self._fields
            if field.editable and (category is None or field.category == category)
        ]

    def get_field_config(self, field_id: str) -> Optional[FieldDefinition]:
        """Look a field up by id, including read-only ones. None when unknown."""
        return self._by_id.get(field_id)

    def is_field_editable(self, field_id: str) -> bool:
        """Unknown fields report False."""
        field = self._by_id.get(field_id)
        return field.editable if field is not None else False


@lru_cache(maxsize=1)
def get_settings_registry() -> SettingsRegistry:
    """Shared registry over the built-in restaurant catalog."""
    return SettingsRegistry()


__all__ = ["SettingsRegistry", "get_settings_registry"]
