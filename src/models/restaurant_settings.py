"""Restaurant settings SQLAlchemy model."""

from __future__ import annotations

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class RestaurantSettingsRecord(Base, TimestampMixin):
    """One flat settings record per restaurant, stored as a JSON object."""

    __tablename__ = "restaurant_settings"

    restaurant_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    values: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<RestaurantSettingsRecord(restaurant_id='{self.restaurant_id}')>"


__all__ = ["RestaurantSettingsRecord"]
