"""
Stores Package

Persistence for restaurant-settings.

Only the SQLAlchemy session layer is re-exported here; models import Base
from this package, so the settings stores (which import the models) are
imported from src.stores.settings_store directly.
"""

from .database import (
    Base,
    create_tables,
    database_session,
    dispose_engine,
    get_engine,
    get_pool_status,
    get_session_factory,
    test_connection,
)

__all__ = [
    "Base",
    "get_engine",
    "get_session_factory",
    "database_session",
    "create_tables",
    "test_connection",
    "get_pool_status",
    "dispose_engine",
]
