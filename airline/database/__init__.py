"""
Database package for the airline records system.

This package provides the SQLAlchemy table models, the generic async
data-access object and the Store that owns the SQLite database.
"""

from .models import (
    Base,
    CustomerRow,
    AirplaneRow,
    FlightRow,
    ReservationRow,
    ENTITY_TABLES,
    SCHEMA_VERSION,
    create_all_tables,
    drop_all_tables,
)

from .dao import EntityDao

from .config import (
    StoreConfig,
    StoreState,
    Store,
    open_store,
    normalize_database_url,
)

__all__ = [
    # Models
    "Base",
    "CustomerRow",
    "AirplaneRow",
    "FlightRow",
    "ReservationRow",
    "ENTITY_TABLES",
    "SCHEMA_VERSION",
    "create_all_tables",
    "drop_all_tables",

    # Data access
    "EntityDao",

    # Store
    "StoreConfig",
    "StoreState",
    "Store",
    "open_store",
    "normalize_database_url",
]
