from .config import ConfigurationError, DatabaseConfig
from .connection import (DatabaseError, check_connection, create_db_engine,
                         get_connection)

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "DatabaseError",
    "check_connection",
    "create_db_engine",
    "get_connection",
]
