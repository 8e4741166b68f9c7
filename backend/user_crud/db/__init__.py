from .base import Base
from .session import (
    check_connection,
    create_db_engine,
    create_session_factory,
    get_db,
    init_db,
)

__all__ = [
    "Base",
    "check_connection",
    "create_db_engine",
    "create_session_factory",
    "get_db",
    "init_db",
]
