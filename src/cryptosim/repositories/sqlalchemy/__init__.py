"""SQLAlchemy repository implementations."""

from cryptosim.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_session,
    init_db,
    reset_database,
    Base,
)
from cryptosim.repositories.sqlalchemy.wallet_store import SqlAlchemyWalletStore

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_session",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyWalletStore",
]
