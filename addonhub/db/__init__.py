"""AddonHub database layer: Base, engine, session, exceptions."""

from addonhub.db.base import Base
from addonhub.db.engine import create_engine, dispose_engine, get_engine
from addonhub.db.exceptions import ConfigurationError, DatabaseError
from addonhub.db.session import create_session_factory, session_scope

__all__ = [
    "Base",
    "create_engine",
    "get_engine",
    "dispose_engine",
    "create_session_factory",
    "session_scope",
    "DatabaseError",
    "ConfigurationError",
]
