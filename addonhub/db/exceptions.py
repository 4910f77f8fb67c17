"""Database-related exceptions for AddonHub.

Messages never include credentials from the database URL.
"""


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class ConfigurationError(DatabaseError):
    """Raised when database configuration is invalid or missing."""

    pass
