"""Error taxonomy for add-on review, regeneration and conversion."""

from __future__ import annotations


class AddonHubError(Exception):
    """Base exception for AddonHub operations.

    Carries the repository (and, where known, release) identity so callers
    can act on the failure.
    """

    def __init__(self, message: str, *, repo_id: int | None = None, release_id: int | None = None) -> None:
        self.repo_id = repo_id
        self.release_id = release_id
        super().__init__(message)


class ForbiddenError(AddonHubError):
    """Raised when a non-administrator attempts a review action."""


class NotFoundError(AddonHubError):
    """Raised when a repository or release id is unknown to the hosting system."""


class NoRecordError(AddonHubError):
    """Raised when no add-on record exists for a repository."""


class NotVerifiedError(AddonHubError):
    """Raised when an add-on record has no usable verified release."""


class ManifestMissingError(AddonHubError):
    """Raised when the repository has no `info` file at the verified revision."""


class ManifestParseError(AddonHubError):
    """Raised when the `info` file is not a valid manifest."""


class ArchiveUnavailableError(AddonHubError):
    """Raised when the release archive cannot be generated or read."""


class RepositoryAccessError(AddonHubError):
    """Raised when the version-control layer fails."""


class StorageError(AddonHubError):
    """Raised when persisting or loading records fails."""


class RecordConflictError(StorageError):
    """Raised when an insert loses against the repository uniqueness constraint."""


class UnsafeFieldValueError(AddonHubError):
    """Raised when a value cannot be represented in the S-expression index."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")


class DependencyResolutionSkipped(AddonHubError):
    """Soft failure for one dependency; logged and never surfaced to callers."""

    def __init__(self, dependency_id: str, reason: str) -> None:
        self.dependency_id = dependency_id
        self.reason = reason
        super().__init__(f"dependency {dependency_id!r} skipped: {reason}")
