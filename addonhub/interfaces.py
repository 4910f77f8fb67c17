"""Protocols for the hosting-system collaborators AddonHub depends on."""

from __future__ import annotations

from typing import Any, Protocol

from addonhub.schema import Actor, ArchiveResult, CommitInfo, Release, Repository, TreeEntry


class RepositoryAccess(Protocol):
    """Version-control access for one hosted repository."""

    async def open_repository(self, owner_name: str, repo_name: str) -> Any:
        """Open the repository and return an opaque handle."""
        ...

    async def close_repository(self, handle: Any) -> None:
        """Release resources held by a handle."""
        ...

    async def get_commit(self, handle: Any, revision: str) -> CommitInfo:
        """Resolve a revision (hash, tag or branch) to a commit."""
        ...

    async def get_file(self, handle: Any, revision: str, path: str) -> bytes | None:
        """Return file content at the revision, or None when the file is absent."""
        ...

    async def list_tree_entries(self, handle: Any, revision: str) -> list[TreeEntry]:
        """Return all tree entries at the revision, recursively."""
        ...


class ArchiveService(Protocol):
    """Deterministic archive generation for a repository revision."""

    async def request_archive(self, repo_id: int, handle: Any, revision: str, fmt: str) -> Any:
        """Request (or reuse) an archive build and return a request handle."""
        ...

    async def await_archive(self, request: Any) -> ArchiveResult:
        """Wait until the requested archive is available."""
        ...


class RepositoryDirectory(Protocol):
    """Lookup of repositories and releases owned by the hosting system."""

    async def get_repository(self, repo_id: int) -> Repository | None:
        ...

    async def get_release(self, repo_id: int, release_id: int) -> Release | None:
        ...

    async def list_repositories(self, page: int, limit: int) -> tuple[list[Repository], int]:
        """Return one page of repositories and the total repository count."""
        ...


class ReleaseStore(Protocol):
    """Persistence of release review columns."""

    async def save_review(self, release: Release) -> None:
        """Persist is_verified, is_rejected, rejection_reason and reviewed_at."""
        ...


class Authorizer(Protocol):
    def is_administrator(self, actor: Actor) -> bool:
        ...


class ReviewNotifier(Protocol):
    async def notify_owner_of_review(self, release: Release) -> None:
        """Tell the repository owner that a review decision was made."""
        ...


class AdminFlagAuthorizer:
    """Authorizer that trusts the actor's admin flag."""

    def is_administrator(self, actor: Actor) -> bool:
        return bool(actor.is_admin)
