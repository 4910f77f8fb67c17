"""Regeneration of published add-on metadata for a verified release."""

from __future__ import annotations

import asyncio
import hashlib
import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from addonhub.conversion import parse_info
from addonhub.exceptions import (
    AddonHubError,
    ArchiveUnavailableError,
    ManifestMissingError,
    ManifestParseError,
    RecordConflictError,
    RepositoryAccessError,
)
from addonhub.interfaces import ArchiveService, RepositoryAccess
from addonhub.models import AddonRecord
from addonhub.schema import Release, Repository, TreeEntry
from addonhub.store import AddonRecordStore

logger = logging.getLogger(__name__)

INFO_FILE = "info"
SCREENSHOTS_DIR = "screenshots/"
_CHUNK_SIZE = 8192


@dataclass(frozen=True)
class RegenerationResult:
    """Outcome of one regenerate() call."""

    record: AddonRecord
    regenerated: bool


def calculate_md5(file_path: Path) -> str:
    """Calculate the hex MD5 digest of a file."""
    digest = hashlib.md5()
    with file_path.open("rb") as handle:
        while True:
            chunk = handle.read(_CHUNK_SIZE)
            if not chunk:
                break
            digest.update(chunk)
    return digest.hexdigest()


def select_screenshots(entries: Iterable[TreeEntry]) -> list[str]:
    """Return screenshot names found directly under `screenshots/`, in tree order.

    Entries in subdirectories, directories themselves and names without an
    extension are skipped.
    """
    names: list[str] = []
    for entry in entries:
        if entry.is_dir or not entry.path.startswith(SCREENSHOTS_DIR):
            continue
        name = entry.path[len(SCREENSHOTS_DIR) :]
        if "/" in name or "." not in name:
            continue
        names.append(name)
    return names


@contextmanager
def _failure_as(error_type: type[AddonHubError], step: str, *, repo_id: int, release_id: int) -> Iterator[None]:
    try:
        yield
    except AddonHubError:
        raise
    except Exception as exc:
        raise error_type(f"{step} failed: {exc}", repo_id=repo_id, release_id=release_id) from exc


class RegenerationEngine:
    """Derive and persist an add-on record for one release, at most once per release."""

    def __init__(
        self,
        *,
        store: AddonRecordStore,
        repositories: RepositoryAccess,
        archives: ArchiveService,
        archive_root: Path,
        archive_format: str = "zip",
    ) -> None:
        self.store = store
        self.repositories = repositories
        self.archives = archives
        self.archive_root = archive_root
        self.archive_format = archive_format

    async def regenerate(self, repository: Repository, release: Release) -> RegenerationResult:
        """Regenerate checksum, manifest and screenshots for `release`.

        Returns immediately when the stored record already points at the
        release. The record write is the last step; nothing is persisted
        unless every read succeeded.
        """
        if release.repo_id != repository.id:
            raise ValueError(f"release {release.id} does not belong to repository {repository.id}")

        existing = await self.store.get(repository.id)
        if existing is not None and existing.release_id == release.id:
            logger.debug("Add-on record for repository %s already at release %s", repository.id, release.id)
            return RegenerationResult(record=existing, regenerated=False)

        ids = {"repo_id": repository.id, "release_id": release.id}
        with _failure_as(RepositoryAccessError, "opening repository", **ids):
            handle = await self.repositories.open_repository(repository.owner_name, repository.name)
        try:
            md5 = await self._archive_checksum(repository, release, handle)
            commit_id, info_file = await self._read_manifest(repository, release, handle)
            with _failure_as(RepositoryAccessError, "listing repository tree", **ids):
                entries = await self.repositories.list_tree_entries(handle, commit_id)
        finally:
            await self.repositories.close_repository(handle)

        record = existing if existing is not None else AddonRecord(repo_id=repository.id)
        record.release_id = release.id
        record.md5 = md5
        record.info_file = info_file
        record.screenshot_names = select_screenshots(entries)

        stored = await self._persist(record, is_new=existing is None)
        logger.info(
            "Regenerated add-on record for repository %s at release %s (md5=%s, screenshots=%d)",
            repository.id,
            release.id,
            md5,
            len(stored.screenshot_names),
        )
        return RegenerationResult(record=stored, regenerated=True)

    async def _archive_checksum(self, repository: Repository, release: Release, handle: object) -> str:
        ids = {"repo_id": repository.id, "release_id": release.id}
        with _failure_as(ArchiveUnavailableError, "archive generation", **ids):
            request = await self.archives.request_archive(repository.id, handle, release.sha1, self.archive_format)
            archive = await self.archives.await_archive(request)
            return await asyncio.to_thread(calculate_md5, self.archive_root / archive.relative_path)

    async def _read_manifest(self, repository: Repository, release: Release, handle: object) -> tuple[str, str]:
        ids = {"repo_id": repository.id, "release_id": release.id}
        with _failure_as(RepositoryAccessError, "reading manifest", **ids):
            commit = await self.repositories.get_commit(handle, release.sha1)
            content = await self.repositories.get_file(handle, commit.id, INFO_FILE)
        if content is None:
            raise ManifestMissingError(f"repository {repository.name!r} has no {INFO_FILE!r} file", **ids)
        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ManifestParseError(f"{INFO_FILE!r} file is not valid UTF-8", **ids) from exc
        parse_info(text, repo_id=repository.id)
        return commit.id, text

    async def _persist(self, record: AddonRecord, *, is_new: bool) -> AddonRecord:
        if not is_new:
            return await self.store.update_all_fields(record)
        try:
            return await self.store.insert(record)
        except RecordConflictError:
            winner = await self.store.get(record.repo_id)
            if winner is None:
                raise
            if winner.release_id == record.release_id:
                logger.info(
                    "Concurrent regeneration already recorded release %s for repository %s",
                    record.release_id,
                    record.repo_id,
                )
                return winner
            winner.release_id = record.release_id
            winner.md5 = record.md5
            winner.info_file = record.info_file
            winner.screenshots = record.screenshots
            return await self.store.update_all_fields(winner)
