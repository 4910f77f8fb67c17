"""Conversion of stored add-on records into public add-on descriptors."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Iterable
from typing import TypeVar

from pydantic import ValidationError

from addonhub.exceptions import (
    AddonHubError,
    DependencyResolutionSkipped,
    ManifestParseError,
    NoRecordError,
    NotVerifiedError,
    StorageError,
)
from addonhub.index.sexp import render_addon
from addonhub.interfaces import RepositoryDirectory
from addonhub.schema import (
    DEFAULT_ADDON_TYPE,
    TOPIC_TYPES,
    AddonDescriptor,
    AddonInfo,
    AddonScreenshots,
    AddonType,
    AddonVersion,
    Repository,
)
from addonhub.store import AddonRecordStore

logger = logging.getLogger(__name__)

_T = TypeVar("_T")
_TOPIC_LOOKUP = {item.value: item for item in TOPIC_TYPES}


def parse_info(text: str, *, repo_id: int | None = None) -> AddonInfo:
    """Parse raw `info` manifest text."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestParseError(f"invalid info file: {exc.msg} at line {exc.lineno}", repo_id=repo_id) from exc
    if not isinstance(payload, dict):
        raise ManifestParseError("info file root must be an object", repo_id=repo_id)
    try:
        return AddonInfo.model_validate(payload)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(part) for part in error["loc"]) for error in exc.errors())
        raise ManifestParseError(f"invalid info file fields: {fields}", repo_id=repo_id) from exc


def infer_addon_type(topics: Iterable[str]) -> AddonType:
    """Return the add-on type named by the first matching topic, or the default."""
    for topic in topics:
        matched = _TOPIC_LOOKUP.get(topic)
        if matched is not None:
            return matched
    return DEFAULT_ADDON_TYPE


def parse_dependency_id(dependency_id: str) -> int:
    """Extract the repository id from `{name}_{id}` (or a bare `{id}`)."""
    suffix = dependency_id.rsplit("_", 1)[-1]
    if not suffix.isascii() or not suffix.isdigit():
        raise ValueError(f"no numeric repository id in {dependency_id!r}")
    return int(suffix)


class AddonConverter:
    """Build add-on descriptors, resolving dependencies recursively."""

    def __init__(
        self,
        *,
        store: AddonRecordStore,
        directory: RepositoryDirectory,
        public_url: str,
        max_dependency_depth: int = 8,
    ) -> None:
        self.store = store
        self.directory = directory
        self.public_url = public_url
        self.max_dependency_depth = max_dependency_depth

    async def to_descriptor(self, repository: Repository) -> AddonDescriptor:
        """Return the descriptor of a repository's verified add-on release."""
        return await self._convert(repository, path=(repository.id,))

    async def _convert(self, repository: Repository, *, path: tuple[int, ...]) -> AddonDescriptor:
        record = await self.store.get(repository.id)
        if record is None:
            raise NoRecordError(f"no add-on data for repository {repository.name!r}", repo_id=repository.id)
        if record.release_id is None:
            raise NotVerifiedError(f"repository {repository.name!r} has no verified release", repo_id=repository.id)

        release = await self._lookup(self.directory.get_release(repository.id, record.release_id), repository.id)
        if release is None:
            raise NotVerifiedError(
                f"verified release of repository {repository.name!r} no longer exists",
                repo_id=repository.id,
                release_id=record.release_id,
            )

        info = parse_info(record.info_file, repo_id=repository.id)
        html_url = repository.html_url(self.public_url)
        dependencies = await self._resolve_dependencies(info.dependencies, path=path)

        return AddonDescriptor(
            id=f"{repository.name}_{repository.id}",
            version=AddonVersion(
                commit=release.sha1,
                title=release.title,
                description=release.note,
                created_at=release.created_at,
            ),
            type=infer_addon_type(repository.topics),
            title=info.title,
            description=repository.description,
            author=repository.owner_name,
            license=info.license,
            origin_url=html_url,
            url=f"{html_url}/archive/{release.sha1}.zip",
            upstream_url=f"{self.public_url.rstrip('/')}/api/v1/repos/addons/{repository.id}",
            md5=record.md5,
            screenshots=AddonScreenshots(
                base_url=f"{html_url}/raw/commit/{release.sha1}/screenshots/",
                files=record.screenshot_names,
            ),
            dependencies=dependencies,
        )

    async def _resolve_dependencies(self, dependency_ids: list[str], *, path: tuple[int, ...]) -> list[AddonDescriptor]:
        resolved: list[AddonDescriptor] = []
        for dependency_id in dependency_ids:
            try:
                resolved.append(await self._resolve_dependency(dependency_id, path=path))
            except DependencyResolutionSkipped as skipped:
                logger.warning("Skipping dependency of repository %s: %s", path[-1], skipped)
        return resolved

    async def _resolve_dependency(self, dependency_id: str, *, path: tuple[int, ...]) -> AddonDescriptor:
        try:
            repo_id = parse_dependency_id(dependency_id)
        except ValueError as exc:
            raise DependencyResolutionSkipped(dependency_id, str(exc)) from exc
        if repo_id in path:
            raise DependencyResolutionSkipped(dependency_id, "dependency cycle")
        if len(path) > self.max_dependency_depth:
            raise DependencyResolutionSkipped(dependency_id, f"nesting deeper than {self.max_dependency_depth}")
        try:
            repository = await self._lookup(self.directory.get_repository(repo_id), repo_id)
            if repository is None:
                raise DependencyResolutionSkipped(dependency_id, "repository not found")
            descriptor = await self._convert(repository, path=(*path, repo_id))
            render_addon(descriptor)
            return descriptor
        except DependencyResolutionSkipped:
            raise
        except AddonHubError as exc:
            raise DependencyResolutionSkipped(dependency_id, str(exc)) from exc

    @staticmethod
    async def _lookup(awaitable: Awaitable[_T], repo_id: int) -> _T:
        try:
            return await awaitable
        except AddonHubError:
            raise
        except Exception as exc:
            raise StorageError(f"repository lookup failed: {exc}", repo_id=repo_id) from exc
