"""In-memory hosting-system collaborators and builders for AddonHub tests."""

from __future__ import annotations

import json
from collections import Counter
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from addonhub.schema import ArchiveResult, CommitInfo, Release, Repository, TreeEntry

PUBLIC_URL = "https://addons.example.org/"

PublishAddon = Callable[..., Awaitable[Repository]]


class FakeRepositoryAccess:
    """Revisions keyed by commit hash; each revision is a path -> content mapping."""

    def __init__(self) -> None:
        self.revisions: dict[str, dict[str, bytes]] = {}
        self.extra_dirs: dict[str, list[str]] = {}
        self.calls: Counter[str] = Counter()
        self.open_handles = 0
        self.fail_on: set[str] = set()

    def add_revision(self, sha1: str, files: dict[str, bytes], dirs: list[str] | None = None) -> None:
        self.revisions[sha1] = dict(files)
        self.extra_dirs[sha1] = list(dirs or [])

    def _maybe_fail(self, name: str) -> None:
        self.calls[name] += 1
        if name in self.fail_on:
            raise RuntimeError(f"{name} failed")

    async def open_repository(self, owner_name: str, repo_name: str) -> Any:
        self._maybe_fail("open_repository")
        self.open_handles += 1
        return f"{owner_name}/{repo_name}"

    async def close_repository(self, handle: Any) -> None:
        self.calls["close_repository"] += 1
        self.open_handles -= 1

    async def get_commit(self, handle: Any, revision: str) -> CommitInfo:
        self._maybe_fail("get_commit")
        if revision not in self.revisions:
            raise LookupError(f"unknown revision {revision}")
        return CommitInfo(id=revision)

    async def get_file(self, handle: Any, revision: str, path: str) -> bytes | None:
        self._maybe_fail("get_file")
        return self.revisions[revision].get(path)

    async def list_tree_entries(self, handle: Any, revision: str) -> list[TreeEntry]:
        self._maybe_fail("list_tree_entries")
        entries = [TreeEntry(path=path) for path in self.revisions[revision]]
        entries.extend(TreeEntry(path=path, is_dir=True) for path in self.extra_dirs[revision])
        return entries


class FakeArchiveService:
    """Writes a deterministic archive file per (repository, revision)."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.calls: Counter[str] = Counter()
        self.fail = False

    async def request_archive(self, repo_id: int, handle: Any, revision: str, fmt: str) -> Any:
        self.calls["request_archive"] += 1
        if self.fail:
            raise RuntimeError("archiver queue is unavailable")
        return (repo_id, revision, fmt)

    async def await_archive(self, request: Any) -> ArchiveResult:
        self.calls["await_archive"] += 1
        repo_id, revision, fmt = request
        relative = f"{repo_id}/{revision}.{fmt}"
        target = self.root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(archive_bytes(repo_id, revision))
        return ArchiveResult(relative_path=relative)


class FakeDirectory:
    def __init__(self) -> None:
        self.repositories: dict[int, Repository] = {}
        self.releases: dict[tuple[int, int], Release] = {}

    def add(self, repository: Repository, *releases: Release) -> None:
        self.repositories[repository.id] = repository
        for release in releases:
            self.releases[(release.repo_id, release.id)] = release

    async def get_repository(self, repo_id: int) -> Repository | None:
        return self.repositories.get(repo_id)

    async def get_release(self, repo_id: int, release_id: int) -> Release | None:
        return self.releases.get((repo_id, release_id))

    async def list_repositories(self, page: int, limit: int) -> tuple[list[Repository], int]:
        ordered = [self.repositories[key] for key in sorted(self.repositories)]
        start = (page - 1) * limit
        return ordered[start : start + limit], len(ordered)


class FakeReleaseStore:
    def __init__(self, directory: FakeDirectory) -> None:
        self.directory = directory
        self.saved: list[Release] = []
        self.fail = False

    async def save_review(self, release: Release) -> None:
        if self.fail:
            raise RuntimeError("release table is locked")
        self.saved.append(release)
        self.directory.releases[(release.repo_id, release.id)] = release


class FakeNotifier:
    def __init__(self) -> None:
        self.notified: list[Release] = []
        self.fail = False

    async def notify_owner_of_review(self, release: Release) -> None:
        if self.fail:
            raise RuntimeError("mail relay down")
        self.notified.append(release)


def archive_bytes(repo_id: int, revision: str) -> bytes:
    return f"archive:{repo_id}:{revision}".encode()


def make_repository(repo_id: int, name: str, *, owner: str = "tux", topics: list[str] | None = None, **flags: Any) -> Repository:
    return Repository(
        id=repo_id,
        name=name,
        owner_name=owner,
        topics=topics or [],
        description=f"{name} description",
        **flags,
    )


def make_release(repo_id: int, release_id: int, sha1: str, *, title: str = "v1.0") -> Release:
    return Release(
        id=release_id,
        repo_id=repo_id,
        tag_name=title,
        sha1=sha1,
        title=title,
        note=f"notes for {title}",
        created_at=datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc),
    )


def info_bytes(title: str, *, license: str = "GPL-3.0", dependencies: list[str] | None = None) -> bytes:
    return json.dumps({"title": title, "license": license, "dependencies": dependencies or []}).encode()

