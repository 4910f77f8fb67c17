"""Shared fixtures for AddonHub tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from addonhub.config import AddonHubConfig
from addonhub.conversion import AddonConverter
from addonhub.db import Base, create_session_factory
from addonhub.models import AddonRecord  # noqa: F401
from addonhub.regeneration import RegenerationEngine
from addonhub.review import ReviewSystem
from addonhub.schema import Repository
from addonhub.service import AddonHub
from addonhub.store import AddonRecordStore
from tests.helpers import (
    PUBLIC_URL,
    FakeArchiveService,
    FakeDirectory,
    FakeNotifier,
    FakeReleaseStore,
    FakeRepositoryAccess,
    PublishAddon,
    info_bytes,
    make_release,
    make_repository,
)


@pytest_asyncio.fixture
async def session_factory() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """In-memory SQLite database with all AddonHub tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    yield create_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def store(session_factory: async_sessionmaker[AsyncSession]) -> AddonRecordStore:
    return AddonRecordStore(session_factory)


@pytest.fixture
def repo_access() -> FakeRepositoryAccess:
    return FakeRepositoryAccess()


@pytest.fixture
def archive_root(tmp_path: Path) -> Path:
    return tmp_path / "repo-archive"


@pytest.fixture
def archives(archive_root: Path) -> FakeArchiveService:
    return FakeArchiveService(archive_root)


@pytest.fixture
def directory() -> FakeDirectory:
    return FakeDirectory()


@pytest.fixture
def release_store(directory: FakeDirectory) -> FakeReleaseStore:
    return FakeReleaseStore(directory)


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def engine(
    store: AddonRecordStore,
    repo_access: FakeRepositoryAccess,
    archives: FakeArchiveService,
    archive_root: Path,
) -> RegenerationEngine:
    return RegenerationEngine(
        store=store,
        repositories=repo_access,
        archives=archives,
        archive_root=archive_root,
    )


@pytest.fixture
def review_system(
    engine: RegenerationEngine,
    release_store: FakeReleaseStore,
    notifier: FakeNotifier,
) -> ReviewSystem:
    return ReviewSystem(engine=engine, releases=release_store, notifier=notifier)


@pytest.fixture
def converter(store: AddonRecordStore, directory: FakeDirectory) -> AddonConverter:
    return AddonConverter(store=store, directory=directory, public_url=PUBLIC_URL)


@pytest.fixture
def config(archive_root: Path) -> AddonHubConfig:
    return AddonHubConfig(public_url=PUBLIC_URL, archive={"root": archive_root}, index={"default_page_size": 2})


@pytest.fixture
def hub(
    config: AddonHubConfig,
    session_factory: async_sessionmaker[AsyncSession],
    repo_access: FakeRepositoryAccess,
    archives: FakeArchiveService,
    directory: FakeDirectory,
    release_store: FakeReleaseStore,
    notifier: FakeNotifier,
) -> AddonHub:
    return AddonHub(
        config=config,
        session_factory=session_factory,
        repositories=repo_access,
        archives=archives,
        directory=directory,
        releases=release_store,
        notifier=notifier,
    )


@pytest.fixture
def publish_addon(
    directory: FakeDirectory,
    repo_access: FakeRepositoryAccess,
    engine: RegenerationEngine,
) -> PublishAddon:
    """Register a repository with one release and regenerate its add-on record."""

    async def _publish(
        repo_id: int,
        name: str,
        *,
        dependencies: list[str] | None = None,
        topics: list[str] | None = None,
        files: dict[str, bytes] | None = None,
        **flags: Any,
    ) -> Repository:
        repository = make_repository(repo_id, name, topics=topics, **flags)
        release = make_release(repo_id, repo_id * 10, f"{name}-sha")
        directory.add(repository, release)
        revision = {"info": info_bytes(name.title(), dependencies=dependencies)}
        revision.update(files or {})
        repo_access.add_revision(release.sha1, revision)
        await engine.regenerate(repository, release)
        return repository

    return _publish
