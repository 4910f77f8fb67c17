"""Service facade wiring AddonHub components from configuration."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from addonhub.config import AddonHubConfig
from addonhub.conversion import AddonConverter
from addonhub.db import create_session_factory, dispose_engine, get_engine
from addonhub.exceptions import NotFoundError
from addonhub.index import IndexBuilder
from addonhub.interfaces import (
    ArchiveService,
    Authorizer,
    ReleaseStore,
    RepositoryAccess,
    RepositoryDirectory,
    ReviewNotifier,
)
from addonhub.regeneration import RegenerationEngine
from addonhub.review import ReviewSystem
from addonhub.schema import Actor, AddonDescriptor, IndexPage, Release, Repository
from addonhub.store import AddonRecordStore


class AddonHub:
    """Entry point for review actions and add-on reads keyed by hosting-system ids."""

    def __init__(
        self,
        *,
        config: AddonHubConfig,
        session_factory: async_sessionmaker[AsyncSession],
        repositories: RepositoryAccess,
        archives: ArchiveService,
        directory: RepositoryDirectory,
        releases: ReleaseStore,
        notifier: ReviewNotifier,
        authorizer: Authorizer | None = None,
    ) -> None:
        self.config = config
        self.directory = directory
        self._database_url: str | None = None
        self._owns_engine = False
        self.store = AddonRecordStore(session_factory, tenant_id=config.database.tenant_id)
        self.engine = RegenerationEngine(
            store=self.store,
            repositories=repositories,
            archives=archives,
            archive_root=config.archive.root,
            archive_format=config.archive.format,
        )
        self.review_system = ReviewSystem(
            engine=self.engine,
            releases=releases,
            notifier=notifier,
            authorizer=authorizer,
        )
        self.converter = AddonConverter(
            store=self.store,
            directory=directory,
            public_url=config.public_url,
            max_dependency_depth=config.dependencies.max_depth,
        )
        self.index_builder = IndexBuilder(
            converter=self.converter,
            directory=directory,
            public_url=config.public_url,
            excluded_owners=config.index.excluded_owners,
            max_page_size=config.index.max_page_size,
            addon_header=config.index.addon_header,
            dependency_header=config.index.dependency_header,
            index_header=config.index.index_header,
        )

    @classmethod
    def from_config(
        cls,
        config: AddonHubConfig,
        *,
        repositories: RepositoryAccess,
        archives: ArchiveService,
        directory: RepositoryDirectory,
        releases: ReleaseStore,
        notifier: ReviewNotifier,
        authorizer: Authorizer | None = None,
    ) -> AddonHub:
        """Build a hub with its own engine from `config.database`."""
        database_url = config.database.url or None
        hub = cls(
            config=config,
            session_factory=create_session_factory(get_engine(database_url)),
            repositories=repositories,
            archives=archives,
            directory=directory,
            releases=releases,
            notifier=notifier,
            authorizer=authorizer,
        )
        hub._database_url = database_url
        hub._owns_engine = True
        return hub

    async def close(self) -> None:
        """Dispose the database engine when this hub created it."""
        if self._owns_engine:
            await dispose_engine(self._database_url)
            self._owns_engine = False

    async def get_repository(self, repo_id: int) -> Repository:
        repository = await self.directory.get_repository(repo_id)
        if repository is None:
            raise NotFoundError(f"repository {repo_id} not found", repo_id=repo_id)
        return repository

    async def get_release(self, repo_id: int, release_id: int) -> Release:
        release = await self.directory.get_release(repo_id, release_id)
        if release is None:
            raise NotFoundError(f"release {release_id} not found", repo_id=repo_id, release_id=release_id)
        return release

    async def verify(self, actor: Actor, repo_id: int, release_id: int) -> Release:
        repository = await self.get_repository(repo_id)
        release = await self.get_release(repo_id, release_id)
        return await self.review_system.verify(actor=actor, repository=repository, release=release)

    async def reject(self, actor: Actor, repo_id: int, release_id: int, reason: str) -> Release:
        repository = await self.get_repository(repo_id)
        release = await self.get_release(repo_id, release_id)
        return await self.review_system.reject(actor=actor, repository=repository, release=release, reason=reason)

    async def descriptor(self, repo_id: int) -> AddonDescriptor:
        return await self.converter.to_descriptor(await self.get_repository(repo_id))

    async def entry(self, repo_id: int) -> str:
        """Render one add-on as a standalone index entry."""
        return await self.index_builder.render_entry(await self.get_repository(repo_id))

    async def index_page(self, page: int = 1, limit: int | None = None) -> IndexPage:
        return await self.index_builder.build_page(page, limit or self.config.index.default_page_size)
