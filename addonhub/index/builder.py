"""Paginated add-on index builder."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from typing import TYPE_CHECKING

from addonhub.exceptions import AddonHubError, StorageError
from addonhub.index.sexp import ADDON_HEADER, DEPENDENCY_HEADER, INDEX_HEADER, render_addon, render_index
from addonhub.interfaces import RepositoryDirectory
from addonhub.schema import IndexPage, Repository

if TYPE_CHECKING:
    from addonhub.conversion import AddonConverter

logger = logging.getLogger(__name__)


def is_addon_repository(repository: Repository, excluded_owners: Iterable[str] = ("supertux",)) -> bool:
    """Return True for non-empty regular public repositories outside the excluded owners."""
    return not (
        repository.is_template
        or repository.is_private
        or repository.is_fork
        or repository.is_mirror
        or repository.is_empty
        or repository.owner_name in set(excluded_owners)
    )


class IndexBuilder:
    """Build rendered index pages from the repository directory."""

    def __init__(
        self,
        *,
        converter: AddonConverter,
        directory: RepositoryDirectory,
        public_url: str,
        excluded_owners: Iterable[str] = ("supertux",),
        max_page_size: int = 100,
        addon_header: str = ADDON_HEADER,
        dependency_header: str = DEPENDENCY_HEADER,
        index_header: str = INDEX_HEADER,
    ) -> None:
        self.converter = converter
        self.directory = directory
        self.public_url = public_url
        self.excluded_owners = tuple(excluded_owners)
        self.max_page_size = max_page_size
        self.addon_header = addon_header
        self.dependency_header = dependency_header
        self.index_header = index_header

    def page_url(self, page: int, limit: int) -> str:
        return f"{self.public_url.rstrip('/')}/api/v1/repos/addons?page={page}&limit={limit}"

    async def render_entry(self, repository: Repository) -> str:
        """Convert and render one repository as a top-level index entry."""
        descriptor = await self.converter.to_descriptor(repository)
        return render_addon(descriptor, self.addon_header, 0, dependency_header=self.dependency_header)

    async def build_page(self, page: int = 1, limit: int = 50) -> IndexPage:
        """Render one page of the add-on index.

        Repositories that are not add-ons, or whose conversion fails, are left
        out of the page; page counts follow the directory's total.
        """
        page = max(1, page)
        limit = min(max(1, limit), self.max_page_size)
        try:
            repositories, total = await self.directory.list_repositories(page, limit)
        except AddonHubError:
            raise
        except Exception as exc:
            raise StorageError(f"repository listing failed: {exc}") from exc

        entries: list[str] = []
        for repository in repositories:
            if not is_addon_repository(repository, self.excluded_owners):
                continue
            try:
                entries.append(await self.render_entry(repository))
            except AddonHubError as exc:
                logger.info("Leaving repository %s out of the add-on index: %s", repository.id, exc)

        total_pages = math.ceil(total / limit) if total > 0 else 0
        previous_page_url = self.page_url(page - 1, limit) if page > 1 else ""
        next_page_url = self.page_url(page + 1, limit) if page < total_pages else ""
        text = render_index(
            entries,
            previous_page_url,
            next_page_url,
            total_pages,
            header=self.index_header,
        )
        return IndexPage(
            text=text,
            page=page,
            limit=limit,
            total_pages=total_pages,
            entry_count=len(entries),
            previous_page_url=previous_page_url,
            next_page_url=next_page_url,
        )
