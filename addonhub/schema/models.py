"""Core schema models for add-on review, conversion and indexing."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field


class ReviewStatus(str, Enum):
    """Review status lifecycle of one release."""

    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class AddonType(str, Enum):
    """Add-on type, inferred from repository topics."""

    WORLD = "world"
    LEVELSET = "levelset"
    LANGUAGEPACK = "languagepack"
    RESOURCEPACK = "resourcepack"
    ADDON = "addon"
    WORLDMAP = "worldmap"


TOPIC_TYPES: tuple[AddonType, ...] = (
    AddonType.WORLD,
    AddonType.LEVELSET,
    AddonType.LANGUAGEPACK,
    AddonType.RESOURCEPACK,
    AddonType.ADDON,
)
DEFAULT_ADDON_TYPE = AddonType.WORLDMAP


@dataclass(frozen=True)
class Actor:
    """User performing a review action."""

    user_id: str
    is_admin: bool = False


@dataclass(frozen=True)
class Repository:
    """Repository attributes the registry reads from the hosting system."""

    id: int
    name: str
    owner_name: str
    topics: list[str] = field(default_factory=list)
    description: str = ""
    is_private: bool = False
    is_template: bool = False
    is_fork: bool = False
    is_mirror: bool = False
    is_empty: bool = False

    def html_url(self, public_url: str) -> str:
        """Return the repository web URL under the given public base URL."""
        return public_url + quote(self.owner_name, safe="") + "/" + quote(self.name, safe="")


@dataclass(frozen=True)
class Release:
    """One tagged release of a repository, with its review fields."""

    id: int
    repo_id: int
    tag_name: str
    sha1: str
    title: str = ""
    note: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    is_verified: bool = False
    is_rejected: bool = False
    rejection_reason: str = ""
    reviewed_at: datetime | None = None

    @property
    def review_status(self) -> ReviewStatus:
        if self.is_verified:
            return ReviewStatus.VERIFIED
        if self.is_rejected:
            return ReviewStatus.REJECTED
        return ReviewStatus.PENDING


@dataclass(frozen=True)
class CommitInfo:
    """Resolved commit identity."""

    id: str
    time: datetime | None = None


@dataclass(frozen=True)
class TreeEntry:
    """One entry of a recursive repository tree listing."""

    path: str
    is_dir: bool = False


@dataclass(frozen=True)
class ArchiveResult:
    """Location of a generated archive, relative to the archive root."""

    relative_path: str


class AddonInfo(BaseModel):
    """Parsed contents of the repository's `info` manifest."""

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    license: str = ""
    dependencies: list[str] = Field(default_factory=list)


@dataclass(frozen=True)
class AddonVersion:
    """Version block of an add-on descriptor."""

    commit: str
    title: str
    description: str
    created_at: datetime


@dataclass(frozen=True)
class AddonScreenshots:
    """Screenshot base URL and file names."""

    base_url: str
    files: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class AddonDescriptor:
    """Public, recursively resolved view of one add-on."""

    id: str
    version: AddonVersion
    type: AddonType
    title: str
    description: str
    author: str
    license: str
    origin_url: str
    url: str
    upstream_url: str
    md5: str
    screenshots: AddonScreenshots
    dependencies: list[AddonDescriptor] = field(default_factory=list)


@dataclass(frozen=True)
class IndexPage:
    """One rendered page of the add-on index."""

    text: str
    page: int
    limit: int
    total_pages: int
    entry_count: int
    previous_page_url: str = ""
    next_page_url: str = ""
