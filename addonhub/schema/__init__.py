"""AddonHub schema models."""

from addonhub.schema.models import (
    DEFAULT_ADDON_TYPE,
    TOPIC_TYPES,
    Actor,
    AddonDescriptor,
    AddonInfo,
    AddonScreenshots,
    AddonType,
    AddonVersion,
    ArchiveResult,
    CommitInfo,
    IndexPage,
    Release,
    Repository,
    ReviewStatus,
    TreeEntry,
)

__all__ = [
    "Actor",
    "AddonDescriptor",
    "AddonInfo",
    "AddonScreenshots",
    "AddonType",
    "AddonVersion",
    "ArchiveResult",
    "CommitInfo",
    "DEFAULT_ADDON_TYPE",
    "IndexPage",
    "Release",
    "Repository",
    "ReviewStatus",
    "TOPIC_TYPES",
    "TreeEntry",
]
