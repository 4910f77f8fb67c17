"""Add-on index rendering and pagination."""

from addonhub.index.builder import IndexBuilder, is_addon_repository
from addonhub.index.sexp import ADDON_HEADER, DEPENDENCY_HEADER, INDEX_HEADER, quote, render_addon, render_index

__all__ = [
    "ADDON_HEADER",
    "DEPENDENCY_HEADER",
    "INDEX_HEADER",
    "IndexBuilder",
    "is_addon_repository",
    "quote",
    "render_addon",
    "render_index",
]
