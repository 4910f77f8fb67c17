"""S-expression rendering of add-on descriptors and index pages.

The layout is the wire contract of the game client's add-on index: field
order, two-space nesting and the four-space shift of nested dependencies
must not change.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from addonhub.exceptions import UnsafeFieldValueError
from addonhub.schema import AddonDescriptor

ADDON_HEADER = "supertux-addoninfo"
DEPENDENCY_HEADER = "dependency"
INDEX_HEADER = "supertux-addons"

_ALLOWED_CONTROL = {"\n", "\r", "\t"}


def quote(value: str, *, field: str = "value") -> str:
    """Return `value` as a double-quoted S-expression string.

    Backslashes and double quotes are escaped; text without either is
    emitted verbatim.
    """
    for char in value:
        if (ord(char) < 0x20 and char not in _ALLOWED_CONTROL) or ord(char) == 0x7F:
            raise UnsafeFieldValueError(field, f"control character {char!r} is not allowed")
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _epoch_seconds(moment: datetime) -> int:
    # naive timestamps are stored in UTC
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp())


def render_addon(
    addon: AddonDescriptor,
    header: str = ADDON_HEADER,
    indent: int = 0,
    *,
    dependency_header: str = DEPENDENCY_HEADER,
) -> str:
    """Render one descriptor, nesting its dependencies, without a trailing newline."""
    pad = " " * indent
    lines = [
        f"{pad}({header}",
        f"{pad}  (id {quote(addon.id, field='id')})",
        f"{pad}  (version",
        f"{pad}    (commit {quote(addon.version.commit, field='version.commit')})",
        f"{pad}    (title {quote(addon.version.title, field='version.title')})",
        f"{pad}    (description {quote(addon.version.description, field='version.description')})",
        f"{pad}    (created-at {_epoch_seconds(addon.version.created_at)})",
        f"{pad}  )",
        f"{pad}  (type {quote(addon.type.value, field='type')})",
        f"{pad}  (title {quote(addon.title, field='title')})",
        f"{pad}  (description {quote(addon.description, field='description')})",
        f"{pad}  (author {quote(addon.author, field='author')})",
        f"{pad}  (license {quote(addon.license, field='license')})",
        f"{pad}  (origin-url {quote(addon.origin_url, field='origin-url')})",
        f"{pad}  (url {quote(addon.url, field='url')})",
        f"{pad}  (upstream-url {quote(addon.upstream_url, field='upstream-url')})",
        f"{pad}  (md5 {quote(addon.md5, field='md5')})",
    ]
    if addon.screenshots.files:
        lines.append(f"{pad}  (screenshots")
        lines.append(f"{pad}    (base-url {quote(addon.screenshots.base_url, field='screenshots.base-url')})")
        lines.append(f"{pad}    (files")
        for name in addon.screenshots.files:
            lines.append(f"{pad}      (file {quote(name, field='screenshots.file')})")
        lines.append(f"{pad}    )")
        lines.append(f"{pad}  )")
    if addon.dependencies:
        lines.append(f"{pad}  (dependencies")
        for dependency in addon.dependencies:
            lines.append(
                render_addon(dependency, dependency_header, indent + 4, dependency_header=dependency_header)
            )
        lines.append(f"{pad}  )")
    lines.append(f"{pad})")
    return "\n".join(lines)


def render_index(
    entries: Iterable[str],
    previous_page_url: str = "",
    next_page_url: str = "",
    total_pages: int = 0,
    *,
    header: str = INDEX_HEADER,
) -> str:
    """Combine rendered entries into one index document with pagination fields."""
    parts = [f"({header}\n"]
    for entry in entries:
        parts.append(entry + "\n")
    if previous_page_url:
        parts.append(f"  (previous-page {quote(previous_page_url, field='previous-page')})\n")
    if next_page_url:
        parts.append(f"  (next-page {quote(next_page_url, field='next-page')})\n")
    parts.append(f"  (total-pages {int(total_pages)})\n")
    parts.append(")")
    return "".join(parts)
