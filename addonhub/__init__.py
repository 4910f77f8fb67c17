"""AddonHub: verified add-on registry and S-expression index for SuperTux."""

from addonhub.conversion import AddonConverter
from addonhub.index import IndexBuilder, render_addon, render_index
from addonhub.regeneration import RegenerationEngine, RegenerationResult
from addonhub.review import ReviewStatus, ReviewSystem
from addonhub.service import AddonHub
from addonhub.store import AddonRecordStore

__all__ = [
    "AddonConverter",
    "AddonHub",
    "AddonRecordStore",
    "IndexBuilder",
    "RegenerationEngine",
    "RegenerationResult",
    "ReviewStatus",
    "ReviewSystem",
    "render_addon",
    "render_index",
]
