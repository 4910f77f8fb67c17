"""Review system primitives for AddonHub."""

from addonhub.review.system import ReviewSystem
from addonhub.schema import ReviewStatus

__all__ = ["ReviewStatus", "ReviewSystem"]
