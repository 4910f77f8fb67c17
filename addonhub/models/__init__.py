"""ORM models for AddonHub."""

from addonhub.models.addon import AddonRecord

__all__ = ["AddonRecord"]
