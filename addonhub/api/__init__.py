"""AddonHub HTTP API."""

from addonhub.api.app import create_app
from addonhub.api.auth import ActorResolver

__all__ = ["ActorResolver", "create_app"]
