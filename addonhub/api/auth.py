"""Actor resolution for AddonHub API.

Authentication belongs to the hosting system; the app only asks an injected
resolver who is behind a request.
"""

from __future__ import annotations

from typing import Protocol

from fastapi import HTTPException, Request

from addonhub.schema import Actor


class ActorResolver(Protocol):
    async def resolve(self, request: Request) -> Actor | None:
        """Return the authenticated actor, or None for anonymous requests."""
        ...


async def get_current_actor(request: Request) -> Actor:
    """FastAPI dependency returning the request's actor or failing with 401."""
    resolver: ActorResolver = request.app.state.actor_resolver
    actor = await resolver.resolve(request)
    if actor is None:
        raise HTTPException(status_code=401, detail="missing credentials")
    return actor
