"""Release review endpoints for AddonHub API."""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request

from addonhub.api.auth import get_current_actor
from addonhub.api.schemas import RejectRequest, ReleaseReviewResponse
from addonhub.exceptions import AddonHubError, ForbiddenError, NotFoundError
from addonhub.schema import Actor

router = APIRouter(prefix="/api/v1/repos/{repo_id}/releases/{release_id}", tags=["reviews"])
current_actor_type = Annotated[Actor, Depends(get_current_actor)]
logger = logging.getLogger(__name__)


@router.post("/verify", response_model=ReleaseReviewResponse)
async def verify_release(
    repo_id: int,
    release_id: int,
    request: Request,
    actor: current_actor_type,
) -> ReleaseReviewResponse:
    hub = request.app.state.hub
    try:
        release = await asyncio.wait_for(
            hub.verify(actor, repo_id, release_id),
            timeout=hub.config.operation_timeout_seconds,
        )
    except asyncio.TimeoutError as exc:
        raise HTTPException(status_code=504, detail="verification timed out") from exc
    except ForbiddenError as exc:
        raise HTTPException(status_code=403, detail="forbidden") from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except AddonHubError as exc:
        logger.warning("Verification of release %s (repository %s) failed: %s", release_id, repo_id, exc)
        raise HTTPException(status_code=422, detail=f"verification failed: {exc}") from exc
    return ReleaseReviewResponse.from_release(release)


@router.post("/reject", response_model=ReleaseReviewResponse)
async def reject_release(
    repo_id: int,
    release_id: int,
    payload: RejectRequest,
    request: Request,
    actor: current_actor_type,
) -> ReleaseReviewResponse:
    hub = request.app.state.hub
    try:
        release = await asyncio.wait_for(
            hub.reject(actor, repo_id, release_id, payload.reason),
            timeout=hub.config.operation_timeout_seconds,
        )
    except asyncio.TimeoutError as exc:
        raise HTTPException(status_code=504, detail="rejection timed out") from exc
    except ForbiddenError as exc:
        raise HTTPException(status_code=403, detail="forbidden") from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except AddonHubError as exc:
        logger.warning("Rejection of release %s (repository %s) failed: %s", release_id, repo_id, exc)
        raise HTTPException(status_code=422, detail=f"rejection failed: {exc}") from exc
    return ReleaseReviewResponse.from_release(release)
