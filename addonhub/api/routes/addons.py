"""Read-only add-on index endpoints."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse

from addonhub.api.schemas import AddonDescriptorResponse
from addonhub.exceptions import AddonHubError

router = APIRouter(prefix="/api/v1/repos/addons", tags=["addons"])
logger = logging.getLogger(__name__)

_T = TypeVar("_T")


async def _read(request: Request, operation: Awaitable[_T], repo_id: int) -> _T:
    timeout = request.app.state.hub.config.operation_timeout_seconds
    try:
        return await asyncio.wait_for(operation, timeout=timeout)
    except asyncio.TimeoutError as exc:
        raise HTTPException(status_code=504, detail="add-on lookup timed out") from exc
    except AddonHubError as exc:
        logger.info("Add-on %s not available: %s", repo_id, exc)
        raise HTTPException(status_code=404, detail="add-on not available") from exc


@router.get("", response_class=PlainTextResponse)
async def list_addons(
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> PlainTextResponse:
    hub = request.app.state.hub
    try:
        index = await asyncio.wait_for(hub.index_page(page, limit), timeout=hub.config.operation_timeout_seconds)
    except asyncio.TimeoutError as exc:
        raise HTTPException(status_code=504, detail="add-on index timed out") from exc
    except AddonHubError as exc:
        logger.warning("Add-on index page %s not available: %s", page, exc)
        raise HTTPException(status_code=503, detail="add-on index not available") from exc
    return PlainTextResponse(index.text)


@router.get("/{repo_id}", response_class=PlainTextResponse)
async def get_addon_entry(repo_id: int, request: Request) -> PlainTextResponse:
    entry = await _read(request, request.app.state.hub.entry(repo_id), repo_id)
    return PlainTextResponse(entry)


@router.get("/{repo_id}/descriptor", response_model=AddonDescriptorResponse)
async def get_addon_descriptor(repo_id: int, request: Request) -> AddonDescriptorResponse:
    descriptor = await _read(request, request.app.state.hub.descriptor(repo_id), repo_id)
    return AddonDescriptorResponse.from_descriptor(descriptor)
