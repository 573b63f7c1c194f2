"""API routes implementation.

Link operations always answer HTTP 200 with the ``ActionResult`` shape;
callers branch on ``success`` and ``error`` rather than on status codes.
"""

import json
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from shortlinks.auth import extract_token
from shortlinks.common.url_builder import build_short_url
from shortlinks.schemas import ActionResult

from .schemas import ActionResponse, CreateLinkBody, HealthResponse, UpdateLinkBody

router = APIRouter()

_INVALID_BODY = object()


def _caller_token(request: Request) -> Optional[str]:
    config = request.app.state.config
    return extract_token(
        request.headers.get("authorization"),
        request.cookies.get(config.session_cookie_name),
    )


async def _json_body(request: Request) -> Any:
    body = await request.body()
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return _INVALID_BODY


def _respond(result: ActionResult) -> JSONResponse:
    return JSONResponse(content=result.to_dict(), headers={"Cache-Control": "no-store"})


def _with_short_url(request: Request, result: ActionResult) -> ActionResult:
    if result.success and result.data and "short_code" in result.data:
        config = request.app.state.config
        result.data["short_url"] = build_short_url(
            result.data["short_code"],
            request.state.public_base_url,
            request.state.path_prefix,
            config.redirect_prefix,
        )
    return result


def _body_schema(model) -> dict:
    return {
        "requestBody": {
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }


@router.get(
    "/links",
    response_model=ActionResponse,
    summary="List links",
    description="All links of the calling user, newest first.",
)
async def list_links(request: Request):
    """List the caller's links."""
    actions = request.app.state.actions
    result = await actions.list_links(_caller_token(request))
    return _respond(result)


@router.post(
    "/links",
    response_model=ActionResponse,
    summary="Create link",
    description="Create a short link. Optionally provide a custom short code.",
    openapi_extra=_body_schema(CreateLinkBody),
)
async def create_link(request: Request):
    """Create a short link for the caller."""
    actions = request.app.state.actions
    body = await _json_body(request)
    if body is _INVALID_BODY:
        return _respond(ActionResult.fail("Invalid request body"))

    result = await actions.create_link(_caller_token(request), body)
    return _respond(_with_short_url(request, result))


@router.patch(
    "/links/{link_id}",
    response_model=ActionResponse,
    summary="Update link",
    description="Change the destination URL and/or short code of one of the caller's links.",
    openapi_extra=_body_schema(UpdateLinkBody),
)
async def update_link(request: Request, link_id: int):
    """Update one of the caller's links."""
    actions = request.app.state.actions
    body = await _json_body(request)
    if body is _INVALID_BODY:
        return _respond(ActionResult.fail("Invalid request body"))

    result = await actions.update_link(_caller_token(request), link_id, body)
    return _respond(_with_short_url(request, result))


@router.delete(
    "/links/{link_id}",
    response_model=ActionResponse,
    summary="Delete link",
)
async def delete_link(request: Request, link_id: int):
    """Delete one of the caller's links."""
    actions = request.app.state.actions
    result = await actions.delete_link(_caller_token(request), link_id)
    return _respond(result)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service and its database are healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    store = request.app.state.store

    db_healthy = await store.health_check()

    return HealthResponse(
        status="healthy" if db_healthy else "unhealthy",
        database="healthy" if db_healthy else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
