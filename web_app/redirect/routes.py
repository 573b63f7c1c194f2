"""Redirect route implementation."""

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from shortlinks.common.logging_config import get_logger

router = APIRouter()

logger = get_logger("web")


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect a short code to its destination.

    The path segment is used verbatim as the lookup key. 307 keeps the
    request method and body when clients replay the request.
    """
    repository = request.app.state.repository

    link = await repository.get_by_short_code(short_code)

    if link is None:
        logger.info(f"Short code not found: {short_code}")
        return PlainTextResponse("Link not found", status_code=status.HTTP_404_NOT_FOUND)

    if link.url.isascii():
        # Location carries the stored URL byte for byte
        return Response(
            status_code=status.HTTP_307_TEMPORARY_REDIRECT,
            headers={"location": link.url},
        )

    # Header values must be latin-1, so non-ASCII targets are percent-encoded
    return RedirectResponse(url=link.url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
