"""Forwarded headers middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable

from shortlinks.common.headers import build_base_url, get_forwarded_path_prefix


class ForwardedHeadersMiddleware(BaseHTTPMiddleware):
    """Resolve the public base URL and path prefix of each request.

    Routes read ``request.state.public_base_url`` and
    ``request.state.path_prefix`` when building absolute short URLs.
    """

    def __init__(self, app, fallback_base_url: str = "http://localhost"):
        super().__init__(app)
        self.fallback_base_url = fallback_base_url

    async def dispatch(self, request: Request, call_next: Callable):
        headers = dict(request.headers)
        request.state.public_base_url = build_base_url(
            headers=headers,
            fallback_base_url=self.fallback_base_url,
            request_scheme=request.url.scheme,
            request_host=request.headers.get("host"),
        )
        request.state.path_prefix = get_forwarded_path_prefix(headers)

        return await call_next(request)
