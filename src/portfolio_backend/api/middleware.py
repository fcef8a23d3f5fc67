"""Request middleware for page-visit logging."""

from __future__ import annotations

from collections.abc import Sequence

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from portfolio_backend.api.dependencies import resolve_client_ip

DEFAULT_SKIP_PREFIXES: tuple[str, ...] = ("/api/", "/_nuxt/")


def is_page_request(method: str, path: str, skip_prefixes: Sequence[str] = DEFAULT_SKIP_PREFIXES) -> bool:
    """Return True if the request looks like a page view.

    API calls, build assets and anything with a file extension are skipped.
    """
    if method != "GET":
        return False
    if any(path.startswith(prefix) for prefix in skip_prefixes):
        return False
    return "." not in path


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Writes a page-visit entry for qualifying requests; never alters the response."""

    def __init__(self, app: ASGIApp, skip_prefixes: Sequence[str] = DEFAULT_SKIP_PREFIXES) -> None:
        super().__init__(app)
        self.skip_prefixes = tuple(skip_prefixes)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        event_log = getattr(request.app.state, "event_log", None)
        if event_log is not None and is_page_request(
            request.method, request.url.path, self.skip_prefixes
        ):
            event_log.log_page_visit(
                resolve_client_ip(request),
                request.url.path,
                user_agent=request.headers.get("user-agent"),
                referer=request.headers.get("referer"),
                method=request.method,
            )
        return await call_next(request)
