"""Response hardening headers."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from src.taskboard.core.config import Settings

# Swagger UI needs inline scripts and its CDN
DOCS_CSP = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
    "style-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
    "img-src 'self' data: cdn.jsdelivr.net; "
    "frame-ancestors 'none'"
)

AUTH_PATH_PREFIX = "/api/v1/auth/"


def build_security_headers(settings: Settings) -> dict[str, str]:
    """Headers added to every response. Docs-enabled deployments get the looser CSP."""
    csp = DOCS_CSP if settings.enable_openapi else settings.csp_production
    headers = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Referrer-Policy": "strict-origin-when-cross-origin",
    }
    if csp:
        headers["Content-Security-Policy"] = csp
    if settings.is_production:
        headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return headers


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds fixed security headers and keeps credentialed responses out of caches.

    Tokens and user records come back from the auth routes and from any call
    made with a bearer token, so those responses are marked no-store.
    """

    def __init__(self, app: ASGIApp, headers: dict[str, str]):
        super().__init__(app)
        self.headers = headers

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers.update(self.headers)

        if request.url.path.startswith(AUTH_PATH_PREFIX) or "authorization" in request.headers:
            response.headers["Cache-Control"] = "no-store"
            response.headers["Pragma"] = "no-cache"

        return response
