"""Security headers for API responses."""
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from decision_assistant.config.settings import Settings, get_settings


def security_headers(settings: Settings) -> dict[str, str]:
    """Headers added to every response. HSTS is only sent in production."""
    headers = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": settings.security_frame_options,
        "Content-Security-Policy": settings.security_csp_policy,
        "Referrer-Policy": "strict-origin-when-cross-origin",
    }
    if settings.security_hsts_enabled and settings.is_production:
        headers["Strict-Transport-Security"] = (
            f"max-age={settings.security_hsts_max_age}; includeSubDomains"
        )
    return headers


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Set security headers and drop the Server banner."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        response.headers.update(security_headers(get_settings()))
        if "Server" in response.headers:
            del response.headers["Server"]

        return response
