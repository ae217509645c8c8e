# src/decision_assistant/api/middleware/cors.py
import logging
from urllib.parse import urlparse

from decision_assistant.api.schemas.chat import TIMER_HEADERS
from decision_assistant.config.settings import Settings

logger = logging.getLogger(__name__)

LOCAL_DEV_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]


def _check_origin(origin: str) -> None:
    parsed = urlparse(origin)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(
            f"Invalid CORS origin {origin!r}: expected scheme and host, e.g. 'http://localhost:3000'"
        )


def get_cors_middleware_config(settings: Settings) -> dict:
    """
    Build CORSMiddleware kwargs from settings.

    Local and dev environments fall back to common localhost origins when
    CORS_ORIGINS is empty. The reflection timer headers are always exposed,
    otherwise a browser client could not read them off the chat response.

    Raises:
        ValueError: An origin is not a scheme://host URL
    """
    origins = list(settings.cors_origins)

    if not origins and settings.environment in ("local", "dev"):
        origins = list(LOCAL_DEV_ORIGINS)
        logger.info("CORS: using localhost origins for %s", settings.environment)

    if not origins and settings.environment in ("staging", "prod"):
        logger.warning(
            "CORS: no origins configured for %s; browser clients will be blocked",
            settings.environment,
        )

    for origin in origins:
        if origin == "*":
            if settings.is_production:
                logger.warning("CORS: wildcard origin in production")
            continue
        _check_origin(origin)

    return {
        "allow_origins": origins,
        "allow_credentials": settings.cors_allow_credentials,
        "allow_methods": settings.cors_allow_methods,
        "allow_headers": settings.cors_allow_headers,
        "expose_headers": list(TIMER_HEADERS),
        "max_age": settings.cors_max_age,
    }
