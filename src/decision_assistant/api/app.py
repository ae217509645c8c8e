# src/decision_assistant/api/app.py
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from decision_assistant.config.settings import get_settings
from decision_assistant.api.dependencies import get_llm_client
from decision_assistant.api.middleware.cors import get_cors_middleware_config
from decision_assistant.api.middleware.request_id import RequestIDMiddleware
from decision_assistant.api.middleware.logging import RequestLoggingMiddleware
from decision_assistant.api.middleware.security import SecurityHeadersMiddleware
from decision_assistant.api.middleware.errors import register_error_handlers
from decision_assistant.api.routes import chat, health
from decision_assistant.infrastructure.observability.logging import configure_logging, get_logger


logger = get_logger(__name__)

API_DESCRIPTION = """
Helps a user reason through a decision, then asks the client to pause for a
reflection period before the next message.

Each `POST /api/chat` reply carries the timer in response headers:

- `X-Timer-Duration`: seconds to wait (0-240)
- `X-Reflection-Prompt-1`, `X-Reflection-Prompt-2`: statements to reflect on
- `X-Decision-Importance`: trivial, routine, complex or life-altering

```python
import httpx

response = httpx.post(
    "http://localhost:8000/api/chat",
    json={"messages": [{"role": "user", "content": "Should I move cities?"}]},
)
print(response.text, response.headers["X-Timer-Duration"])
```
"""


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging()

    llm = get_llm_client()
    if llm.is_configured:
        logger.info("service_started", model=settings.openai_model, environment=settings.environment)
    else:
        logger.warning("service_started_without_llm", hint="set OPENAI_API_KEY")

    yield

    await llm.close()
    get_llm_client.cache_clear()
    logger.info("service_stopped")


def create_app() -> FastAPI:
    """Build the application: middleware, error handlers, then routers."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=API_DESCRIPTION,
        docs_url="/docs" if settings.debug else None,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Health", "description": "Liveness and readiness probes."},
            {"name": "Chat", "description": "Assistant reply plus reflection timer metadata."},
        ],
    )

    # Starlette runs middleware in reverse order of registration, so the
    # request id is set before logging and security headers see the request.
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(CORSMiddleware, **get_cors_middleware_config(settings))

    register_error_handlers(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(chat.router, prefix="/api", tags=["Chat"])

    return app


app = create_app()
