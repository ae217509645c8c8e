"""
Health endpoints.

- GET /health: status of each component, always 200
- GET /health/live: the process answers
- GET /health/ready: chat requests can be served, 503 otherwise

The only component is the language model, and its check is configuration
only: probes never spend tokens.
"""
import time
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from fastapi import APIRouter, Response, status
from pydantic import BaseModel, Field

from decision_assistant.agent.llm import LLMClient
from decision_assistant.api.dependencies import AppSettings, CurrentLLM

_started_at = time.time()

router = APIRouter()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class ComponentHealth(BaseModel):
    name: str = Field(..., description="Component name")
    status: HealthStatus
    details: Optional[Dict] = Field(None, description="Component details, e.g. the model name")
    error: Optional[str] = Field(None, description="Why the component is unhealthy")


class HealthResponse(BaseModel):
    status: HealthStatus = Field(..., description="Worst status across components")
    timestamp: datetime = Field(default_factory=_utcnow)
    uptime_seconds: float
    version: str
    components: List[ComponentHealth] = Field(default_factory=list)


class LivenessResponse(BaseModel):
    status: str = "alive"
    timestamp: datetime = Field(default_factory=_utcnow)


class ReadinessResponse(BaseModel):
    status: str = Field(..., description="ready or not_ready")
    timestamp: datetime = Field(default_factory=_utcnow)
    components: List[ComponentHealth] = Field(default_factory=list)


def check_llm_health(llm: LLMClient, model: str) -> ComponentHealth:
    """Healthy when an API key (or a prebuilt client) is available."""
    if llm.is_configured:
        return ComponentHealth(name="llm", status=HealthStatus.HEALTHY, details={"model": model})
    return ComponentHealth(
        name="llm",
        status=HealthStatus.UNHEALTHY,
        details={"model": model},
        error="OPENAI_API_KEY is not set",
    )


def determine_overall_status(components: List[ComponentHealth]) -> HealthStatus:
    statuses = {component.status for component in components}
    for candidate in (HealthStatus.UNHEALTHY, HealthStatus.DEGRADED):
        if candidate in statuses:
            return candidate
    return HealthStatus.HEALTHY


@router.get("/health", response_model=HealthResponse)
async def health(settings: AppSettings, llm: CurrentLLM):
    components = [check_llm_health(llm, settings.openai_model)]
    return HealthResponse(
        status=determine_overall_status(components),
        uptime_seconds=round(time.time() - _started_at, 2),
        version=settings.app_version,
        components=components,
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_probe():
    return LivenessResponse()


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_probe(response: Response, settings: AppSettings, llm: CurrentLLM):
    components = [check_llm_health(llm, settings.openai_model)]

    if determine_overall_status(components) == HealthStatus.UNHEALTHY:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return ReadinessResponse(status="not_ready", components=components)

    return ReadinessResponse(status="ready", components=components)
