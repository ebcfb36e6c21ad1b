"""HTTP surface: health probes at the root, feature modules under ``/api/v1``."""

from typing import Any, Literal

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from prompt_universe.api.dependencies import Store
from prompt_universe.config import settings
from prompt_universe.core.errors import AppException
from prompt_universe.core.jobs import job_queue
from prompt_universe.core.llm import get_available_providers
from prompt_universe.modules import discover_modules


API_PREFIX = "/api/v1"

installed_modules = discover_modules()


class LivenessResponse(BaseModel):
    status: Literal["alive"] = "alive"


class ReadinessResponse(BaseModel):
    """Readiness of the process and of each backing service it needs."""

    status: Literal["ready", "degraded"]
    checks: dict[str, str]


# ============================================================
# Health
# ============================================================

health_router = APIRouter(tags=["health"])


@health_router.get(
    "/health/live",
    response_model=LivenessResponse,
    summary="Liveness probe",
)
async def liveness() -> LivenessResponse:
    return LivenessResponse()


@health_router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Returns 503 while the document store cannot be reached.",
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ReadinessResponse}},
)
async def readiness(store: Store) -> JSONResponse:
    try:
        await store.ping()
        store_check = "ok"
    except AppException as e:
        store_check = e.message

    ready = store_check == "ok"
    body = ReadinessResponse(
        status="ready" if ready else "degraded",
        checks={"document_store": store_check},
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(),
    )


@health_router.get("/info", summary="Application info")
async def info(store: Store) -> dict[str, Any]:
    """Deployment facts: backends in use, model providers and installed modules."""
    return {
        "app": settings.app_name,
        "environment": settings.environment,
        "document_backend": store.backend,
        "job_queue": "ok" if job_queue.is_open else "unavailable",
        "llm_providers": get_available_providers(),
        "modules": {module.name: module.version for module in installed_modules},
    }


# ============================================================
# Feature modules
# ============================================================

v1_router = APIRouter(prefix=API_PREFIX)
for module in installed_modules:
    v1_router.include_router(module.router)

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(v1_router)
