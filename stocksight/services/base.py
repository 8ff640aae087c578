"""FastAPI 앱 팩토리 — 공통 헬스체크 + 에러 핸들러.

Usage:
    from stocksight.services.base import create_app

    app = create_app("stocksight-api", version="1.0.0", dependencies=["backend"])
"""

import logging
import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

# 서비스 시작 시각 (uptime 계산용)
_start_time: float = 0.0


class DependencyHealth(BaseModel):
    """의존 서비스 상태."""

    status: str  # "healthy" | "degraded" | "down"
    latency_ms: float | None = None
    message: str | None = None


class HealthStatus(BaseModel):
    """서비스 헬스 상태."""

    service: str
    status: str  # "healthy" | "degraded" | "unhealthy"
    uptime_seconds: float
    version: str = "1.0.0"
    dependencies: dict[str, DependencyHealth] = {}
    timestamp: datetime


def create_app(
    service_name: str,
    *,
    version: str = "1.0.0",
    lifespan: Callable | None = None,
    dependencies: list[str] | None = None,
) -> FastAPI:
    """FastAPI 앱 팩토리 — 공통 헬스체크 + 에러 핸들러.

    Args:
        service_name: 서비스 식별자 (예: "stocksight-api")
        version: 서비스 버전
        lifespan: 커스텀 lifespan context manager (startup/shutdown)
        dependencies: 헬스체크에 포함할 의존성 목록 ("backend")
    """
    deps = dependencies or []

    @asynccontextmanager
    async def wrapped_lifespan(app: FastAPI) -> AsyncIterator[None]:
        global _start_time
        _start_time = time.monotonic()
        logger.info("[%s] Starting v%s", service_name, version)
        if lifespan:
            async with lifespan(app):
                yield
        else:
            yield
        logger.info("[%s] Shutting down", service_name)

    app = FastAPI(
        title=f"stocksight {service_name}",
        version=version,
        lifespan=wrapped_lifespan,
    )

    # --- Error Handlers ---

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"detail": exc.errors(include_url=False), "message": "Validation error"},
        )

    # --- Health Check ---

    @app.get("/health")
    async def health() -> HealthStatus:
        dep_health: dict[str, DependencyHealth] = {}
        overall = "healthy"

        for dep in deps:
            dep_health[dep] = await _check_dependency(dep)
            if dep_health[dep].status == "down":
                overall = "unhealthy"
            elif dep_health[dep].status == "degraded" and overall == "healthy":
                overall = "degraded"

        return HealthStatus(
            service=service_name,
            status=overall,
            uptime_seconds=time.monotonic() - _start_time,
            version=version,
            dependencies=dep_health,
            timestamp=datetime.now(UTC),
        )

    return app


async def _check_dependency(name: str) -> DependencyHealth:
    """의존성 상태 체크."""
    start = time.monotonic()
    if name == "backend":
        from stocksight.services.deps import get_backend_client

        # 백엔드 장애 시에도 데이터 API는 synthetic fallback으로 동작 → degraded
        if not await get_backend_client().health():
            return DependencyHealth(
                status="degraded",
                latency_ms=round((time.monotonic() - start) * 1000, 1),
                message="Prediction backend unreachable (serving synthetic data)",
            )
    else:
        return DependencyHealth(status="healthy", message=f"Unknown dep: {name}")

    latency = (time.monotonic() - start) * 1000
    status = "healthy" if latency < 1000 else "degraded"
    return DependencyHealth(status=status, latency_ms=round(latency, 1))
