"""Stocksight API — 모바일 UI용 backend-for-frontend.

모든 데이터 라우트는 PredictionOrchestrator 연산 하나에 위임.
데이터 라우트는 항상 200 (백엔드 장애 시 synthetic 데이터).

Endpoints:
    GET    /api/stocks/{ticker}/quote       → Quote
    GET    /api/stocks/{ticker}/prediction  → PredictionView
    GET    /api/stocks/{ticker}/news        → list[NewsItem]
    GET    /api/cache/stats                 → CacheStats
    DELETE /api/cache
    GET    /api/config/validation
    GET    /health                          → HealthStatus
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from stocksight.domain import CacheStats, NewsItem, PredictionView, Quote
from stocksight.domain.config import get_config, validate_model_config
from stocksight.infra.observability.logging import setup_logging
from stocksight.services.base import create_app
from stocksight.services.deps import get_backend_client, get_orchestrator
from stocksight.services.orchestrator import InvalidTicker, PredictionOrchestrator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    config = get_config()
    setup_logging(
        "stocksight-api",
        log_level=config.log_level,
        json_output=config.json_logs,
        env=config.env.value,
    )
    errors = validate_model_config(config)
    for error in errors:
        logger.warning("Model config violation: %s", error)
    logger.info("Backend: %s (cache ttl=%.0fs)", config.backend.base_url, config.api.cache_ttl_seconds)

    yield

    if get_backend_client.cache_info().currsize:
        await get_backend_client().aclose()


app = create_app("stocksight-api", version="1.0.0", lifespan=lifespan, dependencies=["backend"])


@app.exception_handler(InvalidTicker)
async def invalid_ticker_handler(request: Request, exc: InvalidTicker) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc), "message": "Invalid ticker"})


class ClearCacheResponse(BaseModel):
    cleared: bool = True


class ConfigValidationResponse(BaseModel):
    valid: bool
    errors: list[str] = []


@app.get("/api/stocks/{ticker}/quote")
async def get_quote(ticker: str, orchestrator: PredictionOrchestrator = Depends(get_orchestrator)) -> Quote:
    """현재가."""
    return await orchestrator.get_quote(ticker)


@app.get("/api/stocks/{ticker}/prediction")
async def get_prediction(
    ticker: str, orchestrator: PredictionOrchestrator = Depends(get_orchestrator)
) -> PredictionView:
    """최근 4개 봉 + horizon 예측 차트 데이터."""
    return await orchestrator.get_prediction(ticker)


@app.get("/api/stocks/{ticker}/news")
async def get_news(ticker: str, orchestrator: PredictionOrchestrator = Depends(get_orchestrator)) -> list[NewsItem]:
    """FinBERT 점수 기반 뉴스 리스트."""
    return await orchestrator.get_news(ticker)


@app.get("/api/cache/stats")
def cache_stats(orchestrator: PredictionOrchestrator = Depends(get_orchestrator)) -> CacheStats:
    return orchestrator.cache_stats()


@app.delete("/api/cache")
def clear_cache(orchestrator: PredictionOrchestrator = Depends(get_orchestrator)) -> ClearCacheResponse:
    """전체 캐시 삭제."""
    orchestrator.clear_cache()
    return ClearCacheResponse()


@app.get("/api/config/validation")
def config_validation() -> ConfigValidationResponse:
    errors = validate_model_config(get_config())
    return ConfigValidationResponse(valid=not errors, errors=errors)
