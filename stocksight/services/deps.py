"""의존성 조립 — 설정 → BackendClient → DataProvider → PredictionOrchestrator.

컴포넌트는 모두 생성자 인자로 협력자를 받는다. 이 모듈만 프로세스 단위
인스턴스를 캐싱하며, 테스트에서는 cache_clear() 또는
app.dependency_overrides 로 교체.

Usage:
    from stocksight.services.deps import get_orchestrator

    @app.get("/api/stocks/{ticker}/quote")
    async def quote(ticker: str, orchestrator = Depends(get_orchestrator)):
        ...
"""

import random
from collections.abc import Callable
from datetime import datetime
from functools import lru_cache

from stocksight.domain.config import AppConfig, get_config
from stocksight.infra.backend.client import BackendClient
from stocksight.services.orchestrator import PredictionOrchestrator
from stocksight.services.provider import DataProvider


def build_orchestrator(
    config: AppConfig,
    client: BackendClient,
    *,
    rng: random.Random | None = None,
    now: Callable[[], datetime] | None = None,
) -> PredictionOrchestrator:
    """설정 기반 오케스트레이터 생성 (카테고리별 캐시는 동일 TTL 공유).

    rng / now 는 provider 와 오케스트레이터가 공유 (synthetic 재현용).
    """
    provider = DataProvider(client, model_config=config.forecast_model_payload(), rng=rng, now=now)
    return PredictionOrchestrator(
        provider,
        cache_ttl=config.api.cache_ttl_seconds,
        horizon_days=config.data.prediction_days,
        sentiment_thresholds=(config.finbert.positive_threshold, config.finbert.negative_threshold),
        rng=rng,
        now=now,
    )


@lru_cache
def get_backend_client() -> BackendClient:
    """예측 백엔드 클라이언트 (싱글턴)."""
    return BackendClient(config=get_config())


@lru_cache
def get_orchestrator() -> PredictionOrchestrator:
    """앱 전역 오케스트레이터 (싱글턴)."""
    return build_orchestrator(get_config(), get_backend_client())
