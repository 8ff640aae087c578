"""E2E 테스트 공용 Fixtures.

Fake 예측 백엔드(MockTransport) 위에서 BackendClient → DataProvider →
PredictionOrchestrator 전체 경로를 외부 의존 없이 구동.
"""

from __future__ import annotations

import os
import random
from datetime import UTC, datetime
from unittest.mock import patch

import pytest
import pytest_asyncio
from fake_backend import BackendState, create_mock_transport

from stocksight.domain.config import get_config
from stocksight.infra.backend.client import BackendClient
from stocksight.services.deps import build_orchestrator
from stocksight.services.orchestrator import PredictionOrchestrator

# ---------------------------------------------------------------------------
# Config patching
# ---------------------------------------------------------------------------

_TEST_ENV = {
    "APP_ENV": "production",
    "BACKEND_BASE_URL": "http://fake-backend",
    "DATA_PREDICTION_DAYS": "3",
    "API_CACHE_TIMEOUT_MS": "300000",
}

NOW = datetime(2026, 10, 17, 9, 30, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _patch_config():
    """모든 E2E 테스트에서 config 캐시를 클리어하고 테스트 환경 변수 주입."""
    get_config.cache_clear()
    with patch.dict(os.environ, _TEST_ENV, clear=False):
        yield
    get_config.cache_clear()


# ---------------------------------------------------------------------------
# Fake backend
# ---------------------------------------------------------------------------


@pytest.fixture
def backend_state() -> BackendState:
    """Mutable 백엔드 상태 — 테스트에서 직접 변경."""
    return BackendState()


@pytest_asyncio.fixture
async def backend_client(backend_state: BackendState):
    """MockTransport 기반 BackendClient (네트워크 없음)."""
    config = get_config()
    async with BackendClient(config=config, transport=create_mock_transport(backend_state)) as client:
        yield client


@pytest.fixture
def orchestrator(backend_client: BackendClient) -> PredictionOrchestrator:
    """설정 기반 조립 + synthetic 난수/시각 고정."""
    return build_orchestrator(get_config(), backend_client, rng=random.Random(42), now=lambda: NOW)
