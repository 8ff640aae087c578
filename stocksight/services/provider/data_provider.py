"""Data Provider — 백엔드 호출 + 로컬 fallback.

quote / historical / news:
    try_* 는 FetchResult(Ok | Unavailable)를 반환하고,
    fetch_* 는 Unavailable 일 때 synthetic 데이터로 대체 (호출자는 실패를 보지 않음).
forecast:
    request_forecast 만 실패를 UpstreamUnavailable 로 전파한다.
    전체 대체 여부는 Orchestrator 가 결정.
"""

import logging
import random
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import TypeVar

import httpx

from stocksight.domain import (
    ForecastResponse,
    HistoricalBar,
    NewsArticle,
    Quote,
    SentimentWeights,
)
from stocksight.infra.backend.client import BackendClient

from . import synthetic
from .errors import UpstreamUnavailable
from .result import FetchResult, Ok, Unavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")

# 전송 오류 / 비-2xx / JSON 디코딩 실패 / 불변식 위반 (ValidationError ⊂ ValueError)
UPSTREAM_ERRORS = (httpx.HTTPError, ValueError)


class DataProvider:
    """시세 / 일봉 / 뉴스 / 예측 데이터 제공자.

    Args:
        client: 예측 백엔드 클라이언트
        model_config: 예측 요청에 그대로 실을 modelConfig
        rng: synthetic 데이터 난수원 (테스트에서 seed 고정)
        now: 현재 시각 함수 (synthetic 뉴스 타임스탬프)
    """

    def __init__(
        self,
        client: BackendClient,
        model_config: dict | None = None,
        *,
        rng: random.Random | None = None,
        now: Callable[[], datetime] | None = None,
    ):
        self._client = client
        self._model_config = model_config or {}
        self._rng = rng or random.Random()
        self._now = now or (lambda: datetime.now(UTC))

    # ─── Explicit results ──────────────────────────────────

    async def _attempt(self, endpoint: str, ticker: str, call: Callable[[], Awaitable[T]]) -> FetchResult[T]:
        try:
            return Ok(await call())
        except UPSTREAM_ERRORS as e:
            reason = f"{type(e).__name__}: {e}"
            logger.warning("[%s] %s unavailable: %s", ticker, endpoint, reason)
            return Unavailable(endpoint=endpoint, reason=reason)

    async def try_quote(self, ticker: str) -> FetchResult[Quote]:
        return await self._attempt("quote", ticker, lambda: self._client.get_quote(ticker))

    async def try_historical(self, ticker: str, period: str = "1y") -> FetchResult[list[HistoricalBar]]:
        return await self._attempt("historical", ticker, lambda: self._client.get_historical(ticker, period))

    async def try_news(self, ticker: str) -> FetchResult[list[NewsArticle]]:
        return await self._attempt("news", ticker, lambda: self._client.get_news(ticker))

    # ─── Total operations (local fallback) ─────────────────

    async def fetch_quote(self, ticker: str) -> Quote:
        """현재가. 실패 시 synthetic Quote."""
        result = await self.try_quote(ticker)
        return result.unwrap_or_else(lambda: self._fallback("quote", ticker, synthetic.quote(ticker, self._rng)))

    async def fetch_historical(self, ticker: str, period: str = "1y") -> list[HistoricalBar]:
        """일봉 (날짜 오름차순). 실패 시 synthetic 31일."""
        result = await self.try_historical(ticker, period)
        return result.unwrap_or_else(
            lambda: self._fallback(
                "historical",
                ticker,
                synthetic.historical(ticker, self._rng, today=self._now().date()),
            )
        )

    async def fetch_news_with_sentiment(self, ticker: str) -> list[NewsArticle]:
        """FinBERT 점수 포함 뉴스. 실패 시 고정 3건."""
        result = await self.try_news(ticker)
        return result.unwrap_or_else(lambda: self._fallback("news", ticker, synthetic.news(ticker, self._now())))

    # ─── Forecast (failure surfaces) ───────────────────────

    async def request_forecast(
        self,
        ticker: str,
        historical: list[HistoricalBar],
        sentiment_weights: SentimentWeights,
        horizon_days: int,
    ) -> ForecastResponse:
        """예측 요청. 실패 시 UpstreamUnavailable."""
        try:
            return await self._client.predict(
                ticker,
                historical=historical,
                sentiment_weights=sentiment_weights,
                model_config=self._model_config,
                prediction_days=horizon_days,
            )
        except UPSTREAM_ERRORS as e:
            raise UpstreamUnavailable("forecast", ticker, f"{type(e).__name__}: {e}") from e

    @staticmethod
    def _fallback(endpoint: str, ticker: str, data: T) -> T:
        logger.info("[%s] Using synthetic %s data", ticker, endpoint)
        return data
