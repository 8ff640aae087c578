"""Prediction Backend HTTP Client — 도메인 모델 기반 비동기 인터페이스.

예측 백엔드(yfinance + LSTM + FinBERT)와 통신.
    GET  /api/stock/{ticker}                     → Quote
    GET  /api/historical/{ticker}?period={period} → list[HistoricalBar]
    GET  /api/news/{ticker}                      → list[NewsArticle]
    POST /api/predict/{ticker}                   → ForecastResponse

실패는 그대로 전파한다:
    httpx.HTTPError — 전송 오류, 타임아웃, 비-2xx (raise_for_status)
    ValueError      — JSON 디코딩 실패, pydantic ValidationError (불변식 위반)
fallback 정책은 호출자(DataProvider)가 결정.
"""

import logging

import httpx
from pydantic import TypeAdapter

from stocksight.domain import (
    ForecastResponse,
    HistoricalBar,
    NewsArticle,
    Quote,
    SentimentWeights,
)
from stocksight.domain.config import AppConfig, get_config

logger = logging.getLogger(__name__)

_BARS = TypeAdapter(list[HistoricalBar])
_ARTICLES = TypeAdapter(list[NewsArticle])


class BackendClient:
    """예측 백엔드 비동기 HTTP 클라이언트.

    Usage:
        async with BackendClient() as client:
            quote = await client.get_quote("AAPL")
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        config: AppConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        config = config or get_config()
        self._base_url = (base_url or config.backend.base_url).rstrip("/")
        self._market_timeout = httpx.Timeout(config.api.market_timeout_ms / 1000)
        self._news_timeout = httpx.Timeout(config.api.news_timeout_ms / 1000)
        self._forecast_timeout = httpx.Timeout(config.api.forecast_timeout_ms / 1000)
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._market_timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def get_quote(self, ticker: str) -> Quote:
        """현재가 조회."""
        resp = await self._client.get(f"/api/stock/{ticker}", timeout=self._market_timeout)
        resp.raise_for_status()
        return Quote.model_validate(resp.json())

    async def get_historical(self, ticker: str, period: str = "1y") -> list[HistoricalBar]:
        """일봉 시계열 조회 (날짜 오름차순 정렬)."""
        resp = await self._client.get(
            f"/api/historical/{ticker}",
            params={"period": period},
            timeout=self._market_timeout,
        )
        resp.raise_for_status()
        bars = _BARS.validate_python(resp.json())
        return sorted(bars, key=lambda b: b.date)

    async def get_news(self, ticker: str) -> list[NewsArticle]:
        """FinBERT 점수 포함 뉴스 조회."""
        resp = await self._client.get(f"/api/news/{ticker}", timeout=self._news_timeout)
        resp.raise_for_status()
        return _ARTICLES.validate_python(resp.json())

    async def predict(
        self,
        ticker: str,
        *,
        historical: list[HistoricalBar],
        sentiment_weights: SentimentWeights,
        model_config: dict,
        prediction_days: int,
    ) -> ForecastResponse:
        """예측 요청 (모델 학습 + 추론은 백엔드 블랙박스)."""
        payload = {
            "historicalData": [bar.to_wire() for bar in historical],
            "sentimentWeights": sentiment_weights.to_wire(),
            "modelConfig": model_config,
            "predictionDays": prediction_days,
        }
        resp = await self._client.post(
            f"/api/predict/{ticker}",
            json=payload,
            timeout=self._forecast_timeout,
        )
        resp.raise_for_status()
        return ForecastResponse.model_validate(resp.json())

    async def health(self) -> bool:
        """백엔드 헬스체크."""
        try:
            resp = await self._client.get("/health", timeout=3.0)
            return resp.status_code == 200
        except httpx.HTTPError:
            return False

    async def aclose(self) -> None:
        """클라이언트 종료."""
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()
