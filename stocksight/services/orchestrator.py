"""Prediction Orchestrator — UI 진입점 (quote / prediction / news).

캐싱 정책과 백엔드 조합을 소유한다.

Data Flow (prediction, cache miss):
  quote ∥ historical ∥ news (asyncio.gather)
    → calculate_sentiment_weights(news)
    → request_forecast
        ├─ 성공: PredictionResult 조립
        └─ UpstreamUnavailable: synthetic PredictionResult 전체 대체
    → PredictionView projection → cache

모든 public 연산은 항상 값을 반환한다 (실데이터/대체데이터 구분 불가).
빈 티커만 조회 전에 InvalidTicker 로 거부.
"""

import asyncio
import logging
import random
from collections.abc import Callable, Iterable
from datetime import UTC, date, datetime

from stocksight.domain import (
    CacheStats,
    HistoricalBar,
    NewsArticle,
    NewsItem,
    PredictionResult,
    PredictionView,
    Quote,
)
from stocksight.infra.cache import TypedCache

from . import sentiment
from .provider import DataProvider, UpstreamUnavailable, synthetic

logger = logging.getLogger(__name__)

DEFAULT_HORIZON_DAYS = 3
DEFAULT_CACHE_TTL = 300.0  # 5분
RECENT_BARS = 4  # 차트에 표시할 최근 일봉 수


class InvalidTicker(ValueError):
    """공백뿐인 티커 — 조회 전에 거부."""

    def __init__(self, ticker: str):
        self.ticker = ticker
        super().__init__(f"ticker must not be blank: {ticker!r}")


def normalize_ticker(ticker: str) -> str:
    """공백 제거 + 대문자. 빈 티커는 InvalidTicker."""
    symbol = ticker.strip().upper()
    if not symbol:
        raise InvalidTicker(ticker)
    return symbol


def format_date_label(d: date) -> str:
    """차트 라벨 ("Oct 16")."""
    return f"{d:%b} {d.day}"


def build_prediction_view(result: PredictionResult) -> PredictionView:
    """PredictionResult → UI projection (최근 4개 봉 + 예측일)."""
    recent = result.historical[-RECENT_BARS:]
    dates = [format_date_label(bar.date) for bar in recent]
    dates += [format_date_label(p.date) for p in result.predictions]
    return PredictionView(
        historical=[bar.close for bar in recent],
        predictions=[p.predicted_price for p in result.predictions],
        dates=dates,
        trend=result.trend.label,
        confidence=int(result.confidence * 100),
        result=result,
    )


class PredictionOrchestrator:
    """quote / prediction / news 캐시-또는-조회 오케스트레이터.

    Args:
        provider: Data Provider
        quote_cache / news_cache / prediction_cache: 카테고리별 캐시.
            생략 시 cache_ttl 을 공유하는 새 캐시 생성.
        horizon_days: 예측 일수
        sentiment_thresholds: (positive, negative) FinBERT 라벨 임계값
        rng / now: synthetic 대체 결과용 (테스트에서 주입)
    """

    def __init__(
        self,
        provider: DataProvider,
        *,
        quote_cache: TypedCache[Quote] | None = None,
        news_cache: TypedCache[tuple[NewsItem, ...]] | None = None,
        prediction_cache: TypedCache[PredictionView] | None = None,
        cache_ttl: float = DEFAULT_CACHE_TTL,
        horizon_days: int = DEFAULT_HORIZON_DAYS,
        sentiment_thresholds: tuple[float, float] = (0.3, -0.3),
        rng: random.Random | None = None,
        now: Callable[[], datetime] | None = None,
    ):
        self._provider = provider
        self._quote_cache = quote_cache or TypedCache("quote", cache_ttl)
        self._news_cache = news_cache or TypedCache("news", cache_ttl)
        self._prediction_cache = prediction_cache or TypedCache("prediction", cache_ttl)
        self._horizon_days = horizon_days
        self._positive_threshold, self._negative_threshold = sentiment_thresholds
        self._rng = rng or random.Random()
        self._now = now or (lambda: datetime.now(UTC))

    @property
    def horizon_days(self) -> int:
        return self._horizon_days

    # ─── Quote ─────────────────────────────────────────────

    async def get_quote(self, ticker: str) -> Quote:
        symbol = normalize_ticker(ticker)
        key = self._quote_cache.key_for(symbol)
        cached = self._quote_cache.get(key)
        if cached is not None:
            return cached

        quote = await self._provider.fetch_quote(symbol)
        self._quote_cache.set(key, quote)
        return quote

    # ─── News ──────────────────────────────────────────────

    async def get_news(self, ticker: str) -> list[NewsItem]:
        """UI 뉴스 항목 (sentiment_score = finbert_score).

        캐시는 tuple 로 보관하고 호출마다 새 list 를 반환.
        """
        symbol = normalize_ticker(ticker)
        key = self._news_cache.key_for(symbol)
        cached = self._news_cache.get(key)
        if cached is not None:
            return list(cached)

        articles = await self._provider.fetch_news_with_sentiment(symbol)
        self._check_labels(symbol, articles)
        items = tuple(NewsItem.from_article(a) for a in articles)
        self._news_cache.set(key, items)
        return list(items)

    # ─── Prediction ────────────────────────────────────────

    async def get_prediction(self, ticker: str) -> PredictionView:
        symbol = normalize_ticker(ticker)
        key = self._prediction_cache.key_for(symbol)
        cached = self._prediction_cache.get(key)
        if cached is not None:
            return cached

        result = await self._generate_prediction(symbol)
        view = build_prediction_view(result)
        self._prediction_cache.set(key, view)
        logger.info(
            "[%s] Prediction ready: trend=%s confidence=%d%%",
            symbol,
            view.trend,
            view.confidence,
        )
        return view

    async def _generate_prediction(self, symbol: str) -> PredictionResult:
        quote, historical, articles = await asyncio.gather(
            self._provider.fetch_quote(symbol),
            self._provider.fetch_historical(symbol),
            self._provider.fetch_news_with_sentiment(symbol),
        )
        self._check_labels(symbol, articles)
        weights = sentiment.calculate_sentiment_weights(articles)

        try:
            forecast = await self._provider.request_forecast(symbol, historical, weights, self._horizon_days)
        except UpstreamUnavailable as e:
            logger.warning("[%s] Forecast unavailable, using synthetic prediction: %s", symbol, e.reason)
            return synthetic.prediction_result(
                symbol,
                self._horizon_days,
                sentiment_weights=weights,
                rng=self._rng,
                now=self._now(),
            )

        return PredictionResult(
            symbol=symbol,
            current_price=quote.current_price,
            historical=self._ordered(historical),
            predictions=forecast.predictions,
            model_metrics=forecast.metrics,
            sentiment_weights=weights,
            trend=forecast.trend,
            confidence=forecast.confidence,
            last_updated=self._now(),
        )

    @staticmethod
    def _ordered(bars: list[HistoricalBar]) -> list[HistoricalBar]:
        return sorted(bars, key=lambda b: b.date)

    def _check_labels(self, symbol: str, articles: Iterable[NewsArticle]) -> None:
        """라벨과 FinBERT 점수가 임계값 기준과 어긋나는 기사 로깅 (재라벨링 없음)."""
        for article in articles:
            expected = sentiment.classify_finbert_score(
                article.finbert_score, self._positive_threshold, self._negative_threshold
            )
            if expected != article.sentiment:
                logger.debug(
                    "[%s] Article %s labeled %s but finbert_score=%.2f suggests %s",
                    symbol,
                    article.id,
                    article.sentiment,
                    article.finbert_score,
                    expected,
                )

    # ─── Cache ─────────────────────────────────────────────

    def clear_cache(self) -> None:
        """세 카테고리 전체 삭제 (티커별 선택 삭제 없음)."""
        for cache in (self._quote_cache, self._news_cache, self._prediction_cache):
            cache.clear()
        logger.info("Cache cleared")

    def cache_stats(self) -> CacheStats:
        keys: list[str] = []
        for cache in (self._quote_cache, self._news_cache, self._prediction_cache):
            keys.extend(cache.stats().keys)
        return CacheStats(count=len(keys), keys=keys)
