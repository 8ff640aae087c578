"""Synthetic fallback 생성기 — 백엔드 장애 시 대체 데이터.

형태(shape)와 불변식은 고정, 값은 난수. 티커는 문자열 자체(대문자 심볼,
"<SYMBOL> Corporation")로만 결과에 반영되며 숨은 상태는 없다.
rng / now 를 주입하면 결과가 재현 가능.
"""

import random
from datetime import UTC, date, datetime, timedelta

from stocksight.domain import (
    ForecastPoint,
    HistoricalBar,
    ModelMetrics,
    NewsArticle,
    PredictionResult,
    Quote,
    SentimentLabel,
    SentimentWeights,
    Trend,
)

HISTORICAL_DAYS = 31  # today - 30 ... today
HISTORICAL_BASE_PRICE = 100.0

# 예측 추세 판정 임계 (현재가 대비 마지막 예측가 변화율)
TREND_THRESHOLD = 0.01

FALLBACK_METRICS = ModelMetrics(accuracy=0.85, mse=2.34, rmse=1.53, mae=1.21, r2_score=0.78)


def _rng(rng: random.Random | None) -> random.Random:
    return rng if rng is not None else random.Random()


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(UTC)


def quote(ticker: str, rng: random.Random | None = None) -> Quote:
    """대체 현재가. current_price > 0, volume >= 0."""
    r = _rng(rng)
    symbol = ticker.strip().upper()
    base_price = r.random() * 200 + 50
    change = (r.random() - 0.5) * 10
    return Quote(
        symbol=symbol,
        name=f"{symbol} Corporation",
        current_price=base_price,
        change=change,
        change_percent=change / base_price * 100,
        volume=r.randrange(100_000_000),
        market_cap=f"{r.randrange(1000)}B",
        high_52_week=base_price * 1.3,
        low_52_week=base_price * 0.7,
        pe_ratio=r.random() * 30 + 10,
        dividend_yield=r.random() * 5,
    )


def historical(
    ticker: str,
    rng: random.Random | None = None,
    today: date | None = None,
    days: int = HISTORICAL_DAYS,
) -> list[HistoricalBar]:
    """대체 일봉 (날짜 오름차순, 기준가 100 random walk)."""
    r = _rng(rng)
    end = today or _now(None).date()
    price = HISTORICAL_BASE_PRICE
    bars: list[HistoricalBar] = []

    for offset in range(days - 1, -1, -1):
        price = max(price + (r.random() - 0.5) * 5, 1.0)
        open_ = max(price + (r.random() - 0.5) * 2, 0.5)
        close = price
        bars.append(
            HistoricalBar(
                date=end - timedelta(days=offset),
                open=open_,
                high=max(open_, close) + r.random() * 3,
                low=max(min(open_, close) - r.random() * 3, 0.0),
                close=close,
                volume=r.randrange(10_000_000),
                adjusted_close=close,
            )
        )
    return bars


def news(ticker: str, now: datetime | None = None) -> list[NewsArticle]:
    """고정 대체 뉴스 3건 (positive / neutral / negative)."""
    symbol = ticker.strip().upper()
    ts = _now(now)
    return [
        NewsArticle(
            id="1",
            headline=f"{symbol} Reports Strong Q4 Earnings, Beats Analyst Expectations",
            summary="The company delivered impressive quarterly results with revenue growth exceeding market forecasts.",
            content="Full article content would be here...",
            sentiment=SentimentLabel.POSITIVE,
            sentiment_score=0.78,
            finbert_score=0.82,
            source="Financial Times",
            published_at=ts - timedelta(hours=2),
            relevance_score=0.95,
        ),
        NewsArticle(
            id="2",
            headline=f"Market Volatility Affects {symbol} Stock Performance",
            summary="Recent market turbulence has impacted stock prices across the sector.",
            content="Full article content would be here...",
            sentiment=SentimentLabel.NEUTRAL,
            sentiment_score=-0.05,
            finbert_score=-0.02,
            source="Reuters",
            published_at=ts - timedelta(hours=5),
            relevance_score=0.78,
        ),
        NewsArticle(
            id="3",
            headline=f"{symbol} Faces Regulatory Challenges in Key Markets",
            summary="New regulatory requirements may impact operations in several international markets.",
            content="Full article content would be here...",
            sentiment=SentimentLabel.NEGATIVE,
            sentiment_score=-0.42,
            finbert_score=-0.38,
            source="Bloomberg",
            published_at=ts - timedelta(hours=8),
            relevance_score=0.85,
        ),
    ]


def classify_trend(current_price: float, last_predicted: float) -> Trend:
    """현재가 대비 마지막 예측가 변화율로 추세 판정 (±1%)."""
    if current_price <= 0:
        return Trend.SIDEWAYS
    change = (last_predicted - current_price) / current_price
    if change > TREND_THRESHOLD:
        return Trend.BULLISH
    if change < -TREND_THRESHOLD:
        return Trend.BEARISH
    return Trend.SIDEWAYS


def forecast(
    last_price: float,
    horizon_days: int,
    rng: random.Random | None = None,
    today: date | None = None,
) -> list[ForecastPoint]:
    """대체 예측치 horizon_days개 (today+1 부터, ±5% 밴드)."""
    r = _rng(rng)
    start = today or _now(None).date()
    price = last_price
    points: list[ForecastPoint] = []

    for day in range(1, horizon_days + 1):
        trend_factor = 1.02 if r.random() > 0.5 else 0.98
        price = max(price * trend_factor + (r.random() - 0.5) * 5, 0.01)
        points.append(
            ForecastPoint(
                date=start + timedelta(days=day),
                predicted_price=price,
                confidence=r.random() * 0.3 + 0.7,  # 70-100%
                upper_bound=price * 1.05,
                lower_bound=price * 0.95,
            )
        )
    return points


def prediction_result(
    ticker: str,
    horizon_days: int,
    sentiment_weights: SentimentWeights | None = None,
    rng: random.Random | None = None,
    now: datetime | None = None,
) -> PredictionResult:
    """완전 대체 예측 결과.

    현재가 = 대체 시계열의 마지막 종가, 추세/신뢰도는 대체 예측치에서 도출.
    """
    r = _rng(rng)
    ts = _now(now)
    bars = historical(ticker, r, today=ts.date())
    current_price = bars[-1].close
    points = forecast(current_price, horizon_days, r, today=ts.date())

    if points:
        trend = classify_trend(current_price, points[-1].predicted_price)
        confidence = sum(p.confidence for p in points) / len(points)
    else:
        trend = Trend.SIDEWAYS
        confidence = 0.0

    return PredictionResult(
        symbol=ticker.strip().upper(),
        current_price=current_price,
        historical=bars,
        predictions=points,
        model_metrics=FALLBACK_METRICS,
        sentiment_weights=sentiment_weights or SentimentWeights.neutral_prior(),
        trend=trend,
        confidence=confidence,
        last_updated=ts,
    )
