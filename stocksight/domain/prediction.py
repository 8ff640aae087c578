"""예측 모델 — 백엔드 예측 응답, 통합 예측 결과, UI projection."""

import datetime
from typing import Self

from pydantic import Field, model_validator

from .enums import Trend
from .stock import HistoricalBar
from .types import Fraction, Price, SignedScore, Ticker, WireModel

# 뉴스가 없을 때의 중립 prior
NEUTRAL_PRIOR = (0.33, 0.33, 0.34, 0.0)


class ForecastPoint(WireModel):
    """일별 예측치 + 신뢰 구간."""

    date: datetime.date
    predicted_price: Price
    confidence: Fraction
    upper_bound: Price
    lower_bound: Price

    @model_validator(mode="after")
    def check_bounds_bracket_estimate(self) -> Self:
        if not (self.lower_bound <= self.predicted_price <= self.upper_bound):
            raise ValueError(
                f"bounds [{self.lower_bound:.2f}, {self.upper_bound:.2f}] "
                f"do not bracket predicted_price({self.predicted_price:.2f})"
            )
        return self


class ModelMetrics(WireModel):
    """예측 모델 평가 지표."""

    accuracy: float
    mse: float
    rmse: float
    mae: float
    r2_score: float


class SentimentWeights(WireModel):
    """뉴스 감성 분포 + FinBERT 평균 점수."""

    positive: Fraction
    negative: Fraction
    neutral: Fraction
    overall_sentiment: SignedScore

    @classmethod
    def neutral_prior(cls) -> "SentimentWeights":
        positive, negative, neutral, overall = NEUTRAL_PRIOR
        return cls(positive=positive, negative=negative, neutral=neutral, overall_sentiment=overall)


def _check_strictly_increasing(points: list[ForecastPoint]) -> None:
    for prev, cur in zip(points, points[1:]):
        if cur.date <= prev.date:
            raise ValueError(f"forecast dates must be strictly increasing ({prev.date} → {cur.date})")


class ForecastResponse(WireModel):
    """POST /api/predict/{ticker} 응답."""

    predictions: list[ForecastPoint]
    metrics: ModelMetrics
    trend: Trend
    confidence: Fraction

    @model_validator(mode="after")
    def check_forecast_order(self) -> Self:
        _check_strictly_increasing(self.predictions)
        return self


class PredictionResult(WireModel):
    """통합 예측 결과 — 시세 + 과거 시계열 + 예측 + 감성 가중치."""

    symbol: Ticker
    current_price: Price
    historical: list[HistoricalBar]
    predictions: list[ForecastPoint]
    model_metrics: ModelMetrics
    sentiment_weights: SentimentWeights
    trend: Trend
    confidence: Fraction
    last_updated: datetime.datetime

    @model_validator(mode="after")
    def check_forecast_order(self) -> Self:
        _check_strictly_increasing(self.predictions)
        return self


class PredictionView(WireModel):
    """UI 차트용 projection.

    historical: 최근 4개 봉 종가, predictions: 예측가,
    dates: 최근 4개 봉 + 예측일 라벨 ("Oct 16"), confidence: 퍼센트 정수.
    """

    historical: list[float]
    predictions: list[float]
    dates: list[str]
    trend: str
    confidence: int = Field(ge=0, le=100)
    result: PredictionResult


class CacheStats(WireModel):
    """캐시 introspection (부수효과 없음)."""

    count: int
    keys: list[str]
