"""stocksight 도메인 모델 — 백엔드/UI 데이터 계약의 Single Source of Truth.

Usage:
    from stocksight.domain import Quote, NewsArticle, PredictionResult
    from stocksight.domain.config import AppConfig
"""

# --- Types ---
from .types import Fraction, Price, SignedScore, Ticker, Volume, WireModel

# --- Enums ---
from .enums import Environment, ScalingMethod, SentimentLabel, Trend, WeightingStrategy

# --- Stock ---
from .stock import HistoricalBar, Quote

# --- News ---
from .news import NewsArticle, NewsItem

# --- Prediction ---
from .prediction import (
    CacheStats,
    ForecastPoint,
    ForecastResponse,
    ModelMetrics,
    PredictionResult,
    PredictionView,
    SentimentWeights,
)

__all__ = [
    # Types
    "Ticker",
    "Price",
    "Volume",
    "SignedScore",
    "Fraction",
    "WireModel",
    # Enums
    "SentimentLabel",
    "Trend",
    "Environment",
    "ScalingMethod",
    "WeightingStrategy",
    # Stock
    "Quote",
    "HistoricalBar",
    # News
    "NewsArticle",
    "NewsItem",
    # Prediction
    "ForecastPoint",
    "ModelMetrics",
    "SentimentWeights",
    "ForecastResponse",
    "PredictionResult",
    "PredictionView",
    "CacheStats",
]
