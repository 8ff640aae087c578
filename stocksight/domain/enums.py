"""열거형 정의 — 시스템 전체에서 사용하는 상수값."""

from enum import StrEnum


class SentimentLabel(StrEnum):
    """뉴스 기사 감성 라벨 (FinBERT 분류)"""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class Trend(StrEnum):
    """예측 추세"""

    BULLISH = "bullish"
    BEARISH = "bearish"
    SIDEWAYS = "sideways"

    @property
    def label(self) -> str:
        """UI 표시용 라벨 (Bullish / Bearish / Sideways)."""
        return self.value.capitalize()


class Environment(StrEnum):
    """실행 환경 — 모델 설정 프로파일 선택"""

    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class ScalingMethod(StrEnum):
    MINMAX = "minmax"
    STANDARD = "standard"
    ROBUST = "robust"


class WeightingStrategy(StrEnum):
    """감성 가중 전략 태그 (예측 모델로 그대로 전달)"""

    LINEAR = "linear"
    EXPONENTIAL = "exponential"
    SIGMOID = "sigmoid"
