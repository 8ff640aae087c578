"""통합 설정 모델 — Pydantic Settings 기반.

모든 설정값은 환경 변수로 주입. 우선순위:
  1. 환경 변수 (docker-compose env, .env)
  2. Pydantic Settings 기본값
  3. 환경 프로파일 (development / testing) 오버라이드

모델 관련 값(LSTM/Training/Data/FinBERT)은 예측 엔드포인트로 그대로 전달될 뿐
이 레이어에서 해석하지 않는다. 범위 검증은 validate_model_config()가 담당하며
예외 대신 위반 메시지 목록을 반환한다.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

from .enums import Environment, ScalingMethod, WeightingStrategy


class BackendConfig(BaseSettings):
    """예측 백엔드 설정."""

    base_url: str = "http://localhost:8000"

    model_config = {"env_prefix": "BACKEND_"}


class LSTMConfig(BaseSettings):
    """LSTM 모델 파라미터."""

    sequence_length: int = 60  # 과거 60일
    hidden_units: int = 128
    layers: int = 2
    dropout: float = 0.2
    recurrent_dropout: float = 0.2

    model_config = {"env_prefix": "LSTM_"}


class TrainingConfig(BaseSettings):
    """학습 파라미터."""

    epochs: int = 100
    batch_size: int = 32
    learning_rate: float = 0.001
    validation_split: float = 0.2
    early_stopping_patience: int = 10
    early_stopping_min_delta: float = 0.001

    model_config = {"env_prefix": "TRAINING_"}


class DataConfig(BaseSettings):
    """데이터 처리 설정."""

    features: list[str] = [
        "close",
        "volume",
        "high",
        "low",
        "open",
        "sentiment_score",
        "news_volume",
        "volatility",
        "rsi",
        "macd",
        "bollinger_upper",
        "bollinger_lower",
    ]
    target_column: str = "close"
    scaling_method: ScalingMethod = ScalingMethod.MINMAX
    test_size: float = 0.2
    prediction_days: int = 3  # 예측 horizon

    model_config = {"env_prefix": "DATA_"}


class FinBERTConfig(BaseSettings):
    """FinBERT 감성 분석 설정."""

    model: str = "ProsusAI/finbert"
    max_length: int = 512
    positive_threshold: float = 0.3
    negative_threshold: float = -0.3
    weighting_strategy: WeightingStrategy = WeightingStrategy.EXPONENTIAL

    model_config = {"env_prefix": "FINBERT_"}


class NewsConfig(BaseSettings):
    """뉴스 처리 설정."""

    max_articles: int = 50
    time_window_hours: int = 72
    sources: list[str] = [
        "reuters",
        "bloomberg",
        "cnbc",
        "marketwatch",
        "financial-times",
        "wsj",
    ]
    relevance_threshold: float = 0.5

    model_config = {"env_prefix": "NEWS_"}


class ApiConfig(BaseSettings):
    """백엔드 호출 설정 (ms 단위)."""

    market_timeout_ms: int = 30_000  # quote / historical
    news_timeout_ms: int = 15_000
    forecast_timeout_ms: int = 120_000  # 모델 학습 포함
    retry_attempts: int = 3  # 전달용. 코어는 단일 시도 + fallback
    cache_timeout_ms: int = 300_000  # 5분

    model_config = {"env_prefix": "API_"}

    @property
    def cache_ttl_seconds(self) -> float:
        return self.cache_timeout_ms / 1000


class AppConfig(BaseSettings):
    """최상위 설정 — 모든 서브 설정을 통합.

    Usage:
        config = get_config()
        print(config.backend.base_url)
        print(config.api.cache_ttl_seconds)
    """

    env: Environment = Field(default=Environment.PRODUCTION, description="development | testing | production")
    debug: bool = False
    log_level: str = "INFO"
    json_logs: bool = True

    backend: BackendConfig = Field(default_factory=BackendConfig)
    lstm: LSTMConfig = Field(default_factory=LSTMConfig)
    training: TrainingConfig = Field(default_factory=TrainingConfig)
    data: DataConfig = Field(default_factory=DataConfig)
    finbert: FinBERTConfig = Field(default_factory=FinBERTConfig)
    news: NewsConfig = Field(default_factory=NewsConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)

    model_config = {"env_prefix": "APP_"}

    def forecast_model_payload(self) -> dict:
        """POST /api/predict 의 modelConfig 본문 (camelCase)."""
        return {
            "sequenceLength": self.lstm.sequence_length,
            "features": list(self.data.features),
            "epochs": self.training.epochs,
            "batchSize": self.training.batch_size,
            "learningRate": self.training.learning_rate,
            "sentimentThreshold": {
                "positive": self.finbert.positive_threshold,
                "negative": self.finbert.negative_threshold,
            },
            "weightingStrategy": str(self.finbert.weighting_strategy),
        }


def apply_environment_profile(config: AppConfig) -> AppConfig:
    """환경별 오버라이드 적용. production은 기본값 그대로."""
    if config.env == Environment.DEVELOPMENT:
        return config.model_copy(
            update={
                "training": config.training.model_copy(update={"epochs": 10}),
                "lstm": config.lstm.model_copy(update={"sequence_length": 30}),
                "news": config.news.model_copy(update={"max_articles": 10}),
            }
        )
    if config.env == Environment.TESTING:
        return config.model_copy(
            update={
                "training": config.training.model_copy(update={"epochs": 5}),
                "lstm": config.lstm.model_copy(update={"sequence_length": 10}),
                "news": config.news.model_copy(update={"max_articles": 5}),
                "api": config.api.model_copy(update={"cache_timeout_ms": 1000}),
            }
        )
    return config


def validate_model_config(config: AppConfig) -> list[str]:
    """모델 설정 범위 검증. 위반 메시지 목록 반환 (빈 목록 = 정상)."""
    errors: list[str] = []

    # LSTM
    if config.lstm.sequence_length < 1:
        errors.append("LSTM sequence length must be at least 1")
    if config.lstm.hidden_units < 1:
        errors.append("LSTM hidden units must be at least 1")
    if config.lstm.layers < 1:
        errors.append("LSTM layers must be at least 1")
    if config.lstm.dropout < 0 or config.lstm.dropout >= 1:
        errors.append("LSTM dropout must be between 0 and 1")

    # Training
    if config.training.epochs < 1:
        errors.append("Training epochs must be at least 1")
    if config.training.batch_size < 1:
        errors.append("Training batch size must be at least 1")
    if config.training.learning_rate <= 0:
        errors.append("Learning rate must be positive")
    if config.training.validation_split < 0 or config.training.validation_split >= 1:
        errors.append("Validation split must be between 0 and 1")

    # Data
    if not config.data.features:
        errors.append("At least one feature must be specified")
    if config.data.test_size < 0 or config.data.test_size >= 1:
        errors.append("Test size must be between 0 and 1")
    if config.data.prediction_days < 1:
        errors.append("Prediction days must be at least 1")

    return errors


@lru_cache
def get_config() -> AppConfig:
    """싱글턴 설정 인스턴스 (환경 프로파일 적용).

    프로세스 내에서 한 번만 환경 변수를 읽고 캐싱.
    테스트에서는 get_config.cache_clear()로 초기화.
    """
    return apply_environment_profile(AppConfig())
