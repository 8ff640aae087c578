"""Configuration system unit tests."""

import pytest

from stocksight.domain.config import (
    AppConfig,
    DataConfig,
    LSTMConfig,
    TrainingConfig,
    apply_environment_profile,
    get_config,
    validate_model_config,
)
from stocksight.domain.enums import Environment, WeightingStrategy


@pytest.fixture(autouse=True)
def _clear_config_cache():
    get_config.cache_clear()
    yield
    get_config.cache_clear()


class TestAppConfig:
    def test_defaults(self):
        config = AppConfig()
        assert config.env == Environment.PRODUCTION
        assert config.backend.base_url == "http://localhost:8000"
        assert config.lstm.sequence_length == 60
        assert config.training.epochs == 100
        assert config.data.prediction_days == 3
        assert config.finbert.weighting_strategy == WeightingStrategy.EXPONENTIAL

    def test_api_defaults(self):
        config = AppConfig()
        assert config.api.cache_timeout_ms == 300_000
        assert config.api.cache_ttl_seconds == 300.0
        assert config.api.retry_attempts == 3
        assert config.api.news_timeout_ms == 15_000

    def test_sub_config_count(self):
        config = AppConfig()
        for name in ("backend", "lstm", "training", "data", "finbert", "news", "api"):
            assert hasattr(config, name)

    def test_forecast_model_payload(self):
        payload = AppConfig().forecast_model_payload()
        assert payload["sequenceLength"] == 60
        assert payload["batchSize"] == 32
        assert payload["learningRate"] == 0.001
        assert "close" in payload["features"]
        assert payload["sentimentThreshold"] == {"positive": 0.3, "negative": -0.3}
        assert payload["weightingStrategy"] == "exponential"


class TestEnvironmentProfile:
    def test_production_unchanged(self):
        config = AppConfig()
        assert apply_environment_profile(config) is config

    def test_development(self):
        config = apply_environment_profile(AppConfig(env=Environment.DEVELOPMENT))
        assert config.training.epochs == 10
        assert config.lstm.sequence_length == 30
        assert config.news.max_articles == 10
        assert config.api.cache_timeout_ms == 300_000

    def test_testing(self):
        config = apply_environment_profile(AppConfig(env=Environment.TESTING))
        assert config.training.epochs == 5
        assert config.lstm.sequence_length == 10
        assert config.news.max_articles == 5
        assert config.api.cache_ttl_seconds == 1.0

    def test_profile_does_not_mutate_input(self):
        base = AppConfig(env=Environment.TESTING)
        apply_environment_profile(base)
        assert base.training.epochs == 100


class TestValidateModelConfig:
    def test_defaults_valid(self):
        assert validate_model_config(AppConfig()) == []

    def test_lstm_violations(self):
        config = AppConfig(lstm=LSTMConfig(sequence_length=0, hidden_units=0, layers=0, dropout=1.0))
        errors = validate_model_config(config)
        assert "LSTM sequence length must be at least 1" in errors
        assert "LSTM hidden units must be at least 1" in errors
        assert "LSTM layers must be at least 1" in errors
        assert "LSTM dropout must be between 0 and 1" in errors

    def test_training_violations(self):
        config = AppConfig(training=TrainingConfig(epochs=0, batch_size=0, learning_rate=0.0, validation_split=-0.1))
        errors = validate_model_config(config)
        assert errors == [
            "Training epochs must be at least 1",
            "Training batch size must be at least 1",
            "Learning rate must be positive",
            "Validation split must be between 0 and 1",
        ]

    def test_data_violations(self):
        config = AppConfig(data=DataConfig(features=[], test_size=1.0, prediction_days=0))
        errors = validate_model_config(config)
        assert errors == [
            "At least one feature must be specified",
            "Test size must be between 0 and 1",
            "Prediction days must be at least 1",
        ]

    def test_does_not_raise(self):
        """범위 위반은 예외가 아닌 메시지 목록."""
        config = AppConfig(lstm=LSTMConfig(dropout=-5.0))
        assert validate_model_config(config) == ["LSTM dropout must be between 0 and 1"]


class TestGetConfig:
    def test_singleton(self):
        c1 = get_config()
        c2 = get_config()
        assert c1 is c2

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("BACKEND_BASE_URL", "http://predictor:9000")
        monkeypatch.setenv("API_CACHE_TIMEOUT_MS", "60000")
        config = get_config()
        assert config.backend.base_url == "http://predictor:9000"
        assert config.api.cache_ttl_seconds == 60.0

    def test_env_profile_applied(self, monkeypatch):
        monkeypatch.setenv("APP_ENV", "testing")
        config = get_config()
        assert config.env == Environment.TESTING
        assert config.api.cache_timeout_ms == 1000
