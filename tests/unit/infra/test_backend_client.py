"""BackendClient 단위 테스트 — httpx.MockTransport (네트워크 없음)."""

import json

import httpx
import pytest
from pydantic import ValidationError

from stocksight.domain import HistoricalBar, SentimentWeights, Trend
from stocksight.domain.config import AppConfig
from stocksight.infra.backend.client import BackendClient

QUOTE = {
    "symbol": "AAPL",
    "name": "Apple Inc.",
    "currentPrice": 189.5,
    "change": 1.2,
    "changePercent": 0.64,
    "volume": 51000000,
    "marketCap": "2950B",
    "high52Week": 199.6,
    "low52Week": 164.1,
    "peRatio": 29.4,
    "dividendYield": 0.5,
}


def _bar(day: int, close: float) -> dict:
    return {
        "date": f"2026-10-{day:02d}",
        "open": close - 1,
        "high": close + 2,
        "low": close - 2,
        "close": close,
        "volume": 1000,
        "adjustedClose": close,
    }


FORECAST = {
    "predictions": [
        {"date": "2026-10-20", "predictedPrice": 191.0, "confidence": 0.8, "upperBound": 200.0, "lowerBound": 180.0},
        {"date": "2026-10-21", "predictedPrice": 192.0, "confidence": 0.75, "upperBound": 201.0, "lowerBound": 181.0},
    ],
    "metrics": {"accuracy": 0.85, "mse": 2.34, "rmse": 1.53, "mae": 1.21, "r2Score": 0.78},
    "trend": "bullish",
    "confidence": 0.82,
}


def _client(handler) -> BackendClient:
    return BackendClient("http://backend", config=AppConfig(), transport=httpx.MockTransport(handler))


class TestBackendClient:
    def test_base_url_trailing_slash(self):
        client = BackendClient("http://backend/", config=AppConfig(), transport=httpx.MockTransport(lambda r: None))
        assert client.base_url == "http://backend"

    @pytest.mark.asyncio
    async def test_get_quote(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/stock/AAPL"
            return httpx.Response(200, json=QUOTE)

        async with _client(handler) as client:
            quote = await client.get_quote("AAPL")
        assert quote.symbol == "AAPL"
        assert quote.current_price == 189.5

    @pytest.mark.asyncio
    async def test_get_historical_sorted_with_period(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["period"] = request.url.params.get("period")
            return httpx.Response(200, json=[_bar(17, 101.0), _bar(15, 99.0), _bar(16, 100.0)])

        async with _client(handler) as client:
            bars = await client.get_historical("AAPL", "6mo")
        assert seen["period"] == "6mo"
        assert [b.date.day for b in bars] == [15, 16, 17]

    @pytest.mark.asyncio
    async def test_non_2xx_raises(self):
        async with _client(lambda r: httpx.Response(503, json={"error": "down"})) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.get_news("AAPL")

    @pytest.mark.asyncio
    async def test_malformed_json_raises_value_error(self):
        async with _client(lambda r: httpx.Response(200, content=b"<html>oops</html>")) as client:
            with pytest.raises(ValueError):
                await client.get_quote("AAPL")

    @pytest.mark.asyncio
    async def test_invariant_violation_raises_validation_error(self):
        broken = dict(QUOTE, volume=-1)
        async with _client(lambda r: httpx.Response(200, json=broken)) as client:
            with pytest.raises(ValidationError):
                await client.get_quote("AAPL")

    @pytest.mark.asyncio
    async def test_predict_payload(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            assert request.url.path == "/api/predict/AAPL"
            captured.update(json.loads(request.content))
            return httpx.Response(200, json=FORECAST)

        async with _client(handler) as client:
            resp = await client.predict(
                "AAPL",
                historical=[HistoricalBar.model_validate(_bar(16, 100.0))],
                sentiment_weights=SentimentWeights.neutral_prior(),
                model_config={"epochs": 5},
                prediction_days=2,
            )

        assert set(captured) == {"historicalData", "sentimentWeights", "modelConfig", "predictionDays"}
        assert captured["historicalData"][0]["adjustedClose"] == 100.0
        assert captured["sentimentWeights"]["overallSentiment"] == 0.0
        assert captured["modelConfig"] == {"epochs": 5}
        assert captured["predictionDays"] == 2
        assert resp.trend == Trend.BULLISH
        assert len(resp.predictions) == 2

    @pytest.mark.asyncio
    async def test_health(self):
        async with _client(lambda r: httpx.Response(200, json={"status": "ok"})) as client:
            assert await client.health() is True

    @pytest.mark.asyncio
    async def test_health_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as client:
            assert await client.health() is False
