"""Synthetic fallback 생성기 단위 테스트."""

import random
from datetime import UTC, date, datetime

import pytest

from stocksight.domain import SentimentLabel, SentimentWeights, Trend
from stocksight.services.provider import synthetic

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


class TestSyntheticQuote:
    @pytest.mark.parametrize("seed", range(20))
    def test_invariants(self, seed):
        q = synthetic.quote("aapl", random.Random(seed))
        assert q.current_price > 0
        assert q.volume >= 0

    def test_ticker_shapes_identity(self):
        q = synthetic.quote(" tsla ", random.Random(1))
        assert q.symbol == "TSLA"
        assert q.name == "TSLA Corporation"

    def test_same_seed_same_quote(self):
        assert synthetic.quote("AAPL", random.Random(7)) == synthetic.quote("AAPL", random.Random(7))


class TestSyntheticHistorical:
    @pytest.mark.parametrize("seed", range(20))
    def test_bar_invariants(self, seed):
        bars = synthetic.historical("AAPL", random.Random(seed), today=date(2026, 10, 19))
        assert len(bars) >= 31
        for bar in bars:
            assert bar.high >= max(bar.open, bar.close)
            assert bar.low <= min(bar.open, bar.close)
            assert bar.volume >= 0

    def test_ascending_dates_ending_today(self):
        bars = synthetic.historical("AAPL", random.Random(0), today=date(2026, 10, 19))
        dates = [b.date for b in bars]
        assert dates == sorted(dates)
        assert len(set(dates)) == len(dates)
        assert dates[0] == date(2026, 9, 19)
        assert dates[-1] == date(2026, 10, 19)


class TestSyntheticNews:
    def test_fixed_set_spans_all_labels(self):
        articles = synthetic.news("aapl", NOW)
        assert len(articles) >= 3
        assert {a.sentiment for a in articles} == set(SentimentLabel)

    def test_deterministic(self):
        assert synthetic.news("AAPL", NOW) == synthetic.news("AAPL", NOW)

    def test_headlines_use_symbol(self):
        assert all("AAPL" in a.headline for a in synthetic.news("aapl", NOW))

    def test_published_before_now(self):
        assert all(a.published_at < NOW for a in synthetic.news("AAPL", NOW))


class TestClassifyTrend:
    def test_bullish(self):
        assert synthetic.classify_trend(100.0, 102.0) == Trend.BULLISH

    def test_bearish(self):
        assert synthetic.classify_trend(100.0, 98.0) == Trend.BEARISH

    def test_sideways(self):
        assert synthetic.classify_trend(100.0, 100.5) == Trend.SIDEWAYS


class TestSyntheticPrediction:
    @pytest.mark.parametrize("seed", range(10))
    def test_consistent_result(self, seed):
        result = synthetic.prediction_result("AAPL", 3, rng=random.Random(seed), now=NOW)
        assert len(result.predictions) == 3
        for p in result.predictions:
            assert p.upper_bound >= p.predicted_price >= p.lower_bound
        assert result.current_price == result.historical[-1].close
        assert result.trend == synthetic.classify_trend(result.current_price, result.predictions[-1].predicted_price)
        assert 0.7 <= result.confidence <= 1.0

    def test_forecast_dates_after_today(self):
        result = synthetic.prediction_result("AAPL", 5, rng=random.Random(0), now=NOW)
        assert [p.date.day for p in result.predictions] == [20, 21, 22, 23, 24]

    def test_keeps_given_sentiment_weights(self):
        weights = SentimentWeights(positive=1.0, negative=0.0, neutral=0.0, overall_sentiment=0.6)
        result = synthetic.prediction_result("AAPL", 3, sentiment_weights=weights, rng=random.Random(0), now=NOW)
        assert result.sentiment_weights == weights

    def test_default_sentiment_prior(self):
        result = synthetic.prediction_result("AAPL", 3, rng=random.Random(0), now=NOW)
        assert result.sentiment_weights == SentimentWeights.neutral_prior()
