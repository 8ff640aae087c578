"""Sentiment Weighting — 뉴스 기사 목록 → 감성 분포 + FinBERT 평균.

집계 기준은 finbert_score 이며 기사별 sentiment_score 는 사용하지 않는다.
"""

from collections import Counter
from collections.abc import Iterable

from stocksight.domain import NewsArticle, SentimentLabel, SentimentWeights


def calculate_sentiment_weights(articles: Iterable[NewsArticle]) -> SentimentWeights:
    """라벨별 비율 + finbert_score 산술평균.

    빈 입력은 중립 prior {0.33, 0.33, 0.34, 0}.
    """
    articles = list(articles)
    if not articles:
        return SentimentWeights.neutral_prior()

    counts = Counter(a.sentiment for a in articles)
    total = len(articles)
    return SentimentWeights(
        positive=counts[SentimentLabel.POSITIVE] / total,
        negative=counts[SentimentLabel.NEGATIVE] / total,
        neutral=counts[SentimentLabel.NEUTRAL] / total,
        overall_sentiment=sum(a.finbert_score for a in articles) / total,
    )


def classify_finbert_score(
    score: float,
    positive_threshold: float = 0.3,
    negative_threshold: float = -0.3,
) -> SentimentLabel:
    """FinBERT 점수 → 라벨 (임계값 경계 포함)."""
    if score >= positive_threshold:
        return SentimentLabel.POSITIVE
    if score <= negative_threshold:
        return SentimentLabel.NEGATIVE
    return SentimentLabel.NEUTRAL
