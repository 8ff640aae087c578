"""뉴스 및 감성 분석 모델."""

from datetime import datetime

from .enums import SentimentLabel
from .types import Fraction, SignedScore, WireModel


class NewsArticle(WireModel):
    """FinBERT 감성 점수가 포함된 뉴스 기사 — GET /api/news/{ticker} 응답."""

    id: str
    headline: str
    summary: str = ""
    content: str = ""
    sentiment: SentimentLabel
    sentiment_score: SignedScore  # 휴리스틱 점수 (보존만, 집계/표시에 사용 안 함)
    finbert_score: SignedScore
    source: str
    published_at: datetime
    relevance_score: Fraction = 0.0


class NewsItem(WireModel):
    """UI 뉴스 리스트 항목.

    sentiment_score 에는 기사의 finbert_score 가 들어간다.
    """

    id: str
    headline: str
    summary: str = ""
    sentiment: SentimentLabel
    sentiment_score: SignedScore
    source: str
    published_at: datetime

    @classmethod
    def from_article(cls, article: NewsArticle) -> "NewsItem":
        return cls(
            id=article.id,
            headline=article.headline,
            summary=article.summary,
            sentiment=article.sentiment,
            sentiment_score=article.finbert_score,
            source=article.source,
            published_at=article.published_at,
        )
