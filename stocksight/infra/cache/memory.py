"""TypedCache — 프로세스 메모리 기반 TTL 캐시 (payload 타입별 인스턴스).

Usage:
    from stocksight.domain import Quote
    cache: TypedCache[Quote] = TypedCache("quote", ttl=300)
    cache.set(cache.key_for("aapl"), quote)
    q = cache.get("quote:AAPL")  # -> Quote | None

payload는 직렬화 없이 객체 그대로 보관한다. TTL 내 반복 조회는 동일 객체를 반환.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from stocksight.domain import CacheStats

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    key: str
    payload: T
    created_at: float


class TypedCache(Generic[T]):
    """단일 TTL을 공유하는 key → payload 캐시.

    Args:
        namespace: 호출 카테고리 (quote / news / prediction). 키 prefix로 사용.
        ttl: 초 단위 TTL. now - created_at >= ttl 이면 stale.
        clock: 단조 시계 (테스트에서 주입)
    """

    def __init__(
        self,
        namespace: str,
        ttl: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._namespace = namespace
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry[T]] = {}

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def ttl(self) -> float:
        return self._ttl

    def key_for(self, symbol: str) -> str:
        """카테고리 + 정규화 티커 키."""
        return f"{self._namespace}:{symbol.strip().upper()}"

    def get(self, key: str) -> T | None:
        """신선한 payload만 반환. 만료 엔트리는 읽는 시점에 제거."""
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Cache miss key=%s", key)
            return None
        if self._clock() - entry.created_at >= self._ttl:
            del self._entries[key]
            logger.debug("Cache expired key=%s", key)
            return None
        logger.debug("Cache hit key=%s", key)
        return entry.payload

    def set(self, key: str, payload: T) -> None:
        """현재 시각으로 저장 (기존 엔트리 덮어쓰기)."""
        self._entries[key] = CacheEntry(key=key, payload=payload, created_at=self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def stats(self) -> CacheStats:
        return CacheStats(count=len(self._entries), keys=list(self._entries))
