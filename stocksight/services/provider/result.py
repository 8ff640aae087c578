"""FetchResult — 백엔드 호출 결과의 명시적 표현 (Ok | Unavailable).

fallback 여부를 예외 흐름이 아닌 값으로 드러낸다.

Usage:
    result = await provider.try_quote("AAPL")
    quote = result.unwrap_or_else(lambda: synthetic.quote("AAPL"))
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def unwrap_or_else(self, fallback: Callable[[], T]) -> T:
        return self.value


@dataclass(frozen=True)
class Unavailable:
    endpoint: str
    reason: str

    def unwrap_or_else(self, fallback: Callable[[], T]) -> T:
        return fallback()


FetchResult: TypeAlias = Ok[T] | Unavailable
