"""Data Provider — 백엔드 호출 + synthetic fallback."""

from .data_provider import DataProvider
from .errors import UpstreamUnavailable
from .result import FetchResult, Ok, Unavailable

__all__ = ["DataProvider", "FetchResult", "Ok", "Unavailable", "UpstreamUnavailable"]
