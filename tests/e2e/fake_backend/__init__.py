"""Fake 예측 백엔드 — E2E 테스트용 httpx MockTransport."""

from .app import create_mock_transport
from .state import BackendState

__all__ = ["BackendState", "create_mock_transport"]
