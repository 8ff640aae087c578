"""Data Provider 예외."""


class UpstreamUnavailable(Exception):
    """백엔드 호출 실패 — 전송 오류 / 비-2xx / 잘못된 응답 본문을 하나로 통합."""

    def __init__(self, endpoint: str, ticker: str, reason: str):
        self.endpoint = endpoint
        self.ticker = ticker
        self.reason = reason
        super().__init__(f"{endpoint} unavailable for {ticker}: {reason}")
