"""Structured logging — structlog 렌더링 + stdlib logging 호출부.

모듈 코드는 logging.getLogger(__name__) 와 %-style 인자만 사용하고,
렌더링(JSON / 콘솔)은 루트 핸들러의 structlog ProcessorFormatter 가 담당.

Usage:
    from stocksight.infra.observability.logging import setup_logging

    setup_logging("stocksight-api", env="production")
    logger = logging.getLogger(__name__)
    logger.info("Prediction cached for %s", "AAPL")
"""

import logging
import sys

import structlog

# 요청마다 INFO 를 남기는 HTTP 라이브러리 (DEBUG 일 때만 통과)
NOISY_LOGGERS = ("httpx", "httpcore")

_HANDLER_NAME = "stocksight-stdout"


def _renderer(json_output: bool) -> structlog.types.Processor:
    if json_output:
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def _stdout_handler(root: logging.Logger) -> logging.Handler:
    """루트에 stdout 핸들러 하나만 유지 (반복 호출 시 재사용)."""
    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            return handler
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    root.addHandler(handler)
    return handler


def setup_logging(
    service_name: str = "stocksight",
    *,
    log_level: str = "INFO",
    json_output: bool = True,
    **context: str,
) -> None:
    """전역 로깅 설정. API lifespan / CLI 시작 시 1회 호출 (재호출 안전).

    Args:
        service_name: 모든 로그에 바인딩할 서비스 이름
        log_level: 로그 레벨 이름. 알 수 없는 값은 INFO
        json_output: True면 JSON 한 줄, False면 콘솔 형식
        **context: 추가 바인딩 필드 (예: env="production")
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(json_output),
        ],
        foreign_pre_chain=[*pre_chain, structlog.stdlib.ExtraAdder()],
    )

    root = logging.getLogger()
    root.setLevel(level)
    _stdout_handler(root)
    for handler in root.handlers:
        handler.setFormatter(formatter)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else logging.WARNING)

    structlog.contextvars.bind_contextvars(service=service_name, **context)
