#!/usr/bin/env python3
"""티커 하나의 현재가 / 예측 / 뉴스 조회 CLI.

Usage:
    uv run python scripts/show_prediction.py AAPL
    uv run python scripts/show_prediction.py TSLA --json
    BACKEND_BASE_URL=http://10.0.0.5:8000 uv run python scripts/show_prediction.py NVDA
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from stocksight.domain.config import get_config, validate_model_config
from stocksight.infra.backend.client import BackendClient
from stocksight.infra.observability.logging import setup_logging
from stocksight.services.deps import build_orchestrator
from stocksight.services.orchestrator import InvalidTicker


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="stocksight 예측 조회")
    parser.add_argument("ticker", help="종목 심볼 (예: AAPL)")
    parser.add_argument(
        "--json",
        action="store_true",
        help="camelCase JSON 출력",
    )
    return parser.parse_args()


async def run(ticker: str, as_json: bool) -> int:
    config = get_config()
    async with BackendClient(config=config) as client:
        orchestrator = build_orchestrator(config, client)
        quote, view, news = await asyncio.gather(
            orchestrator.get_quote(ticker),
            orchestrator.get_prediction(ticker),
            orchestrator.get_news(ticker),
        )

    if as_json:
        payload = {
            "quote": quote.to_wire(),
            "prediction": view.to_wire(),
            "news": [item.to_wire() for item in news],
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 0

    print(f"{quote.symbol} ({quote.name})  {quote.current_price:,.2f}  {quote.change_percent:+.2f}%")
    print(f"Trend: {view.trend}  Confidence: {view.confidence}%")
    for i, (label, price) in enumerate(zip(view.dates, view.historical + view.predictions)):
        marker = "*" if i >= len(view.historical) else " "  # 예측치
        print(f"  {marker} {label:>7}  {price:,.2f}")
    weights = view.result.sentiment_weights
    print(
        f"Sentiment: +{weights.positive:.0%} / -{weights.negative:.0%} / ={weights.neutral:.0%}"
        f"  overall={weights.overall_sentiment:+.3f}"
    )
    for item in news:
        print(f"  [{item.sentiment:>8} {item.sentiment_score:+.2f}] {item.headline} ({item.source})")
    return 0


def main() -> None:
    args = parse_args()
    config = get_config()
    setup_logging("stocksight-cli", log_level=config.log_level, json_output=False)

    errors = validate_model_config(config)
    if errors:
        for error in errors:
            print(f"config: {error}", file=sys.stderr)
        sys.exit(2)

    try:
        sys.exit(asyncio.run(run(args.ticker, args.json)))
    except InvalidTicker as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
