"""CLI entry point.

This script loads contact messages, scores their sentiment, and writes a JSON
report for the admin dashboard.

Examples:
    python run_score.py --input messages.json --out report.json
    python run_score.py --api --limit 1000 --days 7
    python run_score.py --api --query "search" --log-level DEBUG

The report holds aggregate stats, a per-day breakdown and every scored message.
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional

import httpx

from feedback_engine.config import get_settings
from feedback_engine.logging import get_logger, setup_logging
from feedback_engine.models import ContactMessage
from feedback_engine.sentiment import SentimentScorer, priority_breakdown, status_breakdown
from feedback_engine.sources.admin_api import AdminApiSource
from feedback_engine.sources.base import MessageSource
from feedback_engine.sources.json_file import JsonFileSource


def positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Score contact-message sentiment and write a dashboard report.")
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--input", type=str, help="JSON export of the message store.")
    src.add_argument("--api", action="store_true", help="Fetch messages from the admin API (FEEDBACK_API_* settings).")
    p.add_argument("--out", type=str, default="sentiment_report.json", help="Output JSON file path.")
    p.add_argument("--limit", type=int, default=500, help="Max messages to score (soft cap).")
    p.add_argument("--query", type=str, default=None, help="Optional search filter.")
    p.add_argument("--days", type=positive_int, default=None, help="Daily breakdown window in days (default from settings).")
    p.add_argument("--log-level", type=str, default=None, help="Logging level.")
    return p.parse_args(argv)


def build_report(messages: List[ContactMessage], scorer: SentimentScorer, days: int) -> dict:
    since = datetime.now(timezone.utc) - timedelta(days=days)
    return {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "stats": scorer.aggregate_stats(messages).model_dump(by_alias=True),
        "total_messages": len(messages),
        "by_status": [s.model_dump(by_alias=True) for s in status_breakdown(messages)],
        "by_priority": [p.model_dump(by_alias=True) for p in priority_breakdown(messages)],
        "daily": [d.model_dump(by_alias=True) for d in scorer.daily_breakdown(messages, since=since)],
        "messages": [m.model_dump(mode="json", by_alias=True) for m in scorer.annotate(messages)],
    }


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    setup_logging(level=args.log_level)
    log = get_logger("run_score")

    source: MessageSource
    if args.api:
        source = AdminApiSource.from_settings(settings)
    else:
        source = JsonFileSource(args.input)

    try:
        messages = source.fetch(query=args.query, limit=args.limit)
    except (httpx.HTTPError, OSError, ValueError) as exc:
        log.error("fetch_failed", source=source.name, error=str(exc))
        return 1

    scorer = SentimentScorer.from_settings(settings)
    report = build_report(messages, scorer, args.days if args.days is not None else settings.daily_window_days)

    out_path = Path(args.out).expanduser().resolve()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8")
    log.info("report_written", path=str(out_path), messages=len(messages))

    stats = report["stats"]
    print(
        f"Scored {stats['total']} messages "
        f"({stats['positive']} positive, {stats['negative']} negative, {stats['neutral']} neutral) to: {out_path}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
