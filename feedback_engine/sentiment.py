"""Keyword-based sentiment scoring for contact messages.

The score is the net share of positive keyword hits:

    score = (positive - negative) / (positive + negative)

so it always lies in [-1, 1], and a message with no lexicon hits scores 0 and is
neutral whatever it says. Buckets use fixed cut-offs (> 0.3 positive, < -0.3
negative). This is deliberately a counting heuristic: no negation handling, no
stemming, English only.

`SentimentScorer` is stateless once built and safe to share across threads. The
module-level functions use a scorer over `DEFAULT_LEXICON`.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .config import Settings
from .lexicon import DEFAULT_LEXICON, Lexicon
from .models import (
    ContactMessage,
    DailySentiment,
    PriorityCount,
    ScoredMessage,
    SentimentResult,
    SentimentStats,
    StatusCount,
)
from .normalize import message_text


POSITIVE_THRESHOLD = 0.3
NEGATIVE_THRESHOLD = -0.3

NEUTRAL_RESULT = SentimentResult()


class SentimentScorer:
    """Classify text against an injected lexicon."""

    def __init__(
        self,
        lexicon: Lexicon = DEFAULT_LEXICON,
        positive_threshold: float = POSITIVE_THRESHOLD,
        negative_threshold: float = NEGATIVE_THRESHOLD,
    ) -> None:
        if negative_threshold > positive_threshold:
            raise ValueError("negative_threshold must not exceed positive_threshold")
        self.lexicon = lexicon
        self.positive_threshold = positive_threshold
        self.negative_threshold = negative_threshold

    @classmethod
    def from_settings(cls, settings: Settings, lexicon: Lexicon = DEFAULT_LEXICON) -> "SentimentScorer":
        return cls(
            lexicon=lexicon,
            positive_threshold=settings.positive_threshold,
            negative_threshold=settings.negative_threshold,
        )

    def classify(self, text: Any) -> SentimentResult:
        """Score one piece of text.

        Empty, None or non-string input yields the neutral zero result; this
        never raises.
        """
        if not isinstance(text, str) or not text:
            return NEUTRAL_RESULT

        lowered = text.lower()
        pos = self.lexicon.count_positive(lowered)
        neg = self.lexicon.count_negative(lowered)
        total = pos + neg
        if total == 0:
            return NEUTRAL_RESULT

        score = (pos - neg) / total
        if score > self.positive_threshold:
            sentiment = "positive"
        elif score < self.negative_threshold:
            sentiment = "negative"
        else:
            sentiment = "neutral"

        return SentimentResult(
            sentiment=sentiment,
            score=score,
            positive_count=pos,
            negative_count=neg,
            total_keywords=total,
        )

    def classify_batch(self, records: Iterable[Any]) -> List[SentimentResult]:
        """Classify `subject + " " + body` of each record, in input order."""
        return [self.classify(message_text(r)) for r in records]

    def aggregate_stats(self, records: Iterable[Any]) -> SentimentStats:
        """Bucket counts, mean score and bucket percentages over records."""
        results = self.classify_batch(records)
        total = len(results)
        if total == 0:
            return SentimentStats()

        counts = {"positive": 0, "negative": 0, "neutral": 0}
        for res in results:
            counts[res.sentiment] += 1

        return SentimentStats(
            total=total,
            positive=counts["positive"],
            negative=counts["negative"],
            neutral=counts["neutral"],
            average_score=sum(r.score for r in results) / total,
            positive_percentage=counts["positive"] / total * 100,
            negative_percentage=counts["negative"] / total * 100,
            neutral_percentage=counts["neutral"] / total * 100,
        )

    def annotate(self, messages: Iterable[ContactMessage]) -> List[ScoredMessage]:
        """Copy each message with its sentiment bucket and score attached."""
        out: List[ScoredMessage] = []
        for msg in messages:
            res = self.classify(message_text(msg))
            data = msg.model_dump(exclude={"sentiment", "sentiment_score"})
            data["raw"] = msg.raw
            out.append(ScoredMessage(**data, sentiment=res.sentiment, sentiment_score=res.score))
        return out

    def daily_breakdown(
        self,
        messages: Iterable[ContactMessage],
        since: Optional[datetime] = None,
    ) -> List[DailySentiment]:
        """Per-day counts by sentiment, oldest day first.

        Messages without `created_at` are skipped. Naive datetimes are taken as UTC.
        """
        if since is not None and since.tzinfo is None:
            since = since.replace(tzinfo=timezone.utc)

        days: Dict[str, DailySentiment] = {}
        for msg in messages:
            created = msg.created_at
            if created is None:
                continue
            if created.tzinfo is None:
                created = created.replace(tzinfo=timezone.utc)
            if since is not None and created < since:
                continue

            key = created.astimezone(timezone.utc).date().isoformat()
            day = days.setdefault(key, DailySentiment(date=key))
            day.count += 1
            bucket = self.classify(message_text(msg)).sentiment
            setattr(day, bucket, getattr(day, bucket) + 1)

        return [days[k] for k in sorted(days)]


_DEFAULT_SCORER = SentimentScorer()


def classify(text: Any) -> SentimentResult:
    return _DEFAULT_SCORER.classify(text)


def classify_batch(records: Iterable[Any]) -> List[SentimentResult]:
    return _DEFAULT_SCORER.classify_batch(records)


def aggregate_stats(records: Iterable[Any]) -> SentimentStats:
    return _DEFAULT_SCORER.aggregate_stats(records)


def annotate(messages: Iterable[ContactMessage]) -> List[ScoredMessage]:
    return _DEFAULT_SCORER.annotate(messages)


def daily_breakdown(messages: Iterable[ContactMessage], since: Optional[datetime] = None) -> List[DailySentiment]:
    return _DEFAULT_SCORER.daily_breakdown(messages, since=since)


def _ranked(values: Iterable[str]) -> List[Tuple[str, int]]:
    # most frequent first, ties by name so output is stable
    return sorted(Counter(values).items(), key=lambda kv: (-kv[1], kv[0]))


def status_breakdown(messages: Iterable[ContactMessage]) -> List[StatusCount]:
    """Message counts per workflow status."""
    return [StatusCount(status=k, count=n) for k, n in _ranked(m.status for m in messages)]


def priority_breakdown(messages: Iterable[ContactMessage]) -> List[PriorityCount]:
    """Message counts per priority level."""
    return [PriorityCount(priority=k, count=n) for k, n in _ranked(m.priority for m in messages)]
