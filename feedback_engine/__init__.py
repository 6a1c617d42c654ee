"""Feedback engine package.

Scores contact-form messages for the admin dashboard:
- `lexicon.py` holds the fixed keyword vocabulary, compiled once.
- `sentiment.py` classifies text and aggregates results.
- `sources/` contains connectors that load messages from the message store.
- `normalize.py` maps raw store records to `models.ContactMessage`.
"""

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
from .sentiment import (
    SentimentScorer,
    aggregate_stats,
    annotate,
    classify,
    classify_batch,
    daily_breakdown,
    priority_breakdown,
    status_breakdown,
)

__all__ = [
    "DEFAULT_LEXICON",
    "ContactMessage",
    "DailySentiment",
    "Lexicon",
    "PriorityCount",
    "ScoredMessage",
    "SentimentResult",
    "SentimentScorer",
    "SentimentStats",
    "StatusCount",
    "aggregate_stats",
    "annotate",
    "classify",
    "classify_batch",
    "daily_breakdown",
    "priority_breakdown",
    "status_breakdown",
]
