"""Data models for the feedback engine.

Contact messages arrive from the site's message store in whatever shape the store
exports; `ContactMessage` is the stable schema we own. Sentiment outputs are
immutable value objects serialized with camelCase aliases, which is what the admin
dashboard consumes (`model_dump(by_alias=True)`).

This file uses Pydantic v2.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


Sentiment = Literal["positive", "negative", "neutral"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SentimentResult(_CamelModel):
    """Keyword-match outcome for a single piece of text."""

    model_config = ConfigDict(frozen=True)

    sentiment: Sentiment = "neutral"
    score: float = Field(default=0.0, ge=-1.0, le=1.0)
    positive_count: int = Field(default=0, ge=0)
    negative_count: int = Field(default=0, ge=0)
    total_keywords: int = Field(default=0, ge=0)


class SentimentStats(_CamelModel):
    """Aggregate of many `SentimentResult`s (dashboard summary card)."""

    total: int = 0
    positive: int = 0
    negative: int = 0
    neutral: int = 0
    average_score: float = 0.0
    positive_percentage: float = 0.0
    negative_percentage: float = 0.0
    neutral_percentage: float = 0.0


class DailySentiment(_CamelModel):
    """Per-day message volume split by sentiment bucket."""

    date: str = Field(..., description="Calendar day (YYYY-MM-DD, UTC).")
    count: int = 0
    positive: int = 0
    negative: int = 0
    neutral: int = 0


class StatusCount(_CamelModel):
    """Number of messages in one workflow status (unread, read, replied, ...)."""

    status: str
    count: int = 0


class PriorityCount(_CamelModel):
    """Number of messages at one priority level."""

    priority: str
    count: int = 0


class ContactMessage(_CamelModel):
    """A normalized contact-form message.

    Only `subject` and `message` matter for scoring; the rest is carried so the
    report can be read without going back to the store.
    """

    id: str = Field(..., description="Store id, or sha256 of email/subject/created_at.")

    name: str = ""
    email: str = ""
    phone: Optional[str] = None
    subject: str = ""
    message: str = ""

    status: str = "unread"
    priority: str = "medium"
    created_at: Optional[datetime] = None

    raw: Dict[str, Any] = Field(default_factory=dict, description="Original payload.", exclude=True)


class ScoredMessage(ContactMessage):
    """A contact message annotated with its sentiment bucket and score."""

    sentiment: Sentiment = "neutral"
    sentiment_score: float = 0.0
