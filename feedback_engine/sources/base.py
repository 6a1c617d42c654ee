"""Base classes for message source connectors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import ContactMessage


class MessageSource(ABC):
    """Abstract base class for a contact-message source connector."""

    name: str

    @abstractmethod
    def fetch(self, query: Optional[str] = None, limit: int = 500) -> List[ContactMessage]:
        """Fetch messages and return normalized records."""
        raise NotImplementedError
