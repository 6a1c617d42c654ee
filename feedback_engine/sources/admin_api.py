"""Admin messages API source connector.

Pages through `GET /api/messages` on the job site's backend (admin bearer token
required), normalizes each record and stops at the last page or at `limit`.
Rate-limited responses (HTTP 429) are retried with exponential backoff; any other
HTTP error propagates to the caller.
"""

from __future__ import annotations

import time
from typing import Any, Dict, List, Optional

import httpx

from ..config import Settings
from ..logging import get_logger
from ..models import ContactMessage
from ..normalize import to_contact_message
from .base import MessageSource


class AdminApiSource(MessageSource):
    """Fetch contact messages from the admin REST endpoint."""

    name = "admin_api"
    path = "/api/messages"

    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout_s: float = 20.0,
        max_retries: int = 3,
        backoff_s: float = 2.0,
        page_size: int = 50,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout_s
        self._max_retries = max_retries
        self._backoff_s = backoff_s
        self._page_size = page_size
        self._transport = transport
        self._log = get_logger("sources.admin_api", base_url=self._base_url)

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.BaseTransport] = None) -> "AdminApiSource":
        return cls(
            base_url=settings.api_base_url,
            token=settings.api_token,
            timeout_s=settings.api_timeout_s,
            max_retries=settings.api_max_retries,
            backoff_s=settings.api_backoff_s,
            page_size=settings.api_page_size,
            transport=transport,
        )

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _get_page(self, client: httpx.Client, params: Dict[str, Any]) -> Dict[str, Any]:
        retries = 0
        while True:
            try:
                resp = client.get(self.path, params=params)
                resp.raise_for_status()
                break
            except httpx.HTTPStatusError as exc:
                if exc.response.status_code == 429 and retries < self._max_retries:
                    sleep_s = self._backoff_s * (2**retries)
                    self._log.warning("rate_limited", page=params.get("page"), retry=retries + 1, sleep_s=sleep_s)
                    time.sleep(sleep_s)
                    retries += 1
                    continue
                raise
        payload = resp.json()
        if not isinstance(payload, dict):
            raise ValueError(f"{self.path}: expected an object with a 'messages' list, got {type(payload).__name__}")
        return payload

    def fetch(self, query: Optional[str] = None, limit: int = 500) -> List[ContactMessage]:
        """Fetch messages newest first and return normalized `ContactMessage`s.

        Args:
            query: Optional free-text search passed to the endpoint.
            limit: Soft cap on the number of messages returned.

        Returns:
            List of ContactMessage records.
        """
        out: List[ContactMessage] = []
        page = 1

        with httpx.Client(
            base_url=self._base_url,
            headers=self._headers(),
            timeout=self._timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            while len(out) < max(limit, 0):
                params: Dict[str, Any] = {
                    "page": page,
                    "limit": self._page_size,
                    "sortBy": "createdAt",
                    "sortOrder": "desc",
                }
                if query:
                    params["search"] = query

                payload = self._get_page(client, params)
                records = payload.get("messages") or []
                if not isinstance(records, list):
                    raise ValueError(f"{self.path}: 'messages' is not a list")
                self._log.debug("page_fetched", page=page, records=len(records))
                if not records:
                    break

                for rec in records:
                    msg = to_contact_message(rec) if isinstance(rec, dict) else None
                    if msg is None:
                        self._log.warning("record_skipped", page=page, reason="unusable record")
                        continue
                    out.append(msg)
                    if len(out) >= max(limit, 0):
                        break

                total_pages = payload.get("totalPages")
                if isinstance(total_pages, int) and page >= total_pages:
                    break
                page += 1

        self._log.info("messages_loaded", count=len(out))
        return out
