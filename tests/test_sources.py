from __future__ import annotations

import json
from pathlib import Path
from typing import List

import httpx
import pytest

from feedback_engine.config import Settings
from feedback_engine.sources import AdminApiSource, JsonFileSource


def _write(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


RECORDS = [
    {"_id": "1", "name": "Ana", "subject": "Thanks", "message": "great site", "createdAt": "2024-03-01T10:00:00Z"},
    {"_id": "2", "name": "Bo", "subject": "Search", "message": "is broken", "createdAt": "2024-03-02T10:00:00Z"},
    {"_id": "3", "name": "Cy", "subject": "", "message": ""},
    "not a record",
    {"_id": "4", "name": "Di", "subject": "Question", "message": "about pricing"},
]


class TestJsonFileSource:
    def test_list_payload(self, tmp_path: Path) -> None:
        src = JsonFileSource(_write(tmp_path / "m.json", RECORDS))
        msgs = src.fetch()
        assert [m.id for m in msgs] == ["1", "2", "4"]

    def test_admin_listing_payload(self, tmp_path: Path) -> None:
        src = JsonFileSource(_write(tmp_path / "m.json", {"messages": RECORDS, "totalPages": 1}))
        assert len(src.fetch()) == 3

    def test_query_and_limit(self, tmp_path: Path) -> None:
        src = JsonFileSource(_write(tmp_path / "m.json", RECORDS))
        assert [m.id for m in src.fetch(query="BROKEN")] == ["2"]
        assert [m.id for m in src.fetch(limit=1)] == ["1"]
        assert src.fetch(limit=0) == []

    def test_bad_shape(self, tmp_path: Path) -> None:
        src = JsonFileSource(_write(tmp_path / "m.json", {"data": []}))
        with pytest.raises(ValueError):
            src.fetch()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            JsonFileSource(tmp_path / "nope.json").fetch()


def _page_handler(pages: List[List[dict]], seen: List[httpx.Request]):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        page = int(request.url.params["page"])
        body = pages[page - 1] if page <= len(pages) else []
        return httpx.Response(200, json={"messages": body, "totalPages": len(pages), "currentPage": page})

    return handler


class TestAdminApiSource:
    def test_paginates_until_last_page(self) -> None:
        seen: List[httpx.Request] = []
        pages = [RECORDS[:2], RECORDS[2:]]
        src = AdminApiSource(
            "http://jobs.test/",
            token="secret",
            page_size=2,
            transport=httpx.MockTransport(_page_handler(pages, seen)),
        )
        msgs = src.fetch(query="site")
        assert [m.id for m in msgs] == ["1", "2", "4"]
        assert len(seen) == 2
        first = seen[0]
        assert first.url.path == "/api/messages"
        assert first.headers["Authorization"] == "Bearer secret"
        assert first.url.params["limit"] == "2"
        assert first.url.params["search"] == "site"

    def test_stops_at_limit(self) -> None:
        seen: List[httpx.Request] = []
        pages = [RECORDS[:2], RECORDS[2:]]
        src = AdminApiSource("http://jobs.test", transport=httpx.MockTransport(_page_handler(pages, seen)))
        msgs = src.fetch(limit=1)
        assert [m.id for m in msgs] == ["1"]
        assert len(seen) == 1
        assert "Authorization" not in seen[0].headers

    def test_stops_on_empty_page(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"messages": []})

        src = AdminApiSource("http://jobs.test", transport=httpx.MockTransport(handler))
        assert src.fetch() == []

    def test_retries_rate_limit(self) -> None:
        calls = {"n": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["n"] += 1
            if calls["n"] < 3:
                return httpx.Response(429)
            return httpx.Response(200, json={"messages": RECORDS[:1], "totalPages": 1})

        src = AdminApiSource("http://jobs.test", backoff_s=0.0, transport=httpx.MockTransport(handler))
        assert [m.id for m in src.fetch()] == ["1"]
        assert calls["n"] == 3

    def test_rate_limit_exhausted(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429)

        src = AdminApiSource("http://jobs.test", max_retries=2, backoff_s=0.0, transport=httpx.MockTransport(handler))
        with pytest.raises(httpx.HTTPStatusError):
            src.fetch()

    def test_server_error_propagates(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"message": "Access denied"})

        src = AdminApiSource("http://jobs.test", transport=httpx.MockTransport(handler))
        with pytest.raises(httpx.HTTPStatusError):
            src.fetch()

    def test_from_settings(self) -> None:
        settings = Settings(api_base_url="http://admin.test", api_token="t", api_page_size=10)
        seen: List[httpx.Request] = []
        src = AdminApiSource.from_settings(settings, transport=httpx.MockTransport(_page_handler([RECORDS[:1]], seen)))
        assert len(src.fetch()) == 1
        assert seen[0].url.host == "admin.test"
        assert seen[0].url.params["limit"] == "10"

    def test_non_object_payload_rejected(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[])

        src = AdminApiSource("http://jobs.test", transport=httpx.MockTransport(handler))
        with pytest.raises(ValueError):
            src.fetch()

    def test_non_list_messages_rejected(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"messages": {"_id": "1"}})

        src = AdminApiSource("http://jobs.test", transport=httpx.MockTransport(handler))
        with pytest.raises(ValueError):
            src.fetch()
