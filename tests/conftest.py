"""Shared fixtures for the Greenhouse client tests."""

from __future__ import annotations

import json
from typing import Any, Iterator, Mapping, Optional
from unittest.mock import MagicMock, patch

import pytest
from requests.structures import CaseInsensitiveDict


class DummyResponse:
    def __init__(
        self,
        payload: Any = None,
        *,
        status_code: int = 200,
        headers: Optional[Mapping[str, str]] = None,
        body: bytes | None = None,
    ):
        if body is None:
            body = b"" if payload is None else json.dumps(payload).encode("utf-8")
        self.content = body
        self.status_code = status_code
        self.headers = CaseInsensitiveDict(headers or {})

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "GREENHOUSE_API_TOKEN",
        "GREENHOUSE_ORGANIZATION",
        "GREENHOUSE_SYMBOLIZE_KEYS",
        "GREENHOUSE_TIMEOUT",
        "GREENHOUSE_HARVEST_URL",
        "GREENHOUSE_JOB_BOARD_URL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_request() -> Iterator[MagicMock]:
    with patch("greenhouse_io.api.requests.request") as mocked:
        mocked.return_value = DummyResponse({})
        yield mocked
