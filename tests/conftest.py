"""Shared fixtures."""

import json
from typing import Any, Callable
from unittest.mock import Mock

import pytest


@pytest.fixture
def make_response() -> Callable[..., Mock]:
    """Factory for fake httpx responses."""

    def _make(status_code: int = 200, data: Any = None, text: str | None = None) -> Mock:
        response = Mock()
        response.status_code = status_code
        response.json = Mock(return_value=data if data is not None else {})
        response.text = text if text is not None else json.dumps(data or {})
        return response

    return _make


@pytest.fixture
def search_result() -> Callable[..., dict]:
    """Factory for one entry of the search API `items` list."""

    def _make(number: int, title: str = "Title", labels: list[str] | None = None, repo: str = "foo") -> dict:
        return {
            "html_url": f"https://github.com/WordPress/{repo}/pull/{number}",
            "number": number,
            "title": title,
            "labels": [{"name": name} for name in labels or []],
        }

    return _make
