"""Tests for event payload readers."""

import json
from pathlib import Path

import pytest

from openverse_automations.core import ConfigError
from openverse_automations.events import discussion_from_event, load_event, pr_author_from_event


DISCUSSION_EVENT = {
    "action": "created",
    "discussion": {
        "html_url": "https://github.com/WordPress/openverse/discussions/42",
        "number": 42,
        "title": "Roadmap",
        "user": {"login": "octocat"},
    },
    "repository": {"full_name": "WordPress/openverse", "owner": {"login": "WordPress"}},
}


def test_load_event_from_env(tmp_path: Path, monkeypatch) -> None:
    """Test the GITHUB_EVENT_PATH fallback."""
    path = tmp_path / "event.json"
    path.write_text(json.dumps(DISCUSSION_EVENT), encoding="utf-8")
    monkeypatch.setenv("GITHUB_EVENT_PATH", str(path))

    assert load_event() == DISCUSSION_EVENT


def test_load_event_without_path(monkeypatch) -> None:
    """Test that a missing payload is a configuration error."""
    monkeypatch.delenv("GITHUB_EVENT_PATH", raising=False)

    with pytest.raises(ConfigError, match="GITHUB_EVENT_PATH"):
        load_event()


def test_load_event_invalid_json(tmp_path: Path) -> None:
    """Test a corrupt payload."""
    path = tmp_path / "event.json"
    path.write_text("{", encoding="utf-8")

    with pytest.raises(ConfigError, match="not valid JSON"):
        load_event(path)


def test_discussion_from_event() -> None:
    """Test extracting the discussion."""
    discussion = discussion_from_event(DISCUSSION_EVENT)

    assert discussion.url == "https://github.com/WordPress/openverse/discussions/42"
    assert discussion.number == 42
    assert discussion.title == "Roadmap"
    assert discussion.author == "octocat"
    assert discussion.repo == "WordPress/openverse"


def test_discussion_from_wrong_event() -> None:
    """Test a payload of another event type."""
    with pytest.raises(ConfigError, match="discussion"):
        discussion_from_event({"pull_request": {}})


def test_pr_author_from_event() -> None:
    """Test extracting org and author of a PR."""
    event = {
        "pull_request": {"user": {"login": "octocat"}},
        "repository": {"owner": {"login": "WordPress"}},
    }

    assert pr_author_from_event(event) == ("WordPress", "octocat")

    with pytest.raises(ConfigError):
        pr_author_from_event(DISCUSSION_EVENT)
