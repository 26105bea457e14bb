"""Readers for GitHub Actions event payloads."""

import json
import os
from pathlib import Path
from typing import Any, Optional

from openverse_automations.core import ConfigError, Discussion


def load_event(event_path: Optional[Path] = None) -> dict[str, Any]:
    """Load the webhook payload that triggered the workflow.

    Args:
        event_path: Payload file. Defaults to `GITHUB_EVENT_PATH`.

    Raises:
        ConfigError: If no payload is available or it is not JSON.
    """
    if event_path is None:
        env_path = os.getenv("GITHUB_EVENT_PATH")
        if not env_path:
            raise ConfigError("No event payload: pass --event-path or set GITHUB_EVENT_PATH")
        event_path = Path(env_path)

    if not event_path.exists():
        raise ConfigError(f"Event payload not found: {event_path}")

    try:
        return json.loads(event_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Event payload {event_path} is not valid JSON: {e}") from e


def discussion_from_event(event: dict[str, Any]) -> Discussion:
    """Extract the discussion from a `discussion` event."""
    try:
        discussion = event["discussion"]
        return Discussion(
            url=discussion["html_url"],
            number=int(discussion["number"]),
            title=discussion["title"],
            author=discussion["user"]["login"],
            repo=event["repository"]["full_name"],
        )
    except (KeyError, TypeError) as e:
        raise ConfigError(f"Not a discussion event, missing {e}") from e


def pr_author_from_event(event: dict[str, Any]) -> tuple[str, str]:
    """Return `(org, login)` of the PR author from a `pull_request` event."""
    try:
        return event["repository"]["owner"]["login"], event["pull_request"]["user"]["login"]
    except (KeyError, TypeError) as e:
        raise ConfigError(f"Not a pull_request event, missing {e}") from e
