"""Tests for the CLI entry points."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from typer.testing import CliRunner

from openverse_automations.cli import app


runner = CliRunner()

CREDENTIALS = {
    "ACCESS_TOKEN": "token",
    "MAKE_USERNAME": "openverse-bot",
    "MAKE_PASSWORD": "app pass",
}


@pytest.fixture
def github_info(tmp_path: Path) -> Path:
    path = tmp_path / "github.yml"
    path.write_text("org: WordPress\nrepos:\n  foo: foo\n  quiet: quiet\n", encoding="utf-8")
    return path


def digest_args(github_info: Path) -> list[str]:
    return [
        "last-week-tonight",
        "--github-info",
        str(github_info),
        "--config",
        str(github_info.parent / "config.yaml"),
    ]


def fake_search(make_response, search_result):
    """Only `foo` has activity: one merged PR."""

    async def fake_get(url, headers, params):
        if "WordPress/foo" in params["q"] and "is:pr" in params["q"]:
            return make_response(200, {"items": [search_result(1, "Fix <bug>")]})
        return make_response(200, {"items": []})

    return fake_get


@pytest.mark.parametrize("missing", ["ACCESS_TOKEN", "MAKE_USERNAME", "MAKE_PASSWORD"])
def test_missing_credential_exits_before_network(github_info: Path, missing: str) -> None:
    """Test that any missing credential aborts with no HTTP calls."""
    env = {**CREDENTIALS, missing: None}

    with patch("httpx.AsyncClient") as mock_client:
        result = runner.invoke(app, digest_args(github_info), env=env)

    assert result.exit_code == 1
    assert f'"{missing}" is required.' in result.output
    assert mock_client.call_count == 0


def test_all_credentials_reported(github_info: Path) -> None:
    """Test that every missing credential is listed."""
    env = {name: None for name in CREDENTIALS}

    with patch("httpx.AsyncClient") as mock_client:
        result = runner.invoke(app, digest_args(github_info), env=env)

    assert result.exit_code == 1
    assert result.output.count("::notice::") == 3
    mock_client.assert_not_called()


def test_missing_descriptor(tmp_path: Path) -> None:
    """Test that a missing descriptor is a configuration error."""
    with patch("httpx.AsyncClient") as mock_client:
        result = runner.invoke(app, digest_args(tmp_path / "nope.yml"), env=CREDENTIALS)

    assert result.exit_code == 1
    assert "::error::GitHub descriptor not found" in result.output
    mock_client.assert_not_called()


def test_digest_published(github_info: Path, make_response, search_result) -> None:
    """Test a successful run exits 0 and logs the response body."""
    with patch("httpx.AsyncClient") as mock_client:
        client = mock_client.return_value.__aenter__.return_value
        client.get = AsyncMock(side_effect=fake_search(make_response, search_result))
        client.post = AsyncMock(return_value=make_response(201, {"id": 4242, "status": "publish"}))

        result = runner.invoke(app, digest_args(github_info), env=CREDENTIALS)

    assert result.exit_code == 0, result.output
    assert '"id": 4242' in result.output

    payload = client.post.call_args.kwargs["json"]
    assert payload["status"] == "publish"
    assert payload["slug"].startswith("last-week-openverse-")
    assert "https://github.com/WordPress/foo" in payload["content"]
    assert "quiet" not in payload["content"]
    assert "Fix &lt;bug&gt;" in payload["content"]
    assert "Closed issues" not in payload["content"]


def test_digest_rejected_by_site(github_info: Path, make_response, search_result) -> None:
    """Test a 403 from the site exits 1 and keeps the rendered digest in the log."""
    with patch("httpx.AsyncClient") as mock_client:
        client = mock_client.return_value.__aenter__.return_value
        client.get = AsyncMock(side_effect=fake_search(make_response, search_result))
        client.post = AsyncMock(
            return_value=make_response(403, text='{"code": "rest_cannot_create"}')
        )

        result = runner.invoke(app, digest_args(github_info), env=CREDENTIALS)

    assert result.exit_code == 1
    assert "::error::Create post request failed. See the logs." in result.output
    assert "rest_cannot_create" in result.output
    assert '<li><a href="https://github.com/WordPress/foo/pull/1">#1</a>: Fix &lt;bug&gt;</li>' in result.output


def test_digest_fetch_failure(github_info: Path, make_response) -> None:
    """Test a failed search exits 1 without posting."""
    with patch("httpx.AsyncClient") as mock_client:
        client = mock_client.return_value.__aenter__.return_value
        client.get = AsyncMock(return_value=make_response(500, text="boom"))
        client.post = AsyncMock()

        result = runner.invoke(app, digest_args(github_info), env=CREDENTIALS)

    assert result.exit_code == 1
    assert "failed with HTTP 500" in result.output
    client.post.assert_not_called()


def test_discussion_ping(tmp_path: Path, make_response) -> None:
    """Test the discussion command posts to the webhook."""
    event_path = tmp_path / "event.json"
    event_path.write_text(
        json.dumps(
            {
                "discussion": {
                    "html_url": "https://github.com/WordPress/openverse/discussions/9",
                    "number": 9,
                    "title": "Hello",
                    "user": {"login": "octocat"},
                },
                "repository": {"full_name": "WordPress/openverse"},
            }
        ),
        encoding="utf-8",
    )

    with patch("httpx.AsyncClient") as mock_client:
        client = mock_client.return_value.__aenter__.return_value
        client.post = AsyncMock(return_value=make_response(200, text="ok"))

        result = runner.invoke(
            app,
            ["discussion-ping", "--event-path", str(event_path), "--config", str(tmp_path / "config.yaml")],
            env={"SLACK_WEBHOOK_URL": "https://hooks.slack.com/services/test"},
        )

    assert result.exit_code == 0, result.output
    assert client.post.call_args.args[0] == "https://hooks.slack.com/services/test"
    assert "#9 - Hello" in client.post.call_args.kwargs["json"]["text"]


def test_discussion_ping_without_webhook(tmp_path: Path) -> None:
    """Test the webhook is required."""
    result = runner.invoke(
        app,
        ["discussion-ping", "--config", str(tmp_path / "config.yaml")],
        env={"SLACK_WEBHOOK_URL": None},
    )

    assert result.exit_code == 1
    assert "SLACK_WEBHOOK_URL" in result.output


def test_pr_limit_reminder(tmp_path: Path, make_response) -> None:
    """Test the reminder command counts PRs and messages the author."""
    event_path = tmp_path / "event.json"
    event_path.write_text(
        json.dumps(
            {
                "pull_request": {"user": {"login": "octocat"}},
                "repository": {"owner": {"login": "WordPress"}},
            }
        ),
        encoding="utf-8",
    )

    with patch("httpx.AsyncClient") as mock_client:
        client = mock_client.return_value.__aenter__.return_value
        client.get = AsyncMock(return_value=make_response(200, {"total_count": 3, "items": []}))
        client.post = AsyncMock(return_value=make_response(200, text="ok"))

        result = runner.invoke(
            app,
            ["pr-limit-reminder", "--event-path", str(event_path), "--config", str(tmp_path / "config.yaml")],
            env={
                "ACCESS_TOKEN": "token",
                "SLACK_WEBHOOK_URL": "https://hooks.slack.com/services/test",
                "GH_SLACK_USERNAME_MAP": '{"octocat": "U123"}',
            },
        )

    assert result.exit_code == 0, result.output
    payload = client.post.call_args.kwargs["json"]
    assert payload["user"] == "U123"
    assert "totalling 6 required reviews" in payload["message"]


def test_digest_site_unreachable(github_info: Path, make_response, search_result) -> None:
    """Test a connection failure to the site still logs the rendered digest."""
    with patch("httpx.AsyncClient") as mock_client:
        client = mock_client.return_value.__aenter__.return_value
        client.get = AsyncMock(side_effect=fake_search(make_response, search_result))
        client.post = AsyncMock(side_effect=httpx.ConnectError("Connection refused"))

        result = runner.invoke(app, digest_args(github_info), env=CREDENTIALS)

    assert result.exit_code == 1
    assert not isinstance(result.exception, httpx.HTTPError)
    assert "::error::Create post request failed. See the logs." in result.output
    assert "ConnectError: Connection refused" in result.output
    assert "Fix &lt;bug&gt;" in result.output


def test_digest_search_timeout(github_info: Path) -> None:
    """Test a search timeout exits 1 naming the repository."""
    with patch("httpx.AsyncClient") as mock_client:
        client = mock_client.return_value.__aenter__.return_value
        client.get = AsyncMock(side_effect=httpx.ReadTimeout("timed out"))
        client.post = AsyncMock()

        result = runner.invoke(app, digest_args(github_info), env=CREDENTIALS)

    assert result.exit_code == 1
    assert not isinstance(result.exception, httpx.HTTPError)
    assert "::error::Searching WordPress/" in result.output
    assert "failed with a network error." in result.output
    client.post.assert_not_called()
