"""CLI entry points for the repository automations."""

import asyncio
from pathlib import Path
from typing import Optional

import typer

from openverse_automations import console
from openverse_automations.adapters.digest import HTMLDigestGenerator
from openverse_automations.adapters.notifications import SlackNotifier
from openverse_automations.adapters.publishing import MakeSitePublisher
from openverse_automations.adapters.sources import GitHubSearchSource
from openverse_automations.config import Settings, get_settings, load_github_info
from openverse_automations.core import (
    ConfigError,
    FetchError,
    NotificationError,
    PublishError,
    compute_window,
)
from openverse_automations.events import discussion_from_event, load_event, pr_author_from_event
from openverse_automations.use_cases import DigestService, DiscussionPingService, ReviewReminderService


app = typer.Typer(help="Repository maintenance automations.", no_args_is_help=True)

CREDENTIAL_NOTICES = {
    "ACCESS_TOKEN": 'GitHub personal access token "ACCESS_TOKEN" is required.',
    "MAKE_USERNAME": 'Make site username "MAKE_USERNAME" is required.',
    "MAKE_PASSWORD": 'Make site application password "MAKE_PASSWORD" is required.',
}


def _load_settings(config: Path) -> Settings:
    try:
        return get_settings(config)
    except ConfigError as e:
        console.error(str(e))
        raise typer.Exit(code=1)


@app.command("last-week-tonight")
def last_week_tonight(
    github_info: Path = typer.Option(
        Path("data/github.yml"), "--github-info", help="Descriptor listing the org and its repos"
    ),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="Optional settings overrides"),
    group_by_label: Optional[bool] = typer.Option(
        None, "--group-by-label/--no-group-by-label", help="Group the digest by stack labels"
    ),
) -> None:
    """Publish the weekly digest of merged PRs and closed issues."""
    settings = _load_settings(config)

    missing = settings.missing_digest_credentials()
    if missing:
        for name in missing:
            console.notice(CREDENTIAL_NOTICES[name])
        raise typer.Exit(code=1)

    try:
        info = load_github_info(github_info)
    except ConfigError as e:
        console.error(str(e))
        raise typer.Exit(code=1)

    if group_by_label is None:
        group_by_label = settings.digest.group_by_label

    service = DigestService(
        source=GitHubSearchSource(
            token=settings.access_token,
            api_base=settings.github.api_base,
            per_page=settings.digest.per_page,
            timeout=settings.github.timeout,
        ),
        digest_generator=HTMLDigestGenerator(),
        publisher=MakeSitePublisher(
            username=settings.make_username,
            password=settings.make_password,
            api_base=settings.digest.make_site_api,
            timeout=settings.github.timeout,
        ),
        tags=settings.digest.tags,
        label_prefix=settings.digest.label_prefix if group_by_label else None,
    )

    window = compute_window()
    console.info(f"🗓️  Window: {window.label}")

    try:
        result = asyncio.run(service.run(info, window))
    except FetchError as e:
        console.error(f"Searching {info.org}/{e.repo} failed with {e.reason}.")
        console.info(e.body)
        raise typer.Exit(code=1)
    except PublishError as e:
        console.error("Create post request failed. See the logs.")
        console.info(e.body)
        raise typer.Exit(code=1)

    console.info(f"✅ Published post {result.post_id} covering {len(result.activities)} repos")


@app.command("discussion-ping")
def discussion_ping(
    event_path: Optional[Path] = typer.Option(
        None, "--event-path", help="Event payload, defaults to $GITHUB_EVENT_PATH"
    ),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="Optional settings overrides"),
) -> None:
    """Announce a newly opened discussion on Slack."""
    settings = _load_settings(config)

    if not settings.slack_webhook_url:
        console.notice('Slack webhook "SLACK_WEBHOOK_URL" is required.')
        raise typer.Exit(code=1)

    try:
        discussion = discussion_from_event(load_event(event_path))
    except ConfigError as e:
        console.error(str(e))
        raise typer.Exit(code=1)

    service = DiscussionPingService(SlackNotifier(settings.slack_webhook_url, timeout=settings.github.timeout))
    try:
        asyncio.run(service.announce(discussion))
    except NotificationError as e:
        console.error(str(e))
        console.info(e.body)
        raise typer.Exit(code=1)


@app.command("pr-limit-reminder")
def pr_limit_reminder(
    event_path: Optional[Path] = typer.Option(
        None, "--event-path", help="Event payload, defaults to $GITHUB_EVENT_PATH"
    ),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="Optional settings overrides"),
) -> None:
    """Remind a PR author about their open-review backlog."""
    settings = _load_settings(config)

    missing = []
    if not settings.access_token:
        missing.append(CREDENTIAL_NOTICES["ACCESS_TOKEN"])
    if not settings.slack_webhook_url:
        missing.append('Slack webhook "SLACK_WEBHOOK_URL" is required.')
    if missing:
        for message in missing:
            console.notice(message)
        raise typer.Exit(code=1)

    try:
        org, login = pr_author_from_event(load_event(event_path))
        slack_ids = settings.slack_user_map()
    except ConfigError as e:
        console.error(str(e))
        raise typer.Exit(code=1)

    service = ReviewReminderService(
        source=GitHubSearchSource(
            token=settings.access_token,
            api_base=settings.github.api_base,
            timeout=settings.github.timeout,
        ),
        notification_service=SlackNotifier(settings.slack_webhook_url, timeout=settings.github.timeout),
        slack_ids=slack_ids,
        threshold=settings.reminders.pr_threshold,
        tasks_url=settings.reminders.maintainer_tasks_url,
    )

    try:
        asyncio.run(service.remind(org, login))
    except FetchError as e:
        console.error(f"Counting PRs of {login} failed with {e.reason}.")
        console.info(e.body)
        raise typer.Exit(code=1)
    except NotificationError as e:
        console.error(str(e))
        console.info(e.body)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
