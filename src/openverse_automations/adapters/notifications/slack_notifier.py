"""Slack notification adapter."""

from typing import Any

import httpx

from openverse_automations.core import Discussion, NotificationError, NotificationService, ReviewReminder


class SlackNotifier(NotificationService):
    """Send notifications to Slack via webhook."""

    def __init__(self, webhook_url: str, timeout: float = 30.0) -> None:
        """Initialize Slack notifier.

        Args:
            webhook_url: Slack webhook URL.
            timeout: Request timeout in seconds.
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    @staticmethod
    def _escape_mrkdwn(text: str) -> str:
        """Escape the characters Slack treats as control sequences.

        Args:
            text: Plain text

        Returns:
            Text safe to embed in a mrkdwn message
        """
        return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")

    def build_discussion_payload(self, discussion: Discussion) -> dict[str, Any]:
        """Message announcing a new discussion."""
        title = self._escape_mrkdwn(discussion.title)
        return {
            "text": (
                f"New discussion opened by {discussion.author} in {discussion.repo}: "
                f"#{discussion.number} - {title}"
            ),
            "blocks": [
                {
                    "type": "section",
                    "text": {
                        "type": "mrkdwn",
                        "text": (
                            f":github: New discussion opened by *{discussion.author}* in {discussion.repo}:\n"
                            f"<{discussion.url}|#{discussion.number} - {title}>"
                        ),
                    },
                }
            ],
        }

    def build_reminder_payload(self, reminder: ReviewReminder, tasks_url: str) -> dict[str, Any]:
        """Direct message for a contributor with a long review queue."""
        return {
            "user": reminder.slack_id,
            "message": (
                "Hi, Opener! \n"
                f"You currently have {reminder.pr_count} Pull Request(s) open with requested reviews "
                f"(totalling {reminder.required_reviews} required reviews). \n"
                "To help ease the review burden, increase review velocity for older PRs, and improve "
                "the equitable distribution of project maintenance tasks across the team, please "
                "consider reviewing this list of ways to contribute instead of working on new code "
                f"contributions: \n{tasks_url}"
            ),
        }

    async def send_discussion(self, discussion: Discussion) -> None:
        await self._post(self.build_discussion_payload(discussion))

    async def send_review_reminder(self, reminder: ReviewReminder, tasks_url: str) -> None:
        await self._post(self.build_reminder_payload(reminder, tasks_url))

    async def _post(self, payload: dict[str, Any]) -> None:
        """Send a payload to the webhook.

        Raises:
            NotificationError: If the request fails or Slack rejects it.
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(self.webhook_url, json=payload)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise NotificationError(e.response.status_code, e.response.text) from e
            except httpx.HTTPError as e:
                raise NotificationError(None, str(e)) from e
