"""Business logic use cases."""

from dataclasses import dataclass
from typing import Optional

from openverse_automations import console
from openverse_automations.core import (
    ActivitySource,
    DigestGenerator,
    DigestPost,
    Discussion,
    GitHubInfo,
    NotificationService,
    PublishError,
    Publisher,
    RepoActivity,
    ReviewReminder,
    TimeWindow,
    group_by_label,
)


@dataclass
class DigestResult:
    """Outcome of a digest run."""

    post: DigestPost
    activities: list[RepoActivity]
    post_id: int


class DigestService:
    """Service for building and publishing the weekly digest."""

    def __init__(
        self,
        source: ActivitySource,
        digest_generator: DigestGenerator,
        publisher: Publisher,
        tags: list[int],
        label_prefix: Optional[str] = None,
    ) -> None:
        """
        Args:
            label_prefix: Group the digest by labels with this prefix
                instead of by repository.
        """
        self.source = source
        self.digest_generator = digest_generator
        self.publisher = publisher
        self.tags = tags
        self.label_prefix = label_prefix

    async def build_post(self, info: GitHubInfo, window: TimeWindow) -> tuple[DigestPost, list[RepoActivity]]:
        """Fetch the activity of the window and render it into a post."""
        console.info(f"\n📥 Fetching activity for {len(info.repos)} repos since {window.start.isoformat()}")
        activities = await self.source.fetch_activity(info.org, info.repos, window)

        if self.label_prefix:
            items = [item for activity in activities for item in activity.items]
            groups = group_by_label(items, self.label_prefix)
            console.info(f"🏷️  Grouped {len(items)} items into {len(groups)} labels")
            content = self.digest_generator.render_grouped(groups)
        else:
            content = self.digest_generator.render(info.org, activities)

        return DigestPost.for_window(window, content, self.tags), activities

    async def run(self, info: GitHubInfo, window: TimeWindow) -> DigestResult:
        """Build the digest and publish it.

        Raises:
            FetchError: If any search fails; nothing is published.
            PublishError: If the site rejects the post.
        """
        post, activities = await self.build_post(info, window)

        console.info(f"📝 Publishing '{post.title}' as {post.slug}")
        try:
            post_id = await self.publisher.publish(post)
        except PublishError:
            with console.group("Rendered digest"):
                console.info(post.content)
            raise

        return DigestResult(post=post, activities=activities, post_id=post_id)


class DiscussionPingService:
    """Announce new discussions in chat."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def announce(self, discussion: Discussion) -> None:
        await self.notification_service.send_discussion(discussion)
        console.info(f"✓ Announced discussion #{discussion.number} in {discussion.repo}")


class ReviewReminderService:
    """Nudge contributors whose open PRs pile up in review."""

    def __init__(
        self,
        source: ActivitySource,
        notification_service: NotificationService,
        slack_ids: dict[str, str],
        threshold: int = 3,
        tasks_url: str = "https://docs.openverse.org/meta/maintainer_tasks.html",
    ) -> None:
        self.source = source
        self.notification_service = notification_service
        self.slack_ids = slack_ids
        self.threshold = threshold
        self.tasks_url = tasks_url

    async def remind(self, org: str, login: str) -> Optional[ReviewReminder]:
        """Send a reminder when `login` is at or over the threshold.

        Returns:
            The reminder sent, or None when no message was needed or the
            user has no known Slack account.
        """
        pr_count = await self.source.count_prs_awaiting_review(org, login)
        console.info(f"🔍 {login} has {pr_count} open PR(s) awaiting review")

        if pr_count < self.threshold:
            return None

        slack_id = self.slack_ids.get(login)
        if not slack_id:
            console.notice(f"No Slack account mapped for {login}, skipping reminder.")
            return None

        reminder = ReviewReminder(login=login, slack_id=slack_id, pr_count=pr_count)
        await self.notification_service.send_review_reminder(reminder, self.tasks_url)
        console.info(f"✓ Reminder sent to {login}")
        return reminder
