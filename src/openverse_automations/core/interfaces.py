"""Core interfaces for adapters."""

from abc import ABC, abstractmethod

from openverse_automations.core.entities import (
    DigestPost,
    Discussion,
    LabelGroup,
    RepoActivity,
    ReviewReminder,
    TimeWindow,
    TrackedRepo,
)


class ActivitySource(ABC):
    """Interface for fetching repository activity."""

    @abstractmethod
    async def fetch_activity(
        self, org: str, repos: list[TrackedRepo], window: TimeWindow
    ) -> list[RepoActivity]:
        """Fetch merged PRs and closed issues since the window start."""
        pass

    @abstractmethod
    async def count_prs_awaiting_review(self, org: str, login: str) -> int:
        """Count open PRs by `login` that still need reviews."""
        pass


class DigestGenerator(ABC):
    """Interface for rendering digests."""

    @abstractmethod
    def render(self, org: str, activities: list[RepoActivity]) -> str:
        """Render per-repository activity."""
        pass

    @abstractmethod
    def render_grouped(self, groups: list[LabelGroup]) -> str:
        """Render activity grouped by label."""
        pass


class Publisher(ABC):
    """Interface for publishing digests."""

    @abstractmethod
    async def publish(self, post: DigestPost) -> int:
        """Create the post and return its id."""
        pass


class NotificationService(ABC):
    """Interface for chat notifications."""

    @abstractmethod
    async def send_discussion(self, discussion: Discussion) -> None:
        """Announce a new discussion."""
        pass

    @abstractmethod
    async def send_review_reminder(self, reminder: ReviewReminder, tasks_url: str) -> None:
        """Remind a contributor about their review backlog."""
        pass
