"""Core domain entities."""

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Any


WINDOW_LENGTH = timedelta(days=7)
UNLABELED = "Unlabeled"


class ActivityKind(str, Enum):
    """Which search query an activity item came from."""

    MERGED_PR = "merged_pr"
    CLOSED_ISSUE = "closed_issue"

    @property
    def heading(self) -> str:
        return "Merged PRs" if self is ActivityKind.MERGED_PR else "Closed issues"


@dataclass(frozen=True)
class TrackedRepo:
    """Repository included in the digest."""

    name: str


@dataclass(frozen=True)
class GitHubInfo:
    """Organization and repositories read from the descriptor."""

    org: str
    repos: list[TrackedRepo]


@dataclass(frozen=True)
class TimeWindow:
    """Reporting period, `start` inclusive."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValueError("Window start must be before its end")

    @property
    def label(self) -> str:
        return f"{self.start.isoformat()} - {self.end.isoformat()}"


@dataclass(frozen=True)
class ActivityItem:
    """A merged pull request or a closed issue."""

    url: str
    number: int
    title: str
    kind: ActivityKind
    repo: str
    labels: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("URL cannot be empty")

    @classmethod
    def from_search_result(cls, data: dict[str, Any], kind: ActivityKind, repo: str) -> "ActivityItem":
        """Build an item from one entry of the search API `items` list."""
        labels = frozenset(
            label["name"] if isinstance(label, dict) else str(label)
            for label in data.get("labels") or []
        )
        return cls(
            url=data["html_url"],
            number=int(data["number"]),
            title=data.get("title") or "",
            kind=kind,
            repo=repo,
            labels=labels,
        )


@dataclass
class RepoActivity:
    """Everything that happened in one repository during the window."""

    repo: TrackedRepo
    merged_prs: list[ActivityItem] = field(default_factory=list)
    closed_issues: list[ActivityItem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.merged_prs or self.closed_issues)

    @property
    def items(self) -> list[ActivityItem]:
        return [*self.merged_prs, *self.closed_issues]


@dataclass
class LabelGroup:
    """Items sharing one taxonomy label."""

    label: str
    items: list[ActivityItem] = field(default_factory=list)

    def of_kind(self, kind: ActivityKind) -> list[ActivityItem]:
        return [item for item in self.items if item.kind is kind]


@dataclass
class DigestPost:
    """Post sent to the Make site."""

    title: str
    slug: str
    excerpt: str
    content: str
    tags: list[int]
    status: str = "publish"

    @classmethod
    def for_window(cls, window: TimeWindow, content: str, tags: list[int]) -> "DigestPost":
        """Build the weekly post; the slug is unique per window."""
        start, end = window.start.isoformat(), window.end.isoformat()
        return cls(
            title=f"A week in Openverse: {start} - {end}",
            slug=f"last-week-openverse-{start}-{end}",
            excerpt=f"The developments in Openverse between {start} and {end}",
            content=content,
            tags=list(tags),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "slug": self.slug,
            "excerpt": self.excerpt,
            "content": self.content,
            "status": self.status,
            "tags": self.tags,
        }


@dataclass(frozen=True)
class Discussion:
    """A newly opened GitHub discussion."""

    url: str
    number: int
    title: str
    author: str
    repo: str


@dataclass(frozen=True)
class ReviewReminder:
    """Nudge for a contributor with many PRs waiting for review."""

    login: str
    slack_id: str
    pr_count: int

    @property
    def required_reviews(self) -> int:
        # Every PR needs two approvals.
        return self.pr_count * 2
