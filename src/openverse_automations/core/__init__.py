"""Core domain layer."""

from openverse_automations.core.entities import (
    UNLABELED,
    ActivityItem,
    ActivityKind,
    DigestPost,
    Discussion,
    GitHubInfo,
    LabelGroup,
    RepoActivity,
    ReviewReminder,
    TimeWindow,
    TrackedRepo,
)
from openverse_automations.core.errors import (
    AutomationError,
    RequestError,
    ConfigError,
    FetchError,
    NotificationError,
    PublishError,
)
from openverse_automations.core.grouping import group_by_label
from openverse_automations.core.interfaces import (
    ActivitySource,
    DigestGenerator,
    NotificationService,
    Publisher,
)
from openverse_automations.core.time_window import compute_window

__all__ = [
    "UNLABELED",
    "ActivityItem",
    "ActivityKind",
    "DigestPost",
    "Discussion",
    "GitHubInfo",
    "LabelGroup",
    "RepoActivity",
    "ReviewReminder",
    "TimeWindow",
    "TrackedRepo",
    "AutomationError",
    "RequestError",
    "ConfigError",
    "FetchError",
    "NotificationError",
    "PublishError",
    "group_by_label",
    "ActivitySource",
    "DigestGenerator",
    "NotificationService",
    "Publisher",
    "compute_window",
]
