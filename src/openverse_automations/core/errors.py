"""Errors raised by the automations."""

from typing import Optional


class AutomationError(Exception):
    """Base class for all automation failures."""


class ConfigError(AutomationError):
    """Descriptor, credentials or event payload are missing or invalid."""


class RequestError(AutomationError):
    """An HTTP request failed; `status` is None when no response arrived."""

    def __init__(self, status: Optional[int], body: str = "") -> None:
        self.status = status
        self.body = body
        super().__init__(f"{self._summary()} failed with {self.reason}")

    @property
    def reason(self) -> str:
        return f"HTTP {self.status}" if self.status is not None else "a network error"

    def _summary(self) -> str:
        return "Request"


class FetchError(RequestError):
    """A GitHub search query failed."""

    def __init__(self, repo: str, status: Optional[int], body: str = "") -> None:
        self.repo = repo
        super().__init__(status, body)

    def _summary(self) -> str:
        return f"Search for {self.repo}"


class PublishError(RequestError):
    """The Make site did not create the post."""

    def _summary(self) -> str:
        return "Create post request"


class NotificationError(RequestError):
    """Slack rejected a webhook message."""

    def _summary(self) -> str:
        return "Slack webhook request"
