"""Notification adapters."""

from openverse_automations.adapters.notifications.slack_notifier import SlackNotifier

__all__ = ["SlackNotifier"]
