"""Source adapters for fetching activity."""

from openverse_automations.adapters.sources.github_search_source import GitHubSearchSource

__all__ = ["GitHubSearchSource"]
