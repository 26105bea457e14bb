"""GitHub search source for merged PRs, closed issues and review backlogs."""

import asyncio
from typing import Any

import httpx

from openverse_automations import console
from openverse_automations.core import (
    ActivityItem,
    ActivityKind,
    ActivitySource,
    FetchError,
    RepoActivity,
    TimeWindow,
    TrackedRepo,
)


class GitHubSearchSource(ActivitySource):
    """Query the GitHub issue search API."""

    def __init__(
        self,
        token: str,
        api_base: str = "https://api.github.com",
        per_page: int = 100,
        timeout: float = 30.0,
    ) -> None:
        self.token = token
        self.api_base = api_base.rstrip("/")
        self.per_page = per_page
        self.timeout = timeout

    @staticmethod
    def merged_prs_query(org: str, repo: str, window: TimeWindow) -> str:
        return f"repo:{org}/{repo} is:pr is:merged merged:>={window.start.isoformat()}"

    @staticmethod
    def closed_issues_query(org: str, repo: str, window: TimeWindow) -> str:
        return f"repo:{org}/{repo} is:issue is:closed closed:>={window.start.isoformat()}"

    async def fetch_activity(
        self, org: str, repos: list[TrackedRepo], window: TimeWindow
    ) -> list[RepoActivity]:
        """
        Fetch activity of every repo since the start of the window.

        Repos are queried concurrently but returned in input order; repos
        without any activity are left out. The first failed query aborts
        the whole fetch.

        Raises:
            FetchError: If any search request fails.
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            headers = self._get_headers()
            tasks = [
                asyncio.ensure_future(self._fetch_repo(client, headers, org, repo, window))
                for repo in repos
            ]
            try:
                activities = await asyncio.gather(*tasks)
            finally:
                # Stop the remaining repos before the client closes under them.
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)

        result = [activity for activity in activities if not activity.is_empty]
        console.info(f"  └─ Repos with activity: {len(result)} of {len(repos)}")
        return result

    async def count_prs_awaiting_review(self, org: str, login: str) -> int:
        """Count open, non-draft PRs by `login` that still require review."""
        query = f"is:pr is:open draft:false review:required author:{login} org:{org}"

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            data = await self._search(client, self._get_headers(), query, repo=f"{org} ({login})")

        return int(data.get("total_count", 0))

    async def _fetch_repo(
        self,
        client: httpx.AsyncClient,
        headers: dict[str, str],
        org: str,
        repo: TrackedRepo,
        window: TimeWindow,
    ) -> RepoActivity:
        """Run both queries for one repository."""
        merged = await self._search(
            client, headers, self.merged_prs_query(org, repo.name, window), repo.name
        )
        closed = await self._search(
            client, headers, self.closed_issues_query(org, repo.name, window), repo.name
        )

        activity = RepoActivity(
            repo=repo,
            merged_prs=self._to_items(merged, ActivityKind.MERGED_PR, repo.name),
            closed_issues=self._to_items(closed, ActivityKind.CLOSED_ISSUE, repo.name),
        )
        console.info(
            f"  └─ {repo.name}: {len(activity.merged_prs)} merged PRs, "
            f"{len(activity.closed_issues)} closed issues"
        )
        return activity

    async def _search(
        self,
        client: httpx.AsyncClient,
        headers: dict[str, str],
        query: str,
        repo: str,
    ) -> dict[str, Any]:
        """Execute a search query and return the decoded response."""
        try:
            response = await client.get(
                f"{self.api_base}/search/issues",
                headers=headers,
                params={"q": query, "per_page": self.per_page},
            )
        except httpx.HTTPError as e:
            raise FetchError(repo, None, f"{type(e).__name__}: {e}") from e

        if response.status_code != 200:
            raise FetchError(repo, response.status_code, response.text)

        return response.json()

    @staticmethod
    def _to_items(data: dict[str, Any], kind: ActivityKind, repo: str) -> list[ActivityItem]:
        return [ActivityItem.from_search_result(result, kind, repo) for result in data.get("items", [])]

    def _get_headers(self) -> dict[str, str]:
        """Get headers for GitHub API requests."""
        return {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "Authorization": f"Bearer {self.token}",
        }
