"""HTML digest generator."""

from html import escape

from openverse_automations.core import (
    ActivityItem,
    ActivityKind,
    DigestGenerator,
    LabelGroup,
    RepoActivity,
)


class HTMLDigestGenerator(DigestGenerator):
    """Generate the HTML body of the weekly post."""

    def render(self, org: str, activities: list[RepoActivity]) -> str:
        """One section per repository, in input order."""
        lines: list[str] = []

        for activity in activities:
            repo = activity.repo.name
            lines.append(f'<h2><a href="https://github.com/{org}/{repo}">{repo}</a></h2>')
            lines.extend(self._format_section(ActivityKind.MERGED_PR.heading, activity.merged_prs))
            lines.extend(self._format_section(ActivityKind.CLOSED_ISSUE.heading, activity.closed_issues))

        return "\n".join(lines)

    def render_grouped(self, groups: list[LabelGroup]) -> str:
        """One section per label; items name their repository."""
        lines: list[str] = []

        for group in groups:
            lines.append(f"<h2>{escape(group.label)}</h2>")
            for kind in ActivityKind:
                lines.extend(
                    self._format_section(kind.heading, group.of_kind(kind), with_repo=True)
                )

        return "\n".join(lines)

    def _format_section(self, heading: str, items: list[ActivityItem], with_repo: bool = False) -> list[str]:
        """Format a merged PRs or closed issues list; empty lists render nothing."""
        if not items:
            return []

        lines = [f"<h3>{heading}</h3>", "<ul>"]
        for item in items:
            number = f"{item.repo}#{item.number}" if with_repo else f"#{item.number}"
            lines.append(f'<li><a href="{item.url}">{number}</a>: {escape(item.title)}</li>')
        lines.append("</ul>")

        return lines
