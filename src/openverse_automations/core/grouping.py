"""Grouping of activity by taxonomy label."""

from collections.abc import Iterable

from openverse_automations.core.entities import UNLABELED, ActivityItem, LabelGroup


DEFAULT_LABEL_PREFIX = "stack:"


def group_by_label(items: Iterable[ActivityItem], prefix: str = DEFAULT_LABEL_PREFIX) -> list[LabelGroup]:
    """
    Bucket items by every label carrying `prefix`.

    An item with several matching labels lands in each of their groups;
    an item with none lands in the `Unlabeled` group only. Groups are
    sorted by label and items keep their input order.
    """
    buckets: dict[str, list[ActivityItem]] = {}

    for item in items:
        matching = sorted(label for label in item.labels if label.startswith(prefix))
        for label in matching or [UNLABELED]:
            buckets.setdefault(label, []).append(item)

    return [LabelGroup(label=label, items=buckets[label]) for label in sorted(buckets)]
