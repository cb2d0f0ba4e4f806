"""Test configuration and shared builders."""

from typing import Sequence

from totem.domain.model import Answer, ContentItem, EngagementLedger, Label
from totem.domain.value import AnswerId, ContentItemId, UserId

# 2023-11-15T12:00:00Z: mid-day UTC, so a few hours either way stay on one day
T0 = 1_700_049_600_000
HOUR_MS = 60 * 60 * 1000
DAY_MS = 24 * HOUR_MS


def make_label(name: str, ledger: EngagementLedger | None = None) -> Label:
    """Build a label with an optional starting ledger."""
    return Label(name=name, ledger=ledger or EngagementLedger())


def make_content_item(
    item_id: str = "item-1",
    label_names: Sequence[str] = ("Insightful",),
    answer_count: int = 1,
) -> ContentItem:
    """Build a content item whose every answer carries ``label_names``.

    Answers get IDs ``a0``, ``a1``... in order.

    Args:
        item_id: Content item ID
        label_names: Labels attached to each answer
        answer_count: Number of answers

    Returns:
        ContentItem with empty ledgers
    """
    answers = [
        Answer(
            id=AnswerId(f"a{i}"),
            text=f"Answer {i}",
            author_id=UserId(f"author-{i}"),
            labels=[make_label(name) for name in label_names],
            created_at=T0,
        )
        for i in range(answer_count)
    ]
    return ContentItem(
        id=ContentItemId(item_id),
        question="What makes a good explanation?",
        answers=answers,
        author_id=UserId("asker"),
        created_at=T0,
        updated_at=T0,
    )
