"""Content item aggregate root.

A content item is a question together with its answers. It is stored as a
single document and only ever replaced whole.
"""

from typing import Optional

from pydantic import Field, model_validator

from totem.domain.model.common import DomainModel
from totem.domain.model.label import Label
from totem.domain.value import AnswerId, ContentItemId, UserId


class Answer(DomainModel):
    """An answer to a question, tagged with labels.

    Labels are unique by name within one answer.
    """

    id: AnswerId
    text: str
    author_id: UserId
    username: Optional[str] = None
    labels: list[Label] = Field(default_factory=list)
    created_at: int = 0
    updated_at: Optional[int] = None
    last_interaction: Optional[int] = None

    @model_validator(mode="after")
    def validate_unique_label_names(self) -> "Answer":
        """Reject answers carrying the same label name twice."""
        names = [label.name for label in self.labels]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate label names on answer {self.id}")
        return self

    def find_label(self, name: str) -> Optional[Label]:
        """Find a label by exact name."""
        for label in self.labels:
            if label.name == name:
                return label
        return None

    def with_label(self, label: Label, now: int) -> "Answer":
        """Return a copy with the same-named label replaced."""
        labels = [label if t.name == label.name else t for t in self.labels]
        return self.model_copy(
            update={"labels": labels, "updated_at": now, "last_interaction": now}
        )


class ContentItem(DomainModel):
    """Question with its ordered answers (aggregate root)."""

    id: ContentItemId
    question: str
    answers: list[Answer] = Field(default_factory=list)
    author_id: Optional[UserId] = None
    created_at: int = 0
    updated_at: int = 0
    last_interaction: Optional[int] = None

    def locate_label(
        self, label_name: str, answer_id: Optional[AnswerId] = None
    ) -> Optional[tuple[int, Label]]:
        """Find the answer index and label for a label name.

        Without ``answer_id`` the first answer carrying the label is used.

        Args:
            label_name: Exact label name
            answer_id: Restrict the search to this answer

        Returns:
            (answer index, label) or None when no answer carries the label
        """
        for index, answer in enumerate(self.answers):
            if answer_id is not None and answer.id != answer_id:
                continue
            label = answer.find_label(label_name)
            if label is not None:
                return index, label
        return None

    def with_answer(self, index: int, answer: Answer, now: int) -> "ContentItem":
        """Return a copy with the answer at ``index`` replaced."""
        answers = list(self.answers)
        answers[index] = answer
        return self.model_copy(
            update={"answers": answers, "updated_at": now, "last_interaction": now}
        )
