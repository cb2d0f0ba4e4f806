"""Engagement ledger.

The ledger is the list of endorsement records attached to one label and the
only write-authoritative record of who likes it. Every mutator returns a new
ledger; the receiver is never changed.
"""

from typing import Optional

from pydantic import Field, model_validator

from totem.domain.error import AlreadyInactiveError, NotLikedError
from totem.domain.model.common import DomainModel
from totem.domain.model.endorsement import EndorsementRecord
from totem.domain.value import UserId


class EngagementLedger(DomainModel):
    """Per-label collection of endorsement records.

    Business rules:
    - At most one record per user (repeat like/unlike flips the same record)
    - Records are deactivated, never removed
    - Only an explicit refresh resets a record's original timestamp
    """

    records: list[EndorsementRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_one_record_per_user(self) -> "EngagementLedger":
        """Reject ledgers holding two records for the same user."""
        seen: set[str] = set()
        for record in self.records:
            if record.user_id in seen:
                raise ValueError(f"Duplicate endorsement record for user {record.user_id}")
            seen.add(record.user_id)
        return self

    def find_record(self, user_id: UserId) -> Optional[EndorsementRecord]:
        """Find the user's record, active or not."""
        for record in self.records:
            if record.user_id == user_id:
                return record
        return None

    def is_active_for(self, user_id: UserId) -> bool:
        """Whether the user currently likes the label."""
        record = self.find_record(user_id)
        return record is not None and record.is_active

    def active_records(self) -> list[EndorsementRecord]:
        """Records that currently count towards likes and crispness."""
        return [r for r in self.records if r.is_active]

    def count_active(self) -> int:
        """Public like count."""
        return sum(1 for r in self.records if r.is_active)

    def upsert_activate(
        self, user_id: UserId, now: int, reset_age_on_relike: bool = False
    ) -> "EngagementLedger":
        """Activate the user's endorsement.

        Inserts a fresh record on first like. Re-liking after an unlike
        reactivates the existing record and keeps its original timestamp
        unless ``reset_age_on_relike`` is set. Liking an already active
        record returns the ledger unchanged.

        Args:
            user_id: User liking the label
            now: Current time in epoch milliseconds
            reset_age_on_relike: Restart the decay clock on reactivation

        Returns:
            Ledger with an active record for the user
        """
        existing = self.find_record(user_id)

        if existing is None:
            record = EndorsementRecord(
                user_id=user_id,
                original_timestamp=now,
                last_updated_at=now,
                is_active=True,
                value=1,
            )
            return self._with_records([*self.records, record])

        if existing.is_active:
            return self

        update: dict = {"is_active": True, "last_updated_at": now}
        if reset_age_on_relike:
            update["original_timestamp"] = now
        return self._replace(existing, existing.model_copy(update=update))

    def deactivate(self, user_id: UserId, now: int) -> "EngagementLedger":
        """Deactivate the user's endorsement, keeping its original timestamp.

        Raises:
            AlreadyInactiveError: If the user has no active record
        """
        existing = self.find_record(user_id)
        if existing is None or not existing.is_active:
            raise AlreadyInactiveError(user_id)

        return self._replace(
            existing,
            existing.model_copy(update={"is_active": False, "last_updated_at": now}),
        )

    def reset_timestamp(self, user_id: UserId, now: int) -> "EngagementLedger":
        """Restart the decay clock of the user's own active endorsement.

        Raises:
            NotLikedError: If the user has no active record
        """
        existing = self.find_record(user_id)
        if existing is None or not existing.is_active:
            raise NotLikedError(user_id)

        return self._replace(
            existing,
            existing.model_copy(
                update={"original_timestamp": now, "last_updated_at": now}
            ),
        )

    def _replace(
        self, old: EndorsementRecord, new: EndorsementRecord
    ) -> "EngagementLedger":
        return self._with_records([new if r is old else r for r in self.records])

    def _with_records(self, records: list[EndorsementRecord]) -> "EngagementLedger":
        return self.model_copy(update={"records": records})
