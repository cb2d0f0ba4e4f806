"""Mappers between stored documents and domain models.

Documents keep the camelCase shape older readers know (``totems``,
``likeHistory``, ``originalTimestamp``...). On write, the flat ``likes`` and
``likedBy`` fields are emitted from the ledger projection. On read they are
ignored whenever a ``likeHistory`` exists; documents that predate the
ledger are reconciled from their legacy arrays.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from totem.domain.model import (
    Answer,
    ContentItem,
    EndorsementRecord,
    EngagementLedger,
    Label,
    QuotaCounter,
)
from totem.domain.service.consistency import (
    merge_duplicate_records,
    project,
    reconcile_legacy,
)
from totem.domain.value import AnswerId, ContentItemId, MembershipTier, UserId


def _epoch_ms(value: Any) -> Optional[int]:
    """Coerce a stored timestamp to epoch milliseconds.

    Accepts numbers, numeric strings and ISO-8601 strings; anything else
    maps to None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(float(text))
        except ValueError:
            pass
        try:
            return int(datetime.fromisoformat(text.replace("Z", "+00:00")).timestamp() * 1000)
        except ValueError:
            return None
    return None


def _user_id(doc: Dict[str, Any]) -> Optional[str]:
    """Read a user ID under either the current or the older field name."""
    return doc.get("userId") or doc.get("firebaseUid")


def _flag(value: Any, default: bool) -> bool:
    """Read a stored boolean that older writers may have saved as text."""
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() not in ("false", "0", "no", "")
    return bool(value)


def row_to_record(doc: Dict[str, Any]) -> EndorsementRecord:
    """Convert a stored like entry to an EndorsementRecord."""
    original = _epoch_ms(doc.get("originalTimestamp")) or 0
    return EndorsementRecord(
        user_id=UserId(_user_id(doc) or ""),
        original_timestamp=original,
        last_updated_at=_epoch_ms(doc.get("lastUpdatedAt")) or original,
        is_active=_flag(doc.get("isActive"), default=True),
        value=max(1, int(doc.get("value") or 1)),
    )


def record_to_dict(record: EndorsementRecord) -> Dict[str, Any]:
    """Convert an EndorsementRecord to its stored shape."""
    return {
        "userId": record.user_id,
        "originalTimestamp": record.original_timestamp,
        "lastUpdatedAt": record.last_updated_at,
        "isActive": record.is_active,
        "value": record.value,
    }


def row_to_label(doc: Dict[str, Any]) -> Label:
    """Convert a stored totem to a Label, reconciling legacy like arrays."""
    history = doc.get("likeHistory")
    if history is not None:
        # Entries without a user cannot be attributed to anyone
        ledger = merge_duplicate_records(
            [row_to_record(entry) for entry in history if _user_id(entry)]
        )
    elif doc.get("likedBy"):
        like_times = doc.get("likeTimes")
        ledger = reconcile_legacy(
            doc["likedBy"],
            [_epoch_ms(t) for t in like_times] if like_times is not None else None,
            doc.get("likeValues"),
        )
    else:
        ledger = EngagementLedger()

    crispness = float(doc.get("crispness") or 0.0)
    return Label(
        name=doc["name"],
        crispness=min(100.0, max(0.0, crispness)),
        ledger=ledger,
        aggregate=project(ledger),
        last_like=_epoch_ms(doc.get("lastLike")),
        updated_at=_epoch_ms(doc.get("updatedAt")),
        last_interaction=_epoch_ms(doc.get("lastInteraction")),
    )


def label_to_dict(label: Label) -> Dict[str, Any]:
    """Convert a Label to its stored shape, including the flat projection."""
    aggregate = project(label.ledger)
    return {
        "name": label.name,
        "crispness": label.crispness,
        "likeHistory": [record_to_dict(r) for r in label.ledger.records],
        "likes": aggregate.count,
        "likedBy": list(aggregate.active_user_ids),
        "lastLike": label.last_like,
        "updatedAt": label.updated_at,
        "lastInteraction": label.last_interaction,
    }


def row_to_answer(doc: Dict[str, Any]) -> Answer:
    """Convert a stored answer to an Answer."""
    return Answer(
        id=AnswerId(str(doc["id"])),
        text=doc.get("text", ""),
        author_id=UserId(_user_id(doc) or ""),
        username=doc.get("username"),
        labels=[row_to_label(t) for t in doc.get("totems", [])],
        created_at=_epoch_ms(doc.get("createdAt")) or 0,
        updated_at=_epoch_ms(doc.get("updatedAt")),
        last_interaction=_epoch_ms(doc.get("lastInteraction")),
    )


def answer_to_dict(answer: Answer) -> Dict[str, Any]:
    """Convert an Answer to its stored shape."""
    return {
        "id": answer.id,
        "text": answer.text,
        "userId": answer.author_id,
        "username": answer.username,
        "totems": [label_to_dict(label) for label in answer.labels],
        "createdAt": answer.created_at,
        "updatedAt": answer.updated_at,
        "lastInteraction": answer.last_interaction,
    }


def row_to_content_item(item_id: str, doc: Dict[str, Any]) -> ContentItem:
    """Convert a stored document to a ContentItem.

    Args:
        item_id: Document ID (the row key, authoritative over any stored id)
        doc: Document body

    Returns:
        ContentItem domain model
    """
    return ContentItem(
        id=ContentItemId(item_id),
        question=doc.get("question", ""),
        answers=[row_to_answer(a) for a in doc.get("answers", [])],
        author_id=_user_id(doc),
        created_at=_epoch_ms(doc.get("createdAt")) or 0,
        updated_at=_epoch_ms(doc.get("updatedAt")) or 0,
        last_interaction=_epoch_ms(doc.get("lastInteraction")),
    )


def content_item_to_dict(item: ContentItem) -> Dict[str, Any]:
    """Convert a ContentItem to its stored document."""
    return {
        "id": item.id,
        "question": item.question,
        "answers": [answer_to_dict(a) for a in item.answers],
        "userId": item.author_id,
        "createdAt": item.created_at,
        "updatedAt": item.updated_at,
        "lastInteraction": item.last_interaction,
    }


def row_to_quota(row: Dict[str, Any]) -> QuotaCounter:
    """Convert database row to QuotaCounter domain model."""
    return QuotaCounter(
        user_id=UserId(row["user_id"]),
        remaining=max(0, row["remaining"]),
        reset_at=row["reset_at"],
        tier=MembershipTier(row.get("tier") or MembershipTier.FREE.value),
    )


def quota_to_dict(counter: QuotaCounter) -> Dict[str, Any]:
    """Convert QuotaCounter domain model to database dict."""
    return {
        "user_id": counter.user_id,
        "remaining": counter.remaining,
        "reset_at": counter.reset_at,
        "tier": counter.tier.value,
    }
