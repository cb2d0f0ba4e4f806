"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for all domain models.

    Models are frozen: every change goes through ``model_copy(update=...)``
    and yields a new instance, which lets a mutator run against a document
    without touching the copy that was read.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",  # Stored documents are mapped field by field
    )
