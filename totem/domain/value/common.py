"""Base class for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable value compared field by field.

    Derived summaries such as a label's flat like projection are value
    objects: they are recomputed wholesale, never edited in place.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")
