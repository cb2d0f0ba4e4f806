"""Strongly typed identifiers for totem domain entities.

Content and user IDs are opaque strings handed to us by the document store
and the identity provider, so they are wrapped with NewType rather than
parsed.
"""

from typing import NewType

ContentItemId = NewType("ContentItemId", str)
AnswerId = NewType("AnswerId", str)
UserId = NewType("UserId", str)
