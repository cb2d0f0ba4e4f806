"""Domain layer errors.

Every domain error carries a stable ``code`` so callers can render a tagged
failure instead of crashing the request.
"""


class DomainError(Exception):
    """Base domain error."""

    code = "domain_error"


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    code = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class LabelNotFoundError(NotFoundError):
    """Raised when no answer in a content item carries the requested label."""

    code = "label_not_found"

    def __init__(self, item_id: str, label_name: str):
        self.item_id = item_id
        self.label_name = label_name
        super().__init__("label", f"{label_name!r} on item {item_id}")


class AlreadyInactiveError(DomainError):
    """Raised when unliking a label the user has no active endorsement on."""

    code = "already_inactive"

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User {user_id} has no active like to remove")


class NotLikedError(DomainError):
    """Raised when refreshing a label the user has not endorsed."""

    code = "not_liked"

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User {user_id} has not liked this label")


class QuotaExhaustedError(DomainError):
    """Raised when a user has no refreshes left for today."""

    code = "quota_exhausted"

    def __init__(self, user_id: str, remaining: int = 0):
        self.user_id = user_id
        self.remaining = remaining
        super().__init__(f"User {user_id} has no refreshes remaining today")


class UnauthenticatedError(DomainError):
    """Raised when an operation needs a user and none is signed in."""

    code = "unauthenticated"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)
