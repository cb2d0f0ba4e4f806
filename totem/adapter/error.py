"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    code = "adapter_error"


class ConcurrentModificationError(AdapterError):
    """A document changed between read and write inside a transaction.

    Transient: callers retry with backoff before surfacing it.
    """

    code = "concurrent_modification"

    def __init__(self, resource: str, identifier: str, attempts: int = 1):
        self.resource = resource
        self.identifier = identifier
        self.attempts = attempts
        super().__init__(
            f"{resource} {identifier} was modified concurrently "
            f"(after {attempts} attempt{'s' if attempts != 1 else ''})"
        )
