"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class DependencyInjectionError(UtilError):
    """Raised when the DI container cannot be assembled.

    For example when a component has no provider for the requested
    (production or mock) flavour.
    """

    pass
