"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components that ship both a production and an in-memory provider
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Base for all DI providers with unified metadata.

    A provider class with subclasses is a mockable component: its
    subclasses are the production and mock implementations, told apart by
    ``__is_mock__``.

    Attributes:
        __mock_component__: Component name (for mockable components, None for concrete providers)
        __is_mock__: Whether this is a mock implementation
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

    @classmethod
    def is_mockable(cls) -> bool:
        """Whether implementations of this provider can be swapped."""
        return bool(cls.__subclasses__())

    @classmethod
    def component_name(cls) -> str:
        """Name used for this provider in unmock sets and error messages."""
        return cls.__mock_component__ or cls.__name__
