"""Dependency injection for the totem engine.

``PROVIDERS`` lists every provider base once. Concrete providers (config,
domain services, use cases) are used as they are; mockable components
(persistence) resolve to a production or in-memory implementation.
"""

from typing import Iterable, Type

from totem.util.di.application import ProdApplicationProvider
from totem.util.di.base import Component, ProviderBase
from totem.util.di.core import ProdConfigProvider
from totem.util.di.domain import ProdDomainProvider
from totem.util.di.infrastructure import PersistenceProvider, ProdPersistenceProvider
from totem.util.error import DependencyInjectionError

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
]


def mockable_components() -> set[str]:
    """Names of every component with swappable implementations."""
    return {base.component_name() for base in PROVIDERS if base.is_mockable()}


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Implementation class for a provider base.

    Args:
        base: Entry of ``PROVIDERS``
        use_mock: Pick the in-memory implementation of a mockable component

    Raises:
        DependencyInjectionError: If the component lacks that implementation
    """
    if not base.is_mockable():
        return base

    for impl in base.__subclasses__():
        if impl.__is_mock__ == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise DependencyInjectionError(
        f"No {kind} implementation for {base.component_name()}"
    )


def select_providers(mocked: Iterable[str] = ()) -> list[ProviderBase]:
    """Instantiate one provider per base, mocking the named components.

    Raises:
        DependencyInjectionError: If a name is not a mockable component
    """
    mocked = set(mocked)
    unknown = mocked - mockable_components()
    if unknown:
        raise DependencyInjectionError(f"Unknown components: {sorted(unknown)}")

    return [
        get_provider(base, use_mock=base.component_name() in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "mockable_components",
    "select_providers",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
