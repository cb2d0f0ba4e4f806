"""Unit tests for provider selection."""

import pytest

from totem.util.di import (
    PROVIDERS,
    PersistenceProvider,
    ProdConfigProvider,
    get_provider,
    mockable_components,
    select_providers,
)
from totem.util.di.infrastructure import ProdPersistenceProvider
from totem.util.error import DependencyInjectionError
from tests.di import MockPersistenceProvider, build_test_container


class TestGetProvider:
    """Tests for choosing provider implementations."""

    def test_concrete_provider_is_used_as_is(self):
        """Providers without implementations are returned unchanged."""
        assert get_provider(ProdConfigProvider) is ProdConfigProvider

    def test_mockable_component_selects_by_flag(self):
        """Mockable components resolve to the production or mock subclass."""
        assert get_provider(PersistenceProvider) is ProdPersistenceProvider
        assert get_provider(PersistenceProvider, use_mock=True) is MockPersistenceProvider

    def test_unknown_component_is_rejected(self):
        """Unmocking a component that does not exist fails fast."""
        with pytest.raises(DependencyInjectionError, match="Unknown components"):
            build_test_container(unmock={"search"})  # type: ignore[arg-type]


class TestSelectProviders:
    """Tests for instantiating the provider set."""

    def test_production_set_has_one_provider_per_base(self):
        providers = select_providers()

        assert len(providers) == len(PROVIDERS)
        assert any(isinstance(p, ProdPersistenceProvider) for p in providers)

    def test_mocked_component_uses_in_memory_provider(self):
        providers = select_providers({"persistence"})

        assert any(isinstance(p, MockPersistenceProvider) for p in providers)
        assert not any(isinstance(p, ProdPersistenceProvider) for p in providers)

    def test_persistence_is_the_only_mockable_component(self):
        assert mockable_components() == {"persistence"}
