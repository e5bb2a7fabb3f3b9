# tests/plugins/test_factory_scope.py
"""Tests for FactoryScope provider registration."""

from typing import Any

import pytest


class TestFactoryScope:
    """Provider registration and candidate enumeration."""

    def test_empty_scope(self) -> None:
        from gigs.contracts.enums import Capability
        from gigs.plugins.manager import FactoryScope

        scope = FactoryScope()
        assert scope.providers == []
        assert scope.candidates(Capability.DATUM_FACTORY) == []

    def test_candidates_in_registration_order(self, static_provider: Any) -> None:
        from gigs.contracts.enums import Capability
        from gigs.plugins.manager import FactoryScope

        first, second, third = object(), object(), object()
        scope = FactoryScope()
        scope.register(static_provider({Capability.DATUM_FACTORY: [first, second]}))
        scope.register(static_provider({Capability.DATUM_FACTORY: [third]}))

        assert scope.candidates(Capability.DATUM_FACTORY) == [first, second, third]

    def test_candidates_per_capability(self, static_provider: Any) -> None:
        from gigs.contracts.enums import Capability
        from gigs.plugins.manager import FactoryScope

        crs, datum = object(), object()
        scope = FactoryScope()
        scope.register(
            static_provider({Capability.CRS_FACTORY: [crs], Capability.DATUM_FACTORY: [datum]})
        )

        assert scope.candidates(Capability.CRS_FACTORY) == [crs]
        assert scope.candidates(Capability.DATUM_FACTORY) == [datum]
        assert scope.candidates(Capability.CS_FACTORY) == []

    def test_providers_listed(self, static_provider: Any) -> None:
        from gigs.plugins.manager import FactoryScope

        a, b = static_provider({}), static_provider({})
        scope = FactoryScope()
        scope.register(a)
        scope.register(b)
        assert scope.providers == [a, b]

    def test_duplicate_registration_rejected(self, static_provider: Any) -> None:
        from gigs.plugins.manager import FactoryScope

        provider = static_provider({})
        scope = FactoryScope()
        scope.register(provider)
        with pytest.raises(ValueError):
            scope.register(provider)

    def test_unregister(self, static_provider: Any) -> None:
        from gigs.contracts.enums import Capability
        from gigs.plugins.manager import FactoryScope

        provider = static_provider({Capability.CRS_FACTORY: [object()]})
        scope = FactoryScope()
        scope.register(provider)
        scope.unregister(provider)
        assert scope.candidates(Capability.CRS_FACTORY) == []

    def test_scopes_are_independent(self, static_provider: Any) -> None:
        from gigs.contracts.enums import Capability
        from gigs.plugins.manager import FactoryScope

        one, other = FactoryScope(), FactoryScope()
        one.register(static_provider({Capability.CRS_FACTORY: [object()]}))
        assert other.candidates(Capability.CRS_FACTORY) == []

    def test_entry_point_group_without_providers(self) -> None:
        from gigs.plugins.manager import FactoryScope

        scope = FactoryScope.from_entry_points("gigs.tests.no-such-group")
        assert scope.providers == []
