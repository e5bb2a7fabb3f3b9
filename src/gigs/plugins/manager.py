# src/gigs/plugins/manager.py
"""Factory scope: the set of providers visible to one conformance run.

Uses pluggy for hook-based provider registration. A scope plays the
role of the class path of the implementation under test: each run
builds (or is given) its own scope, and the capability registry
enumerates candidates from it.
"""

import logging
from typing import Any

import pluggy

from gigs.contracts.enums import Capability
from gigs.plugins.hookspecs import PROJECT_NAME, GigsFactorySpec

logger = logging.getLogger(__name__)

DEFAULT_ENTRY_POINT_GROUP = "gigs.factories"


class FactoryScope:
    """Enumerable collection of factory providers.

    Usage:
        scope = FactoryScope()
        scope.register(MyProvider())

        for factory in scope.candidates(Capability.DATUM_AUTHORITY_FACTORY):
            ...
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(GigsFactorySpec)

    @classmethod
    def from_entry_points(cls, group: str = DEFAULT_ENTRY_POINT_GROUP) -> "FactoryScope":
        """Create a scope holding every provider installed under an entry-point group."""
        scope = cls()
        count = scope.load_entry_points(group)
        logger.info("Loaded %d factory provider(s) from entry-point group %s", count, group)
        return scope

    def load_entry_points(self, group: str = DEFAULT_ENTRY_POINT_GROUP) -> int:
        """Register providers declared in an entry-point group.

        Returns:
            Number of providers loaded
        """
        return self._pm.load_setuptools_entrypoints(group)

    def register(self, provider: Any, name: str | None = None) -> None:
        """Register a provider object implementing the factory hooks.

        Raises:
            ValueError: If the provider (or name) is already registered
        """
        self._pm.register(provider, name=name)

    def unregister(self, provider: Any) -> None:
        self._pm.unregister(provider)

    @property
    def providers(self) -> list[Any]:
        """Registered providers, in registration order."""
        return [impl.plugin for impl in self._pm.hook.gigs_get_factories.get_hookimpls()]

    def candidates(self, capability: Capability) -> list[Any]:
        """Enumerate factories offered for a capability.

        Providers are consulted in registration order; within a provider
        the factories keep the order the provider returned them in.
        """
        # pluggy calls implementations last-registered-first
        results = self._pm.hook.gigs_get_factories(capability=capability)
        found: list[Any] = []
        for factories in reversed(results):
            found.extend(factories)
        return found
