# src/gigs/plugins/hookspecs.py
"""pluggy hook specifications for factory providers.

An implementation under test makes its factories discoverable by
registering a provider object (directly, or through the ``gigs.factories``
entry-point group) that implements these hooks.

Usage (implementing a provider):
    from gigs.plugins.hookspecs import hookimpl

    class MyProvider:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def gigs_get_factories(self, capability):
            if capability is Capability.DATUM_AUTHORITY_FACTORY:
                return [MyEpsgDatumFactory()]
            return []

Note: @hookspec defines the hook interface (done here).
      @hookimpl marks provider implementations of those hooks.
"""

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from gigs.contracts.enums import Capability

# Project name for pluggy
PROJECT_NAME = "gigs"

# Hook specification marker
hookspec = pluggy.HookspecMarker(PROJECT_NAME)

# Hook implementation marker (for providers to use)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class GigsFactorySpec:
    """Hook specifications for factory providers."""

    @hookspec
    def gigs_get_factories(self, capability: "Capability") -> list[Any]:  # type: ignore[empty-body]
        """Return factory instances implementing the given capability.

        Args:
            capability: The factory contract being looked up

        Returns:
            Factory instances (not classes), most preferred first.
            An empty list if this provider has none.
        """
