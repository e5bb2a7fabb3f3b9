"""Factory discovery: providers via pluggy, bound per run in a CapabilityRegistry.

- Hookspecs: pluggy hook definitions for factory providers
- Manager: FactoryScope, the providers visible to one run
- Protocols: type contracts for discovered factories
- Registry: authority-filtered capability bindings
"""

from gigs.plugins.hookspecs import hookimpl, hookspec
from gigs.plugins.manager import DEFAULT_ENTRY_POINT_GROUP, FactoryScope
from gigs.plugins.protocols import AuthorityFactoryProtocol
from gigs.plugins.registry import Binding, CapabilityRegistry

__all__ = [
    "DEFAULT_ENTRY_POINT_GROUP",
    "AuthorityFactoryProtocol",
    "Binding",
    "CapabilityRegistry",
    "FactoryScope",
    "hookimpl",
    "hookspec",
]
