# src/gigs/plugins/protocols.py
"""Type contracts for discovered factories.

Factories are duck-typed: any object can be returned by a provider.
An authority factory additionally exposes the authority it serves.
"""

from typing import Protocol, runtime_checkable

from gigs.contracts.results import Citation


@runtime_checkable
class AuthorityFactoryProtocol(Protocol):
    """A factory creating objects from codes of one authority.

    Example:
        class EpsgDatumFactory:
            authority = Citation("EPSG Geodetic Parameter Dataset", ("EPSG",))

            def create_ellipsoid(self, code: str) -> Ellipsoid: ...
    """

    @property
    def authority(self) -> Citation | None:
        """The authority this factory serves, or None if undeclared."""
        ...
