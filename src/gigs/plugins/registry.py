# src/gigs/plugins/registry.py
"""Capability registry: the factories bound for one conformance run.

For every capability, the first candidate of the scope that passes the
authority filter is bound; other candidates are ignored. Lookups of
unbound capabilities return None and the caller decides whether that is
fatal (the orchestrator turns it into a skipped test).

Authority filter:
- Authority-scoped capabilities only accept factories whose declared
  authority mentions the target authority (title or alternate title).
- A factory that declares no authority is accepted.
- Object factories (not authority-scoped) are never filtered.
"""

import logging
from dataclasses import dataclass
from types import TracebackType
from typing import Any, Self

from gigs.contracts.enums import Capability
from gigs.contracts.results import Citation
from gigs.plugins.manager import FactoryScope
from gigs.plugins.protocols import AuthorityFactoryProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Binding:
    """Description of a bound factory, for reporting."""

    capability: Capability
    implementation: str
    authority: str | None


def declared_authority(candidate: Any) -> Citation | None:
    """Return the authority a candidate declares, or None."""
    # NOTE: Candidates come from arbitrary providers. This isinstance check is at
    # the DISCOVERY TRUST BOUNDARY; undeclared authority is a legitimate state.
    if isinstance(candidate, AuthorityFactoryProtocol):
        return candidate.authority
    return None


def accepts(capability: Capability, candidate: Any, authority: str) -> bool:
    """Whether a candidate may be bound for a capability under the target authority."""
    if not capability.authority_scoped:
        return True
    citation = declared_authority(candidate)
    if citation is None:
        return True
    return citation.mentions(authority)


def _implementation_name(candidate: Any) -> str:
    cls = type(candidate)
    return f"{cls.__module__}.{cls.__qualname__}"


class CapabilityRegistry:
    """Mapping from capability to at most one bound factory.

    Usage:
        with CapabilityRegistry.discover(scope, "EPSG") as registry:
            factory = registry.lookup(Capability.DATUM_AUTHORITY_FACTORY)

    The context manager clears the registry on exit, including on error,
    so that no factory outlives its run.
    """

    def __init__(self, authority: str) -> None:
        self.authority = authority
        self._bound: dict[Capability, Any] = {}

    @classmethod
    def discover(
        cls,
        scope: FactoryScope,
        authority: str,
        capabilities: tuple[Capability, ...] = tuple(Capability),
    ) -> "CapabilityRegistry":
        """Create a fresh registry from the candidates visible in a scope.

        Args:
            scope: Providers of the implementation under test
            authority: Target authority string (e.g. "EPSG")
            capabilities: Capabilities to resolve (default: all)

        Returns:
            New registry; calling discover again yields an independent one
        """
        registry = cls(authority)
        for capability in capabilities:
            for candidate in scope.candidates(capability):
                if accepts(capability, candidate, authority):
                    registry._bound[capability] = candidate
                    logger.debug(
                        "Bound %s to %s", capability.tag, _implementation_name(candidate)
                    )
                    break
                logger.info(
                    "Skipping %s candidate %s: authority is not %s",
                    capability.tag,
                    _implementation_name(candidate),
                    authority,
                )
            else:
                logger.info("No factory found for %s", capability.tag)
        return registry

    def lookup(self, capability: Capability) -> Any | None:
        """Return the factory bound to a capability, or None if unresolved."""
        return self._bound.get(capability)

    def __contains__(self, capability: object) -> bool:
        return capability in self._bound

    def __len__(self) -> int:
        return len(self._bound)

    def missing(self, capabilities: tuple[Capability, ...]) -> tuple[Capability, ...]:
        """Return the capabilities of the given tuple that are not bound."""
        return tuple(c for c in capabilities if c not in self._bound)

    def bindings(self) -> list[Binding]:
        """Describe the bound factories, in capability declaration order."""
        result: list[Binding] = []
        for capability in Capability:
            if capability not in self._bound:
                continue
            candidate = self._bound[capability]
            citation = declared_authority(candidate)
            result.append(
                Binding(
                    capability=capability,
                    implementation=_implementation_name(candidate),
                    authority=citation.title if citation is not None else None,
                )
            )
        return result

    def clear(self) -> None:
        """Release every bound factory."""
        self._bound.clear()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.clear()
