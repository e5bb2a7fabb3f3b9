# src/gigs/engine/context.py
"""Test specifications and the per-invocation context handed to test bodies.

A test body is a callable taking a TestContext. It pulls the factories
it needs from the context, checks optional-feature flags, and marks
optional sections so that a failure inside them is reported with a
configuration tip:

    def test_wgs84(ctx: TestContext) -> None:
        factory = ctx.factory(Capability.DATUM_AUTHORITY_FACTORY)
        ellipsoid = factory.create_ellipsoid("7030")
        assert ellipsoid.semi_major_axis == 6378137
        with ctx.tip(ConfigurationKey.IS_STANDARD_NAME_SUPPORTED):
            assert ellipsoid.name == "WGS 84"
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from gigs.contracts.enums import Capability, ConfigurationKey
from gigs.contracts.errors import UnsupportedCapabilityError, UnsupportedCodeError, UnsupportedError


@dataclass(frozen=True)
class TestSpec:
    """One conformance check.

    ``series`` groups checks (usually the GIGS test number, e.g. "Test2202")
    and ``method`` names the check within the series.
    """

    __test__ = False  # not a pytest test class

    series: str
    method: str
    body: Callable[["TestContext"], None]
    requires: tuple[Capability, ...] = ()
    options: tuple[ConfigurationKey, ...] = ()

    @property
    def test_id(self) -> str:
        return f"{self.series}.{self.method}"


class TestContext:
    """What a running test can see: its factories, its flags and its tip.

    One context is created per invocation and discarded afterwards, so
    the configuration tip never leaks from one test to the next.
    """

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        spec: TestSpec,
        factories: dict[Capability, Any],
        options: dict[ConfigurationKey, bool],
    ) -> None:
        self.spec = spec
        self._factories = factories
        self._options = options
        self.configuration_tip: ConfigurationKey | None = None

    def factory(self, capability: Capability) -> Any:
        """Return the injected factory for a capability.

        Raises:
            UnsupportedCapabilityError: If the capability was not injected
        """
        try:
            return self._factories[capability]
        except KeyError:
            raise UnsupportedCapabilityError((capability,)) from None

    def is_enabled(self, key: ConfigurationKey) -> bool:
        """Whether an optional feature should be checked for this test."""
        return self._options.get(key, True)

    @property
    def options(self) -> dict[ConfigurationKey, bool]:
        return dict(self._options)

    @contextmanager
    def tip(self, key: ConfigurationKey) -> Iterator[None]:
        """Mark the enclosed assertions as checking an optional feature.

        On normal exit the previous tip is restored. If the block raises,
        the tip stays set so the failure report can name the flag to disable.
        """
        previous = self.configuration_tip
        self.configuration_tip = key
        yield
        self.configuration_tip = previous

    def verify_optional(self, key: ConfigurationKey, check: Callable[[], None]) -> bool:
        """Run ``check`` under ``tip(key)`` if the feature is enabled.

        Returns:
            True if the check ran, False if the feature is disabled
        """
        if not self.is_enabled(key):
            return False
        with self.tip(key):
            check()
        return True

    def skip(self, reason: str) -> None:
        """Abort this test with a Skipped outcome."""
        raise UnsupportedError(reason)

    def unsupported_code(self, kind: str, code: object) -> None:
        """Abort this test because the implementation does not know an authority code.

        Example message: ``Ellipsoid[7030] not supported.``
        """
        raise UnsupportedCodeError(kind, code)
