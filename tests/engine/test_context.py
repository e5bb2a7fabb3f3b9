# tests/engine/test_context.py
"""Tests for the per-invocation test context."""

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from gigs.engine.context import TestContext


def _noop(ctx: object) -> None:
    pass


def _context(factories: dict | None = None, options: dict | None = None) -> "TestContext":
    from gigs.engine.context import TestContext, TestSpec

    spec = TestSpec("Test2202", "testWGS84", _noop)
    return TestContext(spec, factories or {}, options or {})


class TestTestSpec:
    def test_test_id(self) -> None:
        from gigs.engine.context import TestSpec

        assert TestSpec("Test2202", "testWGS84", _noop).test_id == "Test2202.testWGS84"


class TestTestContext:
    """What a running test can do."""

    def test_factory_lookup(self) -> None:
        from gigs.contracts.enums import Capability

        factory = object()
        ctx = _context({Capability.DATUM_AUTHORITY_FACTORY: factory})
        assert ctx.factory(Capability.DATUM_AUTHORITY_FACTORY) is factory

    def test_missing_factory_is_unsupported(self) -> None:
        from gigs.contracts.enums import Capability
        from gigs.contracts.errors import UnsupportedCapabilityError

        ctx = _context()
        with pytest.raises(UnsupportedCapabilityError) as exc_info:
            ctx.factory(Capability.CRS_FACTORY)
        assert exc_info.value.capabilities == (Capability.CRS_FACTORY,)
        assert str(exc_info.value) == "Unsupported: missing factory (crs_factory)."

    def test_flags_default_to_enabled(self) -> None:
        from gigs.contracts.enums import ConfigurationKey

        ctx = _context(options={ConfigurationKey.IS_STANDARD_ALIAS_SUPPORTED: False})
        assert not ctx.is_enabled(ConfigurationKey.IS_STANDARD_ALIAS_SUPPORTED)
        assert ctx.is_enabled(ConfigurationKey.IS_STANDARD_NAME_SUPPORTED)

    def test_tip_restored_after_block(self) -> None:
        from gigs.contracts.enums import ConfigurationKey

        ctx = _context()
        with ctx.tip(ConfigurationKey.IS_STANDARD_NAME_SUPPORTED):
            assert ctx.configuration_tip == ConfigurationKey.IS_STANDARD_NAME_SUPPORTED
            with ctx.tip(ConfigurationKey.IS_STANDARD_ALIAS_SUPPORTED):
                assert ctx.configuration_tip == ConfigurationKey.IS_STANDARD_ALIAS_SUPPORTED
            assert ctx.configuration_tip == ConfigurationKey.IS_STANDARD_NAME_SUPPORTED
        assert ctx.configuration_tip is None

    def test_tip_kept_when_block_fails(self) -> None:
        from gigs.contracts.enums import ConfigurationKey

        ctx = _context()
        with pytest.raises(AssertionError):
            with ctx.tip(ConfigurationKey.IS_STANDARD_ALIAS_SUPPORTED):
                raise AssertionError("alias mismatch")
        assert ctx.configuration_tip == ConfigurationKey.IS_STANDARD_ALIAS_SUPPORTED

    def test_verify_optional_runs_enabled_check(self) -> None:
        from gigs.contracts.enums import ConfigurationKey

        calls = []
        ctx = _context()
        assert ctx.verify_optional(ConfigurationKey.IS_STANDARD_NAME_SUPPORTED, lambda: calls.append(1))
        assert calls == [1]
        assert ctx.configuration_tip is None

    def test_verify_optional_skips_disabled_check(self) -> None:
        from gigs.contracts.enums import ConfigurationKey

        calls = []
        key = ConfigurationKey.IS_STANDARD_NAME_SUPPORTED
        ctx = _context(options={key: False})
        assert not ctx.verify_optional(key, lambda: calls.append(1))
        assert calls == []

    def test_unsupported_code(self) -> None:
        from gigs.contracts.errors import UnsupportedCodeError

        ctx = _context()
        with pytest.raises(UnsupportedCodeError, match=r"^Ellipsoid\[7030\] not supported\.$"):
            ctx.unsupported_code("Ellipsoid", 7030)

    def test_unsupported_text_code_is_quoted(self) -> None:
        from gigs.contracts.errors import UnsupportedCodeError

        ctx = _context()
        with pytest.raises(UnsupportedCodeError, match=r'^Datum\["WGS 84"\] not supported\.$'):
            ctx.unsupported_code("Datum", "WGS 84")

    def test_skip(self) -> None:
        from gigs.contracts.errors import UnsupportedError

        ctx = _context()
        with pytest.raises(UnsupportedError, match="no geocentric CRS"):
            ctx.skip("no geocentric CRS")
