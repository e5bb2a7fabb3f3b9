# tests/conftest.py
"""Shared test fixtures and helpers.

Provides the dataset fixture directory and a minimal factory provider
for registering test factories in a FactoryScope.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/core/tabular/
"""

import os
from pathlib import Path
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

from gigs.contracts.enums import Capability
from gigs.plugins.hookspecs import hookimpl

# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def ellipsoid_file() -> Path:
    """The GIGS 2202 ellipsoid dataset (47 rows)."""
    return FIXTURES_DIR / "GIGS_lib_2202_Ellipsoid.txt"


class StaticProvider:
    """Factory provider returning fixed factories per capability.

    Usage:
        scope.register(StaticProvider({Capability.DATUM_FACTORY: [factory]}))
    """

    def __init__(self, factories: dict[Capability, list[Any]]) -> None:
        self._factories = factories

    @hookimpl
    def gigs_get_factories(self, capability: Capability) -> list[Any]:
        return list(self._factories.get(capability, []))


@pytest.fixture
def static_provider() -> type[StaticProvider]:
    """The StaticProvider class, for tests that build their own scope."""
    return StaticProvider
