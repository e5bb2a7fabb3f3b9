"""Shared contracts for cross-boundary data types.

Enums, errors and result types that cross subsystem boundaries are
defined here.

Import pattern:
    from gigs.contracts import Capability, FormatError, TestResult
"""

from gigs.contracts.enums import (
    Capability,
    ConfigurationKey,
    ExecutionState,
    FailureKind,
    Series,
)
from gigs.contracts.errors import (
    ConfigurationError,
    FormatError,
    UnsupportedCapabilityError,
    UnsupportedCodeError,
    UnsupportedError,
)
from gigs.contracts.results import (
    Citation,
    RunResult,
    TestEvent,
    TestResult,
)

__all__ = [
    # enums
    "Capability",
    "ConfigurationKey",
    "ExecutionState",
    "FailureKind",
    "Series",
    # errors
    "ConfigurationError",
    "FormatError",
    "UnsupportedCapabilityError",
    "UnsupportedCodeError",
    "UnsupportedError",
    # results
    "Citation",
    "RunResult",
    "TestEvent",
    "TestResult",
]
