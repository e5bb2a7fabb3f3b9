# src/gigs/engine/__init__.py
"""Conformance engine: runs test specifications against discovered factories.

This module provides the main entry points:
- run_conformance: discover, run, release in one call
- TestOrchestrator: per-test isolation and listener notification
- ConfigurationMap: optional-feature flags, global and per test
- TestSpec/TestContext: what a test is, and what it sees while running

Example:
    from gigs.engine import ResultCollector, TestSpec, run_conformance

    collector = ResultCollector()
    result = run_conformance(settings, specs, [collector])
"""

from gigs.engine.configuration import GLOBAL_SCOPE, ConfigurationMap
from gigs.engine.context import TestContext, TestSpec
from gigs.engine.listeners import (
    LoggingListener,
    ResultCollector,
    ResultEntry,
    TestListener,
    coverage,
)
from gigs.engine.orchestrator import TestOrchestrator, run_conformance

__all__ = [
    "GLOBAL_SCOPE",
    "ConfigurationMap",
    "LoggingListener",
    "ResultCollector",
    "ResultEntry",
    "TestContext",
    "TestListener",
    "TestOrchestrator",
    "TestSpec",
    "coverage",
    "run_conformance",
]
