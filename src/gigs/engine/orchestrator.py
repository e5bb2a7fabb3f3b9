# src/gigs/engine/orchestrator.py
"""Orchestrator: conformance run lifecycle management.

Coordinates, for each test specification:
- Capability check against the registry (missing factory -> skipped)
- Context construction (factories, optional-feature flags)
- Body execution with failure isolation
- Listener notification (starting, then one outcome, then finished)

One failing test never prevents the next from running, and the
configuration tip of one test is never visible to the next.
"""

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

import structlog

from gigs.contracts.enums import ConfigurationKey, ExecutionState, FailureKind
from gigs.contracts.errors import UnsupportedCapabilityError, UnsupportedError
from gigs.contracts.results import RunResult, TestEvent, TestResult
from gigs.engine.configuration import ConfigurationMap
from gigs.engine.context import TestContext, TestSpec
from gigs.engine.listeners import TestListener
from gigs.plugins.manager import FactoryScope
from gigs.plugins.registry import CapabilityRegistry

if TYPE_CHECKING:
    from gigs.core.config import GigsSettings

logger = structlog.get_logger()

# Allowed moves within one execution; PENDING starts a fresh one.
_TRANSITIONS: dict[ExecutionState, frozenset[ExecutionState]] = {
    ExecutionState.PENDING: frozenset({ExecutionState.RUNNING}),
    ExecutionState.RUNNING: frozenset(
        {ExecutionState.SUCCEEDED, ExecutionState.FAILED, ExecutionState.SKIPPED}
    ),
    ExecutionState.SUCCEEDED: frozenset({ExecutionState.FINISHED}),
    ExecutionState.FAILED: frozenset({ExecutionState.FINISHED}),
    ExecutionState.SKIPPED: frozenset({ExecutionState.FINISHED}),
    ExecutionState.FINISHED: frozenset(),
}


class TestOrchestrator:
    """Runs test specifications against the factories of a registry.

    Usage:
        orchestrator = TestOrchestrator(configuration)
        with CapabilityRegistry.discover(scope, "EPSG") as registry:
            result = orchestrator.run(registry, specs, [ResultCollector()])
    """

    __test__ = False  # not a pytest test class

    def __init__(self, configuration: ConfigurationMap | None = None) -> None:
        self.configuration = configuration if configuration is not None else ConfigurationMap()
        self._executing: TestSpec | None = None
        self._context: TestContext | None = None
        self._state: ExecutionState | None = None

    @property
    def executing(self) -> TestSpec | None:
        """The specification currently running, None between tests."""
        return self._executing

    @property
    def state(self) -> ExecutionState | None:
        """State of the current or last execution, None before the first test."""
        return self._state

    @property
    def configuration_tip(self) -> ConfigurationKey | None:
        """Tip of the running test, None between tests."""
        if self._context is None:
            return None
        return self._context.configuration_tip

    def run(
        self,
        registry: CapabilityRegistry,
        specs: Iterable[TestSpec],
        listeners: Sequence[TestListener] = (),
    ) -> RunResult:
        """Execute every specification in order.

        Returns:
            RunResult with one TestResult per specification
        """
        run_result = RunResult()
        for spec in specs:
            run_result.results.append(self.run_one(registry, spec, listeners))
        logger.info(
            "Conformance run completed",
            tests=len(run_result),
            succeeded=run_result.succeeded,
            failed=run_result.failed,
            skipped=run_result.skipped,
        )
        return run_result

    def run_one(
        self,
        registry: CapabilityRegistry,
        spec: TestSpec,
        listeners: Sequence[TestListener] = (),
    ) -> TestResult:
        """Execute one specification and notify listeners.

        Assertion failures and unexpected errors both yield a FAILED result;
        UnsupportedError yields SKIPPED. Neither propagates to the caller.
        """
        flags = self.configuration.options_for(spec.test_id)
        reported = {key: flags[key] for key in spec.options}
        self._executing = spec
        self._state = ExecutionState.PENDING
        try:
            self._notify(listeners, "starting", TestEvent(spec.series, spec.method))
            self._advance(ExecutionState.RUNNING)
            result = self._execute(registry, spec, flags, reported)
            self._advance(result.outcome)
            event = TestEvent(
                spec.series,
                spec.method,
                configuration_tip=result.configuration_tip,
                reason=result.reason,
            )
            if result.outcome == ExecutionState.SUCCEEDED:
                self._notify(listeners, "succeeded", event)
            elif result.outcome == ExecutionState.FAILED:
                self._notify(listeners, "failed", event, result.failure)
            else:
                self._notify(listeners, "skipped", event)
            self._notify(listeners, "finished", event, result)
            self._advance(ExecutionState.FINISHED)
            return result
        finally:
            self._executing = None
            self._context = None

    def _advance(self, state: ExecutionState) -> None:
        current = self._state
        if current is None or state not in _TRANSITIONS[current]:
            raise RuntimeError(f"Illegal execution state change: {current} -> {state}")
        self._state = state

    def _execute(
        self,
        registry: CapabilityRegistry,
        spec: TestSpec,
        flags: dict[ConfigurationKey, bool],
        reported: dict[ConfigurationKey, bool],
    ) -> TestResult:
        missing = registry.missing(spec.requires)
        if missing:
            return TestResult(
                spec.series,
                spec.method,
                ExecutionState.SKIPPED,
                reason=str(UnsupportedCapabilityError(missing)),
                options=reported,
            )

        factories = {capability: registry.lookup(capability) for capability in spec.requires}
        context = TestContext(spec, factories, flags)
        self._context = context
        try:
            spec.body(context)
        except UnsupportedError as e:
            return TestResult(
                spec.series, spec.method, ExecutionState.SKIPPED, reason=str(e), options=reported
            )
        except AssertionError as e:
            return self._failure(spec, context, e, FailureKind.ASSERTION, reported)
        except Exception as e:
            logger.debug("Unexpected error in test body", test_id=spec.test_id, exc_info=True)
            return self._failure(spec, context, e, FailureKind.UNEXPECTED, reported)
        return TestResult(spec.series, spec.method, ExecutionState.SUCCEEDED, options=reported)

    def _failure(
        self,
        spec: TestSpec,
        context: TestContext,
        error: BaseException,
        kind: FailureKind,
        reported: dict[ConfigurationKey, bool],
    ) -> TestResult:
        return TestResult(
            spec.series,
            spec.method,
            ExecutionState.FAILED,
            configuration_tip=context.configuration_tip,
            failure=error,
            failure_kind=kind,
            options=reported,
        )

    def _notify(self, listeners: Sequence[TestListener], name: str, *args: object) -> None:
        """Deliver one notification to every listener.

        Logs but doesn't raise if a listener fails; the run must go on.
        """
        for listener in listeners:
            try:
                getattr(listener, name)(*args)
            except Exception as e:
                logger.warning(
                    "Test listener failed",
                    listener=type(listener).__name__,
                    notification=name,
                    error=str(e),
                )


def run_conformance(
    settings: "GigsSettings",
    specs: Iterable[TestSpec],
    listeners: Sequence[TestListener] = (),
    scope: FactoryScope | None = None,
) -> RunResult:
    """Discover factories, run the specifications, release the factories.

    Args:
        settings: Run settings (authority, entry-point group, option flags)
        specs: Test specifications, executed in order
        listeners: Notified of every test lifecycle event
        scope: Providers to use; defaults to the installed entry points

    Returns:
        RunResult with one TestResult per specification
    """
    if scope is None:
        scope = FactoryScope.from_entry_points(settings.entry_point_group)
    configuration = ConfigurationMap.from_settings(settings)
    orchestrator = TestOrchestrator(configuration)
    with CapabilityRegistry.discover(scope, settings.authority) as registry:
        logger.info("Factories discovered", authority=settings.authority, bound=len(registry))
        return orchestrator.run(registry, specs, listeners)
