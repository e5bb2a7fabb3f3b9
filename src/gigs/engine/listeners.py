# src/gigs/engine/listeners.py
"""Listeners receiving test lifecycle events.

The orchestrator notifies every listener, in registration order, of:

    starting  - before the test body runs
    succeeded - the body returned normally
    failed    - the body raised (with the failure and configuration tip)
    skipped   - a required factory or authority code is unsupported
    finished  - always last, with the final result

Listener errors are logged by the orchestrator and otherwise ignored.
"""

from dataclasses import dataclass

import structlog

from gigs.contracts.enums import ConfigurationKey, ExecutionState
from gigs.contracts.results import TestEvent, TestResult


class TestListener:
    """Base class for listeners. Override the notifications of interest."""

    __test__ = False  # not a pytest test class

    # These are intentionally empty - optional hooks for subclasses to override

    def starting(self, event: TestEvent) -> None:  # noqa: B027
        """Called before a test body executes."""

    def succeeded(self, event: TestEvent) -> None:  # noqa: B027
        """Called when a test body returned normally."""

    def failed(self, event: TestEvent, failure: BaseException) -> None:  # noqa: B027
        """Called when a test body raised.

        ``event.configuration_tip`` names the optional feature being checked
        when the failure happened, if any.
        """

    def skipped(self, event: TestEvent) -> None:  # noqa: B027
        """Called when a test could not run; ``event.reason`` says why."""

    def finished(self, event: TestEvent, result: TestResult) -> None:  # noqa: B027
        """Called last for every test, whatever its outcome."""


@dataclass(frozen=True)
class ResultEntry:
    """One line of a conformance report."""

    series: str
    method: str
    outcome: ExecutionState
    message: str
    configuration_tip: ConfigurationKey | None
    coverage: float

    @property
    def test_id(self) -> str:
        return f"{self.series}.{self.method}"

    def __str__(self) -> str:
        return f"{self.test_id}: {self.outcome.name}"


def coverage(options: dict[ConfigurationKey, bool]) -> float:
    """Fraction of checks performed, counting the mandatory part as one check.

    Each optional feature is one more check, performed only when enabled.
    """
    total = 1 + len(options)
    enabled = 1 + sum(1 for value in options.values() if value)
    return enabled / total


class ResultCollector(TestListener):
    """Keeps one ResultEntry per finished test, in completion order."""

    def __init__(self) -> None:
        self._entries: list[ResultEntry] = []

    @property
    def entries(self) -> list[ResultEntry]:
        return list(self._entries)

    def finished(self, event: TestEvent, result: TestResult) -> None:
        self._entries.append(
            ResultEntry(
                series=result.series,
                method=result.method,
                outcome=result.outcome,
                message=result.message,
                configuration_tip=result.configuration_tip,
                coverage=coverage(result.options),
            )
        )

    def by_outcome(self, outcome: ExecutionState) -> list[ResultEntry]:
        return [e for e in self._entries if e.outcome == outcome]


class LoggingListener(TestListener):
    """Logs lifecycle events through structlog."""

    def __init__(self) -> None:
        self._logger = structlog.get_logger()

    def starting(self, event: TestEvent) -> None:
        self._logger.debug("Test starting", test_id=event.test_id)

    def succeeded(self, event: TestEvent) -> None:
        self._logger.info("Test succeeded", test_id=event.test_id)

    def failed(self, event: TestEvent, failure: BaseException) -> None:
        tip = event.configuration_tip
        if tip is not None:
            self._logger.warning(
                "Test failed in optional check",
                test_id=event.test_id,
                error=str(failure),
                tip=f"Consider setting {tip.value} = false if this aspect is not supported",
            )
        else:
            self._logger.warning("Test failed", test_id=event.test_id, error=str(failure))

    def skipped(self, event: TestEvent) -> None:
        self._logger.info("Test skipped", test_id=event.test_id, reason=event.reason)
