"""Value types exchanged between the registry, the orchestrator and listeners.

These are frozen dataclasses: an event or result never changes after it
has been handed to a listener.
"""

from dataclasses import dataclass, field

from gigs.contracts.enums import ConfigurationKey, ExecutionState, FailureKind


@dataclass(frozen=True)
class Citation:
    """Authority identity declared by an authority factory.

    ``title`` is the primary title (e.g. "EPSG Geodetic Parameter Dataset");
    ``alternate_titles`` are other names the authority is known by.
    """

    title: str | None
    alternate_titles: tuple[str, ...] = ()

    def mentions(self, authority: str) -> bool:
        """Whether the authority string occurs in the title or any alternate title.

        Case-sensitive substring match.
        """
        if self.title is not None and authority in self.title:
            return True
        return any(authority in title for title in self.alternate_titles)


@dataclass(frozen=True)
class TestEvent:
    """Notification sent to listeners about one test execution."""

    __test__ = False  # not a pytest test class

    series: str
    method: str
    configuration_tip: ConfigurationKey | None = None
    reason: str | None = None

    @property
    def test_id(self) -> str:
        return f"{self.series}.{self.method}"


@dataclass(frozen=True)
class TestResult:
    """Outcome of one test execution.

    This is the value a test invocation produces: the outcome plus the
    configuration tip that was set when the test failed (if any).
    """

    __test__ = False  # not a pytest test class

    series: str
    method: str
    outcome: ExecutionState
    configuration_tip: ConfigurationKey | None = None
    failure: BaseException | None = None
    failure_kind: FailureKind | None = None
    reason: str | None = None
    options: dict[ConfigurationKey, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.outcome.is_outcome:
            raise ValueError(f"{self.outcome} is not a test outcome")
        if (self.outcome == ExecutionState.FAILED) != (self.failure is not None):
            raise ValueError("failure must be given exactly when outcome is FAILED")

    @property
    def test_id(self) -> str:
        return f"{self.series}.{self.method}"

    @property
    def message(self) -> str:
        """Human-readable summary: the failure or skip message, else the outcome name."""
        if self.failure is not None and str(self.failure):
            return str(self.failure)
        if self.reason:
            return self.reason
        return self.outcome.value


@dataclass
class RunResult:
    """Summary of a conformance run."""

    results: list[TestResult] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.outcome == ExecutionState.SUCCEEDED)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.outcome == ExecutionState.FAILED)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if r.outcome == ExecutionState.SKIPPED)

    def __len__(self) -> int:
        return len(self.results)
