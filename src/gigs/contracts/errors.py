"""Error taxonomy for dataset ingestion and conformance runs.

Ingestion:
- FormatError: malformed tabular input, attributable to one line
- ConfigurationError: dataset location cannot be resolved
- OSError (builtin): dataset file unreadable

Orchestration:
- UnsupportedError and subclasses: cause a Skipped outcome, never a failure
"""

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gigs.contracts.enums import Capability


class FormatError(ValueError):
    """Raised when a dataset line cannot be parsed.

    ``line_number`` (1-based) and ``line`` are set when the error is
    raised while loading a file; they are None when a single row is
    parsed in isolation.
    """

    def __init__(
        self,
        reason: str,
        *,
        line_number: int | None = None,
        line: str | None = None,
    ) -> None:
        self.reason = reason
        self.line_number = line_number
        self.line = line
        if line_number is None:
            super().__init__(reason)
        else:
            super().__init__(f"{reason} (line {line_number}: {line!r})")

    @classmethod
    def at(cls, error: "FormatError", line_number: int, line: str) -> "FormatError":
        """Return a copy of ``error`` annotated with its source line."""
        return cls(error.reason, line_number=line_number, line=line)


class ConfigurationError(Exception):
    """Raised when external configuration needed to locate datasets is missing or invalid."""


class UnsupportedError(Exception):
    """Base for conditions that skip a test instead of failing it."""


class UnsupportedCapabilityError(UnsupportedError):
    """A test requires capabilities that no discovered factory provides."""

    def __init__(self, capabilities: "Iterable[Capability]") -> None:
        self.capabilities = tuple(capabilities)
        names = ", ".join(c.tag for c in self.capabilities)
        super().__init__(f"Unsupported: missing factory ({names}).")


class UnsupportedCodeError(UnsupportedError):
    """The implementation under test does not know an authority code."""

    def __init__(self, kind: str, code: object) -> None:
        self.kind = kind
        self.code = code
        shown = str(code) if isinstance(code, int | float) else f'"{code}"'
        super().__init__(f"{kind}[{shown}] not supported.")
