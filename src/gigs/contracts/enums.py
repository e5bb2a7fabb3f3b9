"""Status codes, capability tags and option keys used across subsystem boundaries."""

from enum import Enum


class Series(str, Enum):
    """GIGS dataset series.

    The value is the directory holding the series data below
    ``GIGSTestDatasetFiles/``. Uses (str, Enum) so the directory name
    can be joined into a path directly.
    """

    PREDEFINED = "GIGS 2200 Predefined Geodetic Data Objects test data"
    USER_DEFINED = "GIGS 3200 User-defined Geodetic Data Objects test data"

    @property
    def directory(self) -> str:
        return self.value


class Capability(Enum):
    """Factory contracts a conformance test can depend on.

    Each member carries whether its implementations are scoped to an
    authority (and therefore filtered by the target authority string at
    discovery time). Object factories have no authority concept.
    """

    CRS_AUTHORITY_FACTORY = ("crs_authority_factory", True)
    CS_AUTHORITY_FACTORY = ("cs_authority_factory", True)
    DATUM_AUTHORITY_FACTORY = ("datum_authority_factory", True)
    COORDINATE_OPERATION_AUTHORITY_FACTORY = ("coordinate_operation_authority_factory", True)
    CRS_FACTORY = ("crs_factory", False)
    CS_FACTORY = ("cs_factory", False)
    DATUM_FACTORY = ("datum_factory", False)
    COORDINATE_OPERATION_FACTORY = ("coordinate_operation_factory", False)
    MATH_TRANSFORM_FACTORY = ("math_transform_factory", False)

    def __init__(self, tag: str, authority_scoped: bool) -> None:
        self.tag = tag
        self.authority_scoped = authority_scoped

    @classmethod
    def from_tag(cls, tag: str) -> "Capability":
        """Look up a capability by its tag (e.g. ``"datum_authority_factory"``)."""
        for member in cls:
            if member.tag == tag:
                return member
        raise ValueError(f"Unknown capability: {tag!r}")


class ConfigurationKey(str, Enum):
    """Optional aspects of an implementation that a test may check.

    All keys are boolean flags, enabled unless configured otherwise.
    Values keep the names used in GIGS configuration files.
    """

    IS_STANDARD_IDENTIFIER_SUPPORTED = "isStandardIdentifierSupported"
    IS_STANDARD_NAME_SUPPORTED = "isStandardNameSupported"
    IS_STANDARD_ALIAS_SUPPORTED = "isStandardAliasSupported"
    IS_DEPENDENCY_IDENTIFICATION_SUPPORTED = "isDependencyIdentificationSupported"
    IS_DEPRECATED_OBJECT_CREATION_SUPPORTED = "isDeprecatedObjectCreationSupported"
    IS_FACTORY_PRESERVING_USER_VALUES = "isFactoryPreservingUserValues"

    @classmethod
    def parse(cls, name: str) -> "ConfigurationKey | None":
        """Return the key with the given configuration name, or None if unknown."""
        try:
            return cls(name)
        except ValueError:
            return None


class ExecutionState(Enum):
    """State of one test execution.

    Pending -> Running -> {Succeeded, Failed, Skipped} -> Finished.
    Finished is terminal. Derived in memory only, so plain Enum.
    """

    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"
    FINISHED = "finished"

    @property
    def is_outcome(self) -> bool:
        """Whether this state is one of the three test outcomes."""
        return self in (
            ExecutionState.SUCCEEDED,
            ExecutionState.FAILED,
            ExecutionState.SKIPPED,
        )


class FailureKind(Enum):
    """Why a failed test failed."""

    ASSERTION = "assertion"
    UNEXPECTED = "unexpected"
