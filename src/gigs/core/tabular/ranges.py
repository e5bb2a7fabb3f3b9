# src/gigs/core/tabular/ranges.py
"""Integer list, range and step notation used in code columns.

Example cells:

    16099                       -> 16099
    16362-16398 +2              -> 16362, 16364, ..., 16398
    16001-16003; 16002          -> 16001, 16002, 16003, 16002

Elements are expanded in declaration order. There is no sorting and no
deduplication across elements.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from gigs.contracts.errors import FormatError
from gigs.core.tabular.tokenizer import split_list, trim

RANGE_SEPARATOR = "-"
STEP_PREFIX = "+"


def _parse_int(text: str, element: str) -> int:
    try:
        return int(trim(text))
    except ValueError:
        raise FormatError(f"Invalid integer range element: {element!r}") from None


@dataclass(frozen=True)
class RangeSpec:
    """One list element: ``lower-upper +step``, or a single value when lower == upper."""

    lower: int
    upper: int
    step: int = 1

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise FormatError(f"Range lower bound {self.lower} exceeds upper bound {self.upper}")
        if self.step < 1:
            raise FormatError(f"Range step must be at least 1, got {self.step}")

    def __iter__(self) -> Iterator[int]:
        # A trailing partial step is truncated at upper.
        return iter(range(self.lower, self.upper + 1, self.step))

    def __len__(self) -> int:
        return (self.upper - self.lower) // self.step + 1


def parse_range(element: str) -> RangeSpec:
    """Parse a single list element.

    A hyphen at position 0 is a sign, not a range separator.

    Raises:
        FormatError: If the element is not an integer or a valid range
    """
    element = trim(element)
    upper_at = element.find(RANGE_SEPARATOR)
    if upper_at <= 0:
        value = _parse_int(element, element)
        return RangeSpec(value, value)

    lower = _parse_int(element[:upper_at], element)
    step_at = element.find(STEP_PREFIX, upper_at)
    if step_at < 0:
        step_at = len(element)
        step = 1
    else:
        step = _parse_int(element[step_at + 1 :], element)
    upper = _parse_int(element[upper_at + 1 : step_at], element)
    return RangeSpec(lower, upper, step)


def expand(value: Any) -> list[int]:
    """Return the integers denoted by a cell value.

    Args:
        value: A list string such as ``"16261-16299; 16070-16089; 16099"``,
            an already-typed integer, a sequence of integers (a regrouped
            code cell), or None

    Returns:
        The integers in declaration order; empty for None
    """
    if value is None:
        return []
    if isinstance(value, bool):
        raise FormatError(f"Not an integer list: {value!r}")
    if isinstance(value, int):
        return [value]
    if isinstance(value, list | tuple):
        return [int(v) for v in value]
    if not isinstance(value, str):
        raise FormatError(f"Not an integer list: {value!r}")

    codes: list[int] = []
    for element in split_list(value):
        codes.extend(parse_range(element))
    return codes
