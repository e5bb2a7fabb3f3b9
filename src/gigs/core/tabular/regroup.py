# src/gigs/core/tabular/regroup.py
"""Collapse runs of templated rows into one parameterized row.

Some datasets list near-identical objects that differ only by an index
in their name, for example "WGS 84 / UTM zone 1N", "WGS 84 / UTM zone 2N".
Checking them one by one would produce hundreds of identical checks, so
consecutive rows that share their constant columns and whose names only
differ in the part matched by a pattern are merged into a single row
whose code column holds every code of the run.
"""

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from gigs.core.tabular.loader import Table
from gigs.core.tabular.tokenizer import Row, trim


def _same(a: Any, b: Any) -> bool:
    """Value equality where None equals None and NaN equals NaN."""
    if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
        return True
    return bool(a == b)


@dataclass(frozen=True)
class _Fingerprint:
    """What two rows must share to be merged under one pattern."""

    constants: tuple[Any, ...]
    residual: tuple[str, ...]

    def matches(self, other: "_Fingerprint") -> bool:
        return (
            len(self.constants) == len(other.constants)
            and all(_same(a, b) for a, b in zip(self.constants, other.constants, strict=True))
            and self.residual == other.residual
        )


def _residual(name: str, pattern: re.Pattern[str]) -> tuple[str, ...]:
    """The parts of a name outside every match of the pattern."""
    parts = []
    previous = 0
    for match in pattern.finditer(name):
        parts.append(name[previous : match.start()])
        previous = match.end()
    parts.append(name[previous:])
    return tuple(parts)


def _fingerprint(
    row: Row,
    code_column: int,
    constant_columns: Sequence[int],
    name_column: int,
    pattern: re.Pattern[str],
) -> _Fingerprint | None:
    """Return the merge fingerprint of a row, or None if the row cannot be merged.

    A row is eligible when its code is a scalar integer (rows merged by
    an earlier pattern hold a list) and its name contains the pattern.
    """
    code = row[code_column]
    if not isinstance(code, int) or isinstance(code, bool):
        return None
    name = row[name_column]
    if not isinstance(name, str) or pattern.search(name) is None:
        return None
    return _Fingerprint(
        constants=tuple(row[c] for c in constant_columns),
        residual=_residual(name, pattern),
    )


def _merge(
    run: Sequence[Row],
    code_column: int,
    constant_columns: Sequence[int],
    name_column: int,
    pattern: re.Pattern[str],
) -> Row:
    first = run[0]
    merged: list[Any] = [None] * len(first)
    merged[code_column] = [row[code_column] for row in run]
    merged[name_column] = trim(pattern.sub("", first[name_column]))
    for column in constant_columns:
        merged[column] = first[column]
    return tuple(merged)


def regroup(
    table: Table,
    code_column: int,
    constant_columns: int | Sequence[int],
    name_column: int,
    *name_patterns: str | re.Pattern[str],
) -> None:
    """Merge consecutive templated rows in place.

    Patterns are applied one after the other, each scanning from the
    row after the cursor to the end of the table. A maximal run of two
    or more consecutive rows with equal constant columns and equal name
    residuals (the name split around the pattern) becomes one row:

    - code column: list of the codes of the run, in order
    - name column: the name with the pattern match removed, trimmed
    - constant columns: their shared values
    - every other column: None

    Rows merged by an earlier pattern are not eligible for later ones.
    The number of codes across the table is unchanged.

    Args:
        table: Table to modify
        code_column: Column holding integer codes
        constant_columns: Column(s) whose values must be equal across a run
        name_column: Column holding the templated name
        name_patterns: Regular expressions matching the variable part of names
    """
    if isinstance(constant_columns, int):
        constant_columns = (constant_columns,)
    rows = table.rows
    start = table.cursor + 1

    for raw_pattern in name_patterns:
        pattern = re.compile(raw_pattern) if isinstance(raw_pattern, str) else raw_pattern
        index = start
        while index < len(rows):
            key = _fingerprint(rows[index], code_column, constant_columns, name_column, pattern)
            if key is None:
                index += 1
                continue
            end = index + 1
            while end < len(rows):
                other = _fingerprint(rows[end], code_column, constant_columns, name_column, pattern)
                if other is None or not key.matches(other):
                    break
                end += 1
            if end - index >= 2:
                rows[index:end] = [
                    _merge(rows[index:end], code_column, constant_columns, name_column, pattern)
                ]
            index += 1
