# src/gigs/core/tabular/loader.py
"""Dataset table loading and cursor-based row access.

Usage:
    table = load_table(path, (int, str, str, float))
    while table.advance():
        code = table.get_int(0)
        aliases = table.get_strings(2)
"""

import math
import os
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from gigs.contracts.enums import Series
from gigs.contracts.errors import ConfigurationError, FormatError
from gigs.core.tabular.ranges import expand
from gigs.core.tabular.tokenizer import Row, parse_row, split_list, trim

if TYPE_CHECKING:
    from gigs.core.config import GigsSettings

COMMENT_PREFIX = "#"

# Environment variable naming the dataset root when settings leave it unset.
DATA_ENV_VAR = "GIGS_DATA"


class Table:
    """Rows of one dataset file plus a cursor.

    The cursor is -1 before the first row, a valid index while iterating,
    and ``len(table)`` once exhausted.
    """

    def __init__(self, rows: Sequence[Row], source: Path | None = None) -> None:
        self.rows: list[Row] = list(rows)
        self.source = source
        self._cursor = -1

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self.rows)

    def advance(self) -> bool:
        """Move to the next row. Returns False once there are no more rows."""
        if self._cursor < len(self.rows):
            self._cursor += 1
        return self._cursor < len(self.rows)

    def reset(self) -> None:
        """Move the cursor back before the first row."""
        self._cursor = -1

    def current(self) -> Row:
        """Return the active row.

        Raises:
            LookupError: If there is no active row
        """
        if 0 <= self._cursor < len(self.rows):
            return self.rows[self._cursor]
        raise LookupError("No active row.")

    def _value(self, column: int) -> Any:
        return self.current()[column]

    def get_string(self, column: int) -> str | None:
        value = self._value(column)
        if value is not None and not isinstance(value, str):
            raise TypeError(f"Column {column} is not a string: {value!r}")
        return value

    def get_strings(self, column: int) -> list[str]:
        """Return a semicolon-delimited cell as a list (empty when absent)."""
        return split_list(self.get_string(column))

    def get_int_optional(self, column: int) -> int | None:
        value = self._value(column)
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            raise TypeError(f"Column {column} is not an integer: {value!r}")
        return value

    def get_int(self, column: int) -> int:
        value = self.get_int_optional(column)
        if value is None:
            raise ValueError(f"No value in column {column}.")
        return value

    def get_ints(self, column: int) -> list[int]:
        """Return an integer cell, list/range cell or regrouped code array as integers."""
        return expand(self._value(column))

    def get_double(self, column: int) -> float:
        """Return a floating point cell, NaN when absent."""
        value = self._value(column)
        if value is None:
            return math.nan
        if not isinstance(value, float):
            raise TypeError(f"Column {column} is not a double: {value!r}")
        return value

    def get_boolean(self, column: int) -> bool:
        value = self._value(column)
        if not isinstance(value, bool):
            raise TypeError(f"Column {column} is not a boolean: {value!r}")
        return value

    def dependencies(self, column: int) -> set[str]:
        """Collect string values of a column from the next row to the end.

        Used to find the names of objects a test depends on. Absent
        values are ignored. The cursor position is not modified.
        """
        found: set[str] = set()
        for row in self.rows[self._cursor + 1 :]:
            value = row[column]
            if value is not None:
                found.add(value)
        return found

    def __repr__(self) -> str:
        if 0 <= self._cursor < len(self.rows):
            cells = ", ".join(str(v) for v in self.rows[self._cursor])
            return f"Table[{self._cursor}: {cells}]"
        return "Table[no active row]"


def load_table(path: Path, column_types: Sequence[type]) -> Table:
    """Load a dataset file.

    Blank lines and lines whose first non-space character is ``#`` are
    skipped. Every other line becomes one row.

    Args:
        path: Dataset file (UTF-8)
        column_types: Type of each column, see parse_row

    Returns:
        Table positioned before its first row

    Raises:
        FormatError: If a line cannot be parsed (annotated with its line number)
        OSError: If the file cannot be read
    """
    rows: list[Row] = []
    with path.open("r", encoding="utf-8") as handle:
        for line_number, raw in enumerate(handle, start=1):
            line = trim(raw.rstrip("\r\n"))
            if not line.strip() or line.startswith(COMMENT_PREFIX):
                continue
            try:
                rows.append(parse_row(line, column_types))
            except FormatError as e:
                raise FormatError.at(e, line_number, line) from e
    return Table(rows, source=path)


class DatasetLocator:
    """Resolve dataset file names against the configured dataset root.

    Files live in ``<root>/GIGSTestDatasetFiles/<series directory>/ASCII/``.
    """

    def __init__(self, data_root: Path | str | None = None) -> None:
        if data_root is None:
            data_root = os.environ.get(DATA_ENV_VAR) or None
        self._root = Path(data_root) if data_root is not None else None

    @property
    def root(self) -> Path:
        if self._root is None:
            raise ConfigurationError(
                f"The {DATA_ENV_VAR} environment variable (or the data_root setting) "
                "must be set to the root directory of GIGSTestDataset."
            )
        return self._root

    def path(self, series: Series, file_name: str) -> Path:
        return self.root / "GIGSTestDatasetFiles" / series.directory / "ASCII" / file_name

    def load(self, series: Series, file_name: str, column_types: Sequence[type]) -> Table:
        """Locate and load a dataset file of the given series."""
        return load_table(self.path(series, file_name), column_types)

    @classmethod
    def from_settings(cls, settings: "GigsSettings") -> "DatasetLocator":
        """Use the settings' data root, falling back to the environment."""
        return cls(settings.data_root)
