# src/gigs/core/tabular/tokenizer.py
"""Row tokenizer for GIGS dataset lines.

A line holds tab-separated cells. A cell starting with a double quote
extends to the matching closing quote, so it may contain tabs; a doubled
quote inside a quoted cell stands for one literal quote.

Each cell is converted according to the declared column type:

    str   -> verbatim
    int   -> base-10 integer
    float -> decimal number with optional exponent, "NULL" (any case) -> NaN
    bool  -> "true" / "false" (any case)

Empty cells yield None.
"""

import math
import re
import unicodedata
from collections.abc import Sequence
from typing import Any

from gigs.contracts.errors import FormatError

COLUMN_SEPARATOR = "\t"
LIST_ELEMENT_SEPARATOR = ";"
QUOTE = '"'

# Character.isSpaceChar: space, line and paragraph separators. Tab is not one of them.
_SPACE_CATEGORIES = frozenset({"Zs", "Zl", "Zp"})

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")
_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

SUPPORTED_TYPES: tuple[type, ...] = (str, int, float, bool)

Row = tuple[Any, ...]


def _is_space(char: str) -> bool:
    return unicodedata.category(char) in _SPACE_CATEGORIES


def trim(text: str) -> str:
    """Remove leading and trailing Unicode space characters.

    Tabulations are kept because they are the column separator.
    """
    start, end = 0, len(text)
    while end > start and _is_space(text[end - 1]):
        end -= 1
    while start < end and _is_space(text[start]):
        start += 1
    return text[start:end]


def split_list(cell: str | None) -> list[str]:
    """Split a semicolon-delimited cell into trimmed elements.

    An absent cell is an empty list. Empty elements are kept.
    """
    if cell is None:
        return []
    return [trim(element) for element in cell.split(LIST_ELEMENT_SEPARATOR)]


def _scan_quoted(text: str) -> tuple[str, str | None]:
    """Read a quoted cell at the start of ``text``.

    Returns the unescaped cell content and the remainder after the
    column separator (None when the line ends with this cell).
    """
    parts: list[str] = []
    start = 1
    while True:
        close = text.find(QUOTE, start)
        if close < 0:
            raise FormatError("Unbalanced quote.")
        if text.startswith(QUOTE, close + 1):
            # Doubled quote: keep one, continue scanning.
            parts.append(text[start : close + 1])
            start = close + 2
            continue
        parts.append(text[start:close])
        break
    separator = text.find(COLUMN_SEPARATOR, close + 1)
    tail = text[close + 1 :] if separator < 0 else text[close + 1 : separator]
    if trim(tail):
        raise FormatError(f"Unexpected characters after closing quote: {tail!r}")
    rest = None if separator < 0 else text[separator + 1 :]
    return "".join(parts), rest


def _next_cell(text: str) -> tuple[str, str | None]:
    if text.startswith(QUOTE):
        return _scan_quoted(text)
    separator = text.find(COLUMN_SEPARATOR)
    if separator < 0:
        return text, None
    return text[:separator], text[separator + 1 :]


def convert(cell: str, column_type: type) -> Any:
    """Convert a non-empty, trimmed cell to the given column type."""
    # bool before int: bool is a subclass of int but the types are distinct columns
    if column_type is str:
        return cell
    if column_type is bool:
        lowered = cell.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        raise FormatError(f"Not a boolean: {cell!r}")
    if column_type is int:
        if not _INTEGER_PATTERN.fullmatch(cell):
            raise FormatError(f"Not an integer: {cell!r}")
        return int(cell)
    if column_type is float:
        if cell.upper() == "NULL":
            return math.nan
        if not _NUMBER_PATTERN.fullmatch(cell):
            raise FormatError(f"Not a number: {cell!r}")
        return float(cell)
    raise FormatError(f"Unsupported column type: {column_type!r}")


def parse_row(line: str, column_types: Sequence[type]) -> Row:
    """Parse one line into a row of ``len(column_types)`` typed values.

    Missing trailing cells and empty cells are None. Cells beyond the
    declared columns are ignored.

    Args:
        line: One physical line, without line terminator
        column_types: Type of each column (str, int, float or bool)

    Returns:
        Tuple of converted values, one per declared column

    Raises:
        FormatError: On an unbalanced quote, an unparsable cell or an
            unsupported column type
    """
    for column_type in column_types:
        if column_type not in SUPPORTED_TYPES:
            raise FormatError(f"Unsupported column type: {column_type!r}")

    row: list[Any] = [None] * len(column_types)
    rest: str | None = trim(line)
    for index, column_type in enumerate(column_types):
        if rest is None:
            break
        raw, rest = _next_cell(rest)
        cell = trim(raw)
        if cell:
            row[index] = convert(cell, column_type)
        if rest is not None:
            rest = trim(rest)
            if not rest:
                rest = None
    return tuple(row)


def format_cell(value: str) -> str:
    """Quote a string cell, doubling embedded quotes.

    Inverse of the quoted-cell reading done by parse_row.
    """
    return QUOTE + value.replace(QUOTE, QUOTE * 2) + QUOTE
