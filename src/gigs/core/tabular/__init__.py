"""Tabular data ingestion for GIGS dataset files.

- tokenizer: one line -> one typed row
- ranges: list/range/step notation -> integers
- loader: file -> Table with a row cursor
- regroup: merge runs of templated rows
"""

from gigs.core.tabular.loader import DatasetLocator, Table, load_table
from gigs.core.tabular.ranges import RangeSpec, expand, parse_range
from gigs.core.tabular.regroup import regroup
from gigs.core.tabular.tokenizer import Row, parse_row, split_list, trim

__all__ = [
    "DatasetLocator",
    "RangeSpec",
    "Row",
    "Table",
    "expand",
    "load_table",
    "parse_range",
    "parse_row",
    "regroup",
    "split_list",
    "trim",
]
