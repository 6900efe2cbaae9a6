"""Extractor module for turning a DRE sheet export into account rows.

Submodules
----------
table_reader
    CSV payload to grid of cell strings.
months
    Month header classification (``"Jan/25"`` -> ``"jan"``).
layout
    Header row / title column detection and month column mapping.
rows
    Account row extraction below the header.
extraction
    The full pass, returning a :class:`DRESnapshot`.
types
    Frozen dataclasses shared by all stages.
"""

from dre_extract.extractor.extraction import extract_dre, extract_dre_grid
from dre_extract.extractor.layout import locate_header, map_month_columns
from dre_extract.extractor.months import MONTH_KEYS, TOTAL_KEY, classify_month
from dre_extract.extractor.rows import extract_account_rows
from dre_extract.extractor.table_reader import read_grid
from dre_extract.extractor.types import (
    AccountRow,
    DRESnapshot,
    Grid,
    HeaderLocation,
    MonthColumn,
)

__all__ = [
    # Types
    "AccountRow",
    "DRESnapshot",
    "Grid",
    "HeaderLocation",
    "MonthColumn",
    # Months
    "MONTH_KEYS",
    "TOTAL_KEY",
    "classify_month",
    # Stages
    "extract_account_rows",
    "locate_header",
    "map_month_columns",
    "read_grid",
    # Full pass
    "extract_dre",
    "extract_dre_grid",
]
