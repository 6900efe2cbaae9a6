"""Header row detection and month column mapping.

The DRE sheet is maintained by hand, so the month header can sit on any of the
first few rows and each month may be followed by an unlabeled index/percentage
column. This module finds the header row and title column, then binds every
month label to the column that holds its monetary values.

Both steps degrade to fixed positions instead of failing when the layout is
not recognized.
"""

from __future__ import annotations

from collections import Counter

from dre_extract.config import DEFAULT_THRESHOLDS, ExtractionThresholds, setup_logging
from dre_extract.extractor.months import TOTAL_KEY, classify_month
from dre_extract.extractor.types import Grid, HeaderLocation, MonthColumn
from dre_extract.utils.parsing import is_auxiliary_value

logger = setup_logging(__name__)

__all__ = [
    "count_month_hits",
    "find_first_month_col",
    "is_auxiliary_column",
    "locate_header",
    "map_month_columns",
]


def _cell(grid: Grid, row: int, col: int) -> str:
    """Return the cell at ``(row, col)`` or ``""`` when out of range."""
    if row < 0 or row >= len(grid):
        return ""
    cells = grid[row]
    return cells[col] if 0 <= col < len(cells) else ""


def count_month_hits(row: list[str]) -> int:
    """Count cells classified as a month (``"total"`` included)."""
    return sum(1 for cell in row if classify_month(cell) is not None)


# =============================================================================
# Header / Title Column
# =============================================================================


def locate_header(grid: Grid, thresholds: ExtractionThresholds = DEFAULT_THRESHOLDS) -> HeaderLocation:
    """Find the month header row and the account title column.

    Parameters
    ----------
    grid : Grid
        Parsed sheet.
    thresholds : ExtractionThresholds, optional
        Scan window, minimum month hits and fallback positions.

    Returns
    -------
    HeaderLocation
        The first row within the scan window with enough month labels. The
        title column is 1 when that row has a second cell, otherwise 0. When
        no row qualifies, the configured default positions are returned with
        ``detected=False``.
    """
    for idx, row in enumerate(grid[: thresholds.header_scan_rows]):
        hits = count_month_hits(row)
        if hits >= thresholds.header_min_month_hits:
            title_col = 1 if len(row) > 1 else 0
            logger.debug("Header row %d (%d month labels), title column %d", idx, hits, title_col)
            return HeaderLocation(header_row=idx, title_col=title_col)

    logger.warning(
        "No month header in first %d rows; falling back to row %d, title column %d",
        thresholds.header_scan_rows,
        thresholds.default_header_row,
        thresholds.default_title_col,
    )
    return HeaderLocation(
        header_row=thresholds.default_header_row,
        title_col=thresholds.default_title_col,
        detected=False,
    )


# =============================================================================
# Month Columns
# =============================================================================


def find_first_month_col(header: list[str]) -> int | None:
    """Return the index of the first month-classified cell, if any."""
    for idx, cell in enumerate(header):
        if classify_month(cell) is not None:
            return idx
    return None


def is_auxiliary_column(
    grid: Grid,
    header_row: int,
    col: int,
    thresholds: ExtractionThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """Decide whether ``col`` holds an index/percentage for the month before it.

    The column qualifies when its header cell is empty and the first cell
    below the header is a small number (``abs <= aux_column_max_abs``).
    """
    if _cell(grid, header_row, col) != "":
        return False
    below = _cell(grid, header_row + 1, col).strip()
    return is_auxiliary_value(below, thresholds.aux_column_max_abs)


def map_month_columns(
    grid: Grid,
    header_row: int,
    thresholds: ExtractionThresholds = DEFAULT_THRESHOLDS,
) -> list[MonthColumn]:
    """Bind month labels in the header row to their value columns.

    Parameters
    ----------
    grid : Grid
        Parsed sheet.
    header_row : int
        Index of the header row (may be out of range after a fallback).
    thresholds : ExtractionThresholds, optional
        Auxiliary-column magnitude and fallback start column.

    Returns
    -------
    list[MonthColumn]
        Months in left-to-right order with strictly increasing columns.
        ``"total"`` and unlabeled columns are skipped, as is the auxiliary
        column directly after a month. Repeated months are all kept.
    """
    header = grid[header_row] if 0 <= header_row < len(grid) else []

    start = find_first_month_col(header)
    if start is None:
        start = thresholds.default_first_month_col
        logger.debug("No month label in header row %d; starting at column %d", header_row, start)

    month_columns: list[MonthColumn] = []
    idx = start
    while idx < len(header):
        key = classify_month(header[idx])
        if key is None or key == TOTAL_KEY:
            idx += 1
            continue

        month_columns.append(MonthColumn(month=key, col=idx, raw=header[idx]))
        if is_auxiliary_column(grid, header_row, idx + 1, thresholds):
            idx += 1  # skip index/% column
        idx += 1

    counts = Counter(mc.month for mc in month_columns)
    duplicates = sorted(month for month, n in counts.items() if n > 1)
    if duplicates:
        logger.warning("Repeated month labels %s; later columns override earlier values", duplicates)

    logger.info("Mapped %d month columns: %s", len(month_columns), [mc.month for mc in month_columns])
    return month_columns
