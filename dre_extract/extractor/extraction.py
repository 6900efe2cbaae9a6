"""Single DRE extraction pass: delimited text to snapshot.

Stages
------
1. :func:`read_grid` turns the payload into rows of cell strings.
2. :func:`locate_header` finds the month header and title column.
3. :func:`map_month_columns` binds months to value columns.
4. :func:`extract_account_rows` parses every account line.

The pass is synchronous and never raises on malformed content: bad cells
parse to zero and unknown layouts fall back to fixed positions.
"""

from __future__ import annotations

from dre_extract.config import DEFAULT_THRESHOLDS, ExtractionThresholds, setup_logging
from dre_extract.extractor.layout import locate_header, map_month_columns
from dre_extract.extractor.rows import extract_account_rows
from dre_extract.extractor.table_reader import read_grid
from dre_extract.extractor.types import DRESnapshot, Grid, HeaderLocation

logger = setup_logging(__name__)

__all__ = ["extract_dre", "extract_dre_grid"]


def extract_dre_grid(
    grid: Grid,
    thresholds: ExtractionThresholds = DEFAULT_THRESHOLDS,
    location: HeaderLocation | None = None,
) -> DRESnapshot:
    """Run layout detection and row extraction over a parsed grid.

    Parameters
    ----------
    grid : Grid
        Rows of cell strings.
    thresholds : ExtractionThresholds, optional
        Detection policy constants.
    location : HeaderLocation, optional
        Known header row and title column; skips detection when given.

    Returns
    -------
    DRESnapshot
        Rows, month columns and header location of this pass.
    """
    if location is None:
        location = locate_header(grid, thresholds)

    month_columns = map_month_columns(grid, location.header_row, thresholds)
    rows = extract_account_rows(grid, location, month_columns)

    return DRESnapshot(
        rows=tuple(rows),
        month_columns=tuple(month_columns),
        location=location,
    )


def extract_dre(
    text: str | bytes | None,
    thresholds: ExtractionThresholds = DEFAULT_THRESHOLDS,
    location: HeaderLocation | None = None,
) -> DRESnapshot:
    """Parse a DRE CSV payload into a snapshot.

    Parameters
    ----------
    text : str | bytes | None
        CSV export of the DRE sheet.
    thresholds : ExtractionThresholds, optional
        Detection policy constants.
    location : HeaderLocation, optional
        Known header row and title column.

    Returns
    -------
    DRESnapshot
        Extraction result; empty rows when nothing could be recognized.
    """
    grid = read_grid(text)
    logger.info("Extracting DRE from %d grid rows", len(grid))
    return extract_dre_grid(grid, thresholds, location)
