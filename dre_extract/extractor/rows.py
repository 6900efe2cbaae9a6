"""Account row extraction from a located DRE grid."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dre_extract.config import setup_logging
from dre_extract.extractor.types import AccountRow, Grid, HeaderLocation, MonthColumn
from dre_extract.utils.parsing import normalize_account_key, parse_ptbr_number

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = setup_logging(__name__)

__all__ = ["extract_account_rows", "has_month_values", "row_values"]


def _cell(row: list[str], col: int) -> str:
    return row[col] if 0 <= col < len(row) else ""


def has_month_values(row: list[str], month_columns: Sequence[MonthColumn]) -> bool:
    """Check whether any month cell of ``row`` holds non-blank text."""
    return any(_cell(row, mc.col).strip() for mc in month_columns)


def row_values(row: list[str], month_columns: Sequence[MonthColumn]) -> dict[str, float]:
    """Parse the month cells of a row.

    Repeated month keys are written in column order, so the rightmost
    occurrence wins.
    """
    values: dict[str, float] = {}
    for mc in month_columns:
        values[mc.month] = parse_ptbr_number(_cell(row, mc.col))
    return values


def extract_account_rows(
    grid: Grid,
    location: HeaderLocation,
    month_columns: Sequence[MonthColumn],
) -> list[AccountRow]:
    """Build account rows from every line below the header.

    Parameters
    ----------
    grid : Grid
        Parsed sheet.
    location : HeaderLocation
        Header row and title column.
    month_columns : Sequence[MonthColumn]
        Month-to-column bindings from :func:`map_month_columns`.

    Returns
    -------
    list[AccountRow]
        Rows in sheet order. Lines without a title, and section labels with
        no month values, are dropped.
    """
    accounts: list[AccountRow] = []
    skipped_sections = 0

    for row in grid[location.header_row + 1 :]:
        title = _cell(row, location.title_col).strip()
        if not title:
            continue

        if not has_month_values(row, month_columns):
            skipped_sections += 1
            continue

        accounts.append(
            AccountRow(
                name=title,
                key=normalize_account_key(title),
                values=row_values(row, month_columns),
            ),
        )

    logger.info("Extracted %d account rows (%d section labels skipped)", len(accounts), skipped_sections)
    return accounts
