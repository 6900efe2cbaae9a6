"""Delimited text to grid conversion.

The spreadsheet endpoint returns CSV text. It is read into a list of string
rows without any type coercion: empty cells stay as ``""``, blank lines stay as
empty rows, and rows keep their own length.
"""

from __future__ import annotations

import csv
import io

from dre_extract.config import setup_logging
from dre_extract.extractor.types import Grid

logger = setup_logging(__name__)

__all__ = ["read_grid"]


def read_grid(text: str | bytes | None, delimiter: str = ",") -> Grid:
    """Parse delimited text into a grid of cell strings.

    Parameters
    ----------
    text
        Raw payload. Bytes are decoded as UTF-8 (a leading BOM is dropped).
    delimiter
        Field separator; the sheet export uses commas.

    Returns
    -------
    Grid
        Rows in source order. Quoted fields may contain delimiters and
        newlines.
    """
    if text is None:
        return []
    if isinstance(text, bytes):
        text = text.decode("utf-8-sig")
    elif text.startswith("\ufeff"):
        text = text[1:]

    if not text:
        return []

    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)
    grid = [list(row) for row in reader]

    logger.debug("Read grid: %d rows, max width %d", len(grid), max((len(r) for r in grid), default=0))
    return grid
