"""Tabular views of an extracted DRE for analysis and charting."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd

from dre_extract.config import setup_logging

if TYPE_CHECKING:
    from dre_extract.extractor.types import DRESnapshot

logger = setup_logging(__name__)

__all__ = ["snapshot_to_frame", "snapshot_to_long_frame"]


def _unique_months(snapshot: DRESnapshot) -> list[str]:
    return list(dict.fromkeys(snapshot.months))


def snapshot_to_frame(snapshot: DRESnapshot, index: str = "name") -> pd.DataFrame:
    """Build a wide DataFrame: one row per account, one column per month.

    Parameters
    ----------
    snapshot
        Extraction result.
    index
        ``"name"`` to index by sheet title or ``"key"`` by normalized key.

    Returns
    -------
    pd.DataFrame
        Float values; months in sheet order with repeats collapsed. Empty
        snapshots give an empty frame with the month columns (if any).

    Raises
    ------
    ValueError
        If ``index`` is neither ``"name"`` nor ``"key"``.
    """
    if index not in {"name", "key"}:
        msg = f"index must be 'name' or 'key', got {index!r}"
        raise ValueError(msg)

    months = _unique_months(snapshot)
    records = [{m: row.value(m) for m in months} for row in snapshot.rows]
    labels = [getattr(row, index) for row in snapshot.rows]

    df = pd.DataFrame(records, index=pd.Index(labels, name=index), columns=months, dtype=float)
    logger.debug("Snapshot frame: %d rows, %d columns", len(df), len(df.columns))
    return df


def snapshot_to_long_frame(snapshot: DRESnapshot) -> pd.DataFrame:
    """Build a long DataFrame with ``name``, ``key``, ``month`` and ``value`` columns."""
    months = _unique_months(snapshot)
    records = [
        {"name": row.name, "key": row.key, "month": m, "value": row.value(m)}
        for row in snapshot.rows
        for m in months
    ]
    return pd.DataFrame(records, columns=["name", "key", "month", "value"])
