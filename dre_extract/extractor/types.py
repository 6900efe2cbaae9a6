"""Extraction dataclasses and type definitions.

This module contains pure data structures with no business logic dependencies,
ensuring they can be imported without circular dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

__all__ = [
    "AccountRow",
    "DRESnapshot",
    "Grid",
    "HeaderLocation",
    "MonthColumn",
]

# Rows of raw cell strings, possibly ragged.
Grid = list[list[str]]


@dataclass(frozen=True)
class MonthColumn:
    """A month header bound to the grid column holding its values.

    Attributes
    ----------
        month: Canonical month key (never ``"total"``)
        col: Zero-based column index in the grid
        raw: Header text as it appeared in the sheet
    """

    month: str
    col: int
    raw: str = ""


@dataclass(frozen=True)
class HeaderLocation:
    """Position of the month header row and the account title column."""

    header_row: int
    title_col: int
    detected: bool = True  # False when fallback positions were used


@dataclass(frozen=True)
class AccountRow:
    """One account line of the DRE with its monthly values.

    Attributes
    ----------
        name: Title exactly as written in the sheet (trimmed)
        key: Normalized lookup key derived from ``name``
        values: Read-only mapping from month key to parsed value
    """

    name: str
    key: str
    values: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Freeze ``values`` so snapshots cannot be mutated by consumers."""
        if not isinstance(self.values, MappingProxyType):
            object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def value(self, month: str) -> float:
        """Return the value for ``month`` or ``0.0`` when the month is absent."""
        return float(self.values.get(month, 0.0))

    def to_dict(self) -> dict[str, object]:
        """Convert to a plain dictionary."""
        return {"name": self.name, "key": self.key, "values": dict(self.values)}


@dataclass(frozen=True)
class DRESnapshot:
    """Atomic result of one extraction pass.

    Every field is replaced together on the next fetch; nothing here is
    updated in place.
    """

    rows: tuple[AccountRow, ...] = ()
    month_columns: tuple[MonthColumn, ...] = ()
    location: HeaderLocation | None = None

    @classmethod
    def empty(cls) -> DRESnapshot:
        """Snapshot published after a failed fetch."""
        return cls()

    @property
    def months(self) -> tuple[str, ...]:
        """Discovered month keys in column order (duplicates kept)."""
        return tuple(mc.month for mc in self.month_columns)

    def is_empty(self) -> bool:
        """Check whether the snapshot holds no account rows."""
        return not self.rows
