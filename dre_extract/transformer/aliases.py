"""Semantic account lookup through textual aliases.

Consumers ask for a stable key such as ``"ebitda"`` or ``"lucro_liquido"``;
the sheet may label that line ``"EBITDA"``, ``"Lucro Líquido (=)"`` or
``"LUCRO LIQUIDO (+/-)"``. The alias table in ``config/aliases.json`` lists the
variants per key, and :class:`AliasResolver` maps them onto extracted rows.

Resolution order
----------------
For each variant, in table order:

1. exact match of the variant's normalized key against the row index;
2. otherwise the first row, in sheet order, whose key contains it.

The first variant that produces a hit wins.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from dre_extract.extractor.types import AccountRow
from dre_extract.utils.parsing import normalize_account_key

__all__ = ["AliasMatch", "AliasResolver", "build_index"]


@dataclass(frozen=True)
class AliasMatch:
    """How a semantic key was resolved."""

    row: AccountRow
    variant: str
    exact: bool


def build_index(rows: Iterable[AccountRow]) -> dict[str, AccountRow]:
    """Map normalized keys to rows; a later row with the same key replaces an earlier one."""
    return {row.key: row for row in rows}


class AliasResolver:
    """Resolve semantic account keys against one snapshot's rows.

    Parameters
    ----------
    rows
        Extracted account rows in sheet order.
    aliases
        Canonical key to ordered textual variants.
    """

    def __init__(self, rows: Iterable[AccountRow], aliases: Mapping[str, Iterable[str]]) -> None:
        self._rows: tuple[AccountRow, ...] = tuple(rows)
        self._index = build_index(self._rows)
        self._variants: dict[str, tuple[str, ...]] = {
            key: tuple(k for k in (normalize_account_key(v) for v in variants) if k)
            for key, variants in aliases.items()
        }

    @property
    def index(self) -> Mapping[str, AccountRow]:
        """Exact-match index, keyed by normalized title."""
        return self._index

    def variants(self, semantic_key: str) -> tuple[str, ...]:
        """Normalized variants for ``semantic_key`` (empty when unknown)."""
        return self._variants.get(semantic_key, ())

    def resolve(self, semantic_key: str) -> AliasMatch | None:
        """Find the row for ``semantic_key`` and report which branch matched."""
        for variant in self.variants(semantic_key):
            row = self._index.get(variant)
            if row is not None:
                return AliasMatch(row=row, variant=variant, exact=True)

            for candidate in self._rows:
                if variant in candidate.key:
                    return AliasMatch(row=candidate, variant=variant, exact=False)

        return None

    def find_row(self, semantic_key: str) -> AccountRow | None:
        """Return the row for ``semantic_key`` or ``None``."""
        match = self.resolve(semantic_key)
        return match.row if match is not None else None
