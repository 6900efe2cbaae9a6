"""Month header classification.

Header cells such as ``"Jan/25"``, ``"MARÇO"`` or ``"set-2025"`` are mapped to
one of twelve canonical three-letter pt-BR month keys. The literal ``"total"``
maps to the reserved :data:`TOTAL_KEY` so callers can skip yearly total columns.
"""

from __future__ import annotations

import re
from typing import Any

from dre_extract.utils.parsing import normalize_text

__all__ = ["MONTH_ALIASES", "MONTH_KEYS", "TOTAL_KEY", "classify_month", "is_month_key"]

TOTAL_KEY = "total"

# Optional year suffix: "jan/25", "jan-2025", "jan 25", "jan25"
_SUFFIX = r"(?:[/\-\s]?\d{2,4})?"

# Evaluation order matters: first match wins.
MONTH_ALIASES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(rf"^(?:jan|janeiro){_SUFFIX}$"), "jan"),
    (re.compile(rf"^(?:fev|fevereiro){_SUFFIX}$"), "fev"),
    (re.compile(rf"^(?:mar|marco){_SUFFIX}$"), "mar"),
    (re.compile(rf"^(?:abr|abril){_SUFFIX}$"), "abr"),
    (re.compile(rf"^(?:mai|maio){_SUFFIX}$"), "mai"),
    (re.compile(rf"^(?:jun|junho){_SUFFIX}$"), "jun"),
    (re.compile(rf"^(?:jul|julho){_SUFFIX}$"), "jul"),
    (re.compile(rf"^(?:ago|agosto){_SUFFIX}$"), "ago"),
    (re.compile(rf"^(?:set|setembro){_SUFFIX}$"), "set"),
    (re.compile(rf"^(?:out|outubro){_SUFFIX}$"), "out"),
    (re.compile(rf"^(?:nov|novembro){_SUFFIX}$"), "nov"),
    (re.compile(rf"^(?:dez|dezembro){_SUFFIX}$"), "dez"),
    (re.compile(r"^total$"), TOTAL_KEY),
)

MONTH_KEYS: tuple[str, ...] = tuple(key for _, key in MONTH_ALIASES if key != TOTAL_KEY)


def classify_month(cell: Any) -> str | None:
    """Return the canonical month key for a header cell.

    Parameters
    ----------
    cell
        Raw header cell; accents and case are ignored.

    Returns
    -------
    str | None
        One of :data:`MONTH_KEYS`, :data:`TOTAL_KEY`, or ``None`` when the
        cell is not a month label.
    """
    text = normalize_text(cell)
    if not text:
        return None
    for pattern, key in MONTH_ALIASES:
        if pattern.match(text):
            return key
    return None


def is_month_key(key: str | None) -> bool:
    """Check whether ``key`` is a real month (not ``None`` and not total)."""
    return key is not None and key != TOTAL_KEY
