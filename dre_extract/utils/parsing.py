"""Shared parsing utilities for pt-BR numbers and spreadsheet labels.

This module provides the text normalization and number parsing used by every
stage of the DRE extraction (month matching, account keys, cell values).
"""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import Any

logger = logging.getLogger(__name__)

ACCOUNT_KEY_MAX_LENGTH = 100

_PLACEHOLDERS = {"-", "–", "—"}
_CURRENCY_RE = re.compile(r"r\$\s*", re.IGNORECASE)
_FLOAT_PREFIX_RE = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)")


def normalize_text(value: Any) -> str:
    """Strip accents, lowercase, and trim a value for comparisons.

    ``None`` yields an empty string; any other object is converted with ``str``.
    """
    if value is None:
        return ""
    text = unicodedata.normalize("NFD", str(value))
    text = "".join(c for c in text if not unicodedata.combining(c))
    return text.lower().strip()


def normalize_account_key(title: Any) -> str:
    """Derive the lookup key for an account title or alias variant.

    Examples
    --------
    - "Receita Líquida (=)" -> "receita_liquida_"
    - "Lucro Operacional (EBIT)" -> "lucro_operacional_ebit"

    Parameters
    ----------
    title
        Raw title text from the title column, or an alias variant.

    Returns
    -------
    str
        Normalized text with whitespace runs replaced by underscores, the
        characters ``( ) = + -`` removed, truncated to 100 characters.
    """
    key = re.sub(r"\s+", "_", normalize_text(title))
    key = re.sub(r"[()=+\-]", "", key)
    return key[:ACCOUNT_KEY_MAX_LENGTH]


def parse_ptbr_number(raw: Any) -> float:
    """Parse a spreadsheet cell using pt-BR accounting conventions.

    pt-BR locale uses:
    - Comma (,) as decimal separator
    - Period (.) as thousands separator
    - ``R$`` currency prefix
    - Parentheses or a trailing minus for negatives

    Examples
    --------
    - "1.234,56" -> 1234.56
    - "R$ 1.234,56" -> 1234.56
    - "(1.234,56)" -> -1234.56
    - "1.234,56-" -> -1234.56
    - "12,5" -> 12.5
    - "-" -> 0.0

    Parameters
    ----------
    raw
        Cell content; ``None`` is accepted.

    Returns
    -------
    float
        Parsed value. Empty cells, placeholder dashes and unparseable text
        resolve to ``0.0`` instead of raising.
    """
    if raw is None:
        return 0.0

    cleaned = str(raw).strip()
    if not cleaned or cleaned in _PLACEHOLDERS:
        return 0.0

    cleaned = _CURRENCY_RE.sub("", cleaned)
    cleaned = re.sub(r"\s+", "", cleaned)

    is_negative = False
    if len(cleaned) >= 2 and cleaned.startswith("(") and cleaned.endswith(")"):
        is_negative = True
        cleaned = cleaned[1:-1]
    if cleaned.endswith("-"):
        is_negative = True
        cleaned = cleaned[:-1]

    cleaned = re.sub(r"[^\d.,\-]", "", cleaned)

    if "," in cleaned and "." in cleaned:
        cleaned = cleaned.replace(".", "").replace(",", ".", 1)
    elif "," in cleaned:
        cleaned = cleaned.replace(",", ".", 1)

    # Leading numeric prefix only, so "12.5.3" reads as 12.5
    match = _FLOAT_PREFIX_RE.match(cleaned)
    if match is None:
        logger.debug("Could not parse number: %r", raw)
        return 0.0

    value = float(match.group(0))
    return -value if is_negative else value


def is_auxiliary_value(raw: Any, max_abs: float) -> bool:
    """Return True when a cell looks like an index or percentage, not money.

    Parameters
    ----------
    raw
        Cell content below an unlabeled column header.
    max_abs
        Largest magnitude still considered a ratio.

    Returns
    -------
    bool
        ``True`` if ``abs(parse_ptbr_number(raw)) <= max_abs``. Blank and
        unparseable cells parse to zero and therefore qualify.
    """
    return abs(parse_ptbr_number(raw)) <= max_abs
