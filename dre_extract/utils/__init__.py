"""Shared utility functions for dre_extract package."""

from dre_extract.utils.parsing import (
    ACCOUNT_KEY_MAX_LENGTH,
    is_auxiliary_value,
    normalize_account_key,
    normalize_text,
    parse_ptbr_number,
)

__all__ = [
    "ACCOUNT_KEY_MAX_LENGTH",
    "is_auxiliary_value",
    "normalize_account_key",
    "normalize_text",
    "parse_ptbr_number",
]
