"""Configuration management for dre-extract.

This module centralizes file-system paths, environment variables, extraction
policy constants, and the JSON configuration loaders used by the DRE pipeline.

Configuration files
-------------------
* ``config.json``: spreadsheet source (endpoint, sheet, range) and extraction
  thresholds
* ``aliases.json``: semantic account keys and their textual variants

Environment variables
---------------------
``DRE_SOURCE_URL`` replaces the generated source URL entirely; ``DRE_SHEET_ID``,
``DRE_SHEET_NAME`` and ``DRE_RANGE`` override individual parts of it.
``DRE_HTTP_TIMEOUT`` sets the request timeout in seconds. ``LOGS_DIR`` overrides
the log directory, which is created eagerly on import.
"""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass, fields
from datetime import UTC, datetime
from pathlib import Path
from types import MappingProxyType
from typing import Any, cast
from urllib.parse import urlencode

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_DIR = Path(os.getenv("DRE_CONFIG_DIR", PROJECT_ROOT / "config"))
LOGS_DIR = Path(os.getenv("LOGS_DIR", PROJECT_ROOT / "logs"))

LOGS_DIR.mkdir(parents=True, exist_ok=True)

# Source overrides
DRE_SOURCE_URL = os.getenv("DRE_SOURCE_URL", "")
DRE_SHEET_ID = os.getenv("DRE_SHEET_ID", "")
DRE_SHEET_NAME = os.getenv("DRE_SHEET_NAME", "")
DRE_RANGE = os.getenv("DRE_RANGE", "")
DRE_HTTP_TIMEOUT = float(os.getenv("DRE_HTTP_TIMEOUT", "60"))


def setup_logging(name: str = "dre_extract") -> logging.Logger:
    """Configure a console+file logger if not already present.

    Parameters
    ----------
    name : str, optional
        Logger namespace; reused to avoid duplicate handlers.

    Returns
    -------
    logging.Logger
        Logger with INFO-level console handler and DEBUG-level file handler
        under ``LOGS_DIR``.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(logging.DEBUG)

        # Console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_format = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
        console_handler.setFormatter(console_format)
        logger.addHandler(console_handler)

        # File handler
        log_filename = f"{datetime.now(UTC).strftime('%Y-%m-%d')}_run.log"
        file_handler = logging.FileHandler(LOGS_DIR / log_filename)
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    return logger


def _load_config_file(filename: str) -> dict[str, Any]:
    """Load a JSON file from ``CONFIG_DIR``.

    Parameters
    ----------
    filename : str
        Config filename (e.g., ``"aliases.json"``).

    Returns
    -------
    dict[str, Any]
        Parsed JSON configuration.

    Raises
    ------
    FileNotFoundError
        If the file is missing.
    json.JSONDecodeError
        If the file exists but is not valid JSON.
    """
    config_path = CONFIG_DIR / filename
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with config_path.open(encoding="utf-8") as f:
        return cast("dict[str, Any]", json.load(f))


def get_config() -> dict[str, Any]:
    """Load the primary project configuration from ``config/config.json``."""
    return _load_config_file("config.json")


# =============================================================================
# Extraction Thresholds
# =============================================================================


@dataclass(frozen=True)
class ExtractionThresholds:
    """Heuristic policy constants for layout detection.

    Attributes
    ----------
    header_scan_rows : int
        How many leading grid rows are searched for the month header.
    header_min_month_hits : int
        Minimum number of month-classified cells for a row to be the header.
    aux_column_max_abs : float
        A value column next to a month is treated as an index/percentage
        column when its first data cell is at most this large in magnitude.
    default_header_row : int
        Header row used when detection fails.
    default_title_col : int
        Title column used when detection fails.
    default_first_month_col : int
        First month column used when the header row has no month cell.
    """

    header_scan_rows: int = 5
    header_min_month_hits: int = 3
    aux_column_max_abs: float = 5.0
    default_header_row: int = 1
    default_title_col: int = 1
    default_first_month_col: int = 2

    def __post_init__(self) -> None:
        """Reject negative or zero values that would disable detection."""
        if self.header_scan_rows < 1 or self.header_min_month_hits < 1:
            msg = "header_scan_rows and header_min_month_hits must be >= 1"
            raise ValueError(msg)
        if self.aux_column_max_abs < 0:
            msg = f"aux_column_max_abs must be >= 0, got {self.aux_column_max_abs}"
            raise ValueError(msg)
        positions = (self.default_header_row, self.default_title_col, self.default_first_month_col)
        if min(positions) < 0:
            msg = f"Default positions must be >= 0, got {positions}"
            raise ValueError(msg)


DEFAULT_THRESHOLDS = ExtractionThresholds()


def get_extraction_thresholds(config: dict[str, Any] | None = None) -> ExtractionThresholds:
    """Build thresholds from the ``extraction`` section of ``config.json``.

    Parameters
    ----------
    config : dict[str, Any], optional
        Pre-loaded configuration; loaded from disk when omitted.

    Returns
    -------
    ExtractionThresholds
        Defaults overlaid with any configured values. Unknown keys are ignored.
    """
    if config is None:
        config = get_config()

    overrides = config.get("extraction", {})
    known = {f.name for f in fields(ExtractionThresholds)}
    return ExtractionThresholds(**{k: v for k, v in overrides.items() if k in known})


# =============================================================================
# Account Aliases
# =============================================================================


def get_account_aliases() -> MappingProxyType[str, tuple[str, ...]]:
    """Load the semantic account alias table from ``aliases.json``.

    Returns
    -------
    MappingProxyType[str, tuple[str, ...]]
        Read-only mapping from canonical key (e.g. ``"ebitda"``) to the ordered
        textual variants that may label that line in the spreadsheet.
    """
    raw = _load_config_file("aliases.json")
    aliases = raw.get("aliases", {})
    return MappingProxyType({key: tuple(variants) for key, variants in aliases.items()})


# =============================================================================
# Source URL
# =============================================================================


def build_source_url(config: dict[str, Any] | None = None, cachebust: int | None = None) -> str:
    """Render the spreadsheet export URL.

    Parameters
    ----------
    config : dict[str, Any], optional
        Pre-loaded configuration; loaded from disk when omitted.
    cachebust : int, optional
        Millisecond timestamp appended to defeat intermediate caches; defaults
        to the current time.

    Returns
    -------
    str
        ``DRE_SOURCE_URL`` when set, otherwise the configured endpoint with
        ``id``, ``sheet``, ``range`` and ``cachebust`` query parameters.

    Raises
    ------
    ValueError
        If no endpoint is configured.
    """
    if DRE_SOURCE_URL:
        return DRE_SOURCE_URL

    if config is None:
        config = get_config()

    source = config.get("source", {})
    endpoint = source.get("endpoint")
    if not endpoint:
        msg = "No source endpoint configured (config.json 'source.endpoint' or DRE_SOURCE_URL)"
        raise ValueError(msg)

    if cachebust is None:
        cachebust = int(time.time() * 1000)

    params = {
        "id": DRE_SHEET_ID or source.get("sheet_id", ""),
        "sheet": DRE_SHEET_NAME or source.get("sheet_name", ""),
        "range": DRE_RANGE or source.get("range", "A1:Z999"),
        "cachebust": cachebust,
    }
    return f"{endpoint}?{urlencode(params)}"
