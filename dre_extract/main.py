#!/usr/bin/env python3
"""DRE report - fetch the sheet export, extract it and print monthly KPIs.

This module is a thin console consumer of :class:`DREDataService`:
1. Fetch the CSV export (or read a local file)
2. Extract accounts and months
3. Print the headline figures for one month
4. Optionally print alias diagnostics

Usage (from project root):
    python -m dre_extract.main
    python -m dre_extract.main --month mar
    python -m dre_extract.main --file exports/dre_2025.csv --debug-keys

CLI Flags:
    --month, -m     Month to report (default: last month found)
    --url           Export URL (default: built from config/config.json)
    --file, -f      Read a local CSV instead of fetching
    --debug-keys    Print whether each configured key resolved to a row
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from dre_extract.config import get_config, setup_logging
from dre_extract.scraper.downloader import fetch_text
from dre_extract.service import SUMMARY_KEYS, DREDataService, create_service, normalize_month

logger = setup_logging(__name__)

MONTH_LABELS = {
    "jan": "Janeiro",
    "fev": "Fevereiro",
    "mar": "Março",
    "abr": "Abril",
    "mai": "Maio",
    "jun": "Junho",
    "jul": "Julho",
    "ago": "Agosto",
    "set": "Setembro",
    "out": "Outubro",
    "nov": "Novembro",
    "dez": "Dezembro",
}

KPI_LABELS = {
    "faturamento_bruto": "Faturamento",
    "receita_liquida": "Receita líquida",
    "ebitda": "EBITDA",
    "lucro_liquido": "Lucro líquido",
    "custos_fixos": "Custos fixos",
}


def format_brl(value: float) -> str:
    """Format a value as Brazilian currency without cents (``R$ 1.234.567``)."""
    text = f"{abs(value):,.0f}".replace(",", ".")
    sign = "-" if round(value) < 0 else ""
    return f"{sign}R$ {text}"


def print_dre_report(
    service: DREDataService,
    month: str,
    summary_keys: tuple[str, ...] = SUMMARY_KEYS,
    debug_keys: list[str] | None = None,
) -> None:
    """Print the KPI report for one month.

    Parameters
    ----------
    service
        Loaded service.
    month
        Month key (e.g. ``"mar"``).
    summary_keys
        Semantic keys shown as KPIs (fixed costs are always added).
    debug_keys
        Semantic keys to report resolution status for.
    """
    summary = service.month_summary(month, summary_keys)

    print(f"\n{'=' * 60}")
    print(f"DRE - {MONTH_LABELS.get(month, month)}")
    print(f"Accounts: {len(service.rows)} | Months: {', '.join(service.months) or '-'}")
    print(f"{'=' * 60}")

    for key, value in summary.items():
        label = KPI_LABELS.get(key, key)
        print(f"  {label + ':':<20} {format_brl(value):>20}")

    if debug_keys:
        print("\nAlias diagnostics:")
        for diagnostic in service.debug_keys(*debug_keys):
            print(f"  {diagnostic.key:<24} {diagnostic.status}")

    print(f"{'=' * 60}\n")


def main(argv: list[str] | None = None) -> int:
    """Parse CLI flags, load the DRE and print the report.

    Returns
    -------
    int
        ``0`` when accounts were extracted; ``1`` otherwise.
    """
    parser = argparse.ArgumentParser(
        description="Fetch the DRE sheet and print monthly KPIs.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m dre_extract.main                       # Last month in the sheet
  python -m dre_extract.main --month mar           # Specific month
  python -m dre_extract.main -f dre.csv --debug-keys
        """,
    )
    parser.add_argument("--month", "-m", help="Month to report (e.g. mar, Março, mar/25)")
    parser.add_argument("--url", help="Export URL (default: from config/config.json)")
    parser.add_argument("--file", "-f", type=Path, help="Read a local CSV export instead of fetching")
    parser.add_argument(
        "--debug-keys",
        action="store_true",
        help="Show which semantic keys resolved to a sheet row",
    )

    args = parser.parse_args(argv)

    fetcher = None
    if args.url:
        url = args.url

        async def fetcher() -> str:
            return await fetch_text(url)

    service = create_service(fetcher=fetcher)
    if args.file is not None:
        service.load_text(args.file.read_text(encoding="utf-8-sig"))
    else:
        asyncio.run(service.load())

    if not service.rows:
        logger.error("No DRE accounts extracted")
        return 1

    month = normalize_month(args.month) if args.month else service.months[-1]
    if month not in service.months:
        logger.error("Month %r not found; available: %s", args.month, list(service.months))
        return 1

    report_config = get_config().get("report", {})
    summary_keys = tuple(report_config.get("summary_keys", SUMMARY_KEYS))
    debug_keys = None
    if args.debug_keys:
        debug_keys = report_config.get("debug_keys", list(service.aliases))

    print_dre_report(service, month, summary_keys, debug_keys)
    return 0


if __name__ == "__main__":
    sys.exit(main())
