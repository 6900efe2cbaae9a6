"""Pytest configuration for dre_extract tests.

This module provides:
- A realistic DRE CSV export (title line, month header with index columns,
  section labels, pt-BR values in several notations)
- Grid, alias table, and loaded service fixtures built from it
"""

from __future__ import annotations

from types import MappingProxyType

import pytest

from dre_extract.config import get_account_aliases
from dre_extract.extractor.table_reader import read_grid
from dre_extract.extractor.types import Grid
from dre_extract.service import DREDataService

SAMPLE_DRE_CSV = """\
DRE 2025,,,,,,,,
,Conta,Jan/25,,Fev/25,,Mar/25,,Total
,Faturamento Bruto,"R$ 100.000,00","1,00","R$ 120.000,00","1,20","R$ 90.000,00","0,90","R$ 310.000,00"
,Deduções (-),"(5.000,00)","0,05","(6.000,00)","0,05","(4.500,00)","0,05","(15.500,00)"
,Receita Líquida (=),"95.000,00","0,95","114.000,00","0,95","85.500,00","0,95","294.500,00"
,DESPESAS,,,,,,,
,Despesas Administrativas,"10.000,00","0,11","10.500,00","0,09",-,,"20.500,00"
,Despesas Comerciais,"2.500,50","0,03","3.000,00","0,03","2.000,00","0,02","7.500,50"
,Logística,"1.000,00",,"1.000,00",,"1.000,00",,"3.000,00"
,EBITDA,"81.499,50","0,86","99.500,00","0,87","82.500,00","0,96","263.499,50"
,Lucro Líquido (+/-),"70.000,00-","0,74","(1.234,56)","-0,01","R$ 60.000,00","0,70","128.765,44"
,,,,,,,,
,Observação sem valores,,,,,,,
"""

SAMPLE_ROW_NAMES = [
    "Faturamento Bruto",
    "Deduções (-)",
    "Receita Líquida (=)",
    "Despesas Administrativas",
    "Despesas Comerciais",
    "Logística",
    "EBITDA",
    "Lucro Líquido (+/-)",
]


@pytest.fixture
def sample_csv() -> str:
    """CSV export of a three-month DRE sheet."""
    return SAMPLE_DRE_CSV


@pytest.fixture
def sample_grid(sample_csv: str) -> Grid:
    """Grid parsed from :data:`SAMPLE_DRE_CSV`."""
    return read_grid(sample_csv)


@pytest.fixture
def aliases() -> MappingProxyType[str, tuple[str, ...]]:
    """Alias table from ``config/aliases.json``."""
    return get_account_aliases()


@pytest.fixture
def loaded_service(sample_csv: str, aliases: MappingProxyType[str, tuple[str, ...]]) -> DREDataService:
    """Service with the sample sheet already published."""
    service = DREDataService(aliases=aliases)
    service.load_text(sample_csv)
    return service


@pytest.fixture
def sample_row_names() -> list[str]:
    """Account titles extracted from the sample sheet, in order."""
    return list(SAMPLE_ROW_NAMES)
