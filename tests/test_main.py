"""Tests for the console report."""

from __future__ import annotations

from pathlib import Path

import pytest

from dre_extract.main import format_brl, main, print_dre_report
from dre_extract.service import DREDataService


@pytest.fixture
def csv_file(tmp_path: Path, sample_csv: str) -> Path:
    path = tmp_path / "dre.csv"
    path.write_text(sample_csv, encoding="utf-8")
    return path


class TestFormatBrl:
    """Tests for currency formatting."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1234567.0, "R$ 1.234.567"),
            (999.4, "R$ 999"),
            (0.0, "R$ 0"),
            (-1234.56, "-R$ 1.235"),
            (-0.4, "R$ 0"),
        ],
    )
    def test_format(self, value: float, expected: str) -> None:
        """Thousands use periods and cents are rounded away."""
        assert format_brl(value) == expected


class TestPrintReport:
    """Tests for the report body."""

    def test_kpis(self, loaded_service: DREDataService, capsys: pytest.CaptureFixture[str]) -> None:
        """KPI labels and values for the month are printed."""
        print_dre_report(loaded_service, "fev")
        out = capsys.readouterr().out

        assert "DRE - Fevereiro" in out
        assert "Accounts: 8 | Months: jan, fev, mar" in out
        assert "R$ 120.000" in out
        assert "-R$ 1.235" in out
        assert "Custos fixos" in out

    def test_diagnostics(self, loaded_service: DREDataService, capsys: pytest.CaptureFixture[str]) -> None:
        """Diagnostics list each key with its status."""
        print_dre_report(loaded_service, "jan", debug_keys=["ebitda", "custos_totais"])
        out = capsys.readouterr().out

        assert "Alias diagnostics:" in out
        assert "✓ EBITDA (exact)" in out
        assert "✗ not found" in out


class TestMain:
    """Tests for the CLI entry point."""

    def test_file_last_month(self, csv_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Without --month the last sheet month is reported."""
        assert main(["--file", str(csv_file)]) == 0
        assert "DRE - Março" in capsys.readouterr().out

    def test_file_named_month(self, csv_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Month labels are normalized."""
        assert main(["-f", str(csv_file), "--month", "JANEIRO", "--debug-keys"]) == 0
        out = capsys.readouterr().out
        assert "DRE - Janeiro" in out
        assert "Alias diagnostics:" in out

    def test_unknown_month(self, csv_file: Path) -> None:
        """Months absent from the sheet fail."""
        assert main(["-f", str(csv_file), "-m", "dez"]) == 1

    def test_empty_file(self, tmp_path: Path) -> None:
        """A sheet with no accounts fails."""
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        assert main(["-f", str(path)]) == 1
