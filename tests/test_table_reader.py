"""Tests for CSV payload to grid conversion."""

from __future__ import annotations

from dre_extract.extractor.table_reader import read_grid


class TestReadGrid:
    """Tests for :func:`read_grid`."""

    def test_quoted_delimiters(self) -> None:
        """Quoted fields keep their commas."""
        grid = read_grid('Conta,Jan\nReceita,"1.234,56"\n')
        assert grid == [["Conta", "Jan"], ["Receita", "1.234,56"]]

    def test_empty_cells_kept(self) -> None:
        """Empty cells stay as empty strings, not None or NaN."""
        grid = read_grid(",Conta,,Jan\n")
        assert grid == [["", "Conta", "", "Jan"]]

    def test_ragged_rows(self) -> None:
        """Rows keep their own length."""
        grid = read_grid("a,b,c\nd\n")
        assert [len(row) for row in grid] == [3, 1]

    def test_blank_line_is_empty_row(self) -> None:
        """Blank lines produce empty rows so row indices match the sheet."""
        grid = read_grid("a,b\n\nc,d\n")
        assert grid == [["a", "b"], [], ["c", "d"]]

    def test_quoted_newline(self) -> None:
        """Line breaks inside quotes stay in the cell."""
        grid = read_grid('"Receita\nBruta",1\n')
        assert grid == [["Receita\nBruta", "1"]]

    def test_bytes_with_bom(self) -> None:
        """Byte payloads are decoded and the BOM dropped."""
        grid = read_grid("\ufeffConta,Março\n".encode())
        assert grid == [["Conta", "Março"]]

    def test_text_with_bom(self) -> None:
        """A BOM on decoded text is dropped as well."""
        assert read_grid("\ufeffa,b")[0][0] == "a"

    def test_crlf(self) -> None:
        """Windows line endings are handled."""
        assert read_grid("a,b\r\nc,d\r\n") == [["a", "b"], ["c", "d"]]

    def test_empty_payload(self) -> None:
        """Empty and missing payloads yield an empty grid."""
        assert read_grid("") == []
        assert read_grid(None) == []
        assert read_grid(b"") == []

    def test_custom_delimiter(self) -> None:
        """Semicolon exports can be read with an explicit delimiter."""
        assert read_grid("Conta;Jan\nReceita;1,5\n", delimiter=";") == [["Conta", "Jan"], ["Receita", "1,5"]]

    def test_sample_sheet(self, sample_grid: list[list[str]]) -> None:
        """The sample export parses with its header on the second line."""
        assert sample_grid[1][2] == "Jan/25"
        assert sample_grid[2][2] == "R$ 100.000,00"
        assert len(sample_grid) == 13
