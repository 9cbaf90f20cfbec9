"""Tests for report.py -- failure tables and summaries."""

from pathlib import Path

from catalog_packager.errors import DuplicateSkuError, EmptyCatalogError
from catalog_packager.models import RunResult
from catalog_packager.report import print_failure, print_identifiers, print_summary


class TestPrintIdentifiers:
    def test_table_rows(self, capsys):
        print_identifiers(["a_b_c", "bad name"])
        out = capsys.readouterr().out.splitlines()
        assert out[1].startswith("| (index) | Values")
        assert out[3] == "| 0       | a_b_c    |"
        assert out[4] == "| 1       | bad name |"
        assert out[0] == out[2] == out[-1]

    def test_empty_prints_nothing(self, capsys):
        print_identifiers([])
        assert capsys.readouterr().out == ""


class TestPrintFailure:
    def test_identifier_error_lists_values(self, capsys):
        print_failure(DuplicateSkuError(["SKU1"]))
        captured = capsys.readouterr()
        assert "Fail - Duplicate skus" in captured.err
        assert "| SKU1" in captured.out

    def test_plain_error_message_only(self, capsys):
        print_failure(EmptyCatalogError("products.csv has no data rows"))
        captured = capsys.readouterr()
        assert "no data rows" in captured.err
        assert captured.out == ""


class TestPrintSummary:
    def test_lists_unresolved(self, capsys):
        result = RunResult(
            output_dir=Path("/tmp/files-data-x"),
            csv_name="products-x.csv",
            unresolved=["SKU1_4"],
        )
        print_summary(result)
        out = capsys.readouterr().out
        assert "products-x.csv" in out
        assert "SKU1_4" in out

    def test_no_unresolved_section(self, capsys):
        print_summary(RunResult(output_dir=Path("/tmp/o"), csv_name="p.csv"))
        assert "without a download" not in capsys.readouterr().out
