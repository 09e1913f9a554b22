from __future__ import annotations
from pathlib import Path

import pytest

from sheet2vcard.cli import main as cli_main
from sheet2vcard.services.pipeline import ingest

"""End-to-end: spreadsheet file -> contacts.vcf."""

EXPECTED_TWO = (
    "BEGIN:VCARD\nVERSION:3.0\nFN:Alice\nTEL;TYPE=CELL:5551234567\nEND:VCARD\n\n"
    "BEGIN:VCARD\nVERSION:3.0\nFN:Bob\nTEL;TYPE=CELL:5559876543\nEND:VCARD\n\n"
)


def test_round_trip_xlsx_with_heading(temp_workdir: Path, make_xlsx, sample_rows, clean_logging, capsys):
    code = cli_main([str(make_xlsx(sample_rows))])
    out = capsys.readouterr().out
    assert code == 0
    assert "Successfully processed 2 contacts" in out
    assert "INFO 2 contacts" in out
    assert (temp_workdir / "contacts.vcf").read_text(encoding="utf-8") == EXPECTED_TWO


def test_round_trip_numeric_phones_without_heading(make_xlsx):
    result = ingest(make_xlsx([["Alice", 5551234567], ["Bob", 5559876543]]).read_bytes())
    assert result.heading is False
    assert result.status.text == "Successfully processed 2 contacts"
    assert result.vcf_text == EXPECTED_TWO


def test_round_trip_csv(temp_workdir: Path, clean_logging):
    src = temp_workdir / "data" / "contacts.csv"
    src.write_text("Name,Phone\nAlice,5551234567\nBob,5559876543\n", encoding="utf-8")
    assert cli_main([str(src)]) == 0
    assert (temp_workdir / "contacts.vcf").read_text(encoding="utf-8") == EXPECTED_TWO


@pytest.mark.parametrize("delimiter", [";", "\t"])
def test_round_trip_csv_other_delimiters(temp_workdir: Path, clean_logging, delimiter):
    src = temp_workdir / "data" / "contacts.csv"
    lines = [["Name", "Phone"], ["Alice", "5551234567"], ["Bob", "5559876543"]]
    src.write_text("".join(delimiter.join(line) + "\n" for line in lines), encoding="utf-8")
    assert cli_main([str(src)]) == 0
    assert (temp_workdir / "contacts.vcf").read_text(encoding="utf-8") == EXPECTED_TWO


def test_csv_ragged_rows_and_spaced_headers():
    data = b"First Name,Mobile Phone\nAlice,5551234567,friend\nBob,5559876543\n"
    result = ingest(data, source_name="contacts.csv")
    assert result.status.text == "Successfully processed 2 contacts"
    assert result.table[1] == ["Alice", "5551234567", "friend"]
    assert result.vcf_text == EXPECTED_TWO


def test_csv_title_line_before_rows():
    result = ingest(b"My contacts\nAlice,5551234567\nBob,5559876543\n")
    assert result.heading is True
    assert result.vcf_text == EXPECTED_TWO


def test_blank_rows_and_trimming(make_xlsx):
    rows = [
        ["Name", "Phone"],
        [None, None],
        ["  Alice  ", " 5551234567 "],
        [None, None],
        ["Bob", "5559876543"],
    ]
    result = ingest(make_xlsx(rows).read_bytes())
    assert result.row_count == 3
    assert result.vcf_text == EXPECTED_TWO


def test_preview_shows_heading_and_all_rows(make_xlsx, sample_rows):
    result = ingest(make_xlsx(sample_rows).read_bytes())
    assert result.preview_html.count("<tr>") == 4  # header + 3 body rows
    assert "<td>Name</td><td>Phone</td>" in result.preview_html


def test_quirk_reported_count_includes_incomplete_rows(make_xlsx):
    rows = [["Name", "Phone"], ["Carl", None], ["Alice", "5551234567"]]
    result = ingest(make_xlsx(rows).read_bytes())
    assert result.status.text == "Successfully processed 2 contacts"
    assert result.counter_text == "2 contacts"
    assert result.encoded_count == 1
