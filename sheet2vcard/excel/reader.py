from __future__ import annotations

import csv
import io
from typing import Any

import pandas as pd

from .cells import is_blank

"""Spreadsheet reader: bytes -> first sheet as a raw grid of rows.

Decoding is delegated to pandas (openpyxl for xlsx/xlsm, xlrd for xls). The
sheet is read without header inference and without NA coercion so that
``Row`` values are what the workbook holds. Buffers without a workbook
signature are read as delimited text: the delimiter is sniffed among
``, ; tab |`` and rows are tokenized with :mod:`csv`, so they may be ragged.
"""

__all__ = [
    "SpreadsheetDecodeError",
    "decode_first_sheet",
    "extract_table",
    "filter_blank_rows",
    "frame_to_rows",
    "has_workbook_signature",
    "sniff_delimiter",
]

# xlsx / xlsm / ods are zip containers, xls is an OLE2 compound document
ZIP_SIGNATURE = b"PK\x03\x04"
OLE2_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"

CSV_DELIMITERS = ",;\t|"
SNIFF_SAMPLE_SIZE = 64 * 1024


class SpreadsheetDecodeError(Exception):
    """Raised when the byte buffer cannot be decoded into a sheet."""


def has_workbook_signature(data: bytes) -> bool:
    return data.startswith(ZIP_SIGNATURE) or data.startswith(OLE2_SIGNATURE)


def _read_workbook(data: bytes) -> pd.DataFrame:
    # sheet_name=0: first sheet only. header=None: raw array of arrays.
    return pd.read_excel(
        io.BytesIO(data),
        sheet_name=0,
        header=None,
        dtype=object,
        keep_default_na=False,
        na_values=[],
    )


def sniff_delimiter(text: str) -> str:
    """Pick the cell delimiter of a delimited-text export.

    Only ``CSV_DELIMITERS`` are candidates, so letters or spaces inside a
    single-column file never split its cells. When the sniffer cannot decide
    (one column, or a first line without any delimiter) the most frequent
    candidate wins, and ``,`` when none occurs.
    """
    try:
        return csv.Sniffer().sniff(text[:SNIFF_SAMPLE_SIZE], delimiters=CSV_DELIMITERS).delimiter
    except csv.Error:
        counts = {d: text.count(d) for d in CSV_DELIMITERS}
        best = max(counts, key=counts.__getitem__)
        return best if counts[best] else ","


def _read_delimited(data: bytes) -> pd.DataFrame:
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise SpreadsheetDecodeError(f"not a workbook and not UTF-8 text: {e}") from e
    if not text.strip():
        return pd.DataFrame()
    delimiter = sniff_delimiter(text)
    try:
        rows = list(csv.reader(io.StringIO(text, newline=""), delimiter=delimiter))
    except csv.Error as e:
        raise SpreadsheetDecodeError(f"malformed delimited text: {e}") from e
    # ragged rows: the frame pads short rows with None, trimmed again later
    return pd.DataFrame(rows, dtype=object)


def decode_first_sheet(data: bytes) -> pd.DataFrame:
    """Decode a buffer into the raw DataFrame of its first sheet.

    Raises:
        SpreadsheetDecodeError: The collaborator could not decode the buffer.
    """
    try:
        if has_workbook_signature(data):
            return _read_workbook(data)
        return _read_delimited(data)
    except SpreadsheetDecodeError:
        raise
    except Exception as e:
        raise SpreadsheetDecodeError(f"{type(e).__name__}: {e}") from e


def _clean_cell(value: Any) -> Any:
    # pandas uses NaN / NaT for missing cells even with dtype=object
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    return value


def frame_to_rows(df: pd.DataFrame) -> list[list[Any]]:
    """Convert a raw sheet DataFrame to rows of cell values.

    Trailing empty cells are dropped per row, so each row is as wide as its
    last populated cell and a fully empty source row becomes ``[]``.
    """
    rows: list[list[Any]] = []
    for raw in df.itertuples(index=False, name=None):
        row = [_clean_cell(v) for v in raw]
        while row and is_blank(row[-1]):
            row.pop()
        rows.append(row)
    return rows


def filter_blank_rows(rows: list[list[Any]]) -> list[list[Any]]:
    """Keep rows with at least one cell that is neither None nor ""."""
    return [row for row in rows if len(row) > 0 and any(not is_blank(c) for c in row)]


def extract_table(data: bytes) -> list[list[Any]]:
    """Decode ``data`` and return the filtered table of its first sheet."""
    return filter_blank_rows(frame_to_rows(decode_first_sheet(data)))
