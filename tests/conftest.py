# Shared pytest fixtures
from __future__ import annotations
import tempfile
from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

from sheet2vcard.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    monkeypatch.delenv("SHEET2VCARD_CONFIG", raising=False)
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """output_directory: ./out
error_log_directory: ./logs
log_level: INFO
page_title: Excel to vCard
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "app.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def write_xlsx(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    with pd.ExcelWriter(path) as writer:
        for sheet, rows in sheets.items():
            df = pd.DataFrame(rows)
            df.to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


@pytest.fixture()
def make_xlsx(tmp_path: Path) -> Callable[..., Path]:
    """Factory: make_xlsx(rows, name=..., extra_sheets=...) -> path of a workbook."""
    def _make(rows: list[list[object]], name: str = "contacts.xlsx",
              extra_sheets: dict[str, list[list[object]]] | None = None) -> Path:
        sheets = {"Sheet1": rows}
        if extra_sheets:
            sheets.update(extra_sheets)
        return write_xlsx(tmp_path / name, sheets)
    return _make


@pytest.fixture(autouse=True)
def clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_rows() -> list[list[object]]:
    return [
        ["Name", "Phone"],
        ["Alice", "5551234567"],
        ["Bob", "5559876543"],
    ]
