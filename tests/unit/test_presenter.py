from __future__ import annotations
import io
import json
from pathlib import Path
from unittest.mock import patch

from sheet2vcard.models.pipeline_result import StatusKind
from sheet2vcard.services.pipeline import STATUS_READY, ingest, run_upload
from sheet2vcard.ui.presenter import UiState, apply_result, handle_upload, is_new_upload


def _result(table):
    with patch("sheet2vcard.services.pipeline.extract_table", return_value=table):
        return ingest(b"", source_name="x.xlsx")


def test_initial_state_ready():
    state = UiState()
    assert state.status is STATUS_READY
    assert state.status.text == "Ready to upload your Excel file"
    assert state.status.css_class == "status info"
    assert not state.download_enabled
    assert state.counter_text is None


def test_apply_success(sample_rows):
    state = apply_result(UiState(), _result(sample_rows), source_id="f1")
    assert state.status.kind is StatusKind.SUCCESS
    assert state.status.css_class == "status success"
    assert state.counter_text == "2 contacts"
    assert state.download_enabled
    assert state.preview_html is not None
    assert state.source_id == "f1"


def test_failed_rerun_keeps_stale_counter(sample_rows):
    state = apply_result(UiState(), _result(sample_rows), source_id="f1")
    state = apply_result(state, _result([]), source_id="f2")
    assert state.status.text == "No data found in the Excel file"
    assert state.counter_text == "2 contacts"
    assert state.preview_html is None
    assert not state.download_enabled


def test_download_replaced_on_each_run(sample_rows):
    first = apply_result(UiState(), _result(sample_rows), source_id="f1")
    second = apply_result(first, _result([["Zed", "5550000000"]]), source_id="f2")
    assert second.download is not first.download
    assert b"FN:Zed" in second.download.data
    assert b"FN:Alice" not in second.download.data


class WidgetFile(io.BytesIO):
    """Stands in for the upload widget's UploadedFile (bytes + name + file_id)."""

    def __init__(self, file_id: str, name: str, data: bytes) -> None:
        super().__init__(data)
        self.file_id = file_id
        self.name = name


CSV_TWO = b"Name,Phone\nAlice,5551234567\nBob,5559876543\n"
CSV_ONE = b"Name,Phone\nCarol,5550001111\n"


def test_is_new_upload():
    state = UiState(source_id="f1")
    assert not is_new_upload(state, [])
    assert not is_new_upload(state, [WidgetFile("f1", "a.csv", CSV_TWO)])
    assert is_new_upload(state, [WidgetFile("f2", "a.csv", CSV_TWO)])
    assert is_new_upload(UiState(), WidgetFile("f1", "a.csv", CSV_TWO))


def test_handle_upload_no_files_keeps_state(tmp_path: Path):
    state = UiState()
    assert handle_upload(state, None, tmp_path) is state
    assert handle_upload(state, [], tmp_path) is state


def test_handle_upload_same_file_not_decoded_again(tmp_path: Path):
    files = [WidgetFile("f1", "a.csv", CSV_TWO)]
    state = handle_upload(UiState(), files, tmp_path)
    assert state.source_id == "f1"
    with patch("sheet2vcard.ui.presenter.run_upload", wraps=run_upload) as spy:
        again = handle_upload(state, files, tmp_path)
    spy.assert_not_called()
    assert again is state


def test_handle_upload_new_file_replaces_download(tmp_path: Path):
    state = handle_upload(UiState(), [WidgetFile("f1", "a.csv", CSV_TWO)], tmp_path)
    first_payload = state.download
    assert first_payload is not None
    state = handle_upload(state, [WidgetFile("f2", "b.csv", CSV_ONE)], tmp_path)
    assert state.source_id == "f2"
    assert state.download is not first_payload
    assert b"FN:Carol" in state.download.data
    assert b"FN:Alice" not in state.download.data
    assert state.counter_text == "1 contacts"


def test_handle_upload_uses_first_file_only(tmp_path: Path):
    files = [WidgetFile("f1", "a.csv", CSV_ONE), WidgetFile("f2", "b.csv", CSV_TWO)]
    state = handle_upload(UiState(), files, tmp_path)
    assert state.source_id == "f1"
    assert state.status.text == "Successfully processed 1 contacts"


def test_handle_upload_decode_failure_writes_error_log(tmp_path: Path):
    logs = tmp_path / "logs"
    state = handle_upload(UiState(), [WidgetFile("f1", "a.csv", CSV_TWO)], logs)
    assert not logs.exists()

    state = handle_upload(state, [WidgetFile("f2", "broken.xlsx", b"PK\x03\x04 not a zip")], logs)
    assert state.status.text == "Error processing file"
    assert not state.download_enabled
    assert state.counter_text == "2 contacts"
    written = list(logs.glob("errors-*.log"))
    assert len(written) == 1
    record = json.loads(written[0].read_text(encoding="utf-8").strip())
    assert record["file"] == "broken.xlsx"
    assert record["stage"] == "extract"
