from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from ..logging.error_log import ErrorLogBuffer
from ..models.pipeline_result import DownloadPayload, PipelineResult, StatusMessage
from ..services.acquisition import first_file
from ..services.pipeline import STATUS_READY, run_upload

"""Maps PipelineResults onto the page's display state.

The page shows four surfaces: status message, contact counter, preview table
and download button. ``apply_result`` decides what each one shows after a run:

- status, preview and download always follow the latest result (a failed run
  clears the preview and disables the download)
- the counter only changes when the encoder ran, so a failed run leaves the
  previous count visible

``handle_upload`` is the upload-widget side: it skips files already shown,
runs the pipeline and flushes decode failures to the error log.
"""

__all__ = [
    "UiState",
    "apply_result",
    "handle_upload",
    "is_new_upload",
]


@dataclass(frozen=True)
class UiState:
    status: StatusMessage = STATUS_READY
    counter_text: str | None = None
    preview_html: str | None = None
    download: DownloadPayload | None = None
    source_id: str | None = None  # upload widget file id of the last processed file

    @property
    def download_enabled(self) -> bool:
        return self.download is not None


def apply_result(state: UiState, result: PipelineResult, source_id: str | None = None) -> UiState:
    counter = result.counter_text if result.counter_text is not None else state.counter_text
    return replace(
        state,
        status=result.status,
        counter_text=counter,
        preview_html=result.preview_html,
        download=result.download,
        source_id=source_id,
    )


def is_new_upload(state: UiState, files: Any) -> bool:
    """True when the widget holds a file other than the one ``state`` shows."""
    current = first_file(files)
    return current is not None and getattr(current, "file_id", None) != state.source_id


def handle_upload(state: UiState, files: Any, error_log_directory: Path) -> UiState:
    """Run the pipeline for a newly uploaded file and fold the result into ``state``.

    Streamlit reruns the page on every interaction and the widget keeps
    returning the same file, so a file whose id ``state`` already shows is
    not decoded again. Decode failures are flushed to the JSONL error log.
    """
    if not is_new_upload(state, files):
        return state
    result = run_upload(files)
    if result is None:
        return state
    if result.error is not None:
        error_log = ErrorLogBuffer(error_log_directory)
        error_log.append(result.error)
        error_log.flush()
    return apply_result(state, result, source_id=getattr(first_file(files), "file_id", None))
