from __future__ import annotations

from ..models.pipeline_result import PipelineResult

"""SUMMARY line rendering for the headless CLI.

Format:
SUMMARY file={name} rows={filtered rows} processed={N} contacts={encoded} status={kind}
"""


def render_summary_line(result: PipelineResult) -> str:
    """Render a SUMMARY line from a PipelineResult.

    ``processed`` is the count shown in the success status and ``contacts`` the
    number of vCard blocks actually written; the two differ when rows lack a
    name or phone. Stages that did not run report 0.

    Examples:
        >>> from sheet2vcard.models.pipeline_result import StatusMessage, StatusKind
        >>> r = PipelineResult(status=StatusMessage("Error reading file", StatusKind.ERROR),
        ...                    source_name="a.xlsx")
        >>> render_summary_line(r)
        'SUMMARY file=a.xlsx rows=0 processed=0 contacts=0 status=error'
    """
    name = result.source_name or "-"
    processed = result.processed_count if result.processed_count is not None else 0
    return (
        f"SUMMARY file={name} "
        f"rows={result.row_count} "
        f"processed={processed} "
        f"contacts={result.encoded_count} "
        f"status={result.status.kind.value}"
    )
