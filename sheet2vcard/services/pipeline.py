from __future__ import annotations

import logging
from typing import Any

from ..excel.reader import SpreadsheetDecodeError, extract_table
from ..models.error_record import ErrorRecord
from ..models.pipeline_result import DownloadPayload, PipelineResult, StatusKind, StatusMessage
from .acquisition import Upload, UploadReadError, first_file, read_upload
from .encoder import encode_contacts
from .heading import HeadingPredicate, is_heading_row
from .preview import render_preview

"""Conversion pipeline: bytes -> PipelineResult.

``ingest`` is the whole extraction -> preview -> encode sequence for one
buffer. ``run_upload`` adds input acquisition in front of it for adapters
that receive file objects from a UI widget.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "STATUS_DECODE_ERROR",
    "STATUS_NO_CONTACTS",
    "STATUS_NO_DATA",
    "STATUS_READ_ERROR",
    "STATUS_READY",
    "ingest",
    "processing_status",
    "read_failure",
    "run_upload",
    "success_status",
]

STATUS_READY = StatusMessage("Ready to upload your Excel file", StatusKind.INFO)
STATUS_READ_ERROR = StatusMessage("Error reading file", StatusKind.ERROR)
STATUS_NO_DATA = StatusMessage("No data found in the Excel file", StatusKind.ERROR)
STATUS_DECODE_ERROR = StatusMessage("Error processing file", StatusKind.ERROR)
STATUS_NO_CONTACTS = StatusMessage("No valid contacts found in the Excel file", StatusKind.ERROR)


def processing_status(name: str) -> StatusMessage:
    return StatusMessage(f"Processing: {name}...", StatusKind.INFO)


def success_status(count: int) -> StatusMessage:
    return StatusMessage(f"Successfully processed {count} contacts", StatusKind.SUCCESS)


def read_failure(name: str, exc: Exception) -> PipelineResult:
    logger.error(f"read failed: {exc}")
    return PipelineResult(
        status=STATUS_READ_ERROR,
        source_name=name,
        error=ErrorRecord.create(name, "read", "READ_FAILED", str(exc)),
    )


def ingest(
    data: bytes, source_name: str = "", is_heading: HeadingPredicate = is_heading_row
) -> PipelineResult:
    """Run extraction, preview and encoding over one byte buffer.

    Decode failures are reported with a generic status; the detail is logged
    and attached as ``PipelineResult.error``.
    """
    try:
        table = extract_table(data)
    except SpreadsheetDecodeError as e:
        logger.exception(f"decode failed file={source_name!r}")
        return PipelineResult(
            status=STATUS_DECODE_ERROR,
            source_name=source_name,
            error=ErrorRecord.create(source_name, "extract", "DECODE_FAILED", str(e)),
        )

    if not table:
        logger.info(f"no data rows file={source_name!r}")
        return PipelineResult(status=STATUS_NO_DATA, source_name=source_name, table=table)

    logger.debug(f"extracted rows={len(table)} file={source_name!r}")
    preview = render_preview(table)
    encoded = encode_contacts(table, is_heading=is_heading)
    counter = f"{encoded.processed_count} contacts"

    if encoded.count == 0:
        logger.info(f"no valid contacts rows={len(table)} file={source_name!r}")
        return PipelineResult(
            status=STATUS_NO_CONTACTS,
            source_name=source_name,
            table=table,
            heading=encoded.heading,
            preview_html=preview,
            processed_count=encoded.processed_count,
            counter_text=counter,
        )

    if encoded.count != encoded.processed_count:
        logger.debug(
            f"reported count {encoded.processed_count} differs from encoded contacts {encoded.count}"
        )
    logger.info(f"encoded contacts={encoded.count} file={source_name!r}")
    return PipelineResult(
        status=success_status(encoded.processed_count),
        source_name=source_name,
        table=table,
        heading=encoded.heading,
        preview_html=preview,
        contacts=encoded.contacts,
        vcf_text=encoded.vcf_text,
        processed_count=encoded.processed_count,
        counter_text=counter,
        download=DownloadPayload.from_text(encoded.vcf_text),
    )


def run_upload(files: Any, is_heading: HeadingPredicate = is_heading_row) -> PipelineResult | None:
    """Acquire the first of ``files`` and run the pipeline over it.

    Returns None when no file was supplied.
    """
    file = first_file(files)
    if file is None:
        return None
    try:
        upload: Upload = read_upload(file)
    except UploadReadError as e:
        return read_failure(str(getattr(file, "name", "")), e)
    logger.info(processing_status(upload.name).text)
    return ingest(upload.data, source_name=upload.name, is_heading=is_heading)
