from __future__ import annotations

import argparse
import sys
from pathlib import Path

from sheet2vcard.config.loader import ConfigError, resolve_config
from sheet2vcard.logging.error_log import ErrorLogBuffer
from sheet2vcard.logging.init import log_summary, set_level, setup_logging
from sheet2vcard.models.pipeline_result import PipelineResult, StatusKind
from sheet2vcard.services.acquisition import UploadReadError, first_file, read_path
from sheet2vcard.services.pipeline import ingest, processing_status, read_failure
from sheet2vcard.services.summary import render_summary_line

"""Headless entrypoint.

Runs the same pipeline as the Streamlit page over a file path:
- Load config (optional)
- Read the first input file
- Write contacts.vcf (and optionally the preview HTML)
- Print a SUMMARY line and exit with a status-dependent code
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_NO_CONTACTS = 2


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="sheet2vcard", description="Spreadsheet (name, phone) -> vCard 3.0 converter")
    p.add_argument("inputs", nargs="+", type=Path, help="Spreadsheet file (only the first is used)")
    p.add_argument("-o", "--output-dir", type=Path, default=None, help="Directory for contacts.vcf")
    p.add_argument("--config", type=Path, default=None, help="YAML config file")
    p.add_argument("--preview-html", type=Path, default=None, help="Also write the preview table here")
    p.add_argument("--inspect-data", action="store_true", help="Print the filtered rows & heading decision then exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _inspect_data(name: str, data: bytes) -> int:
    from sheet2vcard.excel.reader import SpreadsheetDecodeError, extract_table
    from sheet2vcard.services.heading import is_heading_row

    print(f"FILE: {name}")
    try:
        table = extract_table(data)
    except SpreadsheetDecodeError as e:
        print(f"  read_error: {e}")
        return EXIT_FATAL
    if not table:
        print("  rows=0")
        return EXIT_SUCCESS
    print(f"  rows={len(table)} width={len(table[0])} heading={is_heading_row(table[0])}")
    # datetime cells are printed via isoformat
    safe_rows = [[(v.isoformat() if hasattr(v, "isoformat") else v) for v in r] for r in table[:3]]
    print("    sample_rows=", safe_rows)
    return EXIT_SUCCESS


def _exit_code(result: PipelineResult) -> int:
    if result.download_enabled:
        return EXIT_SUCCESS
    if result.error is not None:
        return EXIT_FATAL
    return EXIT_NO_CONTACTS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only None reads sys.argv; an explicit [] stays empty
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    try:
        cfg = resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    set_level(cfg.log_level)
    if args.debug:
        set_level("DEBUG")
        logger.debug("debug mode enabled")

    path: Path = first_file(args.inputs)
    if len(args.inputs) > 1:
        logger.debug(f"ignoring {len(args.inputs) - 1} additional file(s)")

    logger.info(processing_status(path.name).text)
    try:
        upload = read_path(path)
    except UploadReadError as e:
        result = read_failure(path.name, e)
    else:
        if args.inspect_data:
            return _inspect_data(upload.name, upload.data)
        result = ingest(upload.data, source_name=upload.name)

    if result.status.kind is StatusKind.ERROR:
        logger.error(result.status.text)
    else:
        logger.info(result.status.text)

    if result.error is not None:
        error_log = ErrorLogBuffer(Path(cfg.error_log_directory))
        error_log.append(result.error)
        fp = error_log.flush()
        logger.info(f"error detail written to {fp}")

    if result.preview_html is not None and args.preview_html is not None:
        args.preview_html.parent.mkdir(parents=True, exist_ok=True)
        args.preview_html.write_text(result.preview_html, encoding="utf-8")
        logger.debug(f"preview written to {args.preview_html}")

    if result.counter_text is not None:
        logger.info(result.counter_text)

    if result.download is not None:
        output_dir = args.output_dir if args.output_dir is not None else Path(cfg.output_directory)
        target = result.download.write_to(output_dir)
        logger.info(f"wrote {target} ({result.download.mime})")

    log_summary(render_summary_line(result).removeprefix("SUMMARY "))
    return _exit_code(result)
