"""Domain models for the spreadsheet -> vCard converter.

This package contains the value objects passed between pipeline stages and
the presentation adapters.
"""

from .contact import ContactRecord
from .error_record import ErrorRecord
from .pipeline_result import DownloadPayload, PipelineResult, StatusKind, StatusMessage

__all__ = [
    # Contact models
    "ContactRecord",
    # Pipeline models
    "DownloadPayload",
    "PipelineResult",
    "StatusKind",
    "StatusMessage",
    # Error logging
    "ErrorRecord",
]
