from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for structured error logging.

Failures that are reported to the user only as a generic status message keep
their detail here. Records are written as JSON Lines by
``sheet2vcard.logging.error_log.ErrorLogBuffer``; the fixed key set is pinned
by ``sheet2vcard/logging/error_log_schema.json``.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Name of the uploaded spreadsheet
        stage: Pipeline stage that failed (``read`` or ``extract``)
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Exception text, never shown in the status surface
    """
    timestamp: str  # ISO8601 UTC
    file: str
    stage: str
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, stage: str, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            stage=stage,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        """Serialize ErrorRecord to a single JSON line without extra keys."""
        return json.dumps(asdict(self), ensure_ascii=False)
