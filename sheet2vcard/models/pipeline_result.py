from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from .contact import ContactRecord
from .error_record import ErrorRecord

"""Pipeline result models.

Every pipeline run returns one PipelineResult. Adapters (Streamlit page, CLI)
map it onto their own display primitives; nothing in the pipeline touches UI
state directly.
"""

__all__ = [
    "DOWNLOAD_FILENAME",
    "DOWNLOAD_MIME",
    "DownloadPayload",
    "PipelineResult",
    "Row",
    "StatusKind",
    "StatusMessage",
    "Table",
]

DOWNLOAD_FILENAME = "contacts.vcf"
DOWNLOAD_MIME = "text/vcard"

Row = list[Any]
Table = list[Row]


class StatusKind(Enum):
    """Mutually exclusive style classes of the status surface."""
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class StatusMessage:
    text: str
    kind: StatusKind = StatusKind.INFO

    @property
    def css_class(self) -> str:
        return f"status {self.kind.value}"


@dataclass(frozen=True)
class DownloadPayload:
    """Encoded vCard text bound to the download affordance.

    Filename and MIME type are fixed; only the data varies per run.
    """
    data: bytes
    filename: str = DOWNLOAD_FILENAME
    mime: str = DOWNLOAD_MIME

    @classmethod
    def from_text(cls, text: str) -> DownloadPayload:
        return cls(data=text.encode("utf-8"))

    def write_to(self, directory: Path) -> Path:
        """Write the payload as ``<directory>/contacts.vcf`` and return its path."""
        directory.mkdir(parents=True, exist_ok=True)
        target = directory / self.filename
        with target.open("wb") as f:
            f.write(self.data)
        return target


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of one upload -> download cycle.

    Stages that did not run leave their fields at the defaults: ``preview_html``
    is None when extraction failed, ``counter_text`` is None when encoding did
    not run, ``download`` is None whenever the download must stay disabled.
    """
    status: StatusMessage
    source_name: str = ""  # uploaded file name
    table: Table | None = None  # filtered rows (blank rows removed)
    heading: bool | None = None  # row 0 judged to be column labels
    preview_html: str | None = None
    contacts: list[ContactRecord] = field(default_factory=list)
    vcf_text: str = ""
    processed_count: int | None = None  # N shown in the success message
    counter_text: str | None = None
    download: DownloadPayload | None = None
    error: ErrorRecord | None = None  # detail for failures reported generically

    @property
    def download_enabled(self) -> bool:
        return self.download is not None

    @property
    def row_count(self) -> int:
        return len(self.table) if self.table is not None else 0

    @property
    def encoded_count(self) -> int:
        return len(self.contacts)
