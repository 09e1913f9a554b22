from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

"""Input acquisition: user-supplied files -> byte buffer.

Both entry paths (upload widget, filesystem path) converge on ``Upload``.
Only the first supplied file is used.
"""

__all__ = [
    "Upload",
    "UploadReadError",
    "first_file",
    "read_path",
    "read_upload",
]


class UploadReadError(Exception):
    """Raised when the selected file's bytes cannot be read."""


@dataclass(frozen=True)
class Upload:
    name: str
    data: bytes


def first_file(files: Any) -> Any | None:
    """Return the first of ``files`` (a single file or a sequence), or None."""
    if files is None:
        return None
    if isinstance(files, Sequence) and not isinstance(files, (str, bytes)):
        return files[0] if files else None
    return files


def read_upload(file: Any) -> Upload:
    """Read an uploaded file-like object (``.name`` + ``.getvalue()``/``.read()``)."""
    name = str(getattr(file, "name", ""))
    try:
        if hasattr(file, "getvalue"):
            data = file.getvalue()
        else:
            data = file.read()
    except (OSError, ValueError) as e:
        raise UploadReadError(f"{name}: {e}") from e
    if not isinstance(data, (bytes, bytearray)):
        raise UploadReadError(f"{name}: expected bytes, got {type(data).__name__}")
    return Upload(name=name, data=bytes(data))


def read_path(path: Path) -> Upload:
    try:
        return Upload(name=path.name, data=path.read_bytes())
    except OSError as e:
        raise UploadReadError(f"{path}: {e}") from e
