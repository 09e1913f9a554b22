from __future__ import annotations

import math
from typing import Any

"""Cell value helpers shared by the preview renderer and the contact encoder."""

__all__ = [
    "is_blank",
    "stringify",
]


def is_blank(value: Any) -> bool:
    """True for cells the blank-row filter treats as empty (None or "")."""
    return value is None or (isinstance(value, str) and value == "")


def stringify(value: Any) -> str:
    """Text form of a decoded cell value.

    Mirrors how spreadsheet text is usually displayed: ``None`` -> "",
    ``5551234567.0`` -> "5551234567", ``True`` -> "true".
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return str(value)
    return str(value)
