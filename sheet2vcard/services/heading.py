from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from typing import Any

from ..excel.cells import stringify

"""Heading-row heuristic.

A plausible phone number contains at least five consecutive digits. When the
second cell of the first row has no such run, the row is taken to be column
labels ("Name", "Phone", ...) rather than a contact.
"""

__all__ = [
    "HeadingPredicate",
    "PHONE_DIGIT_RUN",
    "is_heading_row",
]

HeadingPredicate = Callable[[Sequence[Any]], bool]

PHONE_DIGIT_RUN = re.compile(r"\d{5,}", re.ASCII)


def is_heading_row(row: Sequence[Any]) -> bool:
    if len(row) == 0:
        return False
    second = stringify(row[1]) if len(row) > 1 else ""
    return PHONE_DIGIT_RUN.search(second) is None
