from __future__ import annotations

import html
from typing import Any

from ..excel.cells import stringify

"""Preview table rendering (Table -> HTML markup)."""

__all__ = [
    "render_preview",
]


def _cell_text(value: Any) -> str:
    # Falsy cells (None, 0, "", False) render blank, zero included.
    if not value:
        return ""
    return html.escape(stringify(value))


def render_preview(table: list[list[Any]]) -> str:
    """Render every row of ``table`` as an HTML table.

    Header labels are ``Column 1..k`` with ``k`` taken from the first row;
    wider rows still render their extra cells without a label.
    """
    parts = ["<table><thead><tr>"]
    width = len(table[0]) if table else 0
    for i in range(width):
        parts.append(f"<th>Column {i + 1}</th>")
    parts.append("</tr></thead><tbody>")
    for row in table:
        parts.append("<tr>")
        for value in row:
            parts.append(f"<td>{_cell_text(value)}</td>")
        parts.append("</tr>")
    parts.append("</tbody></table>")
    return "".join(parts)
