from __future__ import annotations

from dataclasses import dataclass

"""ContactRecord model.

A ContactRecord is derived from one spreadsheet row and only exists between
encoding and serialization. Both fields are already trimmed and non-empty.
"""

__all__ = [
    "ContactRecord",
    "VCARD_TEMPLATE",
]

VCARD_TEMPLATE = (
    "BEGIN:VCARD\n"
    "VERSION:3.0\n"
    "FN:{name}\n"
    "TEL;TYPE=CELL:{phone}\n"
    "END:VCARD\n"
    "\n"
)


@dataclass(frozen=True)
class ContactRecord:
    """A (name, phone) pair eligible for vCard encoding."""
    name: str  # row[0] trimmed
    phone: str  # row[1] trimmed

    def to_vcard(self) -> str:
        """Serialize as a vCard 3.0 block followed by a blank separator line."""
        return VCARD_TEMPLATE.format(name=self.name, phone=self.phone)
