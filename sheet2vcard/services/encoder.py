from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ..excel.cells import stringify
from ..models.contact import ContactRecord
from .heading import HeadingPredicate, is_heading_row

"""Contact encoder: filtered table -> ContactRecords + vCard text.

Steps:
1. Heading decision from row 0 (``is_heading_row`` unless another predicate
   is supplied)
2. Start index: 1 only when the table has more than one row and row 0 is a
   heading
3. Rows with >= 2 cells whose trimmed first and second cells are both
   non-empty become ContactRecords
4. Records are serialized as vCard 3.0 blocks in row order

``processed_count`` is the row count minus the heading row. It is what the
success status reports and can exceed the number of encoded contacts when
rows are missing a name or phone.
"""

__all__ = [
    "EncodedContacts",
    "encode_contacts",
    "row_to_contact",
    "serialize_contacts",
    "start_index",
]


@dataclass(frozen=True)
class EncodedContacts:
    contacts: list[ContactRecord]
    vcf_text: str
    heading: bool
    start_index: int
    processed_count: int  # len(table) - heading

    @property
    def count(self) -> int:
        return len(self.contacts)


def start_index(table: list[list[Any]], heading: bool) -> int:
    if len(table) > 1 and heading:
        return 1
    return 0


def row_to_contact(row: list[Any]) -> ContactRecord | None:
    if len(row) < 2:
        return None
    name = stringify(row[0]).strip()
    phone = stringify(row[1]).strip()
    if not name or not phone:
        return None
    return ContactRecord(name=name, phone=phone)


def serialize_contacts(contacts: Iterable[ContactRecord]) -> str:
    return "".join(c.to_vcard() for c in contacts)


def encode_contacts(
    table: list[list[Any]], is_heading: HeadingPredicate = is_heading_row
) -> EncodedContacts:
    if not table:
        raise ValueError("cannot encode an empty table")
    heading = is_heading(table[0])
    first = start_index(table, heading)
    contacts: list[ContactRecord] = []
    for row in table[first:]:
        contact = row_to_contact(row)
        if contact is not None:
            contacts.append(contact)
    return EncodedContacts(
        contacts=contacts,
        vcf_text=serialize_contacts(contacts),
        heading=heading,
        start_index=first,
        processed_count=len(table) - (1 if heading else 0),
    )
