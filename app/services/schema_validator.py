from __future__ import annotations

import re
from dataclasses import dataclass

from app.services.errors import ValidationError
from app.services.tabular_parser import ParsedTable, RawRow

FIRST_NAME = "FirstName"
PHONE = "Phone"
NOTES = "Notes"
REQUIRED_COLUMNS = (FIRST_NAME, PHONE, NOTES)

_PHONE_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True, slots=True)
class ValidatedRecord:
    first_name: str
    phone: str
    notes: str
    row_number: int


def validate_rows(table: ParsedTable) -> list[ValidatedRecord]:
    """
    Check the header and every row, stopping at the first problem.
    Returns the rows as records in file order.
    """
    for column in REQUIRED_COLUMNS:
        if column not in table.columns:
            raise ValidationError(f"Missing required column: {column}")

    return [_validate_row(row) for row in table.rows]


def _validate_row(row: RawRow) -> ValidatedRecord:
    first_name = row.get(FIRST_NAME).strip()
    if not first_name:
        raise ValidationError(f"Missing first name at row {row.row_number}", row=row.row_number)

    # No trimming: signs, separators and whitespace all make a phone invalid
    phone = str(row.get(PHONE))
    if not _PHONE_RE.fullmatch(phone):
        raise ValidationError(f"Invalid phone number at row {row.row_number}", row=row.row_number)

    return ValidatedRecord(
        first_name=first_name,
        phone=phone,
        notes=(row.get(NOTES) or "").strip(),
        row_number=row.row_number,
    )
