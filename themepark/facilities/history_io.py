# themepark/facilities/history_io.py
"""
Plain-text (comma separated) export and import of a ride's history.

File layout:
    Name,Age,ContactNumber,TicketId,VisitDate
    Alice Brown,18,555-5678,TICKET002,2025-11-21
    ...

Values are joined with a bare comma: nothing is quoted or escaped, so a value
that itself contains a comma will not survive the round trip.
"""
from __future__ import annotations
import os
import re
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

from themepark.core import parse_iso_date, today_iso
from themepark.visitors.base import Visitor

HEADER = "Name,Age,ContactNumber,TicketId,VisitDate"
DELIMITER = ","
FIELD_COUNT = 5
ENCODING = "utf-8"

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_]")
_INTEGER = re.compile(r"[+-]?[0-9]+")
# ages are 32-bit signed integers in the file format
AGE_MIN, AGE_MAX = -2 ** 31, 2 ** 31 - 1


# ----------------------- Export -----------------------

def sanitize_ride_name(ride_name: str) -> str:
    return _UNSAFE_NAME_CHARS.sub("_", ride_name)


def history_filename(ride_name: str, today: date = None) -> str:
    """[SanitizedRideName]_RideHistory_YYYY-MM-DD.txt"""
    return f"{sanitize_ride_name(ride_name)}_RideHistory_{today_iso(today)}.txt"


def _text(value) -> str:
    return "" if value is None else str(value)


def encode_visitor(visitor: Visitor) -> str:
    return DELIMITER.join([
        _text(visitor.name),
        _text(visitor.age),
        _text(visitor.contact_number),
        _text(visitor.ticket_id),
        _text(visitor.visit_date),
    ])


def export_history(ride_name: str, visitors: List[Visitor], out_dir: str = ".",
                   today: date = None) -> Optional[str]:
    """
    Write `visitors` (in their current order) to out_dir.
    Returns the file path, or None if there was nothing to write or the write failed.
    A second export for the same ride on the same day overwrites the first.
    """
    print(f"\n=== Exporting Ride History for {ride_name} ===")

    if not visitors:
        print("Error: Cannot export empty ride history!")
        return None

    path = os.path.join(out_dir, history_filename(ride_name, today))
    try:
        with open(path, "w", encoding=ENCODING, newline="\n") as fh:
            fh.write(HEADER + "\n")
            for visitor in visitors:
                fh.write(encode_visitor(visitor) + "\n")
    except OSError as e:
        print(f"Error exporting ride history: {e}")
        return None

    print(f"Success! Ride history exported to: {os.path.basename(path)}")
    print(f"File path: {os.path.abspath(path)}")
    return path


# ----------------------- Import -----------------------

@dataclass
class ImportReport:
    source: str
    visitors: List[Visitor] = field(default_factory=list)
    skipped: int = 0
    lines_read: int = 0                     # header included
    error: Optional[str] = None
    rejections: List[str] = field(default_factory=list)

    @property
    def imported(self) -> int:
        return len(self.visitors)

    @property
    def lines_processed(self) -> int:
        """Lines after the header."""
        return max(0, self.lines_read - 1)

    @property
    def ok(self) -> bool:
        return self.error is None


def decode_line(line: str) -> Tuple[Optional[Visitor], Optional[str]]:
    """
    Turn one non-blank data line into a Visitor.
    Returns (visitor, None) on success or (None, reason) when the line is rejected.
    """
    fields = line.split(DELIMITER)
    # trailing empty fields do not count: "a,1,c,T1,2025-11-21," has five
    while fields and fields[-1] == "":
        fields.pop()
    if len(fields) != FIELD_COUNT:
        return None, f"Invalid field count ({len(fields)}/{FIELD_COUNT} required)"

    name, age_text, contact_number, ticket_id, visit_date = (f.strip() for f in fields)

    if parse_iso_date(visit_date) is None:
        return None, f"Invalid visit date format ({visit_date}), must be YYYY-MM-DD"

    if not name or not ticket_id or not visit_date:
        return None, "Mandatory fields (Name/TicketID/VisitDate) cannot be empty"

    if not _INTEGER.fullmatch(age_text) or not AGE_MIN <= int(age_text) <= AGE_MAX:
        return None, f"Invalid age format ({age_text}) - Must be an integer"
    age = int(age_text)
    if age < 0:
        return None, f"Invalid age - Cannot be negative ({age_text})"

    return Visitor(name, age, contact_number, ticket_id, visit_date), None


def read_history(path) -> ImportReport:
    """
    Read a file written by export_history().
    Never raises: a missing/unreadable file gives a report with `error` set and no visitors.
    Visitors are only handed back once the whole file has been read.
    """
    report = ImportReport(source=str(path) if path is not None else "")
    print(f"\n=== Importing Ride History from: {report.source} ===")

    if path is None or not str(path).strip():
        report.error = "File path cannot be empty!"
        print(f"Error: {report.error}")
        return report

    parsed: List[Visitor] = []
    try:
        with open(path, "r", encoding=ENCODING) as fh:
            for line_number, line in enumerate(fh, start=1):
                report.lines_read = line_number

                if line_number == 1:
                    print(f"Skipped header line: {line.rstrip()}")
                    continue

                trimmed = line.strip()
                if not trimmed:
                    print(f"Line {line_number}: Empty line, skipped")
                    report.skipped += 1
                    continue

                visitor, reason = decode_line(trimmed)
                if visitor is None:
                    message = f"Line {line_number}: {reason}, skipped"
                    print(message)
                    report.rejections.append(message)
                    report.skipped += 1
                    continue

                parsed.append(visitor)
                print(f"Line {line_number}: Successfully imported - "
                      f"{visitor.name} (Ticket ID: {visitor.ticket_id})")
    except (OSError, UnicodeDecodeError) as e:
        report.error = f"Error importing file: {e}"
        print(report.error)
        return report

    report.visitors = parsed
    return report
