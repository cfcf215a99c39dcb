# themepark/core.py

import re
import threading
from datetime import date, datetime
from enum import Enum


# ---------- Ids (sequential ticket / employee numbers) ----------
class Ids:
    """
    Simple thread-safe id generator.
    - prefix: text placed in front of the zero-padded counter ("TICKET" -> "TICKET001")
    """

    def __init__(self, prefix: str = "TICKET", start: int = 0, width: int = 3):
        self._prefix = prefix
        self._next = start
        self._width = width
        self._lock = threading.Lock()

    def next(self) -> str:
        """Return the next id and advance the counter."""
        with self._lock:
            self._next += 1
            return f"{self._prefix}{self._next:0{self._width}d}"


# ---------- HistoryAdd Enum ----------
class HistoryAdd(Enum):
    ADDED = "added"
    ALREADY_PRESENT = "already_present"
    REJECTED = "rejected"


# ---------- Helpers: ISO dates ----------
ISO_DATE_FORMAT = "%Y-%m-%d"
_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def today_iso(today: date = None) -> str:
    """Return `today` (or the real current date) as YYYY-MM-DD."""
    return (today or date.today()).strftime(ISO_DATE_FORMAT)


def parse_iso_date(text: str):
    """
    Parse a strict YYYY-MM-DD calendar date.
    Returns a datetime.date, or None when the text is not a valid date
    (wrong shape, month 13, February 30th, ...).
    """
    if text is None or not _ISO_DATE_RE.fullmatch(text):
        return None
    try:
        return datetime.strptime(text, ISO_DATE_FORMAT).date()
    except ValueError:
        return None
