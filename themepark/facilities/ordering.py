# themepark/facilities/ordering.py
"""
Ordering used to sort a ride's history.

Rules:
  1. visit_date ascending (YYYY-MM-DD text compares chronologically)
  2. same date -> age descending (older visitor first)

A missing operand compares as equal instead of raising:
  - either visitor is None          -> 0
  - either visit_date is None       -> dates treated as equal, age decides
  - either age is None              -> 0
With such records the order is only "consistent enough", not total.
"""
from functools import cmp_to_key


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare_visitors(v1, v2) -> int:
    """Negative if v1 sorts first, positive if v2 does, 0 if equal."""
    if v1 is None or v2 is None:
        return 0

    d1, d2 = v1.visit_date, v2.visit_date
    if d1 is not None and d2 is not None:
        by_date = _cmp(d1, d2)
        if by_date != 0:
            return by_date

    if v1.age is None or v2.age is None:
        return 0
    # reversed operands: descending
    return _cmp(v2.age, v1.age)


history_sort_key = cmp_to_key(compare_visitors)


def sort_visitors(visitors: list) -> None:
    """Sort in place; list.sort is stable so equal records keep their order."""
    visitors.sort(key=history_sort_key)
