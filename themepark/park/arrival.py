# themepark/park/arrival.py
from datetime import timedelta

import numpy as np

from themepark.core import Ids, parse_iso_date
from themepark.visitors.base import Visitor

FIRST_NAMES = ["Avery", "Blake", "Carmen", "Dmitri", "Elena", "Farah", "Gus", "Hana",
               "Ines", "Jonas", "Kiko", "Leo", "Maya", "Nils", "Olga", "Pavel", "Rosa", "Sami"]
LAST_NAMES = ["Adams", "Baker", "Chen", "Diaz", "Eriksen", "Fischer", "Garcia", "Haddad",
              "Ito", "Jensen", "Kowalski", "Lopez", "Müller", "Novak", "Okafor", "Park"]


class VisitorGenerator:
    """
    Creates a batch of random visitors for queue / cycle demos.

    - total_visitors: exact number of visitors to generate
    - curve_points: list of {'day': int, 'mean': float}; relative visitor volume per
      day offset from start_date, linearly interpolated between points
    - age_range: inclusive (min, max) ages
    """
    def __init__(self, ids: Ids, total_visitors: int, curve_points, start_date: str,
                 age_range=(5, 75), seed=None):
        self.ids = ids
        self.total_visitors = int(total_visitors)

        start = parse_iso_date(start_date)
        if start is None:
            raise ValueError(f"start_date must be YYYY-MM-DD, got {start_date!r}")
        self.start_date = start

        # Store (day, mean) pairs sorted by day
        self.points = sorted(
            [(int(p["day"]), float(p["mean"])) for p in curve_points],
            key=lambda x: x[0]
        )
        if not self.points:
            self.points = [(0, 1.0)]

        self.min_age, self.max_age = int(age_range[0]), int(age_range[1])
        if self.min_age < 0 or self.max_age < self.min_age:
            raise ValueError(f"age_range must be 0 <= min <= max, got {age_range!r}")

        self.rng = np.random.default_rng(seed)

    # ---- visitor creation ----
    def generate(self):
        """Return `total_visitors` new Visitor records, in creation order."""
        count = self.total_visitors
        ages = self.rng.integers(self.min_age, self.max_age + 1, size=count)
        dates = self._generate_visit_dates(count)
        firsts = self.rng.choice(FIRST_NAMES, size=count)
        lasts = self.rng.choice(LAST_NAMES, size=count)
        phones = self.rng.integers(0, 10000, size=count)

        visitors = [
            Visitor(f"{first} {last}", int(age), f"555-{int(phone):04d}", self.ids.next(), day)
            for first, last, age, phone, day in zip(firsts, lasts, ages, phones, dates)
        ]
        print(f"📋 Created {len(visitors)} visitors")
        return visitors

    def _generate_visit_dates(self, count):
        """Visit dates following the distribution curve."""
        last_day = max(0, self.points[-1][0])

        day_weights = [max(0.0, self._mean_at(day)) for day in range(last_day + 1)]
        total_weight = sum(day_weights)
        if total_weight == 0:
            # Fallback: uniform distribution
            day_weights = [1.0] * len(day_weights)
            total_weight = len(day_weights)
        day_probs = [w / total_weight for w in day_weights]

        offsets = self.rng.choice(len(day_probs), size=count, p=day_probs, replace=True)
        return [(self.start_date + timedelta(days=int(o))).isoformat() for o in offsets]

    # ---- curve evaluation ----
    def _mean_at(self, day: int) -> float:
        """Linear interpolation between control points; clamp at ends."""
        pts = self.points

        if day <= pts[0][0]:
            return pts[0][1]
        if day >= pts[-1][0]:
            return pts[-1][1]

        for (d1, y1), (d2, y2) in zip(pts, pts[1:]):
            if d1 <= day <= d2:
                span = d2 - d1
                t = 0.0 if span == 0 else (day - d1) / span
                return y1 + t * (y2 - y1)

        return pts[-1][1]
