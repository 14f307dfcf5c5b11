# backend/feedgraph/services/velocity.py
"""
Mention velocity: relative growth of a name's mention count between two
points in time, and the hot / rising / new classification built on it.

    previous == 0  ->  velocity = current, status "new"
    otherwise      ->  velocity = (current - previous) / previous
                       "hot"     velocity > 1.0 and current >= 3
                       "rising"  velocity > 0.5
                       ""        anything else (never reported)

"new" names are only reported once they reach NEW_MIN_COUNT mentions.
"""
from __future__ import annotations

from typing import List, Mapping, Tuple

from feedgraph.schemas.graph import RisingMention

HOT_VELOCITY = 1.0
HOT_MIN_COUNT = 3
RISING_VELOCITY = 0.5
NEW_MIN_COUNT = 2

STATUS_HOT = "hot"
STATUS_RISING = "rising"
STATUS_NEW = "new"


def classify(current: int, previous: int) -> Tuple[float, str]:
    """Return (velocity, status); status is "" when the name is not moving."""
    if previous == 0:
        return float(current), STATUS_NEW

    velocity = (current - previous) / previous
    if velocity > HOT_VELOCITY and current >= HOT_MIN_COUNT:
        return velocity, STATUS_HOT
    if velocity > RISING_VELOCITY:
        return velocity, STATUS_RISING
    return velocity, ""


def is_reportable(status: str, current: int) -> bool:
    if status == STATUS_NEW:
        return current >= NEW_MIN_COUNT
    return status != ""


def rank_rising(
    entity_type: str,
    current_counts: Mapping[str, int],
    previous_counts: Mapping[str, int],
    limit: int,
) -> List[RisingMention]:
    """
    Classify every name in `current_counts` against `previous_counts`
    (missing = 0), keep the reportable ones, order by velocity descending
    (name ascending on ties) and truncate to `limit`.
    """
    results: List[RisingMention] = []
    for name, current in current_counts.items():
        previous = previous_counts.get(name, 0)
        velocity, status = classify(current, previous)
        if not is_reportable(status, current):
            continue
        results.append(RisingMention(
            name=name,
            entity_type=entity_type,
            current_count=current,
            previous_count=previous,
            velocity=velocity,
            status=status,
        ))

    results.sort(key=lambda r: (-r.velocity, r.name))
    return results[:max(limit, 0)]
