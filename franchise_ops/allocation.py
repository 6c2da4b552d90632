"""
franchise_ops.allocation
========================

Marketing channel distribution: keep a set of budget shares summing to
exactly 100 after independent edits and integer rounding.

Normalisation is an explicit operation.  :pyfunc:`apply_raw_edit` changes
one channel and leaves the set unbalanced; the caller decides when to call
:pyfunc:`normalize` (or :pyfunc:`rebalance_around`, the slider behaviour that
moves the siblings along with the edited channel).

Channel keys are case-insensitive; iteration order of the input mapping is
the tie-break order everywhere.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Mapping, Sequence

from .models import ChannelShare

logger = logging.getLogger(__name__)

TOTAL = 100

DEFAULT_DISTRIBUTION: Dict[str, int] = {
    "social media": 35,
    "email": 25,
    "search ads": 30,
    "website": 10,
}


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------
def canonical_channel(name: str) -> str:
    """Key under which a channel is stored: stripped and lower-cased."""
    return name.strip().lower()


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -round_half_up(-value)
    return int(math.floor(value + 0.5))


def scale_to_percent(values: Sequence[float], total: float) -> List[int]:
    """Scale *values* so they represent shares of *total*, rounded half up."""
    return [round_half_up(v / total * TOTAL) for v in values]


def equal_split(n: int, total: int = TOTAL) -> List[int]:
    """
    Split *total* into *n* integers as evenly as possible; the first
    ``total % n`` slots get the extra points.

    >>> equal_split(3)
    [34, 33, 33]
    """
    base, extra = divmod(total, n)
    return [base + 1 if i < extra else base for i in range(n)]


def distribute_remainder(values: Sequence[int], target: int = TOTAL) -> List[int]:
    """
    Push the rounding drift ``sum(values) - target`` onto the largest value.

    Ties go to the earliest position.  If the correction would make the
    chosen value negative it is clamped to 0 and the rest of the drift moves
    to the next-largest value.
    """
    result = list(values)
    delta = sum(result) - target
    if delta == 0:
        return result

    order = sorted(range(len(result)), key=lambda i: (-result[i], i))
    for i in order:
        adjusted = result[i] - delta
        if adjusted >= 0:
            logger.debug(f"Correcting rounding drift of {delta} at position {i}")
            result[i] = adjusted
            return result
        logger.warning(f"Drift {delta} exceeds value {result[i]} at position {i}; clamping to 0")
        delta -= result[i]
        result[i] = 0
    return result


def _match_key(current: Mapping[str, float], channel: str) -> str:
    """Existing key equal to *channel* ignoring case, else its canonical form."""
    wanted = canonical_channel(channel)
    for key in current:
        if canonical_channel(key) == wanted:
            return key
    return wanted


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------
def normalize(shares: Mapping[str, float]) -> Dict[str, int]:
    """
    Return the same channels as non-negative integers summing to 100.

    * all-zero input: equal split, remainder to the first channels;
    * otherwise each value is scaled to ``round_half_up(v / sum * 100)`` and
      the drift is corrected on the largest channel.

    Negative inputs count as 0.  Never raises for a non-empty mapping and is
    idempotent: ``normalize(normalize(x)) == normalize(x)``.
    """
    keys = list(shares)
    if not keys:
        return {}

    values = [max(0.0, float(shares[k])) for k in keys]
    total = sum(values)
    if total == 0:
        return dict(zip(keys, equal_split(len(keys))))

    return dict(zip(keys, distribute_remainder(scale_to_percent(values, total))))


# Library entry point used by the HTTP layer and the CLI
normalize_allocation = normalize


def apply_raw_edit(current: Mapping[str, int], channel: str, new_value: int) -> Dict[str, int]:
    """
    Set one channel without touching its siblings.

    The result is usually unbalanced; call :pyfunc:`normalize` when the user
    confirms.  An unknown channel is appended under its canonical name.
    """
    result = dict(current)
    result[_match_key(current, channel)] = new_value
    return result


def rebalance_around(current: Mapping[str, float], channel: str, new_value: float) -> Dict[str, int]:
    """
    Set *channel* to *new_value* (clamped to 0..100) and scale the other
    channels proportionally into the remaining points.

    Siblings that are all zero share the remainder equally.  The edited
    channel keeps its value exactly; rounding drift lands on the largest
    sibling.
    """
    key = _match_key(current, channel)
    value = min(TOTAL, max(0, round_half_up(float(new_value))))
    others = [k for k in current if k != key]
    if not others:
        return {key: TOTAL}

    remaining = TOTAL - value
    other_values = [max(0.0, float(current[k])) for k in others]
    other_total = sum(other_values)
    if other_total == 0:
        scaled = equal_split(len(others), remaining)
    else:
        scaled = [round_half_up(v / other_total * remaining) for v in other_values]
        scaled = distribute_remainder(scaled, remaining)

    result = dict(zip(others, scaled))
    result[key] = value
    # keep the caller's ordering
    ordered = {k: result[k] for k in current if k in result}
    ordered.update({k: v for k, v in result.items() if k not in ordered})
    return ordered


def is_balanced(shares: Mapping[str, float]) -> bool:
    """True when the shares add up to exactly 100."""
    return sum(shares.values()) == TOTAL


def as_shares(shares: Mapping[str, float]) -> List[ChannelShare]:
    """Mapping → list of :class:`ChannelShare`, preserving order."""
    return [ChannelShare(name=name, percentage=pct) for name, pct in shares.items()]
