"""
SM-2 scheduling algorithm.

This is a pure computation module with no I/O: callers persist the
returned state themselves.
"""

import logging
import math
from datetime import date, timedelta

from lexicard.domain.cards.models import CardState
from lexicard.domain.constants import (
    FAILED_INTERVAL,
    FIRST_INTERVAL,
    MAX_QUALITY,
    MIN_EASE_FACTOR,
    MIN_QUALITY,
    PASSING_QUALITY,
    SECOND_INTERVAL,
)

logger = logging.getLogger(__name__)


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round with ties going up (2.5 -> 3), unlike the builtin banker's rounding.
    """
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def clamp_quality(quality: int | float) -> int:
    """
    Coerce a grade into the 0-5 scale.

    Floats are rounded half-up first; anything outside the scale is clamped
    to the nearest bound and logged. NaN counts as a blackout (0) and
    infinities go to the matching bound.
    """
    if not math.isfinite(quality):
        clamped = MAX_QUALITY if quality > 0 else MIN_QUALITY
        logger.warning(f"Quality {quality!r} is not a finite number, using {clamped}")
        return clamped

    q = int(round_half_up(quality))
    if q < MIN_QUALITY or q > MAX_QUALITY:
        clamped = max(MIN_QUALITY, min(MAX_QUALITY, q))
        logger.warning(f"Quality {quality!r} outside {MIN_QUALITY}-{MAX_QUALITY}, using {clamped}")
        return clamped
    return q


def is_passing(quality: int) -> bool:
    return quality >= PASSING_QUALITY


def next_ease_factor(ease_factor: float, quality: int) -> float:
    """
    SM-2 ease update, floored at 1.3 and rounded to two decimals.

    EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
    """
    miss = MAX_QUALITY - quality
    updated = max(MIN_EASE_FACTOR, ease_factor + (0.1 - miss * (0.08 + miss * 0.02)))
    return round_half_up(updated, 2)


def advance(state: CardState, quality: int | float, today: date) -> CardState:
    """
    Compute the state that follows grading an item.

    Args:
        state: Current state of the item (CardState.initial for unseen items).
        quality: Recall grade on the 0-5 scale. Out-of-range values are clamped.
        today: Calendar date the grading happens on.

    Returns:
        The next CardState; the input is left untouched.
    """
    q = clamp_quality(quality)

    if is_passing(q):
        if state.repetitions == 0:
            interval = FIRST_INTERVAL
        elif state.repetitions == 1:
            interval = SECOND_INTERVAL
        else:
            interval = int(round_half_up(state.interval * state.ease_factor))
        repetitions = state.repetitions + 1
    else:
        repetitions = 0
        interval = FAILED_INTERVAL

    return CardState(
        interval=interval,
        repetitions=repetitions,
        ease_factor=next_ease_factor(state.ease_factor, q),
        next_review=today + timedelta(days=interval),
        last_review=today,
        quality=q,
    )
