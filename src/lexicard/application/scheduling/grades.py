"""Mappings from user-facing answers to SM-2 quality grades."""

from enum import IntEnum

from lexicard.domain.constants import PERCENTAGE_GRADES


class ReviewButton(IntEnum):
    """The four answer buttons shown under a flashcard."""

    AGAIN = 0
    HARD = 2
    GOOD = 4
    EASY = 5


def quality_from_percentage(percentage: float) -> int:
    """
    Translate a quiz score (0-100) into a 0-5 quality grade.

    >>> quality_from_percentage(95)
    5
    >>> quality_from_percentage(72)
    4
    >>> quality_from_percentage(5)
    0
    """
    for threshold, quality in PERCENTAGE_GRADES:
        if percentage >= threshold:
            return quality
    return 0
