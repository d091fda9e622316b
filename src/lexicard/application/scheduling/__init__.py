# Application Scheduling Package
from .grades import ReviewButton, quality_from_percentage
from .sm2 import advance, clamp_quality, is_passing, next_ease_factor

__all__ = [
    "ReviewButton",
    "quality_from_percentage",
    "advance",
    "clamp_quality",
    "is_passing",
    "next_ease_factor",
]
