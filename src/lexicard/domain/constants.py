"""Centralized constants for lexicard.

All magic numbers and scheduling defaults live here so every layer
imports from a single source of truth.
"""

# ---------- SM-2 ----------
DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3
FIRST_INTERVAL = 1  # days after the first successful review
SECOND_INTERVAL = 6  # days after the second successful review
FAILED_INTERVAL = 1

# ---------- Card maturity ----------
MATURE_INTERVAL = 7  # interval (days) from which a card counts as mature

# ---------- Sessions ----------
DEFAULT_SESSION_SIZE = 20

# ---------- Quiz score -> quality ----------
# (minimum percentage, quality), checked top-down
PERCENTAGE_GRADES = [
    (90, 5),  # quiz "excellent"
    (70, 4),  # quiz "pass"
    (50, 3),
    (30, 2),
    (10, 1),
]

# ---------- Persistence ----------
STATE_VERSION = 1
DEFAULT_TIMEZONE = "UTC"
