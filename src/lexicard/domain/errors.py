"""Exception hierarchy for lexicard."""


class LexicardError(Exception):
    """Base class for all lexicard errors."""


class SessionFinishedError(LexicardError):
    """Raised when a grade is submitted to a session that has already ended."""


class StorageError(LexicardError):
    """Raised when a card repository cannot persist its state."""
