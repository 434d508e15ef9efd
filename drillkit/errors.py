"""
Error hierarchy for drill sessions and content loading.

Every error raised deliberately by drillkit derives from DrillError so the
calling layer can catch the family with one clause.
"""


class DrillError(Exception):
    """Base class for drillkit errors."""
    pass


class InvalidSession(DrillError):
    """Raised when a session cannot be built from the given input (e.g. an empty item pool)."""
    pass


class SessionExhausted(DrillError):
    """Raised when a question or answer is requested from a finished session."""
    pass


class QuestionNotPresented(DrillError):
    """Raised when an answer is submitted with no question pending for the current position."""
    pass


class AdapterContractViolation(DrillError):
    """Raised when a content adapter returns a malformed option set."""
    pass


class ContentError(DrillError):
    """Raised when drill content cannot be located, parsed or validated."""
    pass
