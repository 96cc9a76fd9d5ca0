"""Error types raised by the wellbeing engine."""

from typing import Optional


class WellbeingError(Exception):
    """Base class for all engine errors."""


class InvalidInput(WellbeingError, ValueError):
    """
    Caller supplied malformed data.

    Raised synchronously and never corrected on the caller's behalf.
    `field` names the offending attribute and `index` the offending
    position for sequence inputs such as questionnaire responses.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        index: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.field = field
        self.index = index

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "detail": self.message,
            "field": self.field,
            "index": self.index,
        }


class ConfigurationError(WellbeingError):
    """A static instrument definition (e.g. its severity band table) is malformed."""
