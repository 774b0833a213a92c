"""
Framework-agnostic input validation for the growth simulator UI.

The form accepts one free-text field. This module turns that text into
validated `CalculationParams` or raises `InvalidInput` with a short,
user-facing message. It has no UI framework dependencies.
"""

from typing import Dict, Optional
import logging
import re

from src.growth_calculator import CalculationParams

logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = "Anna positiivinen luku."

# Leading integer: optional whitespace and sign, then ASCII digits. Anything
# after the digits is ignored ("20min" -> 20, "3.7" -> 3).
_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")

# Longer digit strings are parsed as floats (inf past the float range)
MAX_INT_DIGITS = 300


class InvalidInput(ValueError):
    """Raised when the doubling-time text is not a positive integer."""

    def __init__(self, raw_input: object, message: str = INVALID_INPUT_MESSAGE, context: Optional[Dict] = None):
        """Initialize the error.

        Args:
            raw_input: The text exactly as submitted
            message: User-facing message shown next to the form
            context: Additional context information for logs
        """
        super().__init__(message)
        self.raw_input = raw_input
        self.message = message
        self.context = context or {}

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'raw_input': self.raw_input,
            'message': self.message,
            'context': self.context,
        }


def parse_int_prefix(raw_input: object) -> Optional[float]:
    """Parse the leading integer of `raw_input`; None when there is none.

    Digit strings longer than MAX_INT_DIGITS are parsed as floats, so values
    beyond the float range come back as `inf` or `-inf` instead of raising.
    """
    if raw_input is None:
        return None
    match = _LEADING_INT.match(str(raw_input))
    if match is None:
        return None
    digits = match.group(1)
    if len(digits.lstrip("+-").lstrip("0")) > MAX_INT_DIGITS:
        return float(digits)
    return int(digits)


def parse_doubling_time(raw_input: object) -> CalculationParams:
    """Validate raw form text and build calculator params.

    Raises:
        InvalidInput: when the text has no leading integer or the value is <= 0
    """
    value = parse_int_prefix(raw_input)
    if value is None:
        logger.debug("Rejected doubling time %r: not a number", raw_input)
        raise InvalidInput(raw_input, context={'reason': 'not_a_number'})
    if value <= 0:
        logger.debug("Rejected doubling time %r: not positive", raw_input)
        raise InvalidInput(raw_input, context={'reason': 'not_positive', 'value': value})
    return CalculationParams(doubling_time=value)


__all__ = [
    "INVALID_INPUT_MESSAGE",
    "InvalidInput",
    "parse_int_prefix",
    "parse_doubling_time",
]
