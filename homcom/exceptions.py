"""
Common exception classes.
"""


class ParameterError(Exception):
    """Group or homomorphism parameters are invalid."""


class InvalidElementError(Exception):
    """Value is not an element of the group."""


class RangeError(Exception):
    """Committed value is outside of the allowed range."""


class InvalidOpeningError(Exception):
    """A commitment does not open to the claimed value."""


class ProtocolStateError(Exception):
    """Protocol message requested or received out of order."""
