"""Exceptions for the Roth library."""


class RothError(Exception):
    """Base exception for all Roth errors."""


class RothConnectionError(RothError):
    """Raised when the controller cannot be reached or answers with an error status."""


class RothDataError(RothError):
    """Base exception for unusable data returned by the controller."""


class RothDecodeError(RothDataError):
    """Raised when a response body is not a well-formed item list."""


class RothProtocolError(RothDataError):
    """Raised when a well-formed response carries no usable values."""


class RothParseError(RothDataError):
    """Raised when a single wire value cannot be converted."""


class RothFieldParseError(RothParseError):
    """Raised when a wire item name does not address a known sensor field.

    The sensor decoder recovers from this per item: the item is skipped and
    the remaining items are still applied.
    """
