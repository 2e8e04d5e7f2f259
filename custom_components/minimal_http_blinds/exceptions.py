"""Exceptions raised while talking to a minimal HTTP blinds device."""

__all__ = [
    "BlindsError",
    "BlindsInvalidValueError",
    "BlindsParseError",
    "BlindsTransportError",
]


class BlindsError(Exception):
    """Base exception class for blinds errors."""

    __slots__ = ()


class BlindsTransportError(BlindsError):
    """Raised when the device cannot be reached, times out or answers non-2xx."""

    __slots__ = ()


class BlindsParseError(BlindsError):
    """Raised when a response body is not a usable integer."""

    __slots__ = ()


class BlindsInvalidValueError(BlindsError):
    """Raised for an internally passed value that is not a position."""

    __slots__ = ()
