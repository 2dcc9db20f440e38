"""Exceptions raised by notescribe."""


class NotescribeError(Exception):
    """Base class for notescribe errors."""


class AudioDecodeError(NotescribeError):
    """Raised when an audio file exists but cannot be decoded."""
