"""Signature feature exceptions."""
from __future__ import annotations


class SignatureError(Exception):
    """Base exception for the signature feature."""


class SignatureNotReadyError(SignatureError):
    """Raised when commit() is called before the capture is ready."""


class InvalidStyleIndexError(SignatureError, ValueError):
    """Raised when a style index outside the catalog is selected."""


class InvalidImageDataError(SignatureError, ValueError):
    """Raised when a drawn signature payload is not a decodable PNG data URI."""


class SignaturePersistenceError(SignatureError):
    """Raised when saving or listing signatures fails in the repository."""
