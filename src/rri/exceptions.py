"""
Exception classes for the RRI codec.

All exceptions inherit from RRIError and provide structured error
information with codes, messages, and optional details.
"""

from typing import Optional


class RRIError(Exception):
    """Base exception for all RRI codec errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class EnumerationError(RRIError):
    """Raised when a closed protocol enumeration receives an unknown value."""

    pass


class HandleError(RRIError):
    """Raised when a DENIC handle does not match DENIC-<id>-<code>."""

    pass


class FieldListError(RRIError):
    """Raised when a field list operation would nest entity spans."""

    pass


class QueryParseError(RRIError):
    """Raised when wire text cannot be parsed into a query."""

    pass


class MalformedLineError(QueryParseError):
    """Raised when a non-blank line has no ':' separator."""

    pass


class MissingFieldError(QueryParseError):
    """Raised when a required field (version, action) is absent."""

    pass


class DuplicateFieldError(QueryParseError):
    """Raised when a required field (version, action) appears more than once."""

    pass


class ConfigError(RRIError):
    """Raised when configuration cannot be loaded or is invalid."""

    pass
