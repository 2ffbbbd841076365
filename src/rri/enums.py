"""
Enumeration types for the RRI codec.

These enums are closed sets used by the library itself (error codes, log
levels, wire formats). Protocol values that must stay open to server-side
additions, such as actions and field names, live in ``rri.tokens``.
"""

from enum import Enum


class ErrorCode(Enum):
    """Error codes carried by every ``RRIError``."""

    INVALID_ENUMERATION = "invalid_enumeration"
    INVALID_HANDLE = "invalid_handle"
    MALFORMED_LINE = "malformed_line"
    MISSING_FIELD = "missing_field"
    DUPLICATE_FIELD = "duplicate_field"
    NESTED_ENTITY = "nested_entity"
    INVALID_FIELD = "invalid_field"
    UNSUPPORTED_FORMAT = "unsupported_format"
    INVALID_CONFIG = "invalid_config"


class LogLevel(Enum):
    """Logging severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class QueryFormat(Enum):
    """Wire encodings a query can be exchanged in."""

    KV = "kv"
