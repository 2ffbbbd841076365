"""
Structured logging for the RRI codec.

Every entry is rendered as a JSON object, a single text line, or both. In
audit mode each entry additionally carries an HMAC-SHA256 signature over its
canonical JSON payload so that log files can be checked for tampering.

RRI traffic contains credentials (the LOGIN password, auth info for provider
changes), so entry data is always masked before it is signed or written.
"""

import hashlib
import hmac
import json
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Optional, TextIO

from .enums import LogLevel
from .fields import QueryField, QueryFieldList
from .tokens import FIELD_ACTION, FIELD_VERSION

if TYPE_CHECKING:
    from .config import LoggingConfig
    from .query import Query


_LEVEL_ORDER = {
    LogLevel.DEBUG: 0,
    LogLevel.INFO: 1,
    LogLevel.WARN: 2,
    LogLevel.ERROR: 3,
}

_OUTPUT_FORMATS = ("json", "text", "both")


@dataclass
class LogEntry:
    """One emitted log record."""

    timestamp: str
    level: LogLevel
    component: str
    message: str
    data: dict = field(default_factory=dict)
    signature: Optional[str] = None

    def payload(self) -> dict:
        """Return the signed part of the entry as a JSON-ready dict."""
        return {
            "timestamp": self.timestamp,
            "level": self.level.value,
            "component": self.component,
            "message": self.message,
            "data": self.data,
        }


class AuditLogger:
    """
    Logger used by the codec facade.

    Supports:
    - JSON lines, text lines or both per entry
    - Dropping entries below a minimum level
    - HMAC-SHA256 signatures in audit mode
    - Masking of credentials anywhere in the entry data
    - Masked per-field summaries of queries
    """

    # Key substrings whose values are replaced before output.
    # 'authinfo' also covers authinfohash and authinfoexpire.
    SENSITIVE_KEYS = frozenset({
        'password', 'authinfo', 'secret', 'token',
        'signing_key', 'credential',
    })

    MASK_VALUE = "***MASKED***"

    def __init__(
        self,
        output_format: str = "both",
        output_stream: Optional[TextIO] = None,
        min_level: LogLevel = LogLevel.DEBUG,
    ):
        """
        Create a logger.

        Args:
            output_format: 'json', 'text' or 'both'
            output_stream: Where lines are written (sys.stderr if omitted)
            min_level: Entries below this level are dropped

        Raises:
            ValueError: If output_format is not supported
        """
        if output_format not in _OUTPUT_FORMATS:
            raise ValueError(f"unsupported output format {output_format!r}")

        self._format = output_format
        self._stream = output_stream or sys.stderr
        self._min_level = min_level
        self._key: Optional[bytes] = None
        self._entries: list[LogEntry] = []

    @classmethod
    def from_config(
        cls,
        config: "LoggingConfig",
        output_stream: Optional[TextIO] = None,
    ) -> "AuditLogger":
        """Create a logger from a LoggingConfig, enabling audit mode if set."""
        logger = cls(
            output_format=config.output_format,
            output_stream=output_stream,
            min_level=LogLevel(config.level),
        )
        if config.audit_mode and config.audit_signing_key:
            logger.enable_audit_mode(config.audit_signing_key)
        return logger

    @property
    def output_format(self) -> str:
        return self._format

    @property
    def min_level(self) -> LogLevel:
        return self._min_level

    @property
    def audit_mode(self) -> bool:
        return self._key is not None

    @property
    def entries(self) -> list[LogEntry]:
        """Entries emitted so far, oldest first."""
        return list(self._entries)

    def enable_audit_mode(self, signing_key: str) -> None:
        """Sign every following entry with HMAC-SHA256 under signing_key."""
        if not signing_key:
            raise ValueError("audit mode needs a non-empty signing key")
        self._key = signing_key.encode("utf-8")

    def disable_audit_mode(self) -> None:
        self._key = None

    def is_enabled_for(self, level: LogLevel) -> bool:
        return _LEVEL_ORDER[level] >= _LEVEL_ORDER[self._min_level]

    def log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        data: Optional[dict] = None,
    ) -> Optional[LogEntry]:
        """
        Mask, sign and write one entry.

        Args:
            level: Severity
            component: Name of the emitting component
            message: Human readable message
            data: Structured context; sensitive keys are masked

        Returns:
            The written LogEntry, or None if level is below the minimum
        """
        if not self.is_enabled_for(level):
            return None

        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            level=level,
            component=component,
            message=message,
            data=self.mask_sensitive_data(data or {}),
        )
        if self._key is not None:
            entry.signature = self._sign(entry)

        self._entries.append(entry)
        self._write(entry)
        return entry

    def debug(self, component: str, message: str, data: Optional[dict] = None) -> Optional[LogEntry]:
        return self.log(LogLevel.DEBUG, component, message, data)

    def info(self, component: str, message: str, data: Optional[dict] = None) -> Optional[LogEntry]:
        return self.log(LogLevel.INFO, component, message, data)

    def warn(self, component: str, message: str, data: Optional[dict] = None) -> Optional[LogEntry]:
        return self.log(LogLevel.WARN, component, message, data)

    def log_error(
        self,
        component: str,
        message: str,
        error: Optional[Exception] = None,
        additional_data: Optional[dict] = None,
    ) -> Optional[LogEntry]:
        """
        Write an error entry.

        Exceptions contribute their message and type; RRI errors also
        contribute their code and details.
        """
        data = dict(additional_data or {})

        if error is not None:
            data["error_message"] = str(error)
            data["error_type"] = type(error).__name__
            code = getattr(error, "code", None)
            if code is not None:
                data["error_code"] = code
            details = getattr(error, "details", None)
            if details:
                data["error_details"] = details

        return self.log(LogLevel.ERROR, component, message, data)

    def log_query(
        self,
        component: str,
        message: str,
        query: "Query",
        level: LogLevel = LogLevel.DEBUG,
    ) -> Optional[LogEntry]:
        """Log a query as a masked ``{field name: [values]}`` summary."""
        data = {
            "action": str(query.action()),
            "version": str(query.version()),
            "fields": summarize_fields(query.fields()),
        }
        return self.log(level, component, message, data)

    def mask_sensitive_data(self, data: dict) -> dict:
        """Return a copy of data with every sensitive key's value masked."""
        if not isinstance(data, dict):
            return data
        return {key: self._mask_value(key, value) for key, value in data.items()}

    def _mask_value(self, key: Any, value: Any) -> Any:
        lowered = str(key).lower()
        if any(sensitive in lowered for sensitive in self.SENSITIVE_KEYS):
            return self.MASK_VALUE
        if isinstance(value, dict):
            return self.mask_sensitive_data(value)
        if isinstance(value, list):
            return [self.mask_sensitive_data(item) for item in value]
        return value

    def _sign(self, entry: LogEntry) -> str:
        if self._key is None:
            raise RuntimeError("audit mode is not enabled")
        canonical = json.dumps(entry.payload(), sort_keys=True, ensure_ascii=False)
        return hmac.new(self._key, canonical.encode("utf-8"), hashlib.sha256).hexdigest()

    def verify_signature(self, entry: LogEntry) -> bool:
        """Return True if entry carries a valid signature under the current key."""
        if entry.signature is None or self._key is None:
            return False
        return hmac.compare_digest(entry.signature, self._sign(entry))

    def _write(self, entry: LogEntry) -> None:
        lines = []
        if self._format != "text":
            lines.append(self.format_json(entry))
        if self._format != "json":
            lines.append(self.format_text(entry))

        for line in lines:
            self._stream.write(line + "\n")
        self._stream.flush()

    def format_json(self, entry: LogEntry) -> str:
        obj = entry.payload()
        if entry.signature:
            obj["signature"] = entry.signature
        return json.dumps(obj, ensure_ascii=False)

    def format_text(self, entry: LogEntry) -> str:
        """Format: [TIMESTAMP] LEVEL [COMPONENT] MESSAGE {data} [sig:...]"""
        text = f"[{entry.timestamp}] {entry.level.value.upper()} [{entry.component}] {entry.message}"
        if entry.data:
            text += " " + json.dumps(entry.data, ensure_ascii=False)
        if entry.signature:
            text += f" [sig:{entry.signature[:16]}...]"
        return text

    def clear_entries(self) -> None:
        self._entries.clear()


def summarize_fields(fields: QueryFieldList) -> dict[str, list[str]]:
    """
    Group field values by name in order of first appearance.

    Entity markers are skipped; version and action are left out since they
    are logged separately.
    """
    summary: dict[str, list[str]] = {}
    for entry in fields:
        if not isinstance(entry, QueryField):
            continue
        if entry.name in (FIELD_VERSION, FIELD_ACTION):
            continue
        summary.setdefault(str(entry.name), []).append(entry.value)
    return summary
