"""
Codec facade used by the transport layer.

``RRICodec`` binds a configuration and a logger to the query and response
codecs: the transport hands it query objects to encode and raw strings to
decode, and never deals with field lists directly.
"""

from typing import Optional

from .audit_logger import AuditLogger
from .config import CodecConfig, create_default_config, validate_config
from .enums import QueryFormat
from .exceptions import QueryParseError
from .fields import QueryFieldList
from .query import Query, new_query, parse_query
from .response import Response, parse_response
from .tokens import Version


class RRICodec:
    """
    Encodes queries and decodes queries and responses.

    Encoding and decoding are logged at debug level with secrets masked;
    parse failures are logged as errors and re-raised unchanged.
    """

    COMPONENT = "rri_codec"

    def __init__(
        self,
        config: Optional[CodecConfig] = None,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        """
        Initialize the codec.

        Args:
            config: Codec configuration (defaults to the latest version, KV format)
            logger: Optional audit logger; created from config.logging if omitted

        Raises:
            ConfigError: If the configuration is invalid
        """
        self._config = config or create_default_config()
        validate_config(self._config)
        self._logger = logger or AuditLogger.from_config(self._config.logging)
        self._format = QueryFormat(self._config.protocol.query_format)

    @property
    def version(self) -> Version:
        return Version(self._config.protocol.version).normalize()

    @property
    def query_format(self) -> QueryFormat:
        return self._format

    @property
    def logger(self) -> AuditLogger:
        return self._logger

    def new(self, action: str, fields: Optional[QueryFieldList] = None) -> Query:
        """Build a query for an action at the configured protocol version."""
        return new_query(self.version, action, fields)

    def encode(self, query: Query) -> str:
        """Return the wire text of a query."""
        self._logger.log_query(self.COMPONENT, "encoding query", query)
        return query.encode_kv()

    def decode(self, text: str) -> Query:
        """
        Parse wire text into a validated query.

        Raises:
            QueryParseError: If the text is not a valid query
        """
        try:
            query = parse_query(text, self._format)
        except QueryParseError as e:
            self._logger.log_error(self.COMPONENT, "failed to parse query", error=e)
            raise
        self._logger.log_query(self.COMPONENT, "decoded query", query)
        return query

    def decode_response(self, text: str) -> Response:
        """
        Parse wire text into a response.

        Raises:
            QueryParseError: If a line is malformed
        """
        try:
            response = parse_response(text)
        except QueryParseError as e:
            self._logger.log_error(self.COMPONENT, "failed to parse response", error=e)
            raise
        self._logger.debug(
            self.COMPONENT,
            "decoded response",
            {"field_count": len(response.fields())},
        )
        return response
