"""
RRI Codec - structured object model for the DENIC RRI registry protocol.

This package builds, encodes and parses RRI queries: the line-oriented
key/value protocol used to manage domains and contacts and to drain a
provider's message queue.
"""

__version__ = "0.1.0"
__author__ = "RRI Codec Team"

from rri.exceptions import (
    RRIError,
    EnumerationError,
    HandleError,
    FieldListError,
    QueryParseError,
    MalformedLineError,
    MissingFieldError,
    DuplicateFieldError,
    ConfigError,
)
from rri.enums import (
    ErrorCode,
    LogLevel,
    QueryFormat,
)
from rri.tokens import (
    ProtocolToken,
    Version,
    QueryAction,
    QueryFieldName,
    QueryFieldEntity,
    ContactType,
    CONTACT_TYPE_PERSON,
    CONTACT_TYPE_ORGANISATION,
    CONTACT_TYPE_REQUEST,
    ENTITY_VERIFICATION_INFORMATION,
)
from rri.fields import (
    QueryField,
    EntityMarker,
    QueryFieldList,
)
from rri.handle import DenicHandle
from rri.domain_names import (
    put_domain_to_query_fields,
    to_ace,
    to_idn,
)
from rri.models import (
    VerificationInformation,
    ContactData,
    DomainData,
)
from rri.config import (
    LATEST_VERSION,
    ProtocolConfig,
    LoggingConfig,
    CodecConfig,
    create_default_config,
    load_config_from_file,
    save_config_to_file,
    load_config_from_env,
)
from rri.query import (
    Query,
    new_query,
    new_login_query,
    new_logout_query,
    new_create_contact_query,
    new_update_contact_query,
    new_check_handle_query,
    new_info_handle_query,
    new_create_domain_query,
    new_check_domain_query,
    new_info_domain_query,
    new_update_domain_query,
    new_change_holder_query,
    new_delete_domain_query,
    new_restore_domain_query,
    new_transit_domain_query,
    new_create_auth_info1_query,
    new_create_auth_info2_query,
    new_change_provider_query,
    new_queue_read_query,
    new_queue_delete_query,
    parse_query_kv,
    parse_query,
)
from rri.response import (
    Response,
    parse_response_kv,
    parse_response,
)
from rri.audit_logger import (
    AuditLogger,
    LogEntry,
)
from rri.codec import RRICodec

__all__ = [
    # Exceptions
    "RRIError",
    "EnumerationError",
    "HandleError",
    "FieldListError",
    "QueryParseError",
    "MalformedLineError",
    "MissingFieldError",
    "DuplicateFieldError",
    "ConfigError",
    # Enums
    "ErrorCode",
    "LogLevel",
    "QueryFormat",
    # Tokens
    "ProtocolToken",
    "Version",
    "QueryAction",
    "QueryFieldName",
    "QueryFieldEntity",
    "ContactType",
    "CONTACT_TYPE_PERSON",
    "CONTACT_TYPE_ORGANISATION",
    "CONTACT_TYPE_REQUEST",
    "ENTITY_VERIFICATION_INFORMATION",
    # Fields
    "QueryField",
    "EntityMarker",
    "QueryFieldList",
    # Handle
    "DenicHandle",
    # Domain names
    "put_domain_to_query_fields",
    "to_ace",
    "to_idn",
    # Models
    "VerificationInformation",
    "ContactData",
    "DomainData",
    # Configuration
    "LATEST_VERSION",
    "ProtocolConfig",
    "LoggingConfig",
    "CodecConfig",
    "create_default_config",
    "load_config_from_file",
    "save_config_to_file",
    "load_config_from_env",
    # Query
    "Query",
    "new_query",
    "new_login_query",
    "new_logout_query",
    "new_create_contact_query",
    "new_update_contact_query",
    "new_check_handle_query",
    "new_info_handle_query",
    "new_create_domain_query",
    "new_check_domain_query",
    "new_info_domain_query",
    "new_update_domain_query",
    "new_change_holder_query",
    "new_delete_domain_query",
    "new_restore_domain_query",
    "new_transit_domain_query",
    "new_create_auth_info1_query",
    "new_create_auth_info2_query",
    "new_change_provider_query",
    "new_queue_read_query",
    "new_queue_delete_query",
    "parse_query_kv",
    "parse_query",
    # Response
    "Response",
    "parse_response_kv",
    "parse_response",
    # Audit Logger
    "AuditLogger",
    "LogEntry",
    # Codec
    "RRICodec",
]
