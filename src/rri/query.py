"""
RRI query model.

A ``Query`` is an ordered field list whose first two entries are always
``version`` and ``action``. Every action-specific constructor builds its own
fields and funnels through ``new_query``, which guarantees that layout.
Queries encode to the key-value wire format and parse back from it.
"""

import hashlib
from datetime import date
from typing import Callable, Optional

from .config import LATEST_VERSION
from .domain_names import put_domain_to_query_fields
from .enums import ErrorCode, QueryFormat
from .exceptions import DuplicateFieldError, MissingFieldError, QueryParseError
from .fields import QueryFieldList
from .handle import DenicHandle
from .models import ContactData, DomainData
from .tokens import (
    ACTION_CHANGE_HOLDER,
    ACTION_CHANGE_PROVIDER,
    ACTION_CHECK,
    ACTION_CREATE,
    ACTION_CREATE_AUTH_INFO1,
    ACTION_CREATE_AUTH_INFO2,
    ACTION_DELETE,
    ACTION_INFO,
    ACTION_LOGIN,
    ACTION_LOGOUT,
    ACTION_QUEUE_DELETE,
    ACTION_QUEUE_READ,
    ACTION_RESTORE,
    ACTION_TRANSIT,
    ACTION_UPDATE,
    FIELD_ACTION,
    FIELD_AUTH_INFO,
    FIELD_AUTH_INFO_EXPIRE,
    FIELD_AUTH_INFO_HASH,
    FIELD_DISCONNECT,
    FIELD_HANDLE,
    FIELD_MSG_ID,
    FIELD_MSG_TYPE,
    FIELD_PASSWORD,
    FIELD_USER,
    FIELD_VERSION,
    QueryAction,
    QueryFieldEntity,
    Version,
)


class Query:
    """An RRI request."""

    def __init__(self, fields: QueryFieldList) -> None:
        self._fields = fields

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Query):
            return NotImplemented
        return self._fields == other._fields

    def __repr__(self) -> str:
        return f"Query({self._fields!r})"

    def __str__(self) -> str:
        """Short human readable form, e.g. ``LOGIN{"alice"}``."""
        detail = ""
        if self.action() == ACTION_LOGIN:
            detail = f'"{self.first_field(FIELD_USER)}"'
        return f"{self.action()}{{{detail}}}"

    def version(self) -> Version:
        return Version(self.first_field(FIELD_VERSION)).normalize()

    def action(self) -> QueryAction:
        return QueryAction(self.first_field(FIELD_ACTION)).normalize()

    def fields(self) -> QueryFieldList:
        """Return a copy of all query fields, version and action included."""
        return self._fields.copy()

    def field(self, name: str) -> list[str]:
        """Return all values defined for a field name."""
        return self._fields.values(name)

    def first_field(self, name: str) -> str:
        """Return the first value for a field name or an empty string."""
        return self._fields.first_value(name)

    def entities(self) -> list[tuple[QueryFieldEntity, QueryFieldList]]:
        return self._fields.entities()

    def encode_kv(self) -> str:
        """Return the key-value representation used for RRI communication."""
        return self._fields.encode_kv()


def new_query(
    version: str,
    action: str,
    fields: Optional[QueryFieldList] = None,
) -> Query:
    """
    Assemble a query from a version, an action and additional fields.

    Args:
        version: Protocol version
        action: Query action (normalized to upper-case)
        fields: Optional fields appended after version and action

    Returns:
        New Query
    """
    new_fields = QueryFieldList()
    new_fields.add(FIELD_VERSION, Version(version).normalize())
    new_fields.add(FIELD_ACTION, QueryAction(action).normalize())
    if fields is not None:
        fields.copy_to(new_fields)
    return Query(new_fields)


def new_login_query(username: str, password: str, version: str = LATEST_VERSION) -> Query:
    fields = QueryFieldList()
    fields.add(FIELD_USER, username)
    fields.add(FIELD_PASSWORD, password)
    return new_query(version, ACTION_LOGIN, fields)


def new_logout_query(version: str = LATEST_VERSION) -> Query:
    return new_query(version, ACTION_LOGOUT)


def new_create_contact_query(
    handle: DenicHandle,
    contact_data: ContactData,
    version: str = LATEST_VERSION,
) -> Query:
    fields = QueryFieldList()
    fields.add(FIELD_HANDLE, str(handle))
    contact_data.put_to_query_fields(fields)
    return new_query(version, ACTION_CREATE, fields)


def new_update_contact_query(
    handle: DenicHandle,
    contact_data: ContactData,
    version: str = LATEST_VERSION,
) -> Query:
    fields = QueryFieldList()
    fields.add(FIELD_HANDLE, str(handle))
    contact_data.put_to_query_fields(fields)
    return new_query(version, ACTION_UPDATE, fields)


def new_check_handle_query(handle: DenicHandle, version: str = LATEST_VERSION) -> Query:
    """Return a check query for a contact or request contact handle."""
    fields = QueryFieldList()
    fields.add(FIELD_HANDLE, str(handle))
    return new_query(version, ACTION_CHECK, fields)


def new_info_handle_query(handle: DenicHandle, version: str = LATEST_VERSION) -> Query:
    """Return an info query for a contact or request contact handle."""
    fields = QueryFieldList()
    fields.add(FIELD_HANDLE, str(handle))
    return new_query(version, ACTION_INFO, fields)


def _domain_query(
    version: str,
    action: str,
    domain: str,
    domain_data: Optional[DomainData] = None,
) -> Query:
    fields = QueryFieldList()
    put_domain_to_query_fields(fields, domain)
    if domain_data is not None:
        domain_data.put_to_query_fields(fields)
    return new_query(version, action, fields)


def new_create_domain_query(
    domain: str,
    domain_data: DomainData,
    version: str = LATEST_VERSION,
) -> Query:
    return _domain_query(version, ACTION_CREATE, domain, domain_data)


def new_check_domain_query(domain: str, version: str = LATEST_VERSION) -> Query:
    return _domain_query(version, ACTION_CHECK, domain)


def new_info_domain_query(domain: str, version: str = LATEST_VERSION) -> Query:
    return _domain_query(version, ACTION_INFO, domain)


def new_update_domain_query(
    domain: str,
    domain_data: DomainData,
    version: str = LATEST_VERSION,
) -> Query:
    return _domain_query(version, ACTION_UPDATE, domain, domain_data)


def new_change_holder_query(
    domain: str,
    domain_data: DomainData,
    version: str = LATEST_VERSION,
) -> Query:
    return _domain_query(version, ACTION_CHANGE_HOLDER, domain, domain_data)


def new_delete_domain_query(domain: str, version: str = LATEST_VERSION) -> Query:
    return _domain_query(version, ACTION_DELETE, domain)


def new_restore_domain_query(domain: str, version: str = LATEST_VERSION) -> Query:
    return _domain_query(version, ACTION_RESTORE, domain)


def new_transit_domain_query(
    domain: str,
    disconnect: bool,
    version: str = LATEST_VERSION,
) -> Query:
    fields = QueryFieldList()
    put_domain_to_query_fields(fields, domain)
    fields.add(FIELD_DISCONNECT, "true" if disconnect else "false")
    return new_query(version, ACTION_TRANSIT, fields)


def compute_hash_sha256(text: str) -> str:
    """Return the lower-case hex SHA-256 digest of a UTF-8 string."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def format_date(day: date) -> str:
    """Format a date as ``YYYYMMDD``."""
    return f"{day.year:04d}{day.month:02d}{day.day:02d}"


def new_create_auth_info1_query(
    domain: str,
    auth_info: str,
    expire_day: date,
    version: str = LATEST_VERSION,
) -> Query:
    """
    Return a query registering an AuthInfo1 for a domain.

    Only the SHA-256 digest of the auth info leaves the client.

    Args:
        domain: Domain name
        auth_info: Plaintext auth info
        expire_day: Last day the auth info is valid
        version: Protocol version
    """
    fields = QueryFieldList()
    put_domain_to_query_fields(fields, domain)
    fields.add(FIELD_AUTH_INFO_HASH, compute_hash_sha256(auth_info))
    fields.add(FIELD_AUTH_INFO_EXPIRE, format_date(expire_day))
    return new_query(version, ACTION_CREATE_AUTH_INFO1, fields)


def new_create_auth_info2_query(domain: str, version: str = LATEST_VERSION) -> Query:
    return _domain_query(version, ACTION_CREATE_AUTH_INFO2, domain)


def new_change_provider_query(
    domain: str,
    auth_info: str,
    domain_data: DomainData,
    version: str = LATEST_VERSION,
) -> Query:
    fields = QueryFieldList()
    put_domain_to_query_fields(fields, domain)
    domain_data.put_to_query_fields(fields)
    fields.add(FIELD_AUTH_INFO, auth_info)
    return new_query(version, ACTION_CHANGE_PROVIDER, fields)


def new_queue_read_query(msg_type: str = "", version: str = LATEST_VERSION) -> Query:
    """
    Return a query reading from the registry message queue.

    Args:
        msg_type: Message type filter; empty reads all message types
        version: Protocol version
    """
    fields = QueryFieldList()
    if msg_type:
        fields.add(FIELD_MSG_TYPE, msg_type)
    return new_query(version, ACTION_QUEUE_READ, fields)


def new_queue_delete_query(
    msg_id: str,
    msg_type: str = "",
    version: str = LATEST_VERSION,
) -> Query:
    """
    Return a query deleting a message from the registry message queue.

    Args:
        msg_id: ID of the message to delete
        msg_type: Message type filter; required to delete the oldest message
            of a type that is not the oldest message in the whole queue
        version: Protocol version
    """
    fields = QueryFieldList()
    fields.add(FIELD_MSG_ID, msg_id)
    if msg_type:
        fields.add(FIELD_MSG_TYPE, msg_type)
    return new_query(version, ACTION_QUEUE_DELETE, fields)


def _require_single(fields: QueryFieldList, name: str) -> None:
    values = fields.values(name)
    if not values:
        raise MissingFieldError(
            code=ErrorCode.MISSING_FIELD.value,
            message=f"{name} key is missing",
            details={"field": str(name)},
        )
    if len(values) > 1:
        raise DuplicateFieldError(
            code=ErrorCode.DUPLICATE_FIELD.value,
            message=f"multiple {name} values",
            details={"field": str(name), "values": values},
        )


def parse_query_kv(text: str) -> Query:
    """
    Parse a single key-value encoded query.

    Args:
        text: Wire text

    Returns:
        Parsed Query

    Raises:
        MalformedLineError: If a non-blank line has no ':' separator
        MissingFieldError: If version or action is absent
        DuplicateFieldError: If version or action appears more than once
    """
    fields = QueryFieldList.parse_kv(text)
    _require_single(fields, FIELD_VERSION)
    _require_single(fields, FIELD_ACTION)
    return Query(fields)


_QUERY_PARSERS: dict[QueryFormat, Callable[[str], Query]] = {
    QueryFormat.KV: parse_query_kv,
}


def detect_query_format(text: str) -> QueryFormat:
    """Detect the wire format of a query; key-value is the only one in use."""
    return QueryFormat.KV


def parse_query(text: str, query_format: Optional[QueryFormat] = None) -> Query:
    """
    Parse a query, detecting its wire format unless one is given.

    Raises:
        QueryParseError: If the format is unsupported or the text is invalid
    """
    if query_format is None:
        query_format = detect_query_format(text)

    parser = _QUERY_PARSERS.get(query_format)
    if parser is None:
        raise QueryParseError(
            code=ErrorCode.UNSUPPORTED_FORMAT.value,
            message=f"unsupported query format {query_format!r}",
            details={"format": str(query_format)},
        )
    return parser(text)
