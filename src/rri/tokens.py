"""
Protocol tokens for the RRI wire format.

Versions, actions, field names, entity markers and contact types travel as
plain text. Each is modelled as a ``str`` subclass with its own canonical
case rule so that values compare equal to ordinary strings while still
knowing how to normalize themselves.

Most token types are open: the protocol is versioned and a client must not
choke on actions or field names it does not know yet. ``ContactType`` is the
exception and rejects anything but the two known values on parse.
"""

from .enums import ErrorCode
from .exceptions import EnumerationError


class ProtocolToken(str):
    """
    Base class for textual protocol values.

    Subclasses override ``_canonical`` to define their case rule and set
    ``accepts_unknown`` to False when ``parse`` must reject values outside
    ``known_values``.
    """

    accepts_unknown: bool = True
    known_values: frozenset[str] = frozenset()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({str(self)!r})"

    @staticmethod
    def _canonical(text: str) -> str:
        return text

    def normalize(self) -> "ProtocolToken":
        """Return the canonical form of this token (pure, idempotent)."""
        return type(self)(self._canonical(str(self)))

    @classmethod
    def parse(cls, text: str) -> "ProtocolToken":
        """
        Parse text into a normalized token.

        Args:
            text: Raw token text

        Returns:
            Normalized token of this type

        Raises:
            EnumerationError: If the type rejects unknown values and text is
                not one of ``known_values``
        """
        token = cls(text).normalize()
        if not cls.accepts_unknown and token not in cls.known_values:
            raise EnumerationError(
                code=ErrorCode.INVALID_ENUMERATION.value,
                message=f"invalid {cls.__name__} {text!r}",
                details={"value": text, "allowed": sorted(cls.known_values)},
            )
        return token


class Version(ProtocolToken):
    """RRI protocol version, kept verbatim."""


class QueryAction(ProtocolToken):
    """Action of an RRI query, canonically upper-case."""

    @staticmethod
    def _canonical(text: str) -> str:
        return text.upper()


class QueryFieldName(ProtocolToken):
    """Name of a single query field, canonically lower-case."""

    @staticmethod
    def _canonical(text: str) -> str:
        return text.lower()


class QueryFieldEntity(ProtocolToken):
    """Name of a nested record introduced by an entity marker line."""

    @staticmethod
    def _canonical(text: str) -> str:
        return text.lower()

    def marker(self) -> str:
        """Return the wire marker line, e.g. ``[verificationinformation]``."""
        if not self:
            return ""
        return f"[{self.normalize()}]"


class ContactType(ProtocolToken):
    """
    Type of a contact handle, canonically upper-case.

    Only PERSON and ORG are accepted by ``parse``; REQUEST exists as a
    constant for request contacts but is never parsed from user input.
    """

    accepts_unknown = False
    known_values = frozenset({"PERSON", "ORG"})

    @staticmethod
    def _canonical(text: str) -> str:
        return text.upper()


# Contact types
CONTACT_TYPE_PERSON = ContactType("PERSON")
CONTACT_TYPE_ORGANISATION = ContactType("ORG")
CONTACT_TYPE_REQUEST = ContactType("REQUEST")

# Entities
ENTITY_VERIFICATION_INFORMATION = QueryFieldEntity("verificationinformation")

# Field names
FIELD_VERSION = QueryFieldName("version")
FIELD_ACTION = QueryFieldName("action")
FIELD_USER = QueryFieldName("user")
FIELD_PASSWORD = QueryFieldName("password")
FIELD_DOMAIN_IDN = QueryFieldName("domain")
FIELD_DOMAIN_ACE = QueryFieldName("domain-ace")
FIELD_HOLDER = QueryFieldName("holder")
FIELD_GENERAL_REQUEST = QueryFieldName("generalrequest")
FIELD_ABUSE_CONTACT = QueryFieldName("abusecontact")
FIELD_NAME_SERVER = QueryFieldName("nserver")
FIELD_HANDLE = QueryFieldName("handle")
FIELD_DISCONNECT = QueryFieldName("disconnect")
FIELD_AUTH_INFO_HASH = QueryFieldName("authinfohash")
FIELD_AUTH_INFO_EXPIRE = QueryFieldName("authinfoexpire")
FIELD_AUTH_INFO = QueryFieldName("authinfo")
FIELD_TYPE = QueryFieldName("type")
FIELD_NAME = QueryFieldName("name")
FIELD_ORGANISATION = QueryFieldName("organisation")
FIELD_ADDRESS = QueryFieldName("address")
FIELD_POSTAL_CODE = QueryFieldName("postalcode")
FIELD_CITY = QueryFieldName("city")
FIELD_COUNTRY_CODE = QueryFieldName("countrycode")
FIELD_EMAIL = QueryFieldName("email")
FIELD_PHONE = QueryFieldName("phone")
FIELD_MSG_ID = QueryFieldName("msgid")
FIELD_MSG_TYPE = QueryFieldName("msgtype")
FIELD_VERIFIED_CLAIM = QueryFieldName("verifiedclaim")
FIELD_VERIFICATION_RESULT = QueryFieldName("verificationresult")
FIELD_VERIFICATION_REFERENCE = QueryFieldName("verificationreference")
FIELD_VERIFICATION_TIMESTAMP = QueryFieldName("verificationtimestamp")
FIELD_VERIFICATION_EVIDENCE = QueryFieldName("verificationevidence")
FIELD_VERIFICATION_METHOD = QueryFieldName("verificationmethod")
FIELD_TRUST_FRAMEWORK = QueryFieldName("trustframework")

# Actions
ACTION_LOGIN = QueryAction("LOGIN")
ACTION_LOGOUT = QueryAction("LOGOUT")
ACTION_CHECK = QueryAction("CHECK")
ACTION_INFO = QueryAction("INFO")
ACTION_CREATE = QueryAction("CREATE")
ACTION_UPDATE = QueryAction("UPDATE")
ACTION_CHANGE_HOLDER = QueryAction("CHHOLDER")
ACTION_DELETE = QueryAction("DELETE")
ACTION_RESTORE = QueryAction("RESTORE")
ACTION_TRANSIT = QueryAction("TRANSIT")
ACTION_CREATE_AUTH_INFO1 = QueryAction("CREATE-AUTHINFO1")
ACTION_CREATE_AUTH_INFO2 = QueryAction("CREATE-AUTHINFO2")
ACTION_CHANGE_PROVIDER = QueryAction("CHPROV")
ACTION_QUEUE_READ = QueryAction("QUEUE-READ")
ACTION_QUEUE_DELETE = QueryAction("QUEUE-DELETE")
