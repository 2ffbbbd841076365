"""
Data models for RRI contact and domain records.

Each record knows how to project itself into a ``QueryFieldList``. The
projection order is part of the wire contract since the registry may group
repeated fields by position.
"""

from dataclasses import dataclass, field

from .fields import QueryFieldList
from .handle import DenicHandle
from .tokens import (
    ENTITY_VERIFICATION_INFORMATION,
    FIELD_ABUSE_CONTACT,
    FIELD_ADDRESS,
    FIELD_CITY,
    FIELD_COUNTRY_CODE,
    FIELD_EMAIL,
    FIELD_GENERAL_REQUEST,
    FIELD_HOLDER,
    FIELD_NAME,
    FIELD_NAME_SERVER,
    FIELD_ORGANISATION,
    FIELD_PHONE,
    FIELD_POSTAL_CODE,
    FIELD_TRUST_FRAMEWORK,
    FIELD_TYPE,
    FIELD_VERIFICATION_EVIDENCE,
    FIELD_VERIFICATION_METHOD,
    FIELD_VERIFICATION_REFERENCE,
    FIELD_VERIFICATION_RESULT,
    FIELD_VERIFICATION_TIMESTAMP,
    FIELD_VERIFIED_CLAIM,
    ContactType,
    QueryFieldName,
)


def split_lines(text: str) -> list[str]:
    """Split text on any line break style; an empty string yields ``[""]``."""
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


@dataclass
class VerificationInformation:
    """Identity verification details attached to a contact."""

    verified_claims: list[str] = field(default_factory=list)
    verification_result: str = ""
    verification_reference: str = ""
    verification_timestamp: str = ""  # ISO 8601
    verification_evidence: str = ""
    verification_method: str = ""
    trust_framework: str = ""

    def put_to_query_fields(self, fields: QueryFieldList) -> None:
        """Append this record as one ``[verificationinformation]`` entity."""
        entity_fields = QueryFieldList()
        entity_fields.add(FIELD_VERIFIED_CLAIM, *self.verified_claims)

        optional: list[tuple[QueryFieldName, str]] = [
            (FIELD_VERIFICATION_RESULT, self.verification_result),
            (FIELD_VERIFICATION_REFERENCE, self.verification_reference),
            (FIELD_VERIFICATION_TIMESTAMP, self.verification_timestamp),
            (FIELD_VERIFICATION_EVIDENCE, self.verification_evidence),
            (FIELD_VERIFICATION_METHOD, self.verification_method),
            (FIELD_TRUST_FRAMEWORK, self.trust_framework),
        ]
        for name, value in optional:
            if value:
                entity_fields.add(name, value)

        fields.add_entity(ENTITY_VERIFICATION_INFORMATION, entity_fields)


@dataclass
class ContactData:
    """Contact handle information."""

    type: ContactType
    name: str = ""
    organisation: str = ""  # may span several lines
    address: str = ""  # may span several lines
    postal_code: str = ""
    city: str = ""
    country_code: str = ""
    email: list[str] = field(default_factory=list)
    phone: str = ""
    verification_information: list[VerificationInformation] = field(default_factory=list)

    def put_to_query_fields(self, fields: QueryFieldList) -> None:
        """
        Append the contact fields in wire order.

        Organisation and address contribute one field per physical line.
        Verification information records come last, each as its own entity.
        """
        fields.add(FIELD_TYPE, ContactType(self.type).normalize())
        fields.add(FIELD_NAME, self.name)
        fields.add(FIELD_ORGANISATION, *split_lines(self.organisation))
        fields.add(FIELD_ADDRESS, *split_lines(self.address))
        fields.add(FIELD_POSTAL_CODE, self.postal_code)
        fields.add(FIELD_CITY, self.city)
        fields.add(FIELD_COUNTRY_CODE, self.country_code)
        fields.add(FIELD_EMAIL, *self.email)
        fields.add(FIELD_PHONE, self.phone)

        for verification_info in self.verification_information:
            verification_info.put_to_query_fields(fields)


@dataclass
class DomainData:
    """Domain holder, contact and name server information."""

    holder_handles: list[DenicHandle] = field(default_factory=list)
    general_request_handles: list[DenicHandle] = field(default_factory=list)
    abuse_contact_handles: list[DenicHandle] = field(default_factory=list)
    name_servers: list[str] = field(default_factory=list)

    def put_to_query_fields(self, fields: QueryFieldList) -> None:
        """Append handles (empty ones skipped) and name servers in wire order."""
        _put_handles(fields, FIELD_HOLDER, self.holder_handles)
        _put_handles(fields, FIELD_GENERAL_REQUEST, self.general_request_handles)
        _put_handles(fields, FIELD_ABUSE_CONTACT, self.abuse_contact_handles)
        fields.add(FIELD_NAME_SERVER, *self.name_servers)


def _put_handles(
    fields: QueryFieldList,
    name: QueryFieldName,
    handles: list[DenicHandle],
) -> None:
    fields.add(name, *(str(h) for h in handles if not h.is_empty()))
