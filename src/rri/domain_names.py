"""
Domain name encoding for RRI queries.

RRI queries carry a domain both in its internationalized (Unicode) form and
in its ASCII-compatible encoding (ACE, ``xn--`` labels). Conversions use
IDNA 2008 with UTS #46 mapping via the idna library. A failed conversion
only means the second representation is left out; the query stays valid
with the form the caller supplied.
"""

from typing import Optional

import idna

from .fields import QueryFieldList
from .tokens import FIELD_DOMAIN_ACE, FIELD_DOMAIN_IDN


ACE_PREFIX = "xn--"


def is_ace(domain: str) -> bool:
    """Return True if the domain starts with the ACE prefix (any case)."""
    return domain.lower().startswith(ACE_PREFIX)


def to_ace(domain: str) -> Optional[str]:
    """
    Encode a domain to its ASCII-compatible form.

    Args:
        domain: Domain name, possibly containing non-ASCII characters

    Returns:
        ACE form, or None if the domain cannot be IDNA-encoded
    """
    try:
        return idna.encode(domain, uts46=True).decode("ascii")
    except UnicodeError:  # includes idna.IDNAError
        return None


def to_idn(domain: str) -> Optional[str]:
    """
    Decode an ACE domain to its Unicode form.

    Args:
        domain: Domain name with ``xn--`` labels

    Returns:
        Unicode form, or None if the domain cannot be IDNA-decoded
    """
    try:
        return idna.decode(domain, uts46=True)
    except UnicodeError:  # includes idna.IDNAError
        return None


def put_domain_to_query_fields(fields: QueryFieldList, domain: str) -> None:
    """
    Add a domain in both representations to a field list.

    An ACE input is added as ``domain-ace`` followed by its decoded ``domain``
    form; any other input is added as ``domain`` followed by its encoded
    ``domain-ace`` form. The second field is only added when the conversion
    succeeds.

    Args:
        fields: Field list to append to
        domain: Domain name as supplied by the caller
    """
    if is_ace(domain):
        fields.add(FIELD_DOMAIN_ACE, domain)
        idn = to_idn(domain)
        if idn is not None:
            fields.add(FIELD_DOMAIN_IDN, idn)
    else:
        fields.add(FIELD_DOMAIN_IDN, domain)
        ace = to_ace(domain)
        if ace is not None:
            fields.add(FIELD_DOMAIN_ACE, ace)
