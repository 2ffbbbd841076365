"""
DENIC handle value type.

A handle identifies a contact or request contact and has the textual form
``DENIC-<registrar account id>-<contact code>``, for example
``DENIC-1000006-SOME-CODE``.
"""

import re
from dataclasses import dataclass

from .enums import ErrorCode
from .exceptions import HandleError


HANDLE_PREFIX = "DENIC"

_ACCOUNT_ID_PATTERN = re.compile(r"[0-9]+")

# Registrar account ids are signed 64-bit integers on the registry side
_MAX_ACCOUNT_ID = 2**63 - 1


@dataclass(frozen=True)
class DenicHandle:
    """
    Immutable DENIC handle.

    The contact code is always stored upper-case. ``DenicHandle()`` with
    account id 0 and an empty code is the empty handle and formats to an
    empty string.
    """

    reg_acc_id: int = 0
    contact_code: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "contact_code", self.contact_code.upper())

    def __str__(self) -> str:
        return self.format()

    def format(self) -> str:
        if self.is_empty():
            return ""
        return f"{HANDLE_PREFIX}-{self.reg_acc_id}-{self.contact_code}"

    def is_empty(self) -> bool:
        """Return True when the handle is unset."""
        return self.reg_acc_id == 0 and not self.contact_code

    @classmethod
    def empty(cls) -> "DenicHandle":
        return cls()

    @classmethod
    def parse(cls, text: str) -> "DenicHandle":
        """
        Parse a handle like ``DENIC-1000006-SOME-CODE``.

        Args:
            text: Handle text; an empty string yields the empty handle

        Returns:
            Parsed DenicHandle

        Raises:
            HandleError: If the segment count, prefix or account id is invalid
        """
        if not text:
            return cls.empty()

        parts = text.split("-", 2)
        if len(parts) != 3:
            raise _invalid_handle(text, "expected three '-' separated parts")

        prefix, account_id, contact_code = parts
        if prefix.upper() != HANDLE_PREFIX:
            raise _invalid_handle(text, f"prefix must be {HANDLE_PREFIX}")

        if not _ACCOUNT_ID_PATTERN.fullmatch(account_id):
            raise _invalid_handle(text, "registrar account id must be numeric")

        if len(account_id) > len(str(_MAX_ACCOUNT_ID)) or int(account_id) > _MAX_ACCOUNT_ID:
            raise _invalid_handle(text, "registrar account id is out of range")

        return cls(int(account_id), contact_code)


def _invalid_handle(text: str, reason: str) -> HandleError:
    return HandleError(
        code=ErrorCode.INVALID_HANDLE.value,
        message=f"invalid handle {text!r}: {reason}",
        details={"handle": text, "reason": reason},
    )
