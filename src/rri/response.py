"""
Generic RRI response container.

Responses share the key-value line grammar of queries but carry no required
fields. This module only exposes the parsed fields; interpreting result codes
is left to the caller.
"""

from .fields import QueryFieldList
from .tokens import QueryFieldEntity


class Response:
    """A parsed RRI response."""

    def __init__(self, fields: QueryFieldList) -> None:
        self._fields = fields

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Response):
            return NotImplemented
        return self._fields == other._fields

    def __repr__(self) -> str:
        return f"Response({self._fields!r})"

    def fields(self) -> QueryFieldList:
        return self._fields.copy()

    def field(self, name: str) -> list[str]:
        return self._fields.values(name)

    def first_field(self, name: str) -> str:
        return self._fields.first_value(name)

    def entities(self) -> list[tuple[QueryFieldEntity, QueryFieldList]]:
        return self._fields.entities()


def parse_response_kv(text: str) -> Response:
    """
    Parse a key-value encoded response.

    Raises:
        MalformedLineError: If a non-blank line has no ':' separator
    """
    return Response(QueryFieldList.parse_kv(text))


def parse_response(text: str) -> Response:
    return parse_response_kv(text)
