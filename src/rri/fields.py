"""
Ordered field container for RRI queries and responses.

The RRI wire format is a sequence of ``name: value`` lines in which names may
repeat (multi-value fields such as name servers) and order matters. Nested
records are introduced by a bare ``[entity]`` marker line and span all
following lines up to the next marker. ``QueryFieldList`` models exactly that
sequence and never collapses it into a mapping.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Union

from .enums import ErrorCode
from .exceptions import FieldListError, MalformedLineError
from .tokens import QueryFieldEntity, QueryFieldName


@dataclass(frozen=True)
class QueryField:
    """A single ``name: value`` entry."""

    name: QueryFieldName
    value: str

    def encode_kv(self) -> str:
        return f"{self.name}: {self.value}"


@dataclass(frozen=True)
class EntityMarker:
    """Marker introducing the fields of one nested record."""

    entity: QueryFieldEntity

    def encode_kv(self) -> str:
        return self.entity.marker()


FieldEntry = Union[QueryField, EntityMarker]


def _is_entity_line(line: str) -> bool:
    return len(line) > 2 and line[0] == "[" and line[-1] == "]" and ":" not in line


def _has_line_break(text: str) -> bool:
    return "\n" in text or "\r" in text


class QueryFieldList:
    """
    Ordered sequence of query fields and entity markers.

    Field names are normalized on insertion. An entity span consists of a
    marker and every field after it up to the next marker, so spans can
    neither nest nor interleave.

    Instances are meant to be built by a single writer and shared read-only
    afterwards.
    """

    def __init__(self, entries: Optional[Iterable[FieldEntry]] = None) -> None:
        self._entries: list[FieldEntry] = list(entries) if entries else []

    def __iter__(self) -> Iterator[FieldEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueryFieldList):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"QueryFieldList({self._entries!r})"

    def add(self, name: str, *values: str) -> None:
        """
        Append one field per value, in call order.

        Args:
            name: Field name (normalized to lower-case)
            values: Zero or more values; each becomes its own entry

        Raises:
            FieldListError: If the name contains ':' or a line break, or a
                value contains a line break
        """
        field_name = QueryFieldName(name).normalize()
        if ":" in field_name or _has_line_break(field_name):
            raise FieldListError(
                code=ErrorCode.INVALID_FIELD.value,
                message=f"field name {str(name)!r} must not contain ':' or line breaks",
                details={"name": str(name)},
            )

        entries = [QueryField(field_name, str(value)) for value in values]
        for entry in entries:
            if _has_line_break(entry.value):
                raise FieldListError(
                    code=ErrorCode.INVALID_FIELD.value,
                    message=f"value of field {str(field_name)!r} must be a single line",
                    details={"name": str(field_name)},
                )
        self._entries.extend(entries)

    def begin_entity(self, entity: str) -> None:
        """
        Open a new entity span; subsequent fields belong to it.

        Raises:
            FieldListError: If the entity name is empty or spans lines
        """
        entity_name = QueryFieldEntity(entity).normalize()
        if not entity_name.strip() or _has_line_break(entity_name):
            raise FieldListError(
                code=ErrorCode.INVALID_FIELD.value,
                message=f"invalid entity name {str(entity)!r}",
                details={"entity": str(entity)},
            )
        self._entries.append(EntityMarker(entity_name))

    def add_entity(self, entity: str, fields: "QueryFieldList") -> None:
        """
        Append an entity marker followed by all fields of one nested record.

        Args:
            entity: Entity name of the nested record
            fields: The record's fields

        Raises:
            FieldListError: If fields contains an entity marker itself or the
                entity name is invalid
        """
        if any(isinstance(entry, EntityMarker) for entry in fields):
            raise FieldListError(
                code=ErrorCode.NESTED_ENTITY.value,
                message=f"entity {entity!r} cannot contain nested entities",
                details={"entity": str(entity)},
            )
        self.begin_entity(entity)
        fields.copy_to(self)

    def values(self, name: str) -> list[str]:
        """
        Return all values for a field name in insertion order.

        Fields inside entity spans are included. Returns an empty list if the
        name is absent.
        """
        field_name = QueryFieldName(name).normalize()
        return [
            entry.value
            for entry in self._entries
            if isinstance(entry, QueryField) and entry.name == field_name
        ]

    def first_value(self, name: str) -> str:
        """Return the first value for a field name or an empty string."""
        field_name = QueryFieldName(name).normalize()
        for entry in self._entries:
            if isinstance(entry, QueryField) and entry.name == field_name:
                return entry.value
        return ""

    def copy_to(self, other: "QueryFieldList") -> None:
        """Append all entries, markers included, onto another container."""
        other._entries.extend(self._entries)

    def copy(self) -> "QueryFieldList":
        return QueryFieldList(self._entries)

    def entities(self) -> list[tuple[QueryFieldEntity, "QueryFieldList"]]:
        """Return each nested record as ``(entity, fields)`` in wire order."""
        spans: list[tuple[QueryFieldEntity, QueryFieldList]] = []
        for entry in self._entries:
            if isinstance(entry, EntityMarker):
                spans.append((entry.entity, QueryFieldList()))
            elif spans:
                spans[-1][1]._entries.append(entry)
        return spans

    def encode_kv(self) -> str:
        """Render the key-value wire text, one entry per line, no trailing newline."""
        return "\n".join(entry.encode_kv() for entry in self._entries)

    @classmethod
    def parse_kv(cls, text: str) -> "QueryFieldList":
        """
        Parse key-value wire text into a field list.

        Lines are trimmed and blank lines skipped. A ``[entity]`` line opens
        an entity span; every other line is split on its first ':'.

        Args:
            text: Wire text

        Returns:
            Parsed QueryFieldList

        Raises:
            MalformedLineError: If a non-blank line has no ':' separator or
                holds a name, value or entity the container rejects
        """
        fields = cls()
        for line_number, raw_line in enumerate(text.split("\n"), start=1):
            line = raw_line.strip()
            if not line:
                continue

            try:
                if _is_entity_line(line):
                    fields.begin_entity(line[1:-1].strip())
                    continue

                key, sep, value = line.partition(":")
                if not sep:
                    raise MalformedLineError(
                        code=ErrorCode.MALFORMED_LINE.value,
                        message="query line must be key-value separated by ':'",
                        details={"line_number": line_number},
                    )
                fields.add(key.strip(), value.strip())
            except FieldListError as e:
                raise MalformedLineError(
                    code=ErrorCode.MALFORMED_LINE.value,
                    message=e.message,
                    details={"line_number": line_number},
                ) from e

        return fields
