r"""Records of an Airtable table and their JSON representation."""

from __future__ import annotations

__all__ = ["DeletedRecord", "Record", "RecordPage", "fields_to_json"]

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")


@dataclass(frozen=True)
class Record(Generic[T]):
    r"""One row of a table.

    Attributes:
        id: The record id, e.g. ``"recXXXXXXXXXXXXXX"``.
        fields: The cell values, as a dict or as the table's field type.
        created_time: The creation timestamp in ISO 8601 format.

    Example:
        ```pycon
        >>> from airtablex import Record
        >>> record = Record.from_json({"id": "rec1", "fields": {"Name": "Ada"}})
        >>> record.fields["Name"]
        'Ada'

        ```
    """

    id: str
    fields: T
    created_time: str | None = None

    @classmethod
    def from_json(
        cls,
        data: Mapping[str, Any],
        fields_type: Callable[[dict[str, Any]], T] | None = None,
    ) -> Record[T]:
        """Build a record from its JSON object.

        Args:
            data: The decoded JSON object.
            fields_type: Optional callable converting the ``fields``
                dict, e.g. a dataclass accepting keyword arguments
                wrapped with ``lambda f: Task(**f)``.

        Raises:
            KeyError: If ``id`` is missing.
            TypeError: If the object is malformed.
        """
        if not isinstance(data, Mapping):
            msg = f"Expected a JSON object for a record, got {type(data).__name__}"
            raise TypeError(msg)
        fields = dict(data.get("fields") or {})
        return cls(
            id=data["id"],
            fields=fields_type(fields) if fields_type is not None else fields,
            created_time=data.get("createdTime"),
        )


@dataclass(frozen=True)
class RecordPage(Generic[T]):
    """One page of records.

    Attributes:
        records: The records of the page.
        offset: The token to pass to ``list_page`` for the next page,
            ``None`` on the last page.
    """

    records: list[Record[T]]
    offset: str | None = None


@dataclass(frozen=True)
class DeletedRecord:
    """Result of deleting a record."""

    id: str
    deleted: bool


def fields_to_json(fields: Any) -> dict[str, Any]:
    r"""Convert the fields of a record to a JSON-compatible dict.

    Args:
        fields: A mapping of field name to value, or a dataclass
            instance whose attribute names are the field names.

    Returns:
        The fields as a dict.

    Raises:
        TypeError: If ``fields`` is neither a mapping nor a dataclass
            instance.

    Example:
        ```pycon
        >>> from dataclasses import dataclass
        >>> from airtablex.records import fields_to_json
        >>> @dataclass
        ... class Task:
        ...     Name: str
        ...
        >>> fields_to_json(Task(Name="Write docs"))
        {'Name': 'Write docs'}

        ```
    """
    if isinstance(fields, Mapping):
        return dict(fields)
    if dataclasses.is_dataclass(fields) and not isinstance(fields, type):
        return dataclasses.asdict(fields)
    msg = f"fields must be a mapping or a dataclass instance, got {type(fields).__name__}"
    raise TypeError(msg)
