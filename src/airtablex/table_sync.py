r"""Blocking access to the records of one Airtable table."""

from __future__ import annotations

__all__ = ["SyncTable"]

from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from anyio.from_thread import BlockingPortal

    from airtablex.records import DeletedRecord, Record, RecordPage
    from airtablex.table import AsyncTable

T = TypeVar("T")


class SyncTable(Generic[T]):
    r"""Blocking wrapper around ``AsyncTable``.

    Every method submits the corresponding coroutine to the event loop
    running in the portal's thread and blocks the calling thread until
    the call completes. Tables are obtained from ``Airtable.table``.

    Args:
        table: The asynchronous table.
        portal: The portal running the event loop.
    """

    def __init__(self, table: AsyncTable[T], portal: BlockingPortal) -> None:
        self._table = table
        self._portal = portal

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(base_id={self._table.base_id!r}, "
            f"table_name={self._table.table_name!r})"
        )

    @property
    def url(self) -> str:
        return self._table.url

    def get(self, record_id: str) -> Record[T]:
        """Fetch one record. See ``AsyncTable.get``."""
        return self._portal.call(self._table.get, record_id)

    def list_page(
        self,
        *,
        view: str | None = None,
        fields: Sequence[str] | None = None,
        filter_by_formula: str | None = None,
        max_records: int | None = None,
        page_size: int | None = None,
        sort: Sequence[tuple[str, str]] | None = None,
        offset: str | None = None,
    ) -> RecordPage[T]:
        """Fetch one page of records. See ``AsyncTable.list_page``."""

        async def list_page() -> RecordPage[T]:
            return await self._table.list_page(
                view=view,
                fields=fields,
                filter_by_formula=filter_by_formula,
                max_records=max_records,
                page_size=page_size,
                sort=sort,
                offset=offset,
            )

        return self._portal.call(list_page)

    def create(self, fields: Mapping[str, Any] | T, typecast: bool = False) -> Record[T]:
        """Create a record. See ``AsyncTable.create``."""
        return self._portal.call(self._table.create, fields, typecast)

    def update(
        self, record_id: str, fields: Mapping[str, Any] | T, typecast: bool = False
    ) -> Record[T]:
        """Update some fields of a record. See ``AsyncTable.update``."""
        return self._portal.call(self._table.update, record_id, fields, typecast)

    def replace(
        self, record_id: str, fields: Mapping[str, Any] | T, typecast: bool = False
    ) -> Record[T]:
        """Replace all fields of a record. See ``AsyncTable.replace``."""
        return self._portal.call(self._table.replace, record_id, fields, typecast)

    def delete(self, record_id: str) -> DeletedRecord:
        """Delete a record. See ``AsyncTable.delete``."""
        return self._portal.call(self._table.delete, record_id)
