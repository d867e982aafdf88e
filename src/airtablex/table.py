r"""Asynchronous access to the records of one Airtable table."""

from __future__ import annotations

__all__ = ["AsyncTable"]

from typing import TYPE_CHECKING, Any, Generic, TypeVar
from urllib.parse import quote

import httpx

from airtablex.exceptions import PayloadDecodeError
from airtablex.records import DeletedRecord, Record, RecordPage, fields_to_json
from airtablex.request import RequestDescriptor

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from airtablex.codec import JsonCodec
    from airtablex.retry import AsyncRequestExecutor

T = TypeVar("T")


class AsyncTable(Generic[T]):
    r"""CRUD operations on the records of one table.

    Each operation builds a ``RequestDescriptor``, hands it to the
    executor and decodes the successful response into records. Decoding
    runs through ``executor.dispatch``, on the executor's worker pool
    when one is configured.

    Tables are usually obtained from ``AsyncAirtable.table``.

    Args:
        executor: The request executor.
        codec: The JSON codec for request and response bodies.
        endpoint_url: The API root.
        api_key: The API key sent as a bearer token.
        base_id: The id of the base containing the table.
        table_name: The table name or id.
        fields_type: Optional callable converting the fields dict of
            every record read from the table.

    Example:
        ```pycon
        >>> import asyncio
        >>> from airtablex import AsyncAirtable, Configuration
        >>> async def main():
        ...     async with AsyncAirtable(Configuration.from_env()) as airtable:
        ...         tasks = airtable.table("appXXX", "Tasks")
        ...         created = await tasks.create({"Name": "Write docs"})
        ...         return await tasks.get(created.id)
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        executor: AsyncRequestExecutor,
        codec: JsonCodec,
        endpoint_url: str,
        api_key: str,
        base_id: str,
        table_name: str,
        fields_type: Callable[[dict[str, Any]], T] | None = None,
    ) -> None:
        self._executor = executor
        self._codec = codec
        self._api_key = api_key
        self.base_id = base_id
        self.table_name = table_name
        self.fields_type = fields_type
        self.url = "/".join(
            (endpoint_url.rstrip("/"), quote(base_id, safe=""), quote(table_name, safe=""))
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_id={self.base_id!r}, table_name={self.table_name!r})"

    async def get(self, record_id: str) -> Record[T]:
        """Fetch one record.

        Args:
            record_id: The record id.

        Returns:
            The record.

        Raises:
            AirtableError: If the call fails, e.g. with status 404 when
                the record does not exist.
        """
        response = await self._executor.execute(self._request("GET", self._record_url(record_id)))
        return await self._executor.dispatch(self._decode_record, response)

    async def list_page(
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
        """Fetch one page of records.

        Further pages are not fetched automatically; pass the returned
        ``offset`` to get the next one.

        Args:
            view: Name or id of a view to read from.
            fields: Only return these fields.
            filter_by_formula: An Airtable formula selecting records.
            max_records: Maximum number of records over all pages.
            page_size: Number of records per page (at most 100).
            sort: ``(field, direction)`` pairs, direction being
                ``"asc"`` or ``"desc"``.
            offset: The offset token of the previous page.

        Returns:
            The page.
        """
        params: list[tuple[str, str]] = []
        if view is not None:
            params.append(("view", view))
        for name in fields or ():
            params.append(("fields[]", name))
        if filter_by_formula is not None:
            params.append(("filterByFormula", filter_by_formula))
        if max_records is not None:
            params.append(("maxRecords", str(max_records)))
        if page_size is not None:
            params.append(("pageSize", str(page_size)))
        for index, (field, direction) in enumerate(sort or ()):
            params.append((f"sort[{index}][field]", field))
            params.append((f"sort[{index}][direction]", direction))
        if offset is not None:
            params.append(("offset", offset))

        url = str(httpx.URL(self.url, params=params)) if params else self.url
        response = await self._executor.execute(self._request("GET", url))
        return await self._executor.dispatch(self._decode_page, response)

    async def create(self, fields: Mapping[str, Any] | T, typecast: bool = False) -> Record[T]:
        """Create a record.

        Args:
            fields: The cell values, as a mapping or a dataclass instance.
            typecast: Whether Airtable should convert string values to
                the field types.

        Returns:
            The created record.
        """
        body = self._encode_fields(fields, typecast)
        response = await self._executor.execute(self._request("POST", self.url, body))
        return await self._executor.dispatch(self._decode_record, response)

    async def update(
        self, record_id: str, fields: Mapping[str, Any] | T, typecast: bool = False
    ) -> Record[T]:
        """Update some fields of a record, leaving the others unchanged.

        Args:
            record_id: The record id.
            fields: The cell values to change.
            typecast: Whether Airtable should convert string values.

        Returns:
            The updated record.
        """
        body = self._encode_fields(fields, typecast)
        response = await self._executor.execute(
            self._request("PATCH", self._record_url(record_id), body)
        )
        return await self._executor.dispatch(self._decode_record, response)

    async def replace(
        self, record_id: str, fields: Mapping[str, Any] | T, typecast: bool = False
    ) -> Record[T]:
        """Replace all fields of a record; omitted fields are cleared.

        Args:
            record_id: The record id.
            fields: The new cell values.
            typecast: Whether Airtable should convert string values.

        Returns:
            The replaced record.
        """
        body = self._encode_fields(fields, typecast)
        response = await self._executor.execute(
            self._request("PUT", self._record_url(record_id), body)
        )
        return await self._executor.dispatch(self._decode_record, response)

    async def delete(self, record_id: str) -> DeletedRecord:
        """Delete a record.

        Args:
            record_id: The record id.

        Returns:
            The deletion result.
        """
        response = await self._executor.execute(
            self._request("DELETE", self._record_url(record_id))
        )
        return await self._executor.dispatch(self._decode_deleted, response)

    def _record_url(self, record_id: str) -> str:
        return f"{self.url}/{quote(record_id, safe='')}"

    def _request(self, method: str, url: str, body: bytes | None = None) -> RequestDescriptor:
        headers = [("Authorization", f"Bearer {self._api_key}"), ("Accept", "application/json")]
        if body is not None:
            headers.append(("Content-Type", "application/json"))
        return RequestDescriptor(method, url, headers=headers, body=body)

    def _encode_fields(self, fields: Any, typecast: bool) -> bytes:
        payload: dict[str, Any] = {"fields": fields_to_json(fields)}
        if typecast:
            payload["typecast"] = True
        return self._codec.dumps(payload)

    def _decode(self, response: httpx.Response) -> Any:
        try:
            return self._codec.loads(response.content)
        except ValueError as exc:
            raise self._decode_error(response, exc) from exc

    def _decode_record(self, response: httpx.Response) -> Record[T]:
        data = self._decode(response)
        try:
            return Record.from_json(data, self.fields_type)
        except (KeyError, TypeError, ValueError) as exc:
            raise self._decode_error(response, exc) from exc

    def _decode_page(self, response: httpx.Response) -> RecordPage[T]:
        data = self._decode(response)
        try:
            records = [Record.from_json(item, self.fields_type) for item in data["records"]]
            return RecordPage(records=records, offset=data.get("offset"))
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise self._decode_error(response, exc) from exc

    def _decode_deleted(self, response: httpx.Response) -> DeletedRecord:
        data = self._decode(response)
        try:
            return DeletedRecord(id=data["id"], deleted=bool(data.get("deleted", False)))
        except (KeyError, TypeError, AttributeError) as exc:
            raise self._decode_error(response, exc) from exc

    @staticmethod
    def _decode_error(response: httpx.Response, exc: Exception) -> PayloadDecodeError:
        request = response.request
        return PayloadDecodeError(
            f"{request.method} request to {request.url} returned an unexpected payload: "
            f"{type(exc).__name__}: {exc}",
            status_code=response.status_code,
            body=response.text,
            cause=exc,
            method=request.method,
            url=str(request.url),
        )
