r"""Asynchronous entry point of the Airtable client.

``AsyncAirtable`` owns the ``httpx.AsyncClient`` and the request
executor shared by all the tables it creates.
"""

from __future__ import annotations

__all__ = ["AsyncAirtable", "Base"]

from typing import TYPE_CHECKING, Any, TypeVar

import httpx

from airtablex.codec import StandardJsonCodec
from airtablex.config import DEFAULT_CREDENTIALS_FILE, base_from_env
from airtablex.retry import AsyncRequestExecutor
from airtablex.table import AsyncTable

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from concurrent.futures import Executor
    from pathlib import Path
    from types import TracebackType
    from typing import Self

    from airtablex.codec import JsonCodec
    from airtablex.config import Configuration
    from airtablex.retry import BaseResponseClassifier, CallbackConfig, RetryConfig

T = TypeVar("T")


class Base:
    """Factory of tables belonging to one base.

    Args:
        airtable: The client creating the tables.
        base_id: The base id, e.g. ``"appXXXXXXXXXXXXXX"``.
    """

    def __init__(self, airtable: AsyncAirtable, base_id: str) -> None:
        self.airtable = airtable
        self.base_id = base_id

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_id={self.base_id!r})"

    def table(
        self, table_name: str, fields_type: Callable[[dict[str, Any]], T] | None = None
    ) -> AsyncTable[T]:
        """Return the table ``table_name`` of this base."""
        return self.airtable.table(self.base_id, table_name, fields_type)


class AsyncAirtable:
    r"""Asynchronous client for the Airtable API.

    Used as an async context manager, the client creates its
    ``httpx.AsyncClient`` on entry (with the configured timeout and
    proxy) and closes it on exit. A client passed in by the caller is
    never closed.

    Args:
        config: The connection settings.
        client: Optional HTTP client to use instead of creating one.
        retry_config: The retry policy for rate-limited requests.
        callback_config: Optional lifecycle callbacks.
        classifier: Optional classifier strategy.
        codec: The JSON codec. Defaults to ``StandardJsonCodec()``.
        executor: Optional worker pool on which responses are
            classified and decoded.

    Example:
        ```pycon
        >>> import asyncio
        >>> from airtablex import AsyncAirtable, Configuration
        >>> from airtablex.retry import RetryConfig
        >>> async def main():
        ...     config = Configuration.from_env()
        ...     async with AsyncAirtable(config, retry_config=RetryConfig(max_retries=10)) as airtable:
        ...         page = await airtable.table("appXXX", "Tasks").list_page(page_size=10)
        ...     return page.records
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        config: Configuration,
        *,
        client: httpx.AsyncClient | None = None,
        retry_config: RetryConfig | None = None,
        callback_config: CallbackConfig | None = None,
        classifier: BaseResponseClassifier | None = None,
        codec: JsonCodec | None = None,
        executor: Executor | None = None,
    ) -> None:
        self.config = config
        self.codec: JsonCodec = codec if codec is not None else StandardJsonCodec()
        self._retry_config = retry_config
        self._callback_config = callback_config
        self._classifier = classifier
        self._executor = executor
        self._owns_client = client is None
        self._client = client
        self._request_executor: AsyncRequestExecutor | None = (
            None if client is None else self._build_executor(client)
        )

    async def __aenter__(self) -> Self:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.config.timeout, proxy=self.config.proxy)
            self._request_executor = self._build_executor(self._client)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if it was created by this object."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._request_executor = None

    @property
    def executor(self) -> AsyncRequestExecutor:
        """The request executor shared by the tables.

        Raises:
            RuntimeError: If the client has not been entered and no
                HTTP client was passed in.
        """
        if self._request_executor is None:
            msg = "AsyncAirtable must be used within an async context manager (async with statement)"
            raise RuntimeError(msg)
        return self._request_executor

    def table(
        self,
        base_id: str,
        table_name: str,
        fields_type: Callable[[dict[str, Any]], T] | None = None,
    ) -> AsyncTable[T]:
        """Return a table client.

        Args:
            base_id: The id of the base containing the table.
            table_name: The table name or id.
            fields_type: Optional callable converting the fields of each
                record read from the table.
        """
        return AsyncTable(
            executor=self.executor,
            codec=self.codec,
            endpoint_url=self.config.endpoint_url,
            api_key=self.config.api_key,
            base_id=base_id,
            table_name=table_name,
            fields_type=fields_type,
        )

    def base(
        self,
        base_id: str | None = None,
        environ: Mapping[str, str] | None = None,
        credentials_file: str | Path | None = DEFAULT_CREDENTIALS_FILE,
    ) -> Base:
        """Return a factory for the tables of one base.

        Args:
            base_id: The base id. If ``None``, it is read from the
                ``AIRTABLE_BASE`` setting.
            environ: The environment used to discover the base id.
            credentials_file: Properties file used to discover the base
                id. ``None`` disables the lookup.

        Raises:
            ValueError: If no base id is given or discovered.
        """
        if base_id is None:
            base_id = base_from_env(environ, credentials_file)
        return Base(self, base_id)

    def _build_executor(self, client: httpx.AsyncClient) -> AsyncRequestExecutor:
        return AsyncRequestExecutor(
            client,
            retry_config=self._retry_config,
            callback_config=self._callback_config,
            classifier=self._classifier,
            codec=self.codec,
            executor=self._executor,
        )
