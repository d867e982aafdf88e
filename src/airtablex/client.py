r"""Synchronous entry point of the Airtable client.

``Airtable`` runs an ``AsyncAirtable`` on an event loop in a background
thread (an ``anyio`` blocking portal). Its tables block the calling
thread until each call completes; the request execution itself stays
asynchronous.
"""

from __future__ import annotations

__all__ = ["Airtable"]

from contextlib import ExitStack
from typing import TYPE_CHECKING, Any, TypeVar

from anyio.from_thread import start_blocking_portal

from airtablex.client_async import AsyncAirtable
from airtablex.table_sync import SyncTable

if TYPE_CHECKING:
    from collections.abc import Callable
    from concurrent.futures import Executor
    from types import TracebackType
    from typing import Self

    import httpx
    from anyio.from_thread import BlockingPortal

    from airtablex.codec import JsonCodec
    from airtablex.config import Configuration
    from airtablex.retry import BaseResponseClassifier, CallbackConfig, RetryConfig

T = TypeVar("T")


class Airtable:
    r"""Synchronous client for the Airtable API.

    Accepts the same arguments as ``AsyncAirtable`` and must be used as
    a context manager: entering starts the portal thread and the HTTP
    client, exiting closes both.

    Example:
        ```pycon
        >>> from airtablex import Airtable, Configuration
        >>> with Airtable(Configuration.from_env()) as airtable:  # doctest: +SKIP
        ...     tasks = airtable.table("appXXX", "Tasks")
        ...     record = tasks.create({"Name": "Write docs"})
        ...     tasks.delete(record.id)
        ...

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
        self.airtable = AsyncAirtable(
            config,
            client=client,
            retry_config=retry_config,
            callback_config=callback_config,
            classifier=classifier,
            codec=codec,
            executor=executor,
        )
        self._portal: BlockingPortal | None = None
        self._exit_stack: ExitStack | None = None

    def __enter__(self) -> Self:
        with ExitStack() as stack:
            portal = stack.enter_context(start_blocking_portal())
            stack.enter_context(portal.wrap_async_context_manager(self.airtable))
            self._portal = portal
            self._exit_stack = stack.pop_all()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client and stop the portal thread."""
        if self._exit_stack is not None:
            self._exit_stack.close()
        self._exit_stack = None
        self._portal = None

    def table(
        self,
        base_id: str,
        table_name: str,
        fields_type: Callable[[dict[str, Any]], T] | None = None,
    ) -> SyncTable[T]:
        """Return a blocking table client.

        Args:
            base_id: The id of the base containing the table.
            table_name: The table name or id.
            fields_type: Optional callable converting the fields of each
                record read from the table.

        Raises:
            RuntimeError: If called outside of the context manager.
        """
        if self._portal is None:
            msg = "Airtable must be used within a context manager (with statement)"
            raise RuntimeError(msg)
        return SyncTable(self.airtable.table(base_id, table_name, fields_type), self._portal)
