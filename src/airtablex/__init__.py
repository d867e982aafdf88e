r"""airtablex - Airtable client built on httpx with resilient async
request execution.

Records are read and written through table clients. Every request goes
through an execution core that classifies the response, retries
rate-limited (429) attempts with a bounded, configurable backoff, and
reports every failure as a single ``AirtableError``.

Key Features:
    - Async tables (``AsyncAirtable``) and blocking tables (``Airtable``)
    - Automatic retry of rate-limited requests with Retry-After support
    - Uniform error model: status code, raw body, decoded Airtable error
    - Pluggable response classifier, JSON codec and worker pool
    - Lifecycle callbacks for logging and metrics

Example:
    ```pycon
    >>> import asyncio
    >>> from airtablex import AsyncAirtable, Configuration
    >>> async def main():
    ...     async with AsyncAirtable(Configuration.from_env()) as airtable:
    ...         return await airtable.table("appXXX", "Tasks").get("recXXX")
    ...
    >>> asyncio.run(main())  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "Airtable",
    "AirtableError",
    "AsyncAirtable",
    "AsyncTable",
    "Configuration",
    "DeletedRecord",
    "ErrorPayload",
    "PayloadDecodeError",
    "Record",
    "RecordPage",
    "RequestDescriptor",
    "SyncTable",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from airtablex.client import Airtable
from airtablex.client_async import AsyncAirtable
from airtablex.config import Configuration
from airtablex.exceptions import AirtableError, ErrorPayload, PayloadDecodeError
from airtablex.records import DeletedRecord, Record, RecordPage
from airtablex.request import RequestDescriptor
from airtablex.table import AsyncTable
from airtablex.table_sync import SyncTable

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
