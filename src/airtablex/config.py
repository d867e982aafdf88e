r"""Connection settings and credential discovery.

The API key is looked up, in order, in:

1. the environment variable ``AIRTABLE_API_KEY``
2. a Java-style properties file (``key=value`` lines), by default
   ``credentials.properties`` in the working directory when it exists

The base id used by ``AsyncAirtable.base()`` is discovered the same way
from ``AIRTABLE_BASE``.
"""

from __future__ import annotations

__all__ = [
    "AIRTABLE_API_KEY",
    "AIRTABLE_BASE",
    "AIRTABLE_ENDPOINT_URL",
    "DEFAULT_CREDENTIALS_FILE",
    "DEFAULT_ENDPOINT_URL",
    "DEFAULT_TIMEOUT",
    "Configuration",
    "base_from_env",
    "read_properties",
    "resolve_setting",
]

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from airtablex.validation import validate_timeout

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

logger: logging.Logger = logging.getLogger(__name__)

# Names of the settings, used both as environment variables and as keys
# in the properties file
AIRTABLE_API_KEY = "AIRTABLE_API_KEY"
AIRTABLE_BASE = "AIRTABLE_BASE"
AIRTABLE_ENDPOINT_URL = "AIRTABLE_ENDPOINT_URL"

DEFAULT_ENDPOINT_URL = "https://api.airtable.com/v0"

# Properties file consulted, relative to the working directory, when a
# setting is missing from the environment
DEFAULT_CREDENTIALS_FILE = "credentials.properties"

# Default timeout in seconds for one physical attempt
DEFAULT_TIMEOUT = 10.0


def read_properties(path: str | Path) -> dict[str, str]:
    r"""Read a Java-style properties file.

    Lines are ``key=value`` or ``key: value``. Blank lines and lines
    starting with ``#`` or ``!`` are ignored.

    Args:
        path: The file to read.

    Returns:
        The properties, or an empty dict if the file does not exist.
    """
    path = Path(path)
    if not path.is_file():
        logger.debug(f"Properties file {str(path)!r} not found")
        return {}
    properties: dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith(("#", "!")):
            continue
        positions = [pos for pos in (line.find("="), line.find(":")) if pos >= 0]
        if not positions:
            properties[line] = ""
            continue
        split = min(positions)
        properties[line[:split].strip()] = line[split + 1 :].strip()
    return properties


def resolve_setting(
    name: str,
    environ: Mapping[str, str] | None = None,
    credentials_file: str | Path | None = None,
) -> str | None:
    """Look up a setting in the environment, then in a properties file.

    Args:
        name: The setting name, e.g. ``"AIRTABLE_API_KEY"``.
        environ: The environment to read. Defaults to ``os.environ``.
        credentials_file: Optional properties file consulted when the
            environment does not define the setting.

    Returns:
        The value, or ``None`` if it is not defined anywhere.

    Example:
        ```pycon
        >>> from airtablex.config import resolve_setting
        >>> resolve_setting("AIRTABLE_BASE", environ={"AIRTABLE_BASE": "app123"})
        'app123'
        >>> resolve_setting("AIRTABLE_BASE", environ={}) is None
        True

        ```
    """
    environ = os.environ if environ is None else environ
    logger.debug(f"Looking up {name!r} in the environment")
    value = environ.get(name)
    if value is None and credentials_file is not None:
        logger.debug(f"Looking up {name!r} in {str(credentials_file)!r}")
        value = read_properties(credentials_file).get(name)
    return value


@dataclass(frozen=True)
class Configuration:
    r"""Settings for accessing Airtable.

    Args:
        api_key: The API key or personal access token sent as a bearer
            token with every request.
        endpoint_url: The API root, without trailing slash.
        timeout: Timeout for one physical attempt, in seconds or as an
            ``httpx.Timeout``. ``None`` disables timeouts.
        proxy: Optional proxy URL for all requests.

    Raises:
        ValueError: If the API key or endpoint is empty, or the timeout
            is not positive.

    Example:
        ```pycon
        >>> from airtablex import Configuration
        >>> config = Configuration(api_key="key123")
        >>> config.endpoint_url
        'https://api.airtable.com/v0'
        >>> Configuration.from_env(environ={"AIRTABLE_API_KEY": "key123"}).api_key
        'key123'

        ```
    """

    api_key: str
    endpoint_url: str = DEFAULT_ENDPOINT_URL
    timeout: float | httpx.Timeout | None = DEFAULT_TIMEOUT
    proxy: str | None = None

    def __post_init__(self) -> None:
        if not self.api_key:
            msg = "Missing Airtable API key"
            raise ValueError(msg)
        if not self.endpoint_url:
            msg = "Missing Airtable endpoint URL"
            raise ValueError(msg)
        validate_timeout(self.timeout)
        object.__setattr__(self, "endpoint_url", self.endpoint_url.rstrip("/"))

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(api_key='***', endpoint_url={self.endpoint_url!r}, "
            f"timeout={self.timeout!r}, proxy={self.proxy!r})"
        )

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        credentials_file: str | Path | None = DEFAULT_CREDENTIALS_FILE,
        timeout: float | httpx.Timeout | None = DEFAULT_TIMEOUT,
        proxy: str | None = None,
    ) -> Configuration:
        """Build a configuration from the environment.

        Args:
            environ: The environment to read. Defaults to ``os.environ``.
            credentials_file: Properties file consulted for settings
                missing from the environment, ignored if it does not
                exist. ``None`` disables the lookup.
            timeout: Timeout for one physical attempt.
            proxy: Optional proxy URL.

        Returns:
            The configuration.

        Raises:
            ValueError: If no API key can be found.
        """
        api_key = resolve_setting(AIRTABLE_API_KEY, environ, credentials_file)
        if api_key is None:
            msg = (
                f"Missing Airtable API key: set the {AIRTABLE_API_KEY} environment variable "
                "or provide it in the credentials file"
            )
            raise ValueError(msg)
        endpoint_url = resolve_setting(AIRTABLE_ENDPOINT_URL, environ, credentials_file)
        return cls(
            api_key=api_key,
            endpoint_url=endpoint_url or DEFAULT_ENDPOINT_URL,
            timeout=timeout,
            proxy=proxy,
        )


def base_from_env(
    environ: Mapping[str, str] | None = None,
    credentials_file: str | Path | None = DEFAULT_CREDENTIALS_FILE,
) -> str:
    """Discover the default base id from ``AIRTABLE_BASE``.

    Args:
        environ: The environment to read. Defaults to ``os.environ``.
        credentials_file: Properties file consulted when the environment
            does not define the base. ``None`` disables the lookup.

    Returns:
        The base id.

    Raises:
        ValueError: If no base id can be found.
    """
    base_id = resolve_setting(AIRTABLE_BASE, environ, credentials_file)
    if not base_id:
        msg = f"Missing Airtable base id: pass it or set {AIRTABLE_BASE}"
        raise ValueError(msg)
    return base_id
