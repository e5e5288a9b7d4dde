"""HTTP(S) resources fetched with httpx."""

import io
from typing import BinaryIO

import httpx
from structlog.typing import FilteringBoundLogger  # noqa: TC002

from stacheview.utils import get_default_logger


class UrlResource:
    """Content served at an HTTP(S) URL.

    `exists()` issues a HEAD request and `open()` a GET request; nothing is
    fetched when the resource object is created.
    """

    __slots__ = ("client", "logger", "url")

    def __init__(
        self,
        url: str,
        client: httpx.Client,
        logger: FilteringBoundLogger,
    ) -> None:
        self.url: str = url
        self.client: httpx.Client = client
        self.logger: FilteringBoundLogger = logger

    def exists(self) -> bool:
        try:
            response = self.client.head(self.url, follow_redirects=True)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self.logger.warning("url_resource_unreachable", url=self.url, error=str(e))
            return False
        return response.is_success

    def open(self) -> BinaryIO:
        try:
            response = self.client.get(self.url, follow_redirects=True)
            _ = response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            msg = f"Failed to fetch {self.url}: {e}"
            raise OSError(msg) from e
        return io.BytesIO(response.content)

    def __repr__(self) -> str:
        return f"UrlResource(url={self.url!r})"


class UrlResourceLoader:
    """Resolve locations as URLs.

    Args:
        client: httpx client used for every request. When omitted, the
            loader creates one and closes it in `close()`.
        timeout: Timeout in seconds for a client created by the loader.
        logger: Logger for unreachable hosts.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        timeout: float = 10.0,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._owns_client: bool = client is None
        self.client: httpx.Client = (
            client if client is not None else httpx.Client(timeout=timeout)
        )
        self.logger: FilteringBoundLogger = (
            logger if logger is not None else get_default_logger("resources")
        )

    def get_resource(self, path: str) -> UrlResource:
        return UrlResource(path, self.client, self.logger)

    def close(self) -> None:
        """Close the underlying client if this loader created it."""
        if self._owns_client:
            self.client.close()
