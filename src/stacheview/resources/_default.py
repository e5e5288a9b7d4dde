"""Location-dispatching resource loader."""

from pathlib import Path

import httpx
from structlog.typing import FilteringBoundLogger  # noqa: TC002

from ._filesystem import FileSystemResourceLoader
from ._package import PackageResource
from ._protocols import Resource  # noqa: TC001
from ._url import UrlResourceLoader

PACKAGE_SCHEME = "package:"
FILE_SCHEME = "file:"
URL_SCHEMES = ("http://", "https://")


class DefaultResourceLoader:
    """Pick a backend from the shape of the location.

    Supported locations:
        - ``package:<dotted.package>/<path>``: package data file
        - ``http://...`` / ``https://...``: fetched with httpx
        - ``file:<path>``: filesystem path
        - anything else: filesystem path relative to `root`

    The URL backend is created on first use.
    """

    def __init__(
        self,
        root: Path | str = ".",
        *,
        client: httpx.Client | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self.files: FileSystemResourceLoader = FileSystemResourceLoader(root)
        self._client: httpx.Client | None = client
        self._logger: FilteringBoundLogger | None = logger
        self._urls: UrlResourceLoader | None = None

    @property
    def root(self) -> Path:
        return self.files.root

    def get_resource(self, path: str) -> Resource:
        if path.startswith(PACKAGE_SCHEME):
            package, _, relative = path[len(PACKAGE_SCHEME) :].partition("/")
            return PackageResource(package, relative)
        if path.startswith(URL_SCHEMES):
            return self._url_loader().get_resource(path)
        if path.startswith(FILE_SCHEME):
            return self.files.get_resource(path[len(FILE_SCHEME) :])
        return self.files.get_resource(path)

    def _url_loader(self) -> UrlResourceLoader:
        if self._urls is None:
            self._urls = UrlResourceLoader(self._client, logger=self._logger)
        return self._urls

    def close(self) -> None:
        """Release the URL backend, if one was created."""
        if self._urls is not None:
            self._urls.close()
            self._urls = None
