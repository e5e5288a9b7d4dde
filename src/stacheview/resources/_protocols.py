"""Resource and resource loader protocols."""

from typing import BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class Resource(Protocol):
    """A reference to readable content.

    Resources are transient: loaders create one per lookup and nothing keeps
    them after the content has been read.
    """

    def exists(self) -> bool:
        """Return True if the content is present at this location."""
        ...

    def open(self) -> BinaryIO:
        """Open the content for reading.

        Returns:
            A binary stream. The caller closes it.

        Raises:
            OSError: If the content cannot be opened.
        """
        ...


@runtime_checkable
class ResourceLoader(Protocol):
    """Maps a location string to a Resource."""

    def get_resource(self, path: str) -> Resource:
        """Return the resource at `path`. Never raises for missing content."""
        ...
