"""In-memory resources for embedded templates."""

import io
from collections.abc import Mapping  # noqa: TC003
from dataclasses import dataclass
from typing import BinaryIO


@dataclass(slots=True, frozen=True)
class InMemoryResource:
    """Content held in memory, or a placeholder for missing content.

    Attributes:
        path: The location this resource was requested for.
        content: Raw bytes, or None when nothing is stored at `path`.
    """

    path: str
    content: bytes | None

    def exists(self) -> bool:
        return self.content is not None

    def open(self) -> BinaryIO:
        if self.content is None:
            msg = f"No content stored at {self.path!r}"
            raise FileNotFoundError(msg)
        return io.BytesIO(self.content)


class InMemoryResourceLoader:
    """Serve resources from a mapping of location to content.

    String values are encoded with `encoding` on lookup.
    """

    def __init__(
        self,
        contents: Mapping[str, str | bytes] | None = None,
        *,
        encoding: str = "utf-8",
    ) -> None:
        self.contents: dict[str, str | bytes] = dict(contents or {})
        self.encoding: str = encoding

    def add(self, path: str, content: str | bytes) -> None:
        """Store `content` at `path`, replacing any previous value."""
        self.contents[path] = content

    def get_resource(self, path: str) -> InMemoryResource:
        value = self.contents.get(path)
        if isinstance(value, str):
            value = value.encode(self.encoding)
        return InMemoryResource(path, value)
