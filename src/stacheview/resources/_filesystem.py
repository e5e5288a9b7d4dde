"""Filesystem-backed resources."""

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO


@dataclass(slots=True, frozen=True)
class FileResource:
    """A file on the local filesystem.

    Attributes:
        path: Absolute or root-relative path of the file.
    """

    path: Path

    def exists(self) -> bool:
        return self.path.is_file()

    def open(self) -> BinaryIO:
        return self.path.open("rb")


class FileSystemResourceLoader:
    """Resolve locations as paths below a root directory."""

    def __init__(self, root: Path | str = ".") -> None:
        """Initialize the loader.

        Args:
            root: Directory that relative locations are resolved against.
                Absolute locations ignore it.
        """
        self.root: Path = Path(root)

    def get_resource(self, path: str) -> FileResource:
        return FileResource(self.root / path)

    def __repr__(self) -> str:
        return f"FileSystemResourceLoader(root={str(self.root)!r})"
