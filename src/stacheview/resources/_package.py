"""Python package data resources via importlib.resources."""

from dataclasses import dataclass
from importlib.resources import files
from importlib.resources.abc import Traversable  # noqa: TC003
from typing import BinaryIO, cast


@dataclass(slots=True, frozen=True)
class PackageResource:
    """A data file shipped inside an importable Python package.

    Attributes:
        package: Dotted name of the anchor package.
        path: Slash-separated path below the package.
    """

    package: str
    path: str

    def _traversable(self) -> Traversable:
        node = files(self.package)
        for part in self.path.split("/"):
            if part:
                node = node.joinpath(part)
        return node

    def exists(self) -> bool:
        try:
            return self._traversable().is_file()
        except (ModuleNotFoundError, TypeError, ValueError):
            return False

    def open(self) -> BinaryIO:
        return cast("BinaryIO", self._traversable().open("rb"))


class PackageResourceLoader:
    """Resolve locations as data files of a Python package.

    Example:
        loader = PackageResourceLoader("myapp")
        loader.get_resource("views/index.mustache")
    """

    def __init__(self, package: str) -> None:
        self.package: str = package

    def get_resource(self, path: str) -> PackageResource:
        return PackageResource(self.package, path)

    def __repr__(self) -> str:
        return f"PackageResourceLoader(package={self.package!r})"
