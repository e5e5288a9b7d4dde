"""Template name resolution through a resource loader."""

from structlog.typing import FilteringBoundLogger

from stacheview.exceptions import TemplateLoadError, TemplateNotFoundError
from stacheview.resources import Resource, ResourceLoader
from stacheview.utils import get_default_logger


class MustacheTemplateLoader:
    """Map logical template names to template source.

    Every name is combined with `prefix` before it is handed to the resource
    loader. Names that already carry the prefix are used as they are: a web
    framework typically prefixes the top-level view name itself, while
    partial and parent names found inside templates arrive bare.

    The loader keeps no state between calls; each resolution asks the
    resource loader again.

    Example:
        from stacheview.resources import FileSystemResourceLoader

        loader = MustacheTemplateLoader(
            FileSystemResourceLoader("/srv/app"), prefix="views/"
        )
        source = loader.resolve("index.mustache")  # reads views/index.mustache
    """

    def __init__(
        self,
        resource_loader: ResourceLoader,
        *,
        prefix: str = "",
        encoding: str = "utf-8",
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self.resource_loader: ResourceLoader = resource_loader
        self.prefix: str = prefix
        self.encoding: str = encoding
        self.logger: FilteringBoundLogger = (
            logger if logger is not None else get_default_logger("loader")
        )

    def full_path(self, name: str) -> str:
        """Return the resource location for `name`.

        Args:
            name: Logical template name, with or without the prefix.

        Returns:
            `name` when it already starts with the prefix, otherwise
            `prefix + name`.
        """
        if self.prefix and name.startswith(self.prefix):
            return name
        return f"{self.prefix}{name}"

    def get_resource(self, name: str) -> Resource:
        """Return the resource backing `name` without reading it."""
        return self.resource_loader.get_resource(self.full_path(name))

    def resolve(self, name: str) -> str:
        """Read the source of a template.

        Args:
            name: Logical template name.

        Returns:
            The decoded template source.

        Raises:
            TemplateNotFoundError: If the resource does not exist. The
                stream is never opened in that case.
            TemplateLoadError: If the resource cannot be opened, read or
                decoded.
        """
        path = self.full_path(name)
        self.logger.debug("template_resolving", template=name, path=path)

        resource = self.resource_loader.get_resource(path)
        if not resource.exists():
            msg = f"Template {name!r} not found at {path!r}"
            raise TemplateNotFoundError(msg, name=name, path=path)

        try:
            with resource.open() as stream:
                data = stream.read()
        except OSError as e:
            msg = f"Failed to read template {name!r} from {path!r}: {e}"
            raise TemplateLoadError(msg, name=name, path=path, cause=e) from e

        try:
            return data.decode(self.encoding)
        except UnicodeDecodeError as e:
            msg = f"Template {name!r} at {path!r} is not valid {self.encoding}: {e}"
            raise TemplateLoadError(msg, name=name, path=path, cause=e) from e

    def __repr__(self) -> str:
        return (
            f"MustacheTemplateLoader(resource_loader={self.resource_loader!r}, "
            f"prefix={self.prefix!r})"
        )
