"""Mustache views for FastAPI and Starlette."""

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Self

from fastapi import Request
from fastapi.responses import HTMLResponse
from starlette.background import BackgroundTask
from structlog.typing import FilteringBoundLogger

from stacheview.config import Config
from stacheview.resources import DefaultResourceLoader, ResourceLoader
from stacheview.templating import (
    CompiledTemplate,
    MustacheFactory,
    MustacheTemplateLoader,
)
from stacheview.utils import create_logger, get_default_logger

ContextProcessor = Callable[[Request], dict[str, Any]]  # pyright: ignore[reportExplicitAny]


class MustacheTemplateResponse(HTMLResponse):
    """HTML response that remembers the template and context it rendered."""

    def __init__(
        self,
        template: CompiledTemplate,
        context: dict[str, Any],  # pyright: ignore[reportExplicitAny]
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
        media_type: str | None = None,
        background: BackgroundTask | None = None,
    ) -> None:
        self.template: CompiledTemplate = template
        self.context: dict[str, Any] = context  # pyright: ignore[reportExplicitAny]
        content = template.render(context)
        super().__init__(content, status_code, headers, media_type, background)


class MustacheTemplates:
    """Render Mustache views in FastAPI routes.

    Mirrors Starlette's ``Jinja2Templates``. View names are expanded to
    ``prefix + name + suffix`` before compilation; partial and parent names
    inside templates only get the prefix, applied by the template loader.

    By default every response recompiles its template, so template edits
    are picked up without a restart. Pass ``cache=True`` to memoize.

    Example:
        templates = MustacheTemplates("app", prefix="views/", suffix=".mustache")

        @router.get("/", response_class=HTMLResponse)
        async def index(request: Request) -> HTMLResponse:
            return templates.TemplateResponse(request, "index", {"title": "Home"})
    """

    def __init__(
        self,
        directory: Path | str | None = None,
        *,
        resource_loader: ResourceLoader | None = None,
        prefix: str = "",
        suffix: str = "",
        cache: bool = False,
        encoding: str = "utf-8",
        context_processors: list[ContextProcessor] | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the view renderer.

        Args:
            directory: Filesystem root for template locations. Ignored when
                `resource_loader` is given.
            resource_loader: Loader used to fetch templates. Defaults to a
                `DefaultResourceLoader` rooted at `directory`.
            prefix: Prepended to view, partial and parent names.
            suffix: Appended to view names.
            cache: Memoize compiled templates.
            encoding: Character encoding of template files.
            context_processors: Callables whose results are merged into
                every template context.
            logger: Logger shared by the loader and factory.
        """
        if directory is None and resource_loader is None:
            msg = "Either 'directory' or 'resource_loader' must be given"
            raise ValueError(msg)

        self.logger: FilteringBoundLogger = (
            logger if logger is not None else get_default_logger("views")
        )
        if resource_loader is None:
            resource_loader = DefaultResourceLoader(
                directory if directory is not None else ".", logger=self.logger
            )
        self.suffix: str = suffix
        self.loader: MustacheTemplateLoader = MustacheTemplateLoader(
            resource_loader,
            prefix=prefix,
            encoding=encoding,
            logger=self.logger,
        )
        self.factory: MustacheFactory = MustacheFactory(
            self.loader, cache=cache, logger=self.logger
        )
        self.context_processors: list[ContextProcessor] = list(
            context_processors or []
        )

    @classmethod
    def from_config(
        cls,
        config: Config,
        *,
        resource_loader: ResourceLoader | None = None,
        context_processors: list[ContextProcessor] | None = None,
    ) -> Self:
        """Create a view renderer from loaded configuration.

        Args:
            config: Configuration; the ``views`` and ``logging`` sections
                are used.
            resource_loader: Overrides the default resource loader.
            context_processors: Callables merged into every context.

        Returns:
            A configured MustacheTemplates instance.
        """
        logger = create_logger(
            level=config.logging.level.value,
            log_format=config.logging.format.value,
            log_file=config.logging.file,
            component="views",
        )
        return cls(
            config.views.root,
            resource_loader=resource_loader,
            prefix=config.views.prefix,
            suffix=config.views.suffix,
            cache=config.views.cache,
            encoding=config.views.encoding,
            context_processors=context_processors,
            logger=logger,
        )

    @property
    def prefix(self) -> str:
        return self.loader.prefix

    def view_name(self, name: str) -> str:
        """Return the full template name for the view `name`."""
        return f"{self.loader.full_path(name)}{self.suffix}"

    def get_template(self, name: str) -> CompiledTemplate:
        """Compile the view `name`.

        Raises:
            TemplateCompilationError: If the view cannot be compiled.
        """
        return self.factory.compile(self.view_name(name))

    def TemplateResponse(  # noqa: N802
        self,
        request: Request,
        name: str,
        context: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
        media_type: str | None = None,
        background: BackgroundTask | None = None,
    ) -> MustacheTemplateResponse:
        """Render the view `name` into an HTML response.

        Args:
            request: The current request; exposed to the template as
                ``request``.
            name: View name, without prefix or suffix.
            context: Template variables.
            status_code: Response status code.
            headers: Extra response headers.
            media_type: Response media type (default text/html).
            background: Task run after the response is sent.

        Returns:
            The rendered response.

        Raises:
            TemplateCompilationError: If the view cannot be compiled.
        """
        full_context: dict[str, Any] = {"request": request}  # pyright: ignore[reportExplicitAny]
        for processor in self.context_processors:
            full_context.update(processor(request))
        full_context.update(context or {})

        template = self.get_template(name)
        self.logger.debug("view_rendering", view=name, template=template.path)
        return MustacheTemplateResponse(
            template,
            full_context,
            status_code=status_code,
            headers=headers,
            media_type=media_type,
            background=background,
        )
