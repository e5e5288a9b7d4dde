"""Template factory with a selectable caching policy."""

from structlog.typing import FilteringBoundLogger

from stacheview.exceptions import (
    CachedComputationError,
    TemplateCompilationError,
    unwrap_one_layer,
)
from stacheview.utils import get_default_logger

from ._cache import MemoizingCache
from ._compiled import CompiledTemplate
from ._compiler import MustacheCompiler
from ._loader import MustacheTemplateLoader


def _as_compilation_error(error: BaseException, name: str) -> TemplateCompilationError:
    """Return `error` as a compilation error owned by the current caller.

    Compilation errors come back as a copy of the same type, since the
    original may be raised from several threads sharing one cache entry.
    Anything else is wrapped.
    """
    if isinstance(error, TemplateCompilationError):
        fresh = type(error).__new__(type(error), *error.args)
        fresh.__dict__.update(error.__dict__)
        return fresh
    msg = f"Failed to compile template {name!r}: {error}"
    return TemplateCompilationError(msg, name=name, cause=error)


class MustacheFactory:
    """Compile templates by name.

    With ``cache=False`` (the default) every `compile` call reads and
    compiles the template again, so edits to template files show up on the
    next request. With ``cache=True`` compiled templates are memoized by
    resolved location until `invalidate` or `clear_cache` is called.

    Example:
        from stacheview.resources import FileSystemResourceLoader

        loader = MustacheTemplateLoader(FileSystemResourceLoader(), prefix="views/")
        factory = MustacheFactory(loader)
        html = factory.compile("index.mustache").render({"title": "Home"})
    """

    def __init__(
        self,
        loader: MustacheTemplateLoader,
        *,
        cache: bool = False,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self.loader: MustacheTemplateLoader = loader
        self.compiler: MustacheCompiler = MustacheCompiler(loader)
        self.logger: FilteringBoundLogger = (
            logger if logger is not None else get_default_logger("factory")
        )
        self._cache: MemoizingCache[CompiledTemplate] | None = (
            MemoizingCache() if cache else None
        )

    @property
    def cache_enabled(self) -> bool:
        return self._cache is not None

    def compile(self, name: str) -> CompiledTemplate:
        """Compile the template `name`.

        Args:
            name: Logical template name, with or without the loader prefix.

        Returns:
            A fully initialized compiled template.

        Raises:
            TemplateCompilationError: If the template, or anything it
                references, cannot be resolved, read or parsed. Subclasses
                tell the cases apart.
        """
        self.logger.debug("template_compile_started", template=name)
        try:
            template = self._compile(name)
        except TemplateCompilationError as e:
            self.logger.info(
                "template_compile_failed",
                template=name,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise
        self.logger.debug(
            "template_compiled",
            template=name,
            path=template.path,
            partials=len(template.partials),
        )
        return template

    def _compile(self, name: str) -> CompiledTemplate:
        if self._cache is None:
            try:
                return self.compiler.compile(name)
            except TemplateCompilationError:
                raise
            except Exception as e:
                raise _as_compilation_error(e, name) from e

        try:
            return self._cache.get(
                self.loader.full_path(name),
                lambda: self.compiler.compile(name),
            )
        except CachedComputationError as e:
            error = _as_compilation_error(
                unwrap_one_layer(e, (CachedComputationError,)), name
            )
            raise error from error.cause

    def invalidate(self, name: str) -> bool:
        """Forget the memoized template for `name`.

        Returns:
            True if a memoized entry was dropped.
        """
        if self._cache is None:
            return False
        return self._cache.invalidate(self.loader.full_path(name))

    def clear_cache(self) -> None:
        """Forget all memoized templates."""
        if self._cache is not None:
            self._cache.clear()
