"""Mustache compilation: inheritance, tokenizing and partial resolution."""

from collections import deque
from types import MappingProxyType

from chevron import ChevronError
from chevron.tokenizer import tokenize

from stacheview.exceptions import TemplateSyntaxError

from ._compiled import CompiledTemplate, Token
from ._inheritance import InheritanceExpander
from ._loader import MustacheTemplateLoader


class _Compilation:
    """State of a single `MustacheCompiler.compile` call.

    Each distinct template location is read at most once per compilation,
    however many times it is referenced.
    """

    def __init__(self, loader: MustacheTemplateLoader) -> None:
        self.loader: MustacheTemplateLoader = loader
        self.sources: dict[str, str] = {}
        self.expander: InheritanceExpander = InheritanceExpander(
            self.source, loader.full_path
        )

    def source(self, name: str) -> str:
        path = self.loader.full_path(name)
        if path not in self.sources:
            self.sources[path] = self.loader.resolve(name)
        return self.sources[path]

    def tokens(self, name: str) -> tuple[Token, ...]:
        """Expand inheritance and tokenize eagerly.

        chevron tokenizes lazily; draining the generator here surfaces
        syntax errors at compile time instead of on first render.
        """
        source = self.expander.expand(name, self.source(name))
        try:
            return tuple(tokenize(source))
        except ChevronError as e:
            path = self.loader.full_path(name)
            msg = f"Malformed template {name!r} at {path!r}: {e}"
            raise TemplateSyntaxError(msg, name=name, path=path, cause=e) from e


class MustacheCompiler:
    """Compile templates read through a `MustacheTemplateLoader`.

    Partials (``{{>name}}``) and parents (``{{<name}}``) are resolved through
    the same loader, recursively, so their names get the loader's prefix.
    Nothing is cached between calls.
    """

    def __init__(self, loader: MustacheTemplateLoader) -> None:
        self.loader: MustacheTemplateLoader = loader

    def compile(self, name: str) -> CompiledTemplate:
        """Compile `name` and every partial it can reach.

        Args:
            name: Logical template name.

        Returns:
            A fully initialized compiled template.

        Raises:
            TemplateNotFoundError: If the template or a partial or parent
                does not exist.
            TemplateLoadError: If a template cannot be read.
            TemplateSyntaxError: If a template is malformed.
            TemplateCycleError: If template inheritance loops.
        """
        compilation = _Compilation(self.loader)
        tokens = compilation.tokens(name)

        partials: dict[str, tuple[Token, ...]] = {}
        pending = deque(key for tag, key in tokens if tag == "partial")
        while pending:
            partial = pending.popleft()
            if partial in partials:
                continue
            partial_tokens = compilation.tokens(partial)
            partials[partial] = partial_tokens
            pending.extend(key for tag, key in partial_tokens if tag == "partial")

        return CompiledTemplate(
            name=name,
            path=self.loader.full_path(name),
            tokens=tokens,
            partials=MappingProxyType(partials),
        )
