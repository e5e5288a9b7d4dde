r"""stacheview templating.

Mustache templates resolved by name through a pluggable resource loader,
compiled eagerly with chevron, including partials and template inheritance.

Basic usage:
    from stacheview.resources import FileSystemResourceLoader
    from stacheview.templating import MustacheFactory, MustacheTemplateLoader

    loader = MustacheTemplateLoader(
        FileSystemResourceLoader("/srv/app"),
        prefix="views/",
    )
    factory = MustacheFactory(loader)  # recompiles on every call

    template = factory.compile("index.mustache")
    html = template.render({"title": "Home"})

Memoized compilation:
    factory = MustacheFactory(loader, cache=True)
    factory.compile("index.mustache")  # compiled once
    factory.invalidate("index.mustache")
"""

from ._cache import MemoizingCache
from ._compiled import CompiledTemplate, SupportsWrite, Token
from ._compiler import MustacheCompiler
from ._factory import MustacheFactory
from ._inheritance import InheritanceExpander, has_inheritance
from ._loader import MustacheTemplateLoader

__all__ = [
    "CompiledTemplate",
    "InheritanceExpander",
    "MemoizingCache",
    "MustacheCompiler",
    "MustacheFactory",
    "MustacheTemplateLoader",
    "SupportsWrite",
    "Token",
    "has_inheritance",
]
