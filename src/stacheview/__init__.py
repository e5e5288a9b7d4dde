"""Mustache views for FastAPI, with pluggable template resource loading."""

from stacheview.exceptions import (
    StacheviewError,
    TemplateCompilationError,
    TemplateCycleError,
    TemplateLoadError,
    TemplateNotFoundError,
    TemplateSyntaxError,
)
from stacheview.templating import (
    CompiledTemplate,
    MustacheFactory,
    MustacheTemplateLoader,
)
from stacheview.views import MustacheTemplates

__all__ = [
    "CompiledTemplate",
    "MustacheFactory",
    "MustacheTemplateLoader",
    "MustacheTemplates",
    "StacheviewError",
    "TemplateCompilationError",
    "TemplateCycleError",
    "TemplateLoadError",
    "TemplateNotFoundError",
    "TemplateSyntaxError",
]
