"""Compiled template value."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol, TypeVar

import chevron
from pydantic import BaseModel

Token = tuple[str, str]


class SupportsWrite(Protocol):
    def write(self, s: str, /) -> object: ...


W = TypeVar("W", bound=SupportsWrite)


@dataclass(slots=True, frozen=True)
class CompiledTemplate:
    """A fully resolved Mustache template.

    The token stream and every partial it can reach were produced at compile
    time, so rendering never touches a resource loader and never raises a
    parse error. Instances hold no per-render state and may be rendered any
    number of times, from any thread.

    Attributes:
        name: Logical name the template was compiled from.
        path: Resource location the template was read from.
        tokens: chevron token stream of the template.
        partials: Token streams of all reachable partials, by partial name.
    """

    name: str
    path: str
    tokens: tuple[Token, ...]
    partials: Mapping[str, tuple[Token, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def render(self, data: BaseModel | Mapping[str, Any] | None = None) -> str:  # pyright: ignore[reportExplicitAny]
        """Render the template.

        Args:
            data: Pydantic model or mapping used as the root context.

        Returns:
            Rendered template content.
        """
        if isinstance(data, BaseModel):
            context: object = data.model_dump()
        elif data is None:
            context = {}
        else:
            context = data

        return chevron.render(
            template=list(self.tokens),
            data=context,
            partials_path=None,
            partials_dict=self.partials,
        )

    def execute(self, writer: W, data: BaseModel | Mapping[str, Any] | None = None) -> W:  # pyright: ignore[reportExplicitAny]
        """Render the template into `writer` and return it.

        Args:
            writer: Any object with a text `write()` method.
            data: Pydantic model or mapping used as the root context.

        Returns:
            The same writer, for chaining.
        """
        _ = writer.write(self.render(data))
        return writer
