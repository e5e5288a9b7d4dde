"""Template inheritance expansion.

Mustache inheritance lets a template extend a parent and replace named
blocks of it:

    parent.mustache                   page.mustache
    <h1>{{$title}}Home{{/title}}</h1>    {{<parent.mustache}}
                                          {{$title}}About{{/title}}
                                        {{/parent.mustache}}

chevron has no notion of ``{{<parent}}`` or ``{{$block}}`` tags, so the
expansion happens on the source before tokenizing: every parent reference is
replaced by the parent's source with its blocks filled in, leaving plain
Mustache behind. Section tags are tracked only to keep closing tags paired;
they pass through untouched, as do comments and variables.

Set-delimiter tags (``{{=<% %>=}}``) are followed the way chevron follows
them. Inheritance tags are recognized with the delimiters in force and,
after a delimiter change, also with the default ``{{ }}``. Text spliced
between templates is joined with set-delimiter tags so every piece is read
back with the delimiters it was written in.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from stacheview.exceptions import TemplateCycleError, TemplateSyntaxError

Delimiters = tuple[str, str]
DEFAULT_DELIMITERS: Delimiters = ("{{", "}}")

_INHERITANCE_HINT = re.compile(r"\{\{\s*[<$]|\{\{=")

_KINDS: dict[str, Literal["parent", "block", "section"]] = {
    "<": "parent",
    "$": "block",
    "#": "section",
    "^": "section",
}


@dataclass(slots=True, frozen=True)
class _Text:
    """Source text with the delimiters in force at its start and end."""

    text: str
    opens: Delimiters
    closes: Delimiters


class _Node:
    __slots__ = ("children", "close_tag", "kind", "name", "open_tag")

    def __init__(
        self,
        kind: Literal["parent", "block", "section"],
        name: str,
        open_tag: _Text | None = None,
    ) -> None:
        self.kind: Literal["parent", "block", "section"] = kind
        self.name: str = name
        self.open_tag: _Text | None = open_tag
        self.children: list[_Text | _Node] = []
        self.close_tag: _Text | None = None


def has_inheritance(source: str) -> bool:
    """Return True if `source` may contain parent or block tags.

    Sources that change delimiters are always reported, since their
    inheritance tags cannot be spotted without following the changes.
    """
    return _INHERITANCE_HINT.search(source) is not None


def _standalone_span(source: str, start: int, end: int) -> tuple[int, int]:
    """Widen a tag span to its whole line when the tag stands alone on it."""
    line_start = source.rfind("\n", 0, start) + 1
    line_end = source.find("\n", end)
    line_end = len(source) if line_end == -1 else line_end + 1
    before = source[line_start:start]
    after = source[end:line_end]
    if (before == "" or before.isspace()) and (after == "" or after.isspace()):
        return line_start, line_end
    return start, end


def _join(pieces: list[_Text]) -> str:
    out: list[str] = []
    current = DEFAULT_DELIMITERS
    for piece in pieces:
        if piece.opens != current:
            left, right = current
            new_left, new_right = piece.opens
            out.append(f"{left}={new_left} {new_right}={right}")
        out.append(piece.text)
        current = piece.closes
    return "".join(out)


class _Parser:
    """Split one template source into text and inheritance structure."""

    def __init__(self, source: str, name: str) -> None:
        self.source: str = source
        self.name: str = name
        self.root: list[_Text | _Node] = []
        self.stack: list[_Node] = []
        self.delimiters: Delimiters = DEFAULT_DELIMITERS
        self.pos: int = 0
        self.pos_delimiters: Delimiters = DEFAULT_DELIMITERS

    def parse(self) -> list[_Text | _Node]:
        search = 0
        while (tag := self._find_tag(search)) is not None:
            start, end, content = tag
            search = end
            sigil, key = content[:1], content[1:].strip()

            if sigil == "=":
                parts = content[1:-1].strip().split(" ")
                # Malformed changes are left for chevron to reject
                if content.endswith("=") and parts[0] and parts[-1]:
                    self.delimiters = (parts[0], parts[-1])
            elif sigil == "/":
                self._close(key, start, end)
            elif sigil in _KINDS:
                self._open(_KINDS[sigil], key, start, end)

        if self.stack:
            msg = f"Tag {self.stack[-1].name!r} in {self.name!r} was never closed"
            raise TemplateSyntaxError(msg, name=self.name)
        self._flush(len(self.source), self.root)
        return self.root

    def _find_tag(self, search: int) -> tuple[int, int, str] | None:
        """Find the next tag at or after `search`.

        Comments and tags with a sigil that matters only to chevron are
        returned too; the caller ignores them. Default-delimiter tags found
        under changed delimiters are returned only if they are inheritance
        tags; otherwise they are plain text.
        """
        left, right = self.delimiters
        while True:
            start = self.source.find(left, search)
            fallback = -1
            if self.delimiters != DEFAULT_DELIMITERS:
                fallback = self.source.find("{{", search)

            if fallback != -1 and (start == -1 or fallback < start):
                close = self.source.find("}}", fallback + 2)
                if close != -1:
                    content = self.source[fallback + 2 : close]
                    if self._is_inheritance(content):
                        return fallback, close + 2, content
                search = fallback + 2
                continue

            if start == -1:
                return None
            close = self.source.find(right, start + len(left))
            if close == -1:
                # Unclosed tag; chevron reports it when tokenizing.
                return None
            content = self.source[start + len(left) : close]
            end = close + len(right)
            if (
                content.startswith("{")
                and self.delimiters == DEFAULT_DELIMITERS
                and self.source.startswith("}", end)
            ):
                end += 1
            return start, end, content

    def _is_inheritance(self, content: str) -> bool:
        sigil, key = content[:1], content[1:].strip()
        if sigil in ("<", "$"):
            return True
        top = self.stack[-1] if self.stack else None
        return sigil == "/" and top is not None and top.kind != "section" and top.name == key

    def _flush(self, upto: int, target: list[_Text | _Node]) -> None:
        if upto > self.pos:
            target.append(
                _Text(self.source[self.pos : upto], self.pos_delimiters, self.delimiters)
            )

    def _advance(self, end: int) -> None:
        self.pos = end
        self.pos_delimiters = self.delimiters

    def _open(
        self,
        kind: Literal["parent", "block", "section"],
        key: str,
        start: int,
        end: int,
    ) -> None:
        if kind != "section":
            start, end = _standalone_span(self.source, start, end)
        target = self.stack[-1].children if self.stack else self.root
        self._flush(start, target)

        node = _Node(kind, key)
        if kind == "section":
            node.open_tag = _Text(self.source[start:end], self.delimiters, self.delimiters)
        target.append(node)
        self.stack.append(node)
        self._advance(end)

    def _close(self, key: str, start: int, end: int) -> None:
        if not self.stack:
            msg = f"Closing tag {key!r} in {self.name!r} was never opened"
            raise TemplateSyntaxError(msg, name=self.name)
        top = self.stack[-1]
        if top.name != key:
            msg = (
                f"Closing tag {key!r} in {self.name!r} "
                f"does not match open tag {top.name!r}"
            )
            raise TemplateSyntaxError(msg, name=self.name)

        if top.kind != "section":
            start, end = _standalone_span(self.source, start, end)
        self._flush(start, top.children)
        if top.kind == "section":
            top.close_tag = _Text(self.source[start:end], self.delimiters, self.delimiters)
        _ = self.stack.pop()
        self._advance(end)


class InheritanceExpander:
    """Expand parent and block tags into plain Mustache.

    Args:
        fetch: Returns the source of a template by name.
        identify: Maps a name to the identity used for cycle detection, so
            that prefixed and bare spellings of one template compare equal.
    """

    def __init__(
        self,
        fetch: Callable[[str], str],
        identify: Callable[[str], str] = str,
    ) -> None:
        self.fetch: Callable[[str], str] = fetch
        self.identify: Callable[[str], str] = identify

    def expand(self, name: str, source: str) -> str:
        """Return `source` with every parent reference expanded.

        Raises:
            TemplateSyntaxError: If parent or block tags are not paired.
            TemplateCycleError: If a template extends itself, directly or
                through its parents.
        """
        if not has_inheritance(source):
            return source
        return _join(self._expand(name, source, {}, ((name, self.identify(name)),)))

    def _expand(
        self,
        name: str,
        source: str,
        blocks: dict[str, list[_Text]],
        chain: tuple[tuple[str, str], ...],
    ) -> list[_Text]:
        if not has_inheritance(source):
            return [_Text(source, DEFAULT_DELIMITERS, DEFAULT_DELIMITERS)]
        return self._render(_Parser(source, name).parse(), blocks, chain)

    def _render(
        self,
        nodes: list[_Text | _Node],
        blocks: dict[str, list[_Text]],
        chain: tuple[tuple[str, str], ...],
    ) -> list[_Text]:
        out: list[_Text] = []
        for node in nodes:
            if isinstance(node, _Text):
                out.append(node)
            elif node.kind == "section":
                if node.open_tag is not None:
                    out.append(node.open_tag)
                out.extend(self._render(node.children, blocks, chain))
                if node.close_tag is not None:
                    out.append(node.close_tag)
            elif node.kind == "block":
                if node.name in blocks:
                    out.extend(blocks[node.name])
                else:
                    out.extend(self._render(node.children, blocks, chain))
            else:
                out.extend(self._extend(node, blocks, chain))
        return out

    def _extend(
        self,
        node: _Node,
        blocks: dict[str, list[_Text]],
        chain: tuple[tuple[str, str], ...],
    ) -> list[_Text]:
        identity = self.identify(node.name)
        if any(seen == identity for _, seen in chain):
            names = tuple(n for n, _ in chain) + (node.name,)
            msg = f"Template inheritance cycle: {' -> '.join(names)}"
            raise TemplateCycleError(msg, chain=names)

        overrides = {
            child.name: self._render(child.children, blocks, chain)
            for child in node.children
            if isinstance(child, _Node) and child.kind == "block"
        }
        # Overrides from further out win over the ones given here
        merged = overrides | blocks
        parent = self.fetch(node.name)
        return self._expand(node.name, parent, merged, (*chain, (node.name, identity)))
