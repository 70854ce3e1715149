"""
Typst Document Tree

Small node types the generator assembles before serializing to Typst source.
User text only enters the output through ``Literal``, ``Text`` and ``Strong``,
which escape on serialization; ``Expr`` carries generated code verbatim.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from resumetyp.contexts.templating.typst_patterns import escape, quote


class Node:
    """Base class for all document nodes."""

    def serialize(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.serialize()


@dataclass(frozen=True)
class Literal(Node):
    """User text as a quoted Typst string literal: ``"..."``."""

    text: str

    def serialize(self) -> str:
        return quote(self.text)


@dataclass(frozen=True)
class Text(Node):
    """User text in markup mode, escaped but unquoted."""

    text: str

    def serialize(self) -> str:
        return escape(self.text)


@dataclass(frozen=True)
class Strong(Node):
    """Bold markup: ``*text*``."""

    text: str

    def serialize(self) -> str:
        return f"*{escape(self.text)}*"


@dataclass(frozen=True)
class Expr(Node):
    """Generated Typst code, emitted as-is."""

    code: str

    def serialize(self) -> str:
        return self.code


@dataclass(frozen=True)
class Sequence(Node):
    """Children serialized back to back, joined by ``separator``."""

    children: Tuple[Node, ...] = ()
    separator: str = ""

    def serialize(self) -> str:
        return self.separator.join(child.serialize() for child in self.children)


@dataclass(frozen=True)
class ListItem(Node):
    """One markup list line: ``- content``."""

    content: Node
    indent: str = ""

    def serialize(self) -> str:
        return f"{self.indent}- {self.content.serialize()}"


@dataclass(frozen=True)
class BulletList(Node):
    """Newline-joined list items."""

    items: Tuple[ListItem, ...] = ()

    @classmethod
    def from_texts(cls, texts: Iterable[str], indent: str = "  ") -> "BulletList":
        """Build a list from raw strings, skipping blank entries."""
        return cls(tuple(ListItem(Text(t), indent=indent) for t in texts if t.strip()))

    def __len__(self) -> int:
        return len(self.items)

    def serialize(self) -> str:
        return "\n".join(item.serialize() for item in self.items)


@dataclass(frozen=True)
class Call(Node):
    """
    A helper invocation with an optional trailing content block.

    Block layout puts each argument on its own line and the body between
    ``[`` and ``]`` on separate lines:

        #work-heading(
          "Engineer",
          ...
        )[
          - bullet
        ]

    Inline layout keeps everything on one line: ``#name(a, b)[body]``.
    """

    name: str
    args: Tuple[Node, ...] = ()
    kwargs: Tuple[Tuple[str, Node], ...] = ()
    body: Optional[Node] = None
    inline: bool = False

    def _arguments(self) -> List[str]:
        rendered = [arg.serialize() for arg in self.args]
        rendered.extend(f"{key}: {value.serialize()}" for key, value in self.kwargs)
        return rendered

    def serialize(self) -> str:
        arguments = self._arguments()
        body = self.body.serialize() if self.body is not None else None

        if self.inline:
            out = f"#{self.name}"
            if arguments:
                out += f"({', '.join(arguments)})"
            if body is not None:
                out += f"[{body}]"
            return out

        out = f"#{self.name}"
        if arguments:
            out += "(\n" + ",\n".join(f"  {a}" for a in arguments) + "\n)"
        if body is not None:
            out += f"[\n{body}\n]"
        return out


@dataclass(frozen=True)
class Heading(Node):
    """Level-one heading: ``= Title``."""

    title: str

    def serialize(self) -> str:
        return f"= {escape(self.title)}"


@dataclass(frozen=True)
class Section(Node):
    """
    A heading followed by its blocks.

    Serializes to an empty string when there are no blocks, so callers can
    drop the section by checking the rendered text.
    """

    heading: Heading
    blocks: Tuple[Node, ...] = field(default_factory=tuple)
    separator: str = "\n\n"

    def serialize(self) -> str:
        if not self.blocks:
            return ""
        body = self.separator.join(block.serialize() for block in self.blocks)
        return f"{self.heading.serialize()}\n{body}"
