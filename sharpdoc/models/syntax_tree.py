"""Immutable concrete syntax tree used by the collector and the rewriter.

Every byte of the parsed document lives in exactly one place: either the text
of a ``Token`` or a ``Trivia`` fragment in front of one, or the end-of-file
trivia of the ``SourceTree``. Concatenating them in order reproduces the input
exactly, which is what makes byte-faithful rewriting possible.

All classes are frozen dataclasses. ``with_*`` methods return new objects and
leave the receiver untouched, so rewriting a node always means rebuilding its
ancestors from the rewritten children.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Iterator, Optional, Union

if TYPE_CHECKING:
    from ..parsers.semantic_model import SemanticModel


class TriviaKind(Enum):
    """Kinds of non-semantic source fragments."""

    WHITESPACE = "whitespace"
    END_OF_LINE = "end_of_line"
    SINGLE_LINE_COMMENT = "single_line_comment"
    MULTI_LINE_COMMENT = "multi_line_comment"
    SINGLE_LINE_DOC_COMMENT = "single_line_doc_comment"
    MULTI_LINE_DOC_COMMENT = "multi_line_doc_comment"
    DIRECTIVE = "directive"
    SKIPPED = "skipped"


DOC_COMMENT_KINDS = frozenset(
    {TriviaKind.SINGLE_LINE_DOC_COMMENT, TriviaKind.MULTI_LINE_DOC_COMMENT}
)


class NodeKind(Enum):
    """Coarse node classification used for dispatch.

    Only ``TYPE_DECLARATION`` and ``METHOD_DECLARATION`` are ever documented.
    Everything the parser does not classify is ``OTHER``.
    """

    COMPILATION_UNIT = "compilation_unit"
    NAMESPACE_DECLARATION = "namespace_declaration"
    DECLARATION_LIST = "declaration_list"
    TYPE_DECLARATION = "type_declaration"
    METHOD_DECLARATION = "method_declaration"
    MEMBER_DECLARATION = "member_declaration"
    OTHER = "other"


@dataclass(frozen=True)
class Trivia:
    """A single whitespace, comment or directive fragment."""

    kind: TriviaKind
    text: str

    @property
    def is_doc_comment(self) -> bool:
        return self.kind in DOC_COMMENT_KINDS


@dataclass(frozen=True)
class Token:
    """A lexical token with the trivia that precedes it.

    Attributes:
        text: Exact token text.
        start: Byte offset of the token in the original document.
        end: Byte offset just past the token in the original document.
        leading: Trivia between the previous token and this one.
    """

    text: str
    start: int
    end: int
    leading: tuple[Trivia, ...] = ()

    def to_full_string(self) -> str:
        return "".join(t.text for t in self.leading) + self.text

    def with_leading_trivia(self, trivia) -> "Token":
        return replace(self, leading=tuple(trivia))


Element = Union["Node", Token]


@dataclass(frozen=True)
class Node:
    """An interior node of the syntax tree.

    Attributes:
        kind: Classification used for dispatch.
        syntax_type: Grammar node type, e.g. ``class_declaration``.
        start: Byte offset of the node's first token in the original document.
        end: Byte offset just past the node's last token.
        children: Ordered child nodes and tokens.
    """

    kind: NodeKind
    syntax_type: str
    start: int
    end: int
    children: tuple[Element, ...] = ()

    def tokens(self) -> Iterator[Token]:
        """Yield the node's tokens in document order."""
        for child in self.children:
            if isinstance(child, Token):
                yield child
            else:
                yield from child.tokens()

    def walk(self) -> Iterator["Node"]:
        """Yield this node and all descendant nodes in pre-order."""
        yield self
        for child in self.children:
            if isinstance(child, Node):
                yield from child.walk()

    def first_token(self) -> Optional[Token]:
        return next(self.tokens(), None)

    @property
    def leading_trivia(self) -> tuple[Trivia, ...]:
        """Leading trivia of the node, i.e. of its first token."""
        token = self.first_token()
        return token.leading if token is not None else ()

    def has_documentation(self) -> bool:
        return any(t.is_doc_comment for t in self.leading_trivia)

    def contains_offset(self, offset: int) -> bool:
        return self.start <= offset < self.end

    def with_children(self, children) -> "Node":
        return replace(self, children=tuple(children))

    def with_leading_trivia(self, trivia) -> "Node":
        """Return a copy whose first token carries ``trivia``.

        Raises:
            ValueError: If the node contains no tokens.
        """
        for index, child in enumerate(self.children):
            if isinstance(child, Node):
                if child.first_token() is None:
                    continue
            replaced = child.with_leading_trivia(trivia)
            return self.with_children(
                self.children[:index] + (replaced,) + self.children[index + 1 :]
            )
        raise ValueError(f"{self.syntax_type} node has no tokens")

    def to_full_string(self) -> str:
        """Render the node including its leading trivia."""
        return "".join(token.to_full_string() for token in self.tokens())

    def to_string(self) -> str:
        """Render the node's own text, without its leading trivia."""
        parts = []
        for index, token in enumerate(self.tokens()):
            parts.append(token.text if index == 0 else token.to_full_string())
        return "".join(parts)


@dataclass(frozen=True)
class SourceTree:
    """A parsed document.

    Offsets stored in the tree always refer to ``source``, the bytes the tree
    was originally parsed from. A rewritten tree keeps the original ``source``
    and ``semantic_model`` so that offsets captured before the rewrite stay
    meaningful.

    Attributes:
        root: The compilation unit node.
        end_of_file: Trivia after the last token.
        source: UTF-8 bytes of the parsed document.
        semantic_model: Name resolution for declarations, if available.
    """

    root: Node
    end_of_file: tuple[Trivia, ...] = ()
    source: bytes = b""
    semantic_model: Optional["SemanticModel"] = field(
        default=None, compare=False, repr=False
    )

    @property
    def newline(self) -> str:
        """Line terminator used by the document."""
        return "\r\n" if b"\r\n" in self.source else "\n"

    def line_of(self, offset: int) -> int:
        """Return the 1-based line number of a byte offset in ``source``."""
        return self.source.count(b"\n", 0, offset) + 1

    def with_root(self, root: Node) -> "SourceTree":
        return replace(self, root=root)

    def to_full_string(self) -> str:
        """Serialize the tree back to text, trivia included."""
        return self.root.to_full_string() + "".join(t.text for t in self.end_of_file)
