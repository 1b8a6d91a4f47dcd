"""Rewriter that splices generated documentation into a SourceTree.

The rewrite is bottom-up: children are rewritten first and every ancestor of
a changed node is rebuilt from its rewritten children. Documentation is found
by the original start offset of each declaration, never by object identity,
because rebuilding produces new node objects all the way up to the root.
"""

import logging
import re
from bisect import bisect_left
from collections.abc import Mapping
from typing import Callable

from ..models.doc_target import GeneratedDoc
from ..models.syntax_tree import Node, NodeKind, SourceTree, Trivia, TriviaKind

logger = logging.getLogger(__name__)

DEFAULT_INDENTATION = "    "

BYTE_ORDER_MARK = "\ufeff"

_EXTRA_SLASHES = re.compile(r"^/{4,}")


def doc_comment_lines(text: str) -> list[str]:
    """Normalize generated text into single-line documentation comments.

    Each line is stripped, blank lines are dropped and every line is given a
    ``///`` prefix unless it already has one. ``/** ... */`` blocks are
    converted line by line.

    Args:
        text: Generated documentation, possibly indented or fenced.

    Returns:
        List of ``///`` comment lines without indentation or line breaks.

    Examples:
        >>> doc_comment_lines("  <summary>\\n\\n  Adds.\\n  </summary>")
        ['/// <summary>', '/// Adds.', '/// </summary>']
    """
    lines = []
    in_block = False
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith("///"):
            # Four or more slashes lex as a plain comment.
            lines.append(_EXTRA_SLASHES.sub("///", line))
            continue
        if line.startswith("/**"):
            in_block = True
            line = line[3:].strip()
        if in_block:
            if line.endswith("*/"):
                in_block = False
                line = line[:-2].strip()
            if line.startswith("*"):
                line = line[1:].strip()
        if line:
            lines.append(f"/// {line}")
    return lines


class DocRewriter:
    """Inserts documentation comments in front of selected declarations.

    Dispatch is on ``NodeKind``: type and method declarations go through
    ``_visit_declaration``; every other kind is rebuilt from its rewritten
    children and otherwise left alone. Subtrees that contain none of the
    requested offsets are returned unchanged without being visited.

    New documentation is appended after the declaration's existing leading
    trivia, so directives and comments already in front of it stay first.

    Attributes:
        docs: Frozen mapping of original start offset to GeneratedDoc.
    """

    def __init__(self, docs: Mapping[int, GeneratedDoc]):
        self.docs = docs
        self._offsets = sorted(docs)
        self._handlers: dict[NodeKind, Callable[[Node, Node], Node]] = {
            NodeKind.TYPE_DECLARATION: self._visit_declaration,
            NodeKind.METHOD_DECLARATION: self._visit_declaration,
        }
        self._tree: SourceTree | None = None
        self._consumed: set[int] = set()

    def rewrite(self, tree: SourceTree) -> SourceTree:
        """Return a new tree with documentation inserted.

        Args:
            tree: The original, unmodified tree the offsets were taken from.

        Returns:
            A new SourceTree. ``tree`` itself is not modified.

        Raises:
            RuntimeError: If an offset in the mapping does not belong to a
                type or method declaration of ``tree``.
        """
        self._tree = tree
        self._consumed = set()
        root = self._visit(tree.root)

        unmatched = sorted(set(self._offsets) - self._consumed)
        if unmatched:
            logger.error(
                f"Generated documentation for offsets {unmatched} does not "
                f"match any declaration in the source tree"
            )
            raise RuntimeError(
                f"Rewrite inconsistency: no declaration starts at offsets {unmatched}"
            )
        return tree.with_root(root)

    def _visit(self, node: Node) -> Node:
        if not self._contains_target(node):
            return node

        children = tuple(
            self._visit(child) if isinstance(child, Node) else child
            for child in node.children
        )
        if any(new is not old for new, old in zip(children, node.children)):
            rebuilt = node.with_children(children)
        else:
            rebuilt = node

        handler = self._handlers.get(node.kind, self._visit_default)
        return handler(node, rebuilt)

    def _visit_default(self, original: Node, rebuilt: Node) -> Node:
        return rebuilt

    def _visit_declaration(self, original: Node, rebuilt: Node) -> Node:
        doc = self.docs.get(original.start)
        if doc is None:
            return rebuilt
        self._consumed.add(original.start)

        lines = doc_comment_lines(doc.text)
        if not lines:
            logger.warning(f"Empty documentation for offset {original.start}, skipped")
            return rebuilt

        trivia = self._documentation_trivia(original, rebuilt.leading_trivia, lines)
        return rebuilt.with_leading_trivia(trivia)

    def _contains_target(self, node: Node) -> bool:
        index = bisect_left(self._offsets, node.start)
        return index < len(self._offsets) and self._offsets[index] < node.end

    def _documentation_trivia(
        self, node: Node, leading: tuple[Trivia, ...], lines: list[str]
    ) -> tuple[Trivia, ...]:
        """Return ``leading`` followed by the documentation block for ``node``."""
        newline = self._tree.newline
        indentation, starts_line = self._indentation(node)

        fragments = list(leading)
        if not starts_line:
            # No trailing blanks before the inserted line break.
            while fragments and fragments[-1].kind == TriviaKind.WHITESPACE:
                fragments.pop()
            fragments.append(Trivia(TriviaKind.END_OF_LINE, newline))
            fragments.append(Trivia(TriviaKind.WHITESPACE, indentation))
        for line in lines:
            fragments.append(Trivia(TriviaKind.SINGLE_LINE_DOC_COMMENT, line))
            fragments.append(Trivia(TriviaKind.END_OF_LINE, newline))
            if indentation:
                fragments.append(Trivia(TriviaKind.WHITESPACE, indentation))
        return tuple(fragments)

    def _indentation(self, node: Node) -> tuple[str, bool]:
        """Infer the indentation of ``node`` from its leading trivia.

        A byte order mark at the start of the file is ignored.

        Returns:
            Tuple of (indentation, starts_line). ``starts_line`` is False when
            the declaration shares its line with earlier code, in which case
            the default indentation is returned.
        """
        leading = node.leading_trivia
        same_line = []
        after_newline = False
        for trivia in reversed(leading):
            if trivia.kind == TriviaKind.END_OF_LINE:
                after_newline = True
                break
            if trivia.kind == TriviaKind.SKIPPED and trivia.text == BYTE_ORDER_MARK:
                continue
            same_line.append(trivia)

        if all(t.kind == TriviaKind.WHITESPACE for t in same_line):
            if after_newline or self._at_line_start(node, leading):
                return (same_line[0].text if same_line else ""), True
        return DEFAULT_INDENTATION, False

    def _at_line_start(self, node: Node, leading: tuple[Trivia, ...]) -> bool:
        trivia_start = node.start - sum(len(t.text.encode("utf-8")) for t in leading)
        if trivia_start <= 0:
            return True
        return self._tree.source[trivia_start - 1 : trivia_start] in (b"\n", b"\r")
