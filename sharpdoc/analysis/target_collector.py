"""Collector for declarations that lack documentation comments."""

from typing import Iterator

from ..models.doc_target import DocTarget
from ..models.syntax_tree import Node, NodeKind, SourceTree

TARGET_KINDS = frozenset({NodeKind.TYPE_DECLARATION, NodeKind.METHOD_DECLARATION})

# No targetable declaration can be nested inside these.
OPAQUE_KINDS = frozenset({NodeKind.METHOD_DECLARATION, NodeKind.MEMBER_DECLARATION})


class TargetCollector:
    """Walks a SourceTree and finds undocumented type and method declarations.

    Traversal is pre-order, so a type is always reported before its members
    and targets come out in document order. The tree is never modified.
    """

    def declarations(self, tree: SourceTree) -> Iterator[tuple[Node, bool]]:
        """Yield every targetable declaration with its documentation status.

        Args:
            tree: Parsed source tree.

        Yields:
            Tuples of (node, has_docs) in document order.
        """
        stack = [tree.root]
        while stack:
            node = stack.pop()
            if node.kind in TARGET_KINDS:
                yield node, node.has_documentation()
            if node.kind in OPAQUE_KINDS:
                continue
            stack.extend(
                child for child in reversed(node.children) if isinstance(child, Node)
            )

    def collect(self, tree: SourceTree) -> list[DocTarget]:
        """Return a DocTarget for each undocumented declaration.

        Args:
            tree: Parsed source tree.

        Returns:
            List of DocTarget in document order.
        """
        return [
            DocTarget.from_node(node)
            for node, documented in self.declarations(tree)
            if not documented
        ]
