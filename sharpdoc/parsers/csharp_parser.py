"""C# parser built on tree-sitter.

tree-sitter produces an abstract-ish concrete syntax tree where comments and
directives are "extra" nodes and whitespace is not represented at all. This
module converts it into the full-fidelity ``SourceTree`` model: every
non-extra leaf becomes a ``Token`` and all text between two consecutive
tokens becomes the leading trivia of the second one.
"""

from functools import cache

import tree_sitter_c_sharp
from tree_sitter import Language, Parser
from tree_sitter import Node as TSNode

from ..models.syntax_tree import Node, NodeKind, SourceTree, Token
from .base_parser import BaseParser
from .semantic_model import (
    METHOD_DECLARATION_TYPES,
    NAMESPACE_TYPES,
    TYPE_DECLARATION_TYPES,
    SemanticModel,
)
from .trivia_lexer import lex_trivia

MEMBER_DECLARATION_TYPES = {
    "constructor_declaration",
    "destructor_declaration",
    "field_declaration",
    "property_declaration",
    "event_declaration",
    "event_field_declaration",
    "indexer_declaration",
    "operator_declaration",
    "conversion_operator_declaration",
    "delegate_declaration",
    "enum_member_declaration",
}

# Literals are kept whole so their contents are never mistaken for trivia.
ATOMIC_TYPES = {
    "string_literal",
    "verbatim_string_literal",
    "raw_string_literal",
    "interpolated_string_expression",
    "character_literal",
}


def node_kind(syntax_type: str) -> NodeKind:
    """Map a tree-sitter node type to a NodeKind."""
    if syntax_type == "compilation_unit":
        return NodeKind.COMPILATION_UNIT
    if syntax_type in NAMESPACE_TYPES:
        return NodeKind.NAMESPACE_DECLARATION
    if syntax_type in ("declaration_list", "enum_member_declaration_list"):
        return NodeKind.DECLARATION_LIST
    if syntax_type in TYPE_DECLARATION_TYPES:
        return NodeKind.TYPE_DECLARATION
    if syntax_type in METHOD_DECLARATION_TYPES:
        return NodeKind.METHOD_DECLARATION
    if syntax_type in MEMBER_DECLARATION_TYPES:
        return NodeKind.MEMBER_DECLARATION
    return NodeKind.OTHER


@cache
def _language() -> Language:
    return Language(tree_sitter_c_sharp.language())


class CSharpParser(BaseParser):
    """
    Parser for C# source using the tree-sitter C# grammar.

    Produces a SourceTree with full trivia and a SemanticModel for
    declared-symbol names.
    """

    def __init__(self):
        self._parser = Parser(_language())

    def parse(self, text: str) -> SourceTree:
        """
        Parse C# source text.

        Parameters
        ----------
        text : str
            C# source document

        Returns
        -------
        SourceTree
            Full-fidelity tree of the document

        Raises
        ------
        SyntaxError
            If tree-sitter reports an error or missing node
        """
        source = text.encode("utf-8")
        ts_tree = self._parser.parse(source)
        ts_root = ts_tree.root_node

        if ts_root.has_error:
            raise SyntaxError(self._describe_error(ts_root))

        builder = _TreeBuilder(source)
        root = builder.build(ts_root)
        return SourceTree(
            root=root,
            end_of_file=lex_trivia(source[builder.position :].decode("utf-8")),
            source=source,
            semantic_model=SemanticModel.from_tree_sitter(ts_root, source),
        )

    @staticmethod
    def _describe_error(ts_root: TSNode) -> str:
        stack = [ts_root]
        while stack:
            node = stack.pop()
            if node.is_error or node.is_missing:
                row, column = node.start_point
                if node.is_missing:
                    what = f"missing '{node.type}'"
                else:
                    what = "unexpected input"
                return f"{what} at line {row + 1}, column {column + 1}"
            stack.extend(reversed(node.children))
        return "unparseable input"


class _TreeBuilder:
    """Walks a tree-sitter tree and emits Nodes and Tokens in document order."""

    def __init__(self, source: bytes):
        self.source = source
        self.position = 0

    def build(self, ts_node: TSNode) -> Node:
        children = []
        for child in ts_node.children:
            if child.is_extra or child.start_byte == child.end_byte:
                continue
            if child.child_count == 0 or child.type in ATOMIC_TYPES:
                children.append(self._token(child))
            else:
                node = self.build(child)
                if node.children:
                    children.append(node)

        if children:
            start, end = children[0].start, children[-1].end
        else:
            start = end = ts_node.start_byte
        return Node(
            kind=node_kind(ts_node.type),
            syntax_type=ts_node.type,
            start=start,
            end=end,
            children=tuple(children),
        )

    def _token(self, ts_node: TSNode) -> Token:
        gap = self.source[self.position : ts_node.start_byte].decode("utf-8")
        self.position = ts_node.end_byte
        return Token(
            text=self.source[ts_node.start_byte : ts_node.end_byte].decode("utf-8"),
            start=ts_node.start_byte,
            end=ts_node.end_byte,
            leading=lex_trivia(gap),
        )
