"""Declared-symbol name resolution for C# declarations."""

import re
from typing import Optional, Union

from tree_sitter import Node as TSNode

from ..models.syntax_tree import Node

NAMESPACE_TYPES = {"namespace_declaration", "file_scoped_namespace_declaration"}

TYPE_DECLARATION_TYPES = {
    "class_declaration",
    "struct_declaration",
    "interface_declaration",
    "record_declaration",
    "record_struct_declaration",
    "enum_declaration",
}

METHOD_DECLARATION_TYPES = {"method_declaration"}

_WHITESPACE_RE = re.compile(r"\s+")


class SemanticModel:
    """Maps declaration start offsets to fully-qualified display names.

    Names follow the usual C# display format: ``Namespace.Type`` for types,
    ``Namespace.Type.Method(int, string)`` for methods, with generic type
    parameter lists kept as written (``Repository<T>``).
    """

    def __init__(self, names: Optional[dict[int, str]] = None):
        self._names = dict(names or {})

    @classmethod
    def from_tree_sitter(cls, root: TSNode, source: bytes) -> "SemanticModel":
        """Build the model from a tree-sitter compilation unit."""
        model = cls()
        model._index(root, source, [])
        return model

    def declared_symbol_name(self, target: Union[Node, int]) -> str:
        """Return the display name of the declaration starting at ``target``.

        Args:
            target: A declaration node or its start offset.

        Raises:
            LookupError: If no declaration is known at that offset.
        """
        offset = target if isinstance(target, int) else target.start
        try:
            return self._names[offset]
        except KeyError:
            raise LookupError(f"No declared symbol at offset {offset}") from None

    def __len__(self) -> int:
        return len(self._names)

    def _index(self, ts_node: TSNode, source: bytes, scope: list[str]) -> None:
        # File-scoped namespaces apply to the siblings that follow them.
        # Declarations whose name cannot be read are left unresolved, and so
        # is everything nested inside them.
        scope = list(scope)
        for child in ts_node.named_children:
            try:
                if child.type in NAMESPACE_TYPES:
                    name = _text(child.child_by_field_name("name"), source)
                    if child.type == "file_scoped_namespace_declaration":
                        scope = scope + [name]
                        self._index(child, source, scope)
                    else:
                        self._index(child, source, scope + [name])
                elif child.type in TYPE_DECLARATION_TYPES:
                    qualified = scope + [_type_name(child, source)]
                    self._names[first_token_start(child)] = ".".join(qualified)
                    self._index(child, source, qualified)
                elif child.type in METHOD_DECLARATION_TYPES:
                    self._names[first_token_start(child)] = ".".join(
                        scope + [_method_signature(child, source)]
                    )
                elif child.type == "declaration_list" or child.type.startswith(
                    "preproc_"
                ):
                    self._index(child, source, scope)
            except LookupError:
                continue


def first_token_start(ts_node: TSNode) -> int:
    """Byte offset of the first non-extra leaf under ``ts_node``."""
    node = ts_node
    while node.child_count > 0:
        candidates = [
            child
            for child in node.children
            if not child.is_extra and child.start_byte != child.end_byte
        ]
        if not candidates:
            break
        node = candidates[0]
    return node.start_byte


def _type_name(ts_node: TSNode, source: bytes) -> str:
    name = _text(ts_node.child_by_field_name("name"), source)
    type_parameters = _child_of_type(ts_node, "type_parameter_list")
    if type_parameters is not None:
        name += _text(type_parameters, source)
    return name


def _method_signature(ts_node: TSNode, source: bytes) -> str:
    name = _type_name(ts_node, source)
    parameter_types = []
    parameter_list = _child_of_type(ts_node, "parameter_list")
    if parameter_list is not None:
        for parameter in parameter_list.named_children:
            if parameter.type != "parameter":
                continue
            parameter_type = parameter.child_by_field_name("type")
            if parameter_type is not None:
                parameter_types.append(_text(parameter_type, source))
    return f"{name}({', '.join(parameter_types)})"


def _child_of_type(ts_node: TSNode, node_type: str) -> Optional[TSNode]:
    for child in ts_node.children:
        if child.type == node_type:
            return child
    return None


def _text(ts_node: Optional[TSNode], source: bytes) -> str:
    if ts_node is None:
        raise LookupError("Declaration has no name")
    text = source[ts_node.start_byte : ts_node.end_byte].decode("utf-8")
    return _WHITESPACE_RE.sub(" ", text).strip()
