"""Data models shared by the collector, the coordinator and the rewriter."""

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Iterator, Optional

from .syntax_tree import Node, NodeKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocTarget:
    """A declaration that lacks documentation.

    Equality and hashing use ``offset`` only, the start of the declaration in
    the original document. ``node`` is kept for read-only rendering and is
    never used to find the declaration again after the tree is rewritten.

    Attributes:
        offset: Byte offset of the declaration's first token.
        kind: Node kind of the declaration.
        node: The original node.
    """

    offset: int
    kind: NodeKind
    node: Node = field(compare=False, repr=False)

    @classmethod
    def from_node(cls, node: Node) -> "DocTarget":
        return cls(offset=node.start, kind=node.kind, node=node)


@dataclass(frozen=True)
class GeneratedDoc:
    """Documentation text produced for one target.

    Attributes:
        offset: Identity of the target the text belongs to.
        text: Unindented, newline-separated documentation.
    """

    offset: int
    text: str


@dataclass
class GenerationFailure:
    """A target whose documentation could not be generated.

    Attributes:
        name: Resolved symbol name (or ``Unknown``).
        offset: Identity of the failed target.
        error: First line of the error message.
    """

    name: str
    offset: int
    error: str

    def to_dict(self) -> dict:
        return {"name": self.name, "offset": self.offset, "error": self.error}


class RewriteMap(Mapping):
    """Read-only mapping from target offset to ``GeneratedDoc``."""

    def __init__(self, docs: Optional[dict[int, GeneratedDoc]] = None):
        self._docs = dict(docs or {})

    def __getitem__(self, offset: int) -> GeneratedDoc:
        return self._docs[offset]

    def __iter__(self) -> Iterator[int]:
        return iter(self._docs)

    def __len__(self) -> int:
        return len(self._docs)

    def __repr__(self) -> str:
        return f"RewriteMap({sorted(self._docs)})"


class RewriteMapBuilder:
    """Thread-safe accumulator for generated documentation.

    Producers call ``add`` from worker threads. ``freeze`` snapshots the
    content into a ``RewriteMap``; anything added afterwards is discarded.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._docs: dict[int, GeneratedDoc] = {}
        self._frozen = False

    def add(self, doc: GeneratedDoc) -> bool:
        """Store ``doc`` unless its offset is already present.

        Returns:
            True if the document was stored, False if it was a duplicate or
            the builder is frozen.
        """
        with self._lock:
            if self._frozen:
                logger.debug(f"Discarding late result for offset {doc.offset}")
                return False
            if doc.offset in self._docs:
                logger.warning(f"Duplicate documentation for offset {doc.offset}")
                return False
            self._docs[doc.offset] = doc
            return True

    def __contains__(self, offset: int) -> bool:
        with self._lock:
            return offset in self._docs

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> RewriteMap:
        with self._lock:
            self._frozen = True
            return RewriteMap(self._docs)


@dataclass
class GenerationReport:
    """Outcome of a generation round.

    Attributes:
        rewrite_map: Frozen documentation keyed by target offset.
        generated: Names of targets that received documentation.
        failures: Targets whose generation failed.
    """

    rewrite_map: RewriteMap
    generated: list[str] = field(default_factory=list)
    failures: list[GenerationFailure] = field(default_factory=list)
