"""CodeItem data model for representing C# declarations."""

from dataclasses import dataclass, asdict


@dataclass
class CodeItem:
    """Represents a type or method declaration found in a source file.

    Attributes:
        name: Fully-qualified display name, or 'Unknown'.
        type: Kind of declaration ('type', 'method').
        filepath: Absolute or relative path to the source file.
        line_number: Line number where the declaration starts.
        offset: Byte offset of the declaration's first token.
        has_docs: Whether a documentation comment precedes the declaration.
    """

    name: str
    type: str
    filepath: str
    line_number: int
    offset: int
    has_docs: bool

    def to_dict(self) -> dict:
        """Serialize CodeItem to a JSON-compatible dictionary.

        Returns:
            Dictionary representation of the CodeItem with all fields.
        """
        return asdict(self)

    def __repr__(self) -> str:
        """Human-readable representation for debugging."""
        docs_indicator = "📝" if self.has_docs else "❌"
        return (
            f"CodeItem({docs_indicator} {self.type} '{self.name}' "
            f"@ {self.filepath}:{self.line_number})"
        )
