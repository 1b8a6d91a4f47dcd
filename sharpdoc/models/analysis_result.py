"""AnalysisResult data model for aggregated coverage results."""

from dataclasses import dataclass, field, asdict
from typing import List

from .code_item import CodeItem


@dataclass
class ParseFailure:
    """Represents a file that failed to parse.

    Attributes:
        filepath: Absolute path to the file that failed to parse.
        error: First line of the error message from the exception.
    """

    filepath: str
    error: str

    def to_dict(self) -> dict[str, str]:
        """Serialize ParseFailure to a JSON-compatible dictionary."""
        return asdict(self)


@dataclass
class AnalysisResult:
    """Aggregated documentation coverage of a set of C# files.

    Attributes:
        items: Every type and method declaration found.
        coverage_percent: Overall documentation coverage percentage (0-100).
        total_items: Total number of declarations analyzed.
        documented_items: Number of declarations with documentation.
        parse_failures: List of files that failed to parse.
    """

    items: List[CodeItem]
    coverage_percent: float
    total_items: int
    documented_items: int
    parse_failures: List[ParseFailure] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize AnalysisResult to a JSON-compatible dictionary.

        Returns:
            Dictionary representation with all items and metrics.
        """
        return {
            "coverage_percent": self.coverage_percent,
            "total_items": self.total_items,
            "documented_items": self.documented_items,
            "items": [item.to_dict() for item in self.items],
            "parse_failures": [failure.to_dict() for failure in self.parse_failures],
        }

    def get_undocumented_items(self) -> List[CodeItem]:
        """Get all items without documentation.

        Returns:
            List of CodeItem objects where has_docs is False.
        """
        return [item for item in self.items if not item.has_docs]

    def __repr__(self) -> str:
        """Human-readable representation for debugging."""
        return (
            f"AnalysisResult(total={self.total_items}, "
            f"documented={self.documented_items}, "
            f"coverage={self.coverage_percent:.1f}%)"
        )
