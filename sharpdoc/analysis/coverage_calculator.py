"""Coverage calculator for computing documentation metrics."""

from ..models.code_item import CodeItem


class CoverageCalculator:
    """Calculates documentation coverage metrics from declarations."""

    def calculate_coverage(self, items: list[CodeItem]) -> float:
        """Calculate overall documentation coverage percentage.

        Args:
            items: List of CodeItem objects to analyze.

        Returns:
            Coverage percentage (0-100), or 0.0 if no items.
        """
        if not items:
            return 0.0

        documented = sum(1 for item in items if item.has_docs)
        return (documented / len(items)) * 100.0

    def count_documented(self, items: list[CodeItem]) -> int:
        """Count the number of documented items.

        Args:
            items: List of CodeItem objects to count.

        Returns:
            Number of items with has_docs=True.
        """
        return sum(1 for item in items if item.has_docs)
