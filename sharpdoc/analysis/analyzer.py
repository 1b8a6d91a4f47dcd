"""Documentation coverage analyzer for C# files."""

import os
import sys
from pathlib import Path
from typing import List, Optional, Set

from ..models.analysis_result import AnalysisResult, ParseFailure
from ..models.code_item import CodeItem
from ..models.syntax_tree import NodeKind
from ..parsers.base_parser import BaseParser
from .coverage_calculator import CoverageCalculator
from .target_collector import TargetCollector

ITEM_TYPES = {
    NodeKind.TYPE_DECLARATION: "type",
    NodeKind.METHOD_DECLARATION: "method",
}


class DocumentationAnalyzer:
    """Orchestrates file discovery, parsing and coverage analysis.

    Attributes:
        parser: Parser for C# source files.
        collector: TargetCollector used to enumerate declarations.
        calculator: CoverageCalculator for computing metrics.
    """

    # Default directory names to exclude during discovery
    DEFAULT_EXCLUDES = {
        "bin",
        "obj",
        ".git",
        ".vs",
        ".idea",
        "packages",
        "node_modules",
        "TestResults",
    }

    EXTENSIONS = {".cs"}

    def __init__(
        self,
        parser: BaseParser,
        collector: Optional[TargetCollector] = None,
        calculator: Optional[CoverageCalculator] = None,
        exclude_patterns: Optional[Set[str]] = None,
    ) -> None:
        """Initialize the analyzer with injected dependencies.

        Args:
            parser: Parser used for every discovered file.
            collector: Optional TargetCollector (creates default if None).
            calculator: Optional CoverageCalculator (creates default if None).
            exclude_patterns: Optional set of directory names to exclude.
                            Merged with DEFAULT_EXCLUDES.
        """
        self.parser = parser
        self.collector = collector or TargetCollector()
        self.calculator = calculator or CoverageCalculator()

        self.exclude_patterns = self.DEFAULT_EXCLUDES.copy()
        if exclude_patterns:
            self.exclude_patterns.update(exclude_patterns)

    def analyze(
        self, path: str, verbose: bool = False, strict: bool = False
    ) -> AnalysisResult:
        """Analyze documentation coverage for a file or directory.

        Args:
            path: Path to a .cs file or a directory to search.
            verbose: If True, print progress information to stderr.
            strict: If True, fail immediately on first parse error instead of
                   collecting failures and continuing.

        Returns:
            AnalysisResult containing all declarations and metrics.

        Raises:
            FileNotFoundError: If the specified path does not exist.
            SyntaxError: If strict=True and a file has syntax errors.
        """
        try:
            path_obj = Path(path).resolve(strict=True)
        except (FileNotFoundError, RuntimeError) as e:
            raise FileNotFoundError(f"Path does not exist or is invalid: {path}") from e

        files = self._discover_files(path_obj)

        if verbose:
            print(f"Discovered {len(files)} files to analyze", file=sys.stderr)

        all_items: List[CodeItem] = []
        parse_failures: List[ParseFailure] = []
        for filepath in files:
            items, failure = self._parse_file(filepath, strict=strict)
            all_items.extend(items)
            if failure:
                parse_failures.append(failure)

        return AnalysisResult(
            items=all_items,
            coverage_percent=self.calculator.calculate_coverage(all_items),
            total_items=len(all_items),
            documented_items=self.calculator.count_documented(all_items),
            parse_failures=parse_failures,
        )

    def _discover_files(self, path: Path) -> List[Path]:
        """Discover all C# files under ``path``.

        Args:
            path: Path object to search (file or directory).

        Returns:
            Sorted list of Path objects for files that can be parsed.
        """
        if path.is_file():
            return [path] if path.suffix in self.EXTENSIONS else []

        files: List[Path] = []
        for root, dirs, filenames in os.walk(path):
            dirs[:] = [d for d in dirs if d not in self.exclude_patterns]
            for filename in filenames:
                filepath = Path(root) / filename
                if filepath.suffix in self.EXTENSIONS:
                    files.append(filepath)

        return sorted(files)  # Sort for deterministic ordering

    def _parse_file(
        self, filepath: Path, strict: bool = False
    ) -> tuple[List[CodeItem], Optional[ParseFailure]]:
        """Parse a single file and list its declarations.

        Returns:
            Tuple of (items, failure) where failure is a ParseFailure if the
            file could not be parsed, None otherwise.

        Raises:
            SyntaxError: If strict=True and file has syntax errors.
        """
        try:
            tree = self.parser.parse_file(str(filepath))
        except (SyntaxError, ValueError, UnicodeDecodeError, OSError) as e:
            if strict:
                raise
            error_msg = str(e).split("\n")[0] or "Unknown parse error"
            print(f"Warning: Failed to parse {filepath}: {error_msg}", file=sys.stderr)
            return [], ParseFailure(filepath=str(filepath), error=error_msg)

        items = []
        for node, documented in self.collector.declarations(tree):
            name = "Unknown"
            if tree.semantic_model is not None:
                try:
                    name = tree.semantic_model.declared_symbol_name(node)
                except LookupError:
                    pass
            items.append(
                CodeItem(
                    name=name,
                    type=ITEM_TYPES[node.kind],
                    filepath=str(filepath),
                    line_number=tree.line_of(node.start),
                    offset=node.start,
                    has_docs=documented,
                )
            )
        return items, None
