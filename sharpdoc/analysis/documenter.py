"""End-to-end documentation pipeline with dependency injection."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..claude.doc_generator import DocGenerator
from ..generation.coordinator import GenerationCoordinator
from ..models.doc_target import DocTarget, GenerationFailure
from ..parsers.base_parser import BaseParser
from ..writer.doc_rewriter import DocRewriter
from .target_collector import TargetCollector

logger = logging.getLogger(__name__)


@dataclass
class DocumentationResult:
    """Outcome of documenting one source document.

    Attributes:
        text: The rewritten source (the input itself when nothing changed).
        targets: Undocumented declarations that were found.
        generated: Names of declarations that received documentation.
        failures: Declarations whose generation failed.
    """

    text: str
    targets: list[DocTarget] = field(default_factory=list)
    generated: list[str] = field(default_factory=list)
    failures: list[GenerationFailure] = field(default_factory=list)


class Documenter:
    """Parses a document, generates missing documentation and rewrites it.

    The parsed tree is never modified; the result is rendered from a new tree
    produced by the DocRewriter once every generation request has settled.

    Attributes:
        parser: Parser producing a SourceTree with a semantic model.
        coordinator: Fan-out of generation requests.
        collector: Finder of undocumented declarations.
    """

    def __init__(
        self,
        parser: BaseParser,
        generator: DocGenerator,
        max_concurrency: int = 3,
        timeout: Optional[float] = None,
        failure_policy: str = "drop",
        collector: Optional[TargetCollector] = None,
    ) -> None:
        self.parser = parser
        self.collector = collector or TargetCollector()
        self.coordinator = GenerationCoordinator(
            generator,
            max_concurrency=max_concurrency,
            timeout=timeout,
            failure_policy=failure_policy,
        )

    def add_documentation(self, source: str) -> DocumentationResult:
        """Return ``source`` with documentation added to undocumented declarations.

        Args:
            source: Complete C# document.

        Returns:
            DocumentationResult with the rewritten text.

        Raises:
            SyntaxError: If the source cannot be parsed.
            RuntimeError: If generated documentation cannot be matched back
                to a declaration.
        """
        tree = self.parser.parse(source)
        targets = self.collector.collect(tree)

        if not targets:
            logger.info("No missing documentation found.")
            return DocumentationResult(text=source)

        logger.info(
            f"Found {len(targets)} undocumented items. Generating docs..."
        )
        report = self.coordinator.run(tree, targets)

        result = DocumentationResult(
            text=source,
            targets=targets,
            generated=report.generated,
            failures=report.failures,
        )
        if not report.rewrite_map:
            return result

        rewritten = DocRewriter(report.rewrite_map).rewrite(tree)
        result.text = rewritten.to_full_string()
        return result
