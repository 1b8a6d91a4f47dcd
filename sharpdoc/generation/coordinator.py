"""Concurrent documentation generation for collected targets.

One generation request is dispatched per target on a bounded thread pool.
Workers only read the immutable source tree and write their result into a
lock-guarded ``RewriteMapBuilder``. The coordinator waits for every request to
settle before freezing the map, so the rewriter never sees a partial result
unless the optional overall timeout expires.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Optional

from ..claude.doc_generator import DocGenerator
from ..models.doc_target import (
    DocTarget,
    GeneratedDoc,
    GenerationFailure,
    GenerationReport,
    RewriteMap,
    RewriteMapBuilder,
)
from ..models.syntax_tree import SourceTree

logger = logging.getLogger(__name__)

UNKNOWN_SYMBOL = "Unknown"

# drop: failed targets get no documentation.
# fallback: failed targets get a block naming the error.
FAILURE_POLICIES = ("drop", "fallback")


def fallback_documentation(error: str) -> str:
    """Documentation block inserted for a failed target under 'fallback'."""
    return "\n".join(
        [
            "<summary>",
            f"Documentation generation failed: {error}",
            "</summary>",
        ]
    )


def _first_line(error: BaseException) -> str:
    return str(error).split("\n")[0] or type(error).__name__


class GenerationCoordinator:
    """Fans out generation requests with bounded parallelism.

    Attributes:
        generator: Service that writes documentation for one declaration.
        max_concurrency: Maximum number of requests in flight at once.
        timeout: Overall time limit in seconds, or None to wait indefinitely.
        failure_policy: 'drop' or 'fallback'.
    """

    def __init__(
        self,
        generator: DocGenerator,
        max_concurrency: int = 3,
        timeout: Optional[float] = None,
        failure_policy: str = "drop",
    ) -> None:
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")
        if failure_policy not in FAILURE_POLICIES:
            raise ValueError(
                f"Unsupported failure policy: {failure_policy}. "
                f"Supported: {', '.join(FAILURE_POLICIES)}"
            )
        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")

        self.generator = generator
        self.max_concurrency = max_concurrency
        self.timeout = timeout
        self.failure_policy = failure_policy

    def resolve_name(self, tree: SourceTree, target: DocTarget) -> str:
        """Return the target's declared symbol name, or 'Unknown'."""
        if tree.semantic_model is None:
            return UNKNOWN_SYMBOL
        try:
            return tree.semantic_model.declared_symbol_name(target.offset)
        except LookupError as e:
            logger.debug(f"Symbol resolution failed at offset {target.offset}: {e}")
            return UNKNOWN_SYMBOL

    def run(self, tree: SourceTree, targets: list[DocTarget]) -> GenerationReport:
        """Generate documentation for every target.

        Args:
            tree: The original source tree the targets were collected from.
            targets: Targets to document, each with a unique offset.

        Returns:
            GenerationReport with the frozen RewriteMap. Failed targets are
            listed in ``failures`` and never abort the run.
        """
        builder = RewriteMapBuilder()
        report = GenerationReport(rewrite_map=RewriteMap())
        if not targets:
            report.rewrite_map = builder.freeze()
            return report

        names = {target.offset: self.resolve_name(tree, target) for target in targets}
        settled: set[int] = set()

        executor = ThreadPoolExecutor(
            max_workers=self.max_concurrency, thread_name_prefix="sharpdoc"
        )
        try:
            future_to_target: dict[Future, DocTarget] = {
                executor.submit(
                    self._generate_one, builder, target, names[target.offset]
                ): target
                for target in targets
            }

            try:
                for future in as_completed(future_to_target, timeout=self.timeout):
                    target = future_to_target[future]
                    self._settle(future, target, names[target.offset], builder, report)
                    settled.add(target.offset)
            except FuturesTimeoutError:
                report.rewrite_map = self._expire(
                    future_to_target, names, settled, builder, report
                )
                return report
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        report.rewrite_map = builder.freeze()
        return report

    def _generate_one(
        self, builder: RewriteMapBuilder, target: DocTarget, name: str
    ) -> None:
        snippet = target.node.to_string()
        text = self.generator.generate(name, snippet)
        if not text or not text.strip():
            raise ValueError("Generator returned empty documentation")
        builder.add(GeneratedDoc(offset=target.offset, text=text))

    def _settle(
        self,
        future: Future,
        target: DocTarget,
        name: str,
        builder: RewriteMapBuilder,
        report: GenerationReport,
    ) -> None:
        error = future.exception()
        if error is None:
            report.generated.append(name)
            logger.info(f"✓ Generated docs for: {name}")
            return

        self._record_failure(target, name, _first_line(error), report)
        if self.failure_policy == "fallback":
            builder.add(
                GeneratedDoc(
                    offset=target.offset,
                    text=fallback_documentation(_first_line(error)),
                )
            )

    def _expire(
        self,
        future_to_target: dict[Future, DocTarget],
        names: dict[int, str],
        settled: set[int],
        builder: RewriteMapBuilder,
        report: GenerationReport,
    ) -> RewriteMap:
        """Close the round after the overall timeout.

        The builder is frozen first so no worker can still publish a result;
        whatever reached the map counts as generated, everything else failed.
        """
        logger.warning(
            f"Documentation generation timed out after {self.timeout} seconds"
        )
        frozen = builder.freeze()
        fallbacks: dict[int, GeneratedDoc] = {}
        message = f"Generation did not finish within {self.timeout} seconds"

        for future, target in future_to_target.items():
            if target.offset in settled:
                continue
            name = names[target.offset]
            if target.offset in frozen:
                report.generated.append(name)
                logger.info(f"✓ Generated docs for: {name}")
                continue
            error = message
            if future.done() and not future.cancelled() and future.exception():
                error = _first_line(future.exception())
            self._record_failure(target, name, error, report)
            if self.failure_policy == "fallback":
                fallbacks[target.offset] = GeneratedDoc(
                    offset=target.offset, text=fallback_documentation(error)
                )

        if not fallbacks:
            return frozen
        return RewriteMap({**dict(frozen), **fallbacks})

    @staticmethod
    def _record_failure(
        target: DocTarget, name: str, error: str, report: GenerationReport
    ) -> None:
        report.failures.append(
            GenerationFailure(name=name, offset=target.offset, error=error)
        )
        logger.warning(f"✗ Error generating docs for {name}: {error}")
