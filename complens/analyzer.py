"""
Component analysis pipeline: load -> parse -> extract + score -> result.

``ComponentAnalyzer.analyze`` never raises. Every fault is caught at the
smallest boundary that can contain it (loader, parser, per-node extractor)
and surfaces as an entry in ``AnalysisResult.errors`` or ``warnings``.
"""

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

from .complexity import score_complexity
from .config import AnalysisConfig
from .models import AnalysisResult, ComplexityMetrics, ErrorKind
from .source_loader import load_source
from .structure_extractor import StructureExtractor
from .tree_parser import TreeParser

BatchItem = str | Path | tuple[Any, ...]


class ComponentAnalyzer:
    """
    Extracts a ComponentStructure and ComplexityMetrics per source file.

    The config is immutable and the logger is injected, so one analyzer can
    serve concurrent batch workers.
    """

    def __init__(
        self,
        config: AnalysisConfig | None = None,
        logger: logging.Logger | None = None,
    ):
        self.config = config or AnalysisConfig()
        self.logger = logger or logging.getLogger("complens.analyzer")
        self._parser = TreeParser(self.logger)
        self._extractor = StructureExtractor(self.config, self.logger)

    def analyze(self, file_path: str | Path, hint: Any = None) -> AnalysisResult:
        """Analyze one component file.

        Args:
            file_path: Source file to analyze.
            hint: Opaque value from file discovery; accepted for callers
                that pass one along, not used by the analysis itself.
        """
        self.logger.debug(f"Analyzing component: {file_path}")
        try:
            loaded = load_source(file_path, self.config.max_file_size_bytes, self.logger)
        except Exception as e:
            self.logger.error(f"Could not load {file_path}: {e}")
            return AnalysisResult.failure([ErrorKind.FILE_UNREADABLE.message(str(e))])
        if not loaded.ok:
            warnings = [loaded.warning] if loaded.warning else []
            return AnalysisResult.failure([loaded.error], warnings)
        return self.analyze_source(loaded.text, file_path)

    def analyze_source(self, text: str, file_path: str | Path) -> AnalysisResult:
        """Analyze in-memory source; ``file_path`` selects the dialect."""
        try:
            return self._analyze_text(text, Path(file_path))
        except Exception as e:
            self.logger.error(f"Unexpected error analyzing {file_path}: {e}")
            return AnalysisResult.failure([f"Unexpected error: {e}"])

    def _analyze_text(self, text: str, path: Path) -> AnalysisResult:
        outcome = self._parser.parse(text, path)
        if not outcome.ok:
            return AnalysisResult.failure(
                [ErrorKind.PARSE_FAILURE.message(d) for d in outcome.diagnostics]
            )

        root = outcome.tree.root_node
        structure, faults = self._extractor.extract(root, path)
        metrics = (
            score_complexity(root)
            if self.config.compute_complexity
            else ComplexityMetrics.empty()
        )

        self.logger.debug(f"Successfully analyzed component: {path}")
        return AnalysisResult(
            success=True,
            structure=structure,
            metrics=metrics,
            warnings=faults,
        )

    def analyze_batch(
        self, items: Iterable[BatchItem], max_workers: int | None = None
    ) -> dict[str, AnalysisResult]:
        """Analyze many files; one failure never affects the others.

        Args:
            items: Paths, ``(path,)`` or ``(path, hint)`` tuples. A malformed
                item yields a failed result under its own key.
            max_workers: Analyze on a thread pool of this size. Sequential
                when None or 1.

        Returns:
            Results keyed by path string, in input order.
        """
        items = list(items)
        self.logger.info(f"Analyzing {len(items)} components...")

        if max_workers and max_workers > 1 and len(items) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                futures = [executor.submit(self._analyze_item, item) for item in items]
                # _analyze_item() never raises, so result() is safe
                outcomes = [future.result() for future in futures]
        else:
            outcomes = [self._analyze_item(item) for item in items]

        results: dict[str, AnalysisResult] = {}
        for item, result in zip(items, outcomes):
            results[_item_key(item)] = result

        success_count = sum(1 for r in results.values() if r.success)
        self.logger.info(f"Analyzed {success_count}/{len(items)} components successfully")
        return results

    def _analyze_item(self, item: BatchItem) -> AnalysisResult:
        try:
            path, hint = _as_pair(item)
        except ValueError as e:
            self.logger.error(f"Invalid batch item {item!r}: {e}")
            return AnalysisResult.failure([ErrorKind.INVALID_ITEM.message(str(e))])
        return self.analyze(path, hint)


def _as_pair(item: BatchItem) -> tuple[str | Path, Any]:
    if not isinstance(item, tuple):
        return item, None
    if len(item) == 1:
        return item[0], None
    if len(item) == 2:
        return item[0], item[1]
    raise ValueError(f"expected a path or (path, hint) tuple, got {len(item)} items")


def _item_key(item: BatchItem) -> str:
    if isinstance(item, tuple) and item:
        return str(item[0])
    return str(item)
