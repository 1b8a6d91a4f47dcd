"""Data models shared across sharpdoc.

This module defines the core data structures used throughout sharpdoc:
- SourceTree, Node, Token, Trivia: Immutable full-fidelity syntax tree
- DocTarget: An undocumented declaration identified by its original offset
- RewriteMap: Frozen offset -> generated documentation mapping
- CodeItem: A declaration reported by coverage analysis
- AnalysisResult: Aggregated analysis results with coverage metrics
"""

from .analysis_result import AnalysisResult, ParseFailure
from .code_item import CodeItem
from .doc_target import (
    DocTarget,
    GeneratedDoc,
    GenerationFailure,
    GenerationReport,
    RewriteMap,
    RewriteMapBuilder,
)
from .syntax_tree import Node, NodeKind, SourceTree, Token, Trivia, TriviaKind

__all__ = [
    "AnalysisResult",
    "CodeItem",
    "DocTarget",
    "GeneratedDoc",
    "GenerationFailure",
    "GenerationReport",
    "Node",
    "NodeKind",
    "ParseFailure",
    "RewriteMap",
    "RewriteMapBuilder",
    "SourceTree",
    "Token",
    "Trivia",
    "TriviaKind",
]
