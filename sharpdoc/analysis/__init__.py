"""Analysis module for finding and documenting undocumented declarations."""

from .analyzer import DocumentationAnalyzer
from .coverage_calculator import CoverageCalculator
from .documenter import Documenter, DocumentationResult
from .target_collector import TargetCollector

__all__ = [
    'DocumentationAnalyzer',
    'CoverageCalculator',
    'Documenter',
    'DocumentationResult',
    'TargetCollector',
]
