"""Concurrent documentation generation."""

from .coordinator import GenerationCoordinator, fallback_documentation

__all__ = ["GenerationCoordinator", "fallback_documentation"]
