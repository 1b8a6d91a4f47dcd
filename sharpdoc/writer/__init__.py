"""Module for writing documentation into C# source.

This module provides the syntax-tree rewriter that inserts generated
documentation comments and the atomic writer for the resulting file.
"""

from .doc_rewriter import DocRewriter
from .output_writer import OutputWriter

__all__ = ["DocRewriter", "OutputWriter"]
