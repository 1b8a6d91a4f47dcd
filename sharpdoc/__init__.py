"""sharpdoc package.

This package adds missing XML documentation comments to C# source code:
- Full-fidelity parsing of C# with tree-sitter
- Discovery of undocumented types and methods
- Bounded, concurrent documentation generation with Claude
- Bottom-up rewriting that preserves every other character of the input
"""

__version__ = "0.1.0"
