"""Parser modules for building full-fidelity C# syntax trees."""

from .base_parser import BaseParser
from .csharp_parser import CSharpParser
from .semantic_model import SemanticModel

__all__ = ['BaseParser', 'CSharpParser', 'SemanticModel']
