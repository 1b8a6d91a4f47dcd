"""Claude API integration for documentation generation."""

from .claude_client import ClaudeClient
from .doc_generator import ClaudeDocGenerator, DocGenerator
from .prompt_builder import PromptBuilder

__all__ = ['ClaudeClient', 'ClaudeDocGenerator', 'DocGenerator', 'PromptBuilder']
