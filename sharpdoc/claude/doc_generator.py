"""Documentation generators used by the generation coordinator."""

from abc import ABC, abstractmethod
from typing import Optional

from .claude_client import ClaudeClient
from .prompt_builder import PromptBuilder
from .response_parser import ClaudeResponseParser


class DocGenerator(ABC):
    """
    Interface for services that write documentation for one declaration.

    Implementations may be called from several worker threads at once and
    may raise any exception on failure.
    """

    @abstractmethod
    def generate(self, context_name: str, code_snippet: str) -> str:
        """
        Return documentation text for a declaration.

        Parameters
        ----------
        context_name : str
            Fully-qualified symbol name, or 'Unknown'
        code_snippet : str
            Source text of the declaration

        Returns
        -------
        str
            Documentation comment text
        """
        pass


class ClaudeDocGenerator(DocGenerator):
    """
    Generates XML documentation comments with Claude.

    Parameters
    ----------
    client : ClaudeClient
        Configured API client
    prompt_builder : PromptBuilder, optional
        Prompt builder; a concise-tone builder is created if omitted
    max_tokens : int, optional
        Token limit per response. Defaults to 1024.
    """

    def __init__(
        self,
        client: ClaudeClient,
        prompt_builder: Optional[PromptBuilder] = None,
        max_tokens: int = 1024,
    ):
        self.client = client
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.max_tokens = max_tokens

    def generate(self, context_name: str, code_snippet: str) -> str:
        prompt = self.prompt_builder.build_prompt(code_snippet, context_name)
        response = self.client.complete(
            prompt,
            max_tokens=self.max_tokens,
            system=self.prompt_builder.system_prompt,
        )
        return ClaudeResponseParser.strip_markdown_fences(response.strip(), "csharp")
