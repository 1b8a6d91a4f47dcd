"""Parser for cleaning Claude API responses before insertion.

This module provides utilities to strip markdown code fences from Claude's
responses, implementing a defensive layer to handle cases where Claude might
wrap the XML documentation in markdown despite prompt instructions.
"""

import re


class ClaudeResponseParser:
    """Parse and clean Claude API responses before insertion.

    The parser is designed to:
    - Strip outer markdown fences if present
    - Preserve clean responses unchanged (no-op)
    - Preserve code examples within the documentation (``<code>`` blocks)
    """

    # Fence specifiers Claude uses for C# documentation
    LANGUAGE_SPECIFIERS = {
        'csharp': ['csharp', 'cs', 'c#', 'xml'],
    }

    @staticmethod
    def strip_markdown_fences(response: str, language: str = 'csharp') -> str:
        """Remove markdown code fence wrappers if present.

        This method strips outer markdown fences like:
        - ```csharp ... ```
        - ```xml ... ```
        - ``` ... ``` (generic fence)

        Parameters
        ----------
        response : str
            Raw response from Claude API
        language : str
            Expected language, used to match language-specific fences

        Returns
        -------
        str
            Cleaned documentation without outer markdown wrappers

        Examples
        --------
        >>> wrapped = '```xml\\n/// <summary>Adds.</summary>\\n```'
        >>> ClaudeResponseParser.strip_markdown_fences(wrapped)
        '/// <summary>Adds.</summary>'
        """
        if not response:
            return response

        language_pattern = ClaudeResponseParser._build_language_pattern(language)

        # re.DOTALL: . matches newlines
        # Non-greedy (.*?): stop at first closing fence
        pattern = rf'^\s*```(?:{language_pattern})?\s*\n(.*?)\n```\s*$'

        match = re.match(pattern, response.strip(), re.DOTALL | re.IGNORECASE)
        if match:
            return match.group(1)

        return response

    @staticmethod
    def _build_language_pattern(language: str) -> str:
        """Build regex alternation for a language's fence specifiers."""
        specifiers = ClaudeResponseParser.LANGUAGE_SPECIFIERS.get(
            language.lower(), [language.lower()]
        )
        return '|'.join(re.escape(s) for s in specifiers)
