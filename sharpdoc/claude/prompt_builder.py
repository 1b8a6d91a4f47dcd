"""
Prompt builder for C# XML documentation generation.

This module constructs the system and user prompts sent to Claude for each
undocumented declaration.
"""


class PromptBuilder:
    """
    Builder for creating documentation generation prompts.

    Parameters
    ----------
    tone : str, optional
        Writing tone. Supported: 'concise', 'detailed', 'friendly'.
        Defaults to 'concise'.
    """

    SYSTEM_PROMPT = (
        "You are a C# documentation expert. Output ONLY the XML documentation "
        "comments (/// <summary>...). Do not output Markdown blocks. Do not "
        "output the function code again. Include <param> tags for all "
        "parameters and <returns> tags for methods that return values."
    )

    EXAMPLE = """/// <summary>
/// Calculates the sum of two numbers.
/// </summary>
/// <param name="a">The first number.</param>
/// <param name="b">The second number.</param>
/// <returns>The sum of <paramref name="a"/> and <paramref name="b"/>.</returns>"""

    TONE_DESCRIPTIONS = {
        "concise": ("Be brief and to the point. Focus on essential information only."),
        "detailed": ("Provide comprehensive explanations with examples where helpful."),
        "friendly": (
            "Write in a conversational, approachable style while remaining "
            "professional."
        ),
    }

    def __init__(self, tone: str = "concise"):
        if tone not in self.TONE_DESCRIPTIONS:
            raise ValueError(
                f"Unsupported tone: {tone}. "
                f"Supported: {', '.join(self.TONE_DESCRIPTIONS.keys())}"
            )
        self.tone = tone

    @property
    def system_prompt(self) -> str:
        return self.SYSTEM_PROMPT

    def build_prompt(self, code: str, symbol_name: str) -> str:
        """
        Build the user prompt for one declaration.

        Parameters
        ----------
        code : str
            Source text of the declaration to document.
        symbol_name : str
            Fully-qualified name of the declaration, or 'Unknown'.

        Returns
        -------
        str
            The complete prompt to send to Claude.
        """
        tone_desc = self.TONE_DESCRIPTIONS[self.tone]

        prompt_parts = [
            f"Generate XML summary and param tags for this symbol: {symbol_name}",
            "",
            f"Tone: {self.tone.capitalize()} - {tone_desc}",
            "",
            "Example format:",
            self.EXAMPLE,
            "",
            "Code:",
            code.strip(),
            "",
            "Requirements:",
            (
                f"1. Return ONLY the documentation for '{symbol_name}' - "
                f"nothing else"
            ),
            "2. Do not include the code itself, only the documentation",
            "3. Start every line with ///",
            (
                "4. IMPORTANT: Do NOT wrap your response in markdown code "
                "fences (```csharp, ```xml, etc.)"
            ),
        ]
        return "\n".join(prompt_parts)
