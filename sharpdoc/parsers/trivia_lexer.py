"""Split the text between two tokens into trivia fragments."""

import re

from ..models.syntax_tree import Trivia, TriviaKind

# Order matters: doc comments must be tried before plain comments.
_PATTERNS = [
    (TriviaKind.END_OF_LINE, r"\r\n|\r|\n"),
    (TriviaKind.WHITESPACE, r"[ \t\f\v]+"),
    (TriviaKind.SINGLE_LINE_DOC_COMMENT, r"///(?!/)[^\r\n]*"),
    (TriviaKind.SINGLE_LINE_COMMENT, r"//[^\r\n]*"),
    (TriviaKind.MULTI_LINE_DOC_COMMENT, r"/\*\*(?!/)[\s\S]*?(?:\*/|\Z)"),
    (TriviaKind.MULTI_LINE_COMMENT, r"/\*[\s\S]*?(?:\*/|\Z)"),
    (TriviaKind.DIRECTIVE, r"\#[^\r\n]*"),
    (TriviaKind.SKIPPED, r"[^\s/#]+|[\s\S]"),
]

_TRIVIA_RE = re.compile(
    "|".join(f"(?P<{kind.name}>{pattern})" for kind, pattern in _PATTERNS)
)


def lex_trivia(text: str) -> tuple[Trivia, ...]:
    """Classify ``text`` into an ordered tuple of trivia fragments.

    The concatenated fragment texts always equal ``text``.

    Args:
        text: Source text between two tokens.

    Returns:
        Tuple of Trivia in document order.

    Examples:
        >>> [t.kind.name for t in lex_trivia("\\n    /// doc\\n    ")]
        ['END_OF_LINE', 'WHITESPACE', 'SINGLE_LINE_DOC_COMMENT', 'END_OF_LINE', 'WHITESPACE']
    """
    fragments = []
    for match in _TRIVIA_RE.finditer(text):
        kind = TriviaKind[match.lastgroup]
        fragments.append(Trivia(kind=kind, text=match.group()))
    return tuple(fragments)
