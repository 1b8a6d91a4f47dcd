"""Tests for classifying the text between tokens into trivia."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sharpdoc.models.syntax_tree import TriviaKind
from sharpdoc.parsers.trivia_lexer import lex_trivia


def kinds(text):
    return [t.kind for t in lex_trivia(text)]


class TestTriviaLexer:
    """Test suite for lex_trivia."""

    def test_empty_text(self):
        assert lex_trivia("") == ()

    def test_whitespace_and_newlines(self):
        assert kinds("\n    ") == [TriviaKind.END_OF_LINE, TriviaKind.WHITESPACE]

    def test_crlf_is_one_fragment(self):
        trivia = lex_trivia("\r\n\t")
        assert [t.text for t in trivia] == ["\r\n", "\t"]
        assert trivia[0].kind == TriviaKind.END_OF_LINE

    def test_single_line_doc_comment(self):
        trivia = lex_trivia("/// <summary>Adds.</summary>\n")
        assert trivia[0].kind == TriviaKind.SINGLE_LINE_DOC_COMMENT
        assert trivia[0].text == "/// <summary>Adds.</summary>"
        assert trivia[0].is_doc_comment

    def test_four_slashes_is_not_documentation(self):
        trivia = lex_trivia("//// commented out\n")
        assert trivia[0].kind == TriviaKind.SINGLE_LINE_COMMENT
        assert not trivia[0].is_doc_comment

    def test_plain_comment(self):
        assert kinds("// note") == [TriviaKind.SINGLE_LINE_COMMENT]

    def test_multi_line_doc_comment(self):
        trivia = lex_trivia("/** <summary>\n * Adds.\n */")
        assert len(trivia) == 1
        assert trivia[0].kind == TriviaKind.MULTI_LINE_DOC_COMMENT

    def test_multi_line_comment(self):
        assert kinds("/* a\n b */") == [TriviaKind.MULTI_LINE_COMMENT]

    def test_empty_block_comment_is_not_documentation(self):
        assert kinds("/**/") == [TriviaKind.MULTI_LINE_COMMENT]

    def test_directive(self):
        assert kinds("#region Helpers\n") == [
            TriviaKind.DIRECTIVE,
            TriviaKind.END_OF_LINE,
        ]

    def test_unrecognized_text_is_skipped(self):
        trivia = lex_trivia("\u00a0")
        assert trivia[0].kind == TriviaKind.SKIPPED

    @pytest.mark.parametrize(
        "text",
        [
            "\n    /// <summary>\n    /// Adds.\n    /// </summary>\n    ",
            "\r\n// a\r\n/* b */\r\n#if DEBUG\r\n",
            "  /** open block without end",
            "\ufeff\n\t\t",
        ],
    )
    def test_fragments_reproduce_input(self, text):
        assert "".join(t.text for t in lex_trivia(text)) == text
