"""Tests for splicing generated documentation into the syntax tree."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sharpdoc.analysis.target_collector import TargetCollector
from sharpdoc.models.doc_target import GeneratedDoc, RewriteMap
from sharpdoc.parsers.csharp_parser import CSharpParser
from sharpdoc.writer.doc_rewriter import DocRewriter, doc_comment_lines

STUB = "<summary>stub</summary>"


@pytest.fixture
def parser():
    return CSharpParser()


def document_all(parser, source, text=STUB):
    """Parse ``source`` and document every undocumented declaration with ``text``."""
    tree = parser.parse(source)
    targets = TargetCollector().collect(tree)
    docs = RewriteMap({t.offset: GeneratedDoc(t.offset, text) for t in targets})
    return tree, DocRewriter(docs).rewrite(tree)


class TestDocCommentLines:
    """Test normalization of generated text."""

    def test_prefix_added(self):
        assert doc_comment_lines("<summary>Adds.</summary>") == [
            "/// <summary>Adds.</summary>"
        ]

    def test_existing_prefix_kept(self):
        assert doc_comment_lines("  /// <summary>Adds.</summary>") == [
            "/// <summary>Adds.</summary>"
        ]

    def test_extra_slashes_reduced_to_doc_prefix(self):
        assert doc_comment_lines("//// <summary>\n///////Adds.\n/// </summary>") == [
            "/// <summary>",
            "///Adds.",
            "/// </summary>",
        ]

    def test_blank_lines_dropped_and_lines_stripped(self):
        text = "  <summary>\n\n     Adds two numbers.\n  </summary>\n\n"
        assert doc_comment_lines(text) == [
            "/// <summary>",
            "/// Adds two numbers.",
            "/// </summary>",
        ]

    def test_block_comment_converted(self):
        text = "/**\n * <summary>Adds.</summary>\n */"
        assert doc_comment_lines(text) == ["/// <summary>Adds.</summary>"]

    def test_whitespace_only_text(self):
        assert doc_comment_lines("\n   \n") == []


class TestDocRewriter:
    """Test suite for DocRewriter."""

    def test_basic_scenario(self, parser):
        _, rewritten = document_all(parser, "class Foo {\n    void Bar() {}\n}")

        assert rewritten.to_full_string() == (
            "/// <summary>stub</summary>\n"
            "class Foo {\n"
            "    /// <summary>stub</summary>\n"
            "    void Bar() {}\n"
            "}"
        )

    def test_indentation_follows_declaration(self, parser):
        source = (
            "namespace App\n"
            "{\n"
            "    public class Calc\n"
            "    {\n"
            "        public int Add(int a, int b) => a + b;\n"
            "    }\n"
            "}\n"
        )
        _, rewritten = document_all(parser, source)

        assert rewritten.to_full_string() == (
            "namespace App\n"
            "{\n"
            "    /// <summary>stub</summary>\n"
            "    public class Calc\n"
            "    {\n"
            "        /// <summary>stub</summary>\n"
            "        public int Add(int a, int b) => a + b;\n"
            "    }\n"
            "}\n"
        )

    def test_tab_indentation(self, parser):
        source = "class Foo\n{\n\tvoid Bar() { }\n}\n"
        _, rewritten = document_all(parser, source)

        assert "\n\t/// <summary>stub</summary>\n\tvoid Bar() { }" in (
            rewritten.to_full_string()
        )

    def test_multiline_documentation(self, parser):
        text = "<summary>\nAdds.\n</summary>\n\n<returns>Sum.</returns>"
        _, rewritten = document_all(parser, "class Foo\n{\n    int Add() => 1;\n}\n", text)

        assert rewritten.to_full_string() == (
            "/// <summary>\n"
            "/// Adds.\n"
            "/// </summary>\n"
            "/// <returns>Sum.</returns>\n"
            "class Foo\n"
            "{\n"
            "    /// <summary>\n"
            "    /// Adds.\n"
            "    /// </summary>\n"
            "    /// <returns>Sum.</returns>\n"
            "    int Add() => 1;\n"
            "}\n"
        )

    def test_existing_trivia_kept_first(self, parser):
        source = "#region Models\n// Keep me.\nclass Foo { }\n#endregion\n"
        _, rewritten = document_all(parser, source)

        assert rewritten.to_full_string() == (
            "#region Models\n"
            "// Keep me.\n"
            "/// <summary>stub</summary>\n"
            "class Foo { }\n"
            "#endregion\n"
        )

    def test_declaration_sharing_a_line(self, parser):
        _, rewritten = document_all(parser, "class A { } class B { }")

        assert rewritten.to_full_string() == (
            "/// <summary>stub</summary>\n"
            "class A { }\n"
            "    /// <summary>stub</summary>\n"
            "    class B { }"
        )

    def test_single_line_nesting(self, parser):
        tree, rewritten = document_all(parser, "class Foo { void Bar() {} }")

        assert rewritten.to_full_string() == (
            "/// <summary>stub</summary>\n"
            "class Foo {\n"
            "    /// <summary>stub</summary>\n"
            "    void Bar() {} }"
        )
        assert tree.to_full_string() == "class Foo { void Bar() {} }"

    def test_byte_order_mark_counts_as_line_start(self, parser):
        _, rewritten = document_all(parser, "\ufeffclass B { }\n")

        assert rewritten.to_full_string() == (
            "\ufeff/// <summary>stub</summary>\nclass B { }\n"
        )

    def test_crlf_preserved(self, parser):
        source = "class Foo\r\n{\r\n    void Bar() { }\r\n}\r\n"
        _, rewritten = document_all(parser, source)

        assert rewritten.to_full_string() == (
            "/// <summary>stub</summary>\r\n"
            "class Foo\r\n"
            "{\r\n"
            "    /// <summary>stub</summary>\r\n"
            "    void Bar() { }\r\n"
            "}\r\n"
        )

    def test_original_tree_unchanged(self, parser):
        source = "class Foo {\n    void Bar() {}\n}"
        tree, rewritten = document_all(parser, source)

        assert tree.to_full_string() == source
        assert rewritten is not tree

    def test_only_mapped_declarations_change(self, parser):
        source = "class Foo\n{\n    void A() { }\n    void B() { }\n}\n"
        tree = parser.parse(source)
        offset = source.index("void B")
        docs = RewriteMap({offset: GeneratedDoc(offset, STUB)})

        rewritten = DocRewriter(docs).rewrite(tree)
        assert rewritten.to_full_string() == (
            "class Foo\n{\n    void A() { }\n"
            "    /// <summary>stub</summary>\n"
            "    void B() { }\n}\n"
        )

    def test_empty_map_is_identity(self, parser):
        source = "class Foo { }\n"
        tree = parser.parse(source)
        assert DocRewriter(RewriteMap()).rewrite(tree).to_full_string() == source

    def test_unknown_offset_raises(self, parser):
        tree = parser.parse("class Foo { }\n")
        docs = RewriteMap({9999: GeneratedDoc(9999, STUB)})

        with pytest.raises(RuntimeError, match="9999"):
            DocRewriter(docs).rewrite(tree)

    def test_offset_of_non_declaration_raises(self, parser):
        source = "class Foo { int x; }\n"
        tree = parser.parse(source)
        offset = source.index("int")
        docs = RewriteMap({offset: GeneratedDoc(offset, STUB)})

        with pytest.raises(RuntimeError):
            DocRewriter(docs).rewrite(tree)

    def test_whitespace_only_documentation_is_skipped(self, parser):
        source = "class Foo { }\n"
        tree = parser.parse(source)
        docs = RewriteMap({0: GeneratedDoc(0, "  \n ")})

        assert DocRewriter(docs).rewrite(tree).to_full_string() == source

    def test_result_is_documented_on_reparse(self, parser):
        _, rewritten = document_all(parser, "class Foo {\n    void Bar() {}\n}")

        reparsed = parser.parse(rewritten.to_full_string())
        assert TargetCollector().collect(reparsed) == []
