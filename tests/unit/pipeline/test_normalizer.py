"""
Tests for markdown normalization.
"""
import pytest

from spread.pipeline.normalizer import normalize, strip_frontmatter, strip_markup


class TestStripMarkup:

    def test_headings(self):
        assert strip_markup("# Heading") == "Heading"
        assert strip_markup("### Third level") == "Third level"

    def test_bold_and_italic(self):
        assert strip_markup("**bold** and *italic*") == "bold and italic"
        assert strip_markup("__also bold__ and _also italic_") == "also bold and also italic"

    def test_strikethrough(self):
        assert strip_markup("~~deleted~~") == "deleted"

    def test_inline_code(self):
        assert strip_markup("`code`") == "code"

    def test_link_keeps_text(self):
        assert strip_markup("[link text](https://example.com)") == "link text"

    def test_image_removed_entirely(self):
        assert strip_markup("![alt text](image.png)") == ""
        assert strip_markup("before ![a](b.png) after") == "before  after"

    @pytest.mark.parametrize("source,expected", [
        ("[[note]]", "note"),
        ("[[note|alias]]", "alias"),
        ("see [[folder/page|the page]] here", "see the page here"),
    ])
    def test_wikilinks(self, source, expected):
        assert strip_markup(source) == expected

    def test_blockquote(self):
        assert strip_markup("> quoted text") == "quoted text"

    def test_list_markers(self):
        assert strip_markup("- item") == "item"
        assert strip_markup("+ item") == "item"
        assert strip_markup("1. item") == "item"
        assert strip_markup("12. item") == "item"

    def test_horizontal_rule_removed(self):
        assert strip_markup("above\n---\nbelow") == "above\n\nbelow"

    def test_collapses_blank_runs(self):
        assert strip_markup("a\n\n\n\nb") == "a\n\nb"

    def test_plain_text_untouched(self):
        assert strip_markup("just words, nothing else") == "just words, nothing else"

    def test_unbalanced_markup_passes_through(self):
        assert strip_markup("**open bold and [broken link(") == "**open bold and [broken link("


class TestFrontmatter:

    def test_leading_block_removed(self):
        text = "---\ntitle: x\ntags: [a]\n---\nBody"
        assert strip_frontmatter(text) == "Body"

    def test_only_leading_block(self):
        text = "Intro\n---\nkey: v\n---\nrest"
        assert strip_frontmatter(text) == text

    def test_unterminated_block_kept(self):
        text = "---\ntitle: x\nno end"
        assert strip_frontmatter(text) == text


class TestNormalize:

    def test_title_and_bold(self):
        assert normalize("# Title\n\n**bold** text") == "Title\n\nbold text"

    def test_frontmatter_optional(self):
        text = "---\na: 1\n---\n# Hi"
        assert normalize(text) == "Hi"
        assert "a: 1" in normalize(text, strip_front=False)

    @pytest.mark.parametrize("clean", [
        "Plain paragraph of text.",
        "Title\n\nbody line\nanother line",
        "numbers 42 and symbols: ; , .",
    ])
    def test_idempotent_on_clean_text(self, clean):
        once = normalize(clean)
        assert normalize(once) == once

    def test_blank_collapse_stable_after_one_pass(self):
        once = normalize("a\n\n\n\n\nb\n\n\nc")
        assert once == "a\n\nb\n\nc"
        assert normalize(once) == once
