"""Tests for HtmlRenderer block handling."""

from __future__ import annotations

import logging

import pytest

from chatmark.config import RenderConfig
from chatmark.errors import RenderError
from chatmark.renderers.html import HtmlRenderer


@pytest.fixture
def renderer() -> HtmlRenderer:
    return HtmlRenderer(RenderConfig())


class TestHeadings:
    """ATX and setext headings."""

    @pytest.mark.parametrize("level", range(1, 7))
    def test_atx_levels(self, renderer: HtmlRenderer, level: int) -> None:
        assert renderer.render("#" * level + " Title") == f"<h{level}>Title</h{level}>\n"

    def test_atx_closing_sequence_removed(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("## Title ##") == "<h2>Title</h2>\n"

    def test_atx_inline_content(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("# Hello **World**") == "<h1>Hello <strong>World</strong></h1>\n"

    def test_seven_hashes_is_paragraph(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("####### x") == "<p>####### x</p>\n"

    def test_hash_without_space_is_paragraph(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("#tag") == "<p>#tag</p>\n"

    def test_setext_after_other_paragraph(self, renderer: HtmlRenderer) -> None:
        html = renderer.render("intro\n\nTitle\n===")
        assert html == "<p>intro</p>\n<br/>\n<h1>Title</h1>\n"

    def test_setext_without_paragraph_becomes_rule(self, renderer: HtmlRenderer) -> None:
        """A --- under a heading is a rule, not a second heading."""
        assert renderer.render("# Title\n---") == "<h1>Title</h1>\n<hr/>\n"

    def test_equals_without_paragraph_is_text(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("# Title\n===") == "<h1>Title</h1>\n<p>===</p>\n"

    def test_equals_at_start_is_text(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("===") == "<p>===</p>\n"

    def test_underline_after_merged_paragraph_is_rule(self, renderer: HtmlRenderer) -> None:
        """A --- under a multi-line paragraph stays a rule."""
        assert renderer.render("a\nb\n---") == "<p>a b</p>\n<hr/>\n"

    def test_equals_after_merged_paragraph_titles_last_line(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("a\nb\n===") == "<p>a b</p>\n<h1>b</h1>\n"

    def test_equals_after_hard_break_paragraph(self, renderer: HtmlRenderer) -> None:
        html = renderer.render("a  \nb\n===")
        assert html.endswith("<h1>b</h1>\n")
        assert html.startswith("<p>a<br />\nb</p>\n")


class TestParagraphs:
    """Paragraph merging and breaks."""

    def test_lines_trimmed(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("   padded   ") == "<p>padded</p>\n"

    def test_paragraph_break_marker(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("a\n\nb") == "<p>a</p>\n<br/>\n<p>b</p>\n"

    def test_no_marker_before_list(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("a\n\n- b") == "<p>a</p>\n<ul>\n<li>b</li>\n</ul>\n"

    def test_no_marker_at_end(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("a\n\n") == "<p>a</p>\n"

    def test_no_marker_before_blank(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("a\n\n\nb") == "<p>a</p>\n<br/>\n<p>b</p>\n"

    def test_paragraph_breaks_disabled(self) -> None:
        renderer = HtmlRenderer(RenderConfig(paragraph_breaks=False))
        assert renderer.render("a\n\nb") == "<p>a</p>\n<p>b</p>\n"

    def test_multiple_hard_breaks(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("a  \nb  \nc") == "<p>a<br />\nb<br />\nc</p>\n"

    def test_trailing_spaces_on_last_line(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("a  ") == "<p>a</p>\n"

    def test_special_line_stops_merge(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("text\n# Head") == "<p>text</p>\n<h1>Head</h1>\n"

    def test_crlf_input(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("a\r\nb\rc") == "<p>a b c</p>\n"


class TestLists:
    """Unordered, ordered and task lists."""

    def test_switch_list_kind(self, renderer: HtmlRenderer) -> None:
        html = renderer.render("- a\n1. b")
        assert html == "<ul>\n<li>a</li>\n</ul>\n<ol>\n<li>b</li>\n</ol>\n"

    def test_ordered_start(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("3. c\n4. d") == '<ol start="3">\n<li>c</li>\n<li>d</li>\n</ol>\n'

    def test_all_bullets(self, renderer: HtmlRenderer) -> None:
        html = renderer.render("- a\n* b\n+ c")
        assert html == "<ul>\n<li>a</li>\n<li>b</li>\n<li>c</li>\n</ul>\n"

    def test_task_item_markup(self, renderer: HtmlRenderer) -> None:
        html = renderer.render("- [X] done")
        assert html == (
            '<ul class="task-list">\n'
            '<li class="task-list-item"><input type="checkbox" '
            'class="task-list-item-checkbox" disabled checked/> done</li>\n'
            "</ul>\n"
        )

    def test_task_and_plain_items_share_list(self, renderer: HtmlRenderer) -> None:
        html = renderer.render("- [ ] todo\n- plain")
        assert html.count("<ul") == 1
        assert "<li>plain</li>" in html

    def test_task_lists_disabled(self) -> None:
        renderer = HtmlRenderer(RenderConfig(task_lists_enabled=False))
        assert renderer.render("- [x] done") == "<ul>\n<li>[x] done</li>\n</ul>\n"

    def test_blank_line_closes_list(self, renderer: HtmlRenderer) -> None:
        html = renderer.render("- a\n\n- b")
        assert html == "<ul>\n<li>a</li>\n</ul>\n<ul>\n<li>b</li>\n</ul>\n"

    def test_rule_keeps_list_open(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("- a\n* * *\n- b") == (
            "<ul>\n<li>a</li>\n<hr/>\n<li>b</li>\n</ul>\n"
        )

    def test_list_item_inline(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("- **a**") == "<ul>\n<li><strong>a</strong></li>\n</ul>\n"


class TestBlockquotes:
    """Blockquote lines."""

    def test_consecutive_lines_share_container(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("> a\n> b") == (
            "<blockquote>\n<p>a</p>\n<p>b</p>\n</blockquote>\n"
        )

    def test_blockquote_closes_list(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("1. a\n> b") == (
            "<ol>\n<li>a</li>\n</ol>\n<blockquote>\n<p>b</p>\n</blockquote>\n"
        )

    def test_marker_without_space_is_text(self, renderer: HtmlRenderer) -> None:
        assert renderer.render(">quote") == "<p>&gt;quote</p>\n"


class TestCodeBlocks:
    """Fenced code blocks."""

    def test_content_escaped_verbatim(self, renderer: HtmlRenderer) -> None:
        html = renderer.render("```html\n<b>**x**</b> &amp;\n```")
        assert html == (
            '<pre><code class="language-html">\n'
            "&lt;b&gt;**x**&lt;/b&gt; &amp;amp;\n"
            "</code></pre>\n"
        )

    def test_markdown_inside_fence_is_literal(self, renderer: HtmlRenderer) -> None:
        html = renderer.render("```\n# not a heading\n- not a list\n```")
        assert "# not a heading\n- not a list\n" in html
        assert "<h1>" not in html
        assert "<ul>" not in html

    def test_fence_closes_list(self, renderer: HtmlRenderer) -> None:
        html = renderer.render("- a\n```\nx\n```")
        assert html.startswith("<ul>\n<li>a</li>\n</ul>\n<pre>")

    def test_unterminated_fence_closed(
        self, renderer: HtmlRenderer, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="chatmark"):
            html = renderer.render("```py\nprint(1)")
        assert html == '<pre><code class="language-py">\nprint(1)\n</code></pre>\n'
        assert "unterminated" in caplog.text

    def test_language_escaped(self, renderer: HtmlRenderer) -> None:
        html = renderer.render('```"x\n```')
        assert 'class="language-&quot;x"' in html

    def test_blank_lines_kept(self, renderer: HtmlRenderer) -> None:
        html = renderer.render("```\na\n\nb\n```")
        assert "a\n\nb\n" in html
        assert "<br/>" not in html


class TestTables:
    """Table buffering and flushing."""

    def test_table_flushed_by_paragraph(self, renderer: HtmlRenderer) -> None:
        html = renderer.render("| a | b |\n|---|---|\n| 1 | 2 |\nafter")
        assert html.endswith("</table>\n<p>after</p>\n")

    def test_table_flushed_at_end(self, renderer: HtmlRenderer) -> None:
        html = renderer.render("| a | b |\n| 1 | 2 |")
        assert html.startswith("<table>\n")
        assert html.endswith("</table>\n")

    def test_single_row_renders_nothing(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("| a | b |") == ""

    def test_table_closes_list(self, renderer: HtmlRenderer) -> None:
        html = renderer.render("- a\n| x | y |\n|---|---|")
        assert html.startswith("<ul>\n<li>a</li>\n</ul>\n<table>")

    def test_tables_disabled(self) -> None:
        renderer = HtmlRenderer(RenderConfig(tables_enabled=False))
        assert renderer.render("| a | b |\n| 1 | 2 |") == "<p>| a | b | | 1 | 2 |</p>\n"


class TestRendererContract:
    """Input handling and reuse."""

    def test_none(self, renderer: HtmlRenderer) -> None:
        assert renderer.render(None) == ""

    @pytest.mark.parametrize("value", [b"# bytes", 1, ["# list"]])
    def test_rejects_non_text(self, renderer: HtmlRenderer, value: object) -> None:
        with pytest.raises(RenderError) as exc_info:
            renderer.render(value)  # type: ignore[arg-type]
        assert exc_info.value.value is value

    def test_reusable(self, renderer: HtmlRenderer) -> None:
        """No state carries over between calls."""
        assert renderer.render("```\nopen") != ""
        assert renderer.render("plain") == "<p>plain</p>\n"

    def test_nul_replaced(self, renderer: HtmlRenderer) -> None:
        assert renderer.render("a\x00b") == "<p>a\ufffdb</p>\n"
