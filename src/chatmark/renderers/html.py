"""Block renderer: markdown text to HTML in one pass over the lines.

Walks the normalized lines in order, classifies each one, keeps track of
the single open container (list, blockquote, table or code block) and
hands inline spans to the InlineTransformer and table runs to
render_table.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single HtmlRenderer instance
and call render() concurrently without synchronization.

Setext Headings:
A setext underline is only recognized after its text line has already been
emitted as a paragraph. The renderer takes that paragraph back out of the
StringBuilder and emits a heading instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from chatmark.config import RenderConfig, get_render_config
from chatmark.errors import RenderError
from chatmark.lexer.classifier import classify_line, is_list_item, is_special_line
from chatmark.lexer.modes import CLOSING_TAGS, BlockState
from chatmark.parsing.inline import InlineTransformer
from chatmark.parsing.table import render_table
from chatmark.placeholders import PlaceholderMap
from chatmark.stringbuilder import StringBuilder
from chatmark.tokens import ClassifiedLine, LineKind
from chatmark.utils.logger import get_logger
from chatmark.utils.text import escape_html, normalize_source

logger = get_logger(__name__)

HARD_BREAK = "<br />\n"
PARAGRAPH_BREAK = "<br/>"


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Created fresh for each render, ensuring thread safety when sharing
    HtmlRenderer instances across threads.
    """

    lines: list[str]
    config: RenderConfig
    inline: InlineTransformer
    sb: StringBuilder = field(default_factory=StringBuilder)
    state: BlockState = BlockState.NORMAL
    table_lines: list[str] = field(default_factory=list)


class HtmlRenderer:
    """Render markdown text to HTML.

    Usage:
        >>> renderer = HtmlRenderer()
        >>> renderer.render("# Hello **World**")
        '<h1>Hello <strong>World</strong></h1>\\n'

    Thread Safety:
        Multiple threads can safely share a single HtmlRenderer instance.
        Each render() call creates an independent RenderContext.
    """

    __slots__ = ("_config",)

    def __init__(self, config: RenderConfig | None = None) -> None:
        """Initialize renderer.

        Args:
            config: Fixed configuration. If None, the active context config
                (see chatmark.config) is read on every render() call.
        """
        self._config = config

    def render(self, text: str | None) -> str:
        """Render markdown text to an HTML string.

        Never raises for string input: malformed markdown degrades to
        best-effort HTML and every open block is closed at the end.

        Args:
            text: Markdown source; None and "" render as ""

        Returns:
            HTML string

        Raises:
            RenderError: If text is neither a string nor None
        """
        if text is None:
            return ""
        if not isinstance(text, str):
            raise RenderError(text)
        if not text:
            return ""

        config = self._config or get_render_config()
        placeholders = PlaceholderMap()
        ctx = RenderContext(
            lines=normalize_source(text).split("\n"),
            config=config,
            inline=InlineTransformer(placeholders, config),
        )
        try:
            self._render_lines(ctx)
        finally:
            self._finalize(ctx)
        return ctx.sb.build()

    # =========================================================================
    # Line loop
    # =========================================================================

    def _render_lines(self, ctx: RenderContext) -> None:
        lines = ctx.lines
        i = 0
        while i < len(lines):
            line = lines[i]
            previous = lines[i - 1] if i > 0 else None
            classified = classify_line(line, previous, config=ctx.config)

            if ctx.state is BlockState.IN_CODE_BLOCK and classified.kind is not LineKind.FENCE:
                ctx.sb.append(escape_html(line) + "\n")
                i += 1
                continue

            i = self._render_block(ctx, classified, i) + 1

    def _render_block(self, ctx: RenderContext, line: ClassifiedLine, index: int) -> int:
        """Render one classified line.

        Returns:
            Index of the last line consumed (paragraphs consume several).
        """
        match line.kind:
            case LineKind.PARAGRAPH:
                return self._render_paragraph(ctx, index)
            case LineKind.FENCE:
                self._render_fence(ctx, line)
            case LineKind.BLANK:
                self._render_blank(ctx, index)
            case LineKind.TABLE_ROW:
                if ctx.state is not BlockState.IN_TABLE:
                    self._leave(ctx)
                    ctx.state = BlockState.IN_TABLE
                ctx.table_lines.append(line.line)
            case LineKind.SETEXT_UNDERLINE:
                return self._render_setext(ctx, line, index)
            case LineKind.ATX_HEADING:
                self._leave(ctx)
                self._render_heading(ctx, line.content, line.level)
            case LineKind.THEMATIC_BREAK:
                if ctx.state is BlockState.IN_TABLE:
                    self._leave(ctx)
                ctx.sb.append_line("<hr/>")
            case LineKind.TASK_ITEM:
                self._enter(ctx, BlockState.IN_UNORDERED_LIST, '<ul class="task-list">')
                checked = " checked" if line.checked else ""
                ctx.sb.append_line(
                    '<li class="task-list-item">'
                    f'<input type="checkbox" class="task-list-item-checkbox" disabled{checked}/> '
                    f"{ctx.inline.transform(line.content)}</li>"
                )
            case LineKind.UNORDERED_ITEM:
                self._enter(ctx, BlockState.IN_UNORDERED_LIST, "<ul>")
                ctx.sb.append_line(f"<li>{ctx.inline.transform(line.content)}</li>")
            case LineKind.ORDERED_ITEM:
                start_attr = f' start="{line.start}"' if line.start != 1 else ""
                self._enter(ctx, BlockState.IN_ORDERED_LIST, f"<ol{start_attr}>")
                ctx.sb.append_line(f"<li>{ctx.inline.transform(line.content)}</li>")
            case LineKind.BLOCKQUOTE:
                self._enter(ctx, BlockState.IN_BLOCKQUOTE, "<blockquote>")
                ctx.sb.append_line(f"<p>{ctx.inline.transform(line.content)}</p>")
        return index

    def _render_fence(self, ctx: RenderContext, line: ClassifiedLine) -> None:
        closing = ctx.state is BlockState.IN_CODE_BLOCK
        self._leave(ctx)
        if closing:
            return
        ctx.sb.append_line(f'<pre><code class="language-{escape_html(line.language)}">')
        ctx.state = BlockState.IN_CODE_BLOCK

    def _render_blank(self, ctx: RenderContext, index: int) -> None:
        """Close open blocks; mark the gap unless a list continues after it."""
        self._leave(ctx)
        if not ctx.config.paragraph_breaks or index + 1 >= len(ctx.lines):
            return
        following = ctx.lines[index + 1]
        if following.strip() and not is_list_item(following, config=ctx.config):
            ctx.sb.append_line(PARAGRAPH_BREAK)

    def _render_setext(self, ctx: RenderContext, line: ClassifiedLine, index: int) -> int:
        """Turn the paragraph emitted for the previous line into a heading.

        When the previous line was merged into a longer paragraph, that
        paragraph stays and a === underline still titles the previous line
        alone; a --- underline becomes a rule instead.
        """
        text = ctx.lines[index - 1].strip()
        if ctx.state is BlockState.NORMAL:
            if ctx.sb.remove_last(self._paragraph_html(ctx, text)):
                self._render_heading(ctx, text, line.level)
                return index
            if line.level == 1 and self._continues_paragraph(ctx, index - 1):
                self._render_heading(ctx, text, line.level)
                return index

        logger.debug("Underline %r has no paragraph above it; reclassifying", line.line)
        fallback = classify_line(line.line, config=ctx.config, setext=False)
        return self._render_block(ctx, fallback, index)

    def _continues_paragraph(self, ctx: RenderContext, index: int) -> bool:
        """Check if the line at index was folded into the paragraph before it."""
        if index == 0:
            return False
        line, previous = ctx.lines[index], ctx.lines[index - 1]
        if not line.strip() or not previous.strip():
            return False
        return not is_special_line(line, previous, config=ctx.config)

    def _render_heading(self, ctx: RenderContext, text: str, level: int) -> None:
        ctx.sb.append_line(f"<h{level}>{ctx.inline.transform(text)}</h{level}>")

    def _render_paragraph(self, ctx: RenderContext, index: int) -> int:
        """Merge the paragraph starting at index with its continuation lines.

        A line ending in two spaces joins the next one with a hard break;
        otherwise lines are joined with a single space.

        Returns:
            Index of the last line consumed.
        """
        self._leave(ctx)
        lines = ctx.lines
        current = lines[index]
        parts = [current.strip()]
        while index + 1 < len(lines):
            following = lines[index + 1]
            if not following.strip() or is_special_line(following, current, config=ctx.config):
                break
            if current.endswith("  "):
                parts.append(ctx.inline.placeholders.protect(HARD_BREAK))
            else:
                parts.append(" ")
            parts.append(following.strip())
            current = following
            index += 1
        ctx.sb.append(self._paragraph_html(ctx, "".join(parts)))
        return index

    def _paragraph_html(self, ctx: RenderContext, text: str) -> str:
        return f"<p>{ctx.inline.transform(text)}</p>\n"

    # =========================================================================
    # Containers
    # =========================================================================

    def _enter(self, ctx: RenderContext, state: BlockState, opening: str) -> None:
        """Open a list or blockquote unless it is already the open container."""
        if ctx.state is state:
            return
        self._leave(ctx)
        ctx.sb.append_line(opening)
        ctx.state = state

    def _leave(self, ctx: RenderContext) -> None:
        """Close whatever container is open and return to NORMAL."""
        state = ctx.state
        if state is BlockState.NORMAL:
            return
        if state is BlockState.IN_TABLE:
            ctx.sb.append(render_table(ctx.table_lines, ctx.inline))
            ctx.table_lines.clear()
        else:
            ctx.sb.append_line(CLOSING_TAGS[state])
        ctx.state = BlockState.NORMAL

    def _finalize(self, ctx: RenderContext) -> None:
        """Close anything still open at end of input."""
        if ctx.state is BlockState.IN_CODE_BLOCK:
            logger.debug("Closing unterminated code fence at end of input")
        self._leave(ctx)
