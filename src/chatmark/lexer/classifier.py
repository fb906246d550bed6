"""Line classifier.

Decides what a single source line is, using one line of look-behind for
setext underlines. Classification is pure: no position tracking, no state,
the same inputs always give the same ClassifiedLine.

Precedence (first match wins):
    fence, blank, table row, setext underline, ATX heading,
    horizontal rule, task item, unordered item, ordered item,
    blockquote, paragraph.

The rule check comes before the list checks so that ``- - -`` is a rule
and not a list item whose text is ``- -``.
"""

from __future__ import annotations

from chatmark.config import RenderConfig, get_render_config
from chatmark.parsing.charsets import (
    MIN_RULE_LENGTH,
    SETEXT_LEVELS,
    TABLE_DELIMITER,
    THEMATIC_BREAK_CHARS,
)
from chatmark.patterns import (
    ATX_CLOSING,
    ATX_HEADING,
    BLOCKQUOTE,
    FENCE,
    ORDERED_ITEM,
    TASK_ITEM,
    UNORDERED_ITEM,
)
from chatmark.tokens import LIST_KINDS, SPECIAL_KINDS, ClassifiedLine, LineKind


def classify_line(
    line: str,
    previous: str | None = None,
    *,
    config: RenderConfig | None = None,
    setext: bool = True,
) -> ClassifiedLine:
    """Classify one line.

    Args:
        line: The line to classify (no trailing newline)
        previous: The raw line before it, or None at the start of input
        config: Feature switches (defaults to the active render config)
        setext: Set to False to skip the setext underline rule, used when
            the renderer could not attach the underline to a paragraph

    Returns:
        ClassifiedLine with kind and extracted payload.
    """
    cfg = config or get_render_config()

    fence = _try_classify_fence(line)
    if fence is not None:
        return fence

    if not line.strip():
        return ClassifiedLine(LineKind.BLANK, line)

    if cfg.tables_enabled and line.count(TABLE_DELIMITER) >= 2:
        return ClassifiedLine(LineKind.TABLE_ROW, line)

    if setext and previous is not None and previous.strip():
        underline = _try_classify_setext(line)
        if underline is not None:
            return underline

    heading = _try_classify_atx_heading(line)
    if heading is not None:
        return heading

    if _is_thematic_break(line):
        return ClassifiedLine(LineKind.THEMATIC_BREAK, line)

    if cfg.task_lists_enabled:
        match = TASK_ITEM.match(line)
        if match:
            return ClassifiedLine(
                LineKind.TASK_ITEM,
                line,
                content=match.group(2),
                checked=match.group(1).lower() == "x",
            )

    match = UNORDERED_ITEM.match(line)
    if match:
        return ClassifiedLine(LineKind.UNORDERED_ITEM, line, content=match.group(1))

    match = ORDERED_ITEM.match(line)
    if match:
        return ClassifiedLine(
            LineKind.ORDERED_ITEM,
            line,
            content=match.group(2),
            start=int(match.group(1)),
        )

    match = BLOCKQUOTE.match(line)
    if match:
        return ClassifiedLine(LineKind.BLOCKQUOTE, line, content=match.group(1))

    return ClassifiedLine(LineKind.PARAGRAPH, line, content=line.strip())


def is_special_line(
    line: str, previous: str | None = None, *, config: RenderConfig | None = None
) -> bool:
    """Check if line starts its own block and cannot continue a paragraph."""
    return classify_line(line, previous, config=config).kind in SPECIAL_KINDS


def is_list_item(line: str, *, config: RenderConfig | None = None) -> bool:
    """Check if line is a task, unordered or ordered list item."""
    return classify_line(line, config=config).kind in LIST_KINDS


def _try_classify_fence(line: str) -> ClassifiedLine | None:
    """Three or more backticks, optionally followed by a language token."""
    match = FENCE.match(line)
    if match is None:
        return None
    return ClassifiedLine(LineKind.FENCE, line, language=match.group(2))


def _try_classify_setext(line: str) -> ClassifiedLine | None:
    """A run of = (level 1) or - (level 2), at least three long."""
    stripped = line.strip()
    if len(stripped) < MIN_RULE_LENGTH:
        return None
    char = stripped[0]
    if char not in SETEXT_LEVELS or stripped.count(char) != len(stripped):
        return None
    return ClassifiedLine(LineKind.SETEXT_UNDERLINE, line, level=SETEXT_LEVELS[char])


def _try_classify_atx_heading(line: str) -> ClassifiedLine | None:
    """1-6 # characters followed by a space.

    A closing # sequence is removed if it is preceded by a space.
    """
    match = ATX_HEADING.match(line)
    if match is None:
        return None
    content = ATX_CLOSING.sub("", match.group(2)).strip()
    return ClassifiedLine(
        LineKind.ATX_HEADING, line, content=content, level=len(match.group(1))
    )


def _is_thematic_break(line: str) -> bool:
    """Three or more of the same rule character, spaces ignored."""
    compact = "".join(line.split())
    if len(compact) < MIN_RULE_LENGTH or compact[0] not in THEMATIC_BREAK_CHARS:
        return False
    return compact.count(compact[0]) == len(compact)
