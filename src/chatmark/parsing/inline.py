"""Inline transformer: one span of markdown text to safe inline HTML.

Processing order (each stage sees the output of the previous one):

1. Backslash escapes: ``\\*`` becomes a literal ``*`` that no later stage
   can treat as markup.
2. Raw HTML neutralization: ``&``, ``<``, ``>`` are escaped. Existing
   character references are kept, so escaping happens exactly once.
3. Images.
4. Links with a trailing ``{_blank}`` marker.
5. Links.
6. Autolinks (``<https://...>``, already in ``&lt;...&gt;`` form here).
7. Code spans, pairing backtick runs of equal length.
8. Strong, emphasis, strikethrough.
9. Placeholder restoration.

Every construct a stage produces is parked in the PlaceholderMap, so the
``*`` in ``![*alt*](u)`` or the ``_`` in ``[x](http://a_b_c)`` is never seen
by the emphasis pass. Link text and formatted content are transformed
recursively from stage 3 on; the recursion depth is bounded by
``RenderConfig.max_inline_depth``.

Thread Safety:
An InlineTransformer shares its PlaceholderMap with the render call that
created it. Create one per render() call.
"""

from __future__ import annotations

import re

from chatmark.config import RenderConfig, get_render_config
from chatmark.parsing.charsets import EMPHASIS_DELIMITERS
from chatmark.patterns import (
    AUTOLINK,
    BACKTICK_RUN,
    EMPHASIS,
    ESCAPE,
    IMAGE,
    LINK,
    LINK_TARGET_BLANK,
    STRIKETHROUGH,
    STRONG,
)
from chatmark.placeholders import PlaceholderMap
from chatmark.sanitize import safe_url
from chatmark.utils.logger import get_logger
from chatmark.utils.text import escape_attribute, escape_text

logger = get_logger(__name__)

TARGET_BLANK_ATTRS = ' target="_blank" rel="noopener noreferrer"'


class InlineTransformer:
    """Convert inline markdown to HTML.

    Usage:
        >>> inline = InlineTransformer()
        >>> inline.transform("this _word_ only")
        'this <em>word</em> only'
        >>> inline.transform("snake_case")
        'snake_case'

    """

    __slots__ = ("_config", "_placeholders")

    def __init__(
        self,
        placeholders: PlaceholderMap | None = None,
        config: RenderConfig | None = None,
    ) -> None:
        """Initialize transformer.

        Args:
            placeholders: Map shared with the block renderer, which stores
                hard line breaks in it before calling transform()
            config: Feature switches (defaults to the active render config)
        """
        self._placeholders = placeholders if placeholders is not None else PlaceholderMap()
        self._config = config or get_render_config()

    @property
    def placeholders(self) -> PlaceholderMap:
        return self._placeholders

    def transform(self, text: str) -> str:
        """Transform one span of raw markdown into inline HTML.

        Args:
            text: Raw inline text; may contain placeholder tokens created
                through ``self.placeholders``

        Returns:
            HTML with every placeholder resolved.
        """
        if not text:
            return ""
        text = ESCAPE.sub(self._protect_escape, text)
        text = escape_text(text)
        text = self._transform(text, 0)
        return self._placeholders.resolve(text)

    # =========================================================================
    # Pipeline (stages 3-8, re-entered for nested content)
    # =========================================================================

    def _transform(self, text: str, depth: int) -> str:
        if depth > self._config.max_inline_depth:
            logger.debug(
                "Inline nesting exceeds %d levels; leaving span unformatted",
                self._config.max_inline_depth,
            )
            return text

        text = IMAGE.sub(self._replace_image, text)
        text = LINK_TARGET_BLANK.sub(lambda m: self._replace_link(m, depth, blank=True), text)
        text = LINK.sub(lambda m: self._replace_link(m, depth), text)
        if self._config.autolinks_enabled:
            text = AUTOLINK.sub(self._replace_autolink, text)
        text = self._replace_code_spans(text)

        if not any(c in text for c in EMPHASIS_DELIMITERS):
            return text
        text = STRONG.sub(lambda m: self._wrap("strong", m, depth), text)
        text = EMPHASIS.sub(lambda m: self._wrap("em", m, depth), text)
        if self._config.strikethrough_enabled:
            text = STRIKETHROUGH.sub(lambda m: self._wrap("del", m, depth), text)
        return text

    def _protect_escape(self, match: re.Match[str]) -> str:
        return self._placeholders.protect(match.group(1))

    def _attribute(self, value: str) -> str:
        """Flatten placeholders in value and make it attribute-safe."""
        return escape_attribute(escape_text(self._placeholders.resolve(value)))

    def _url(self, value: str) -> str:
        url = self._attribute(value)
        if self._config.strip_dangerous_urls:
            return safe_url(url)
        return url

    def _replace_image(self, match: re.Match[str]) -> str:
        alt = self._attribute(match.group(1))
        src = self._url(match.group(2))
        return self._placeholders.protect(f'<img src="{src}" alt="{alt}" title="{alt}"/>')

    def _replace_link(self, match: re.Match[str], depth: int, *, blank: bool = False) -> str:
        label = self._transform(match.group(1), depth + 1)
        href = self._url(match.group(2))
        attrs = TARGET_BLANK_ATTRS if blank else ""
        return self._placeholders.protect(f'<a href="{href}"{attrs}>{label}</a>')

    def _replace_autolink(self, match: re.Match[str]) -> str:
        url = self._attribute(match.group(1))
        return self._placeholders.protect(f'<a href="{url}">{url}</a>')

    def _replace_code_spans(self, text: str) -> str:
        """Protect code spans.

        Each backtick run is paired with the next run of the same length;
        a run with no partner stays literal. Partners are found in one
        backward sweep, so unclosed runs never trigger a rescan.
        """
        if "`" not in text:
            return text
        runs = list(BACKTICK_RUN.finditer(text))
        partners: list[int | None] = [None] * len(runs)
        next_by_length: dict[int, int] = {}
        for i in range(len(runs) - 1, -1, -1):
            length = runs[i].end() - runs[i].start()
            partners[i] = next_by_length.get(length)
            next_by_length[length] = i

        parts: list[str] = []
        pos = 0
        i = 0
        while i < len(runs):
            partner = partners[i]
            if partner is None:
                i += 1
                continue
            opener, closer = runs[i], runs[partner]
            parts.append(text[pos : opener.start()])
            code = text[opener.end() : closer.start()]
            parts.append(self._placeholders.protect(f"<code>{code}</code>"))
            pos = closer.end()
            i = partner + 1
        parts.append(text[pos:])
        return "".join(parts)

    def _wrap(self, tag: str, match: re.Match[str], depth: int) -> str:
        content = next(group for group in match.groups() if group is not None)
        inner = self._transform(content, depth + 1)
        return self._placeholders.protect(f"<{tag}>{inner}</{tag}>")
