"""
chatmark: line-oriented Markdown to HTML for chat transcripts

Renders the markdown typically produced by chat assistants (headings,
fenced code, lists, task lists, blockquotes, pipe tables, emphasis, links)
into HTML in a single pass. Raw HTML in the input is always neutralized.

Quick Start:
    >>> from chatmark import render
    >>> render("# Hello, World!")
    '<h1>Hello, World!</h1>\\n'

    >>> # Or use the high-level Markdown class
    >>> from chatmark import Markdown
    >>> md = Markdown(plugins=["table"])
    >>> html = md("| a | b |\\n|---|---|\\n| 1 | 2 |")

Installation:
    pip install chatmark             # zero runtime dependencies
    pip install chatmark[test]       # + pytest and hypothesis
"""

from collections.abc import Iterable

from chatmark.config import (
    BUILTIN_PLUGINS,
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from chatmark.errors import ChatmarkError, ConfigError, RenderError
from chatmark.renderers.html import HtmlRenderer

__version__ = "0.1.0"


def render(text: str | None, *, config: RenderConfig | None = None) -> str:
    """Render markdown text to HTML.

    Args:
        text: Markdown source; None and "" render as ""
        config: Configuration to use (defaults to the active context config)

    Returns:
        HTML string

    Raises:
        RenderError: If text is neither a string nor None

    Example:
        >>> render("Some **bold** text")
        '<p>Some <strong>bold</strong> text</p>\\n'
    """
    return HtmlRenderer(config).render(text)


def render_many(texts: Iterable[str | None], *, config: RenderConfig | None = None) -> list[str]:
    """Render several markdown texts with one shared renderer.

    Example:
        >>> render_many(["# One", "# Two"])
        ['<h1>One</h1>\\n', '<h1>Two</h1>\\n']
    """
    renderer = HtmlRenderer(config)
    return [renderer.render(text) for text in texts]


class Markdown:
    """High-level renderer holding one immutable configuration.

    Usage:
        >>> md = Markdown()
        >>> md("# Hello **World**")
        '<h1>Hello <strong>World</strong></h1>\\n'

        >>> # Only tables, no task lists, strikethrough or autolinks
        >>> md = Markdown(plugins=["table"], paragraph_breaks=False)

    Thread Safety:
        The configuration is frozen and installed through a ContextVar for
        the duration of each call. Safe to share between threads.

    """

    __slots__ = ("_config",)

    def __init__(
        self,
        *,
        plugins: list[str] | None = None,
        paragraph_breaks: bool = True,
        max_inline_depth: int = 16,
        strip_dangerous_urls: bool = False,
    ) -> None:
        """Initialize Markdown renderer.

        Args:
            plugins: Feature names to enable (e.g., ["table", "task_lists"]).
                None or ["all"] enables every built-in feature.
            paragraph_breaks: Emit a <br/> marker for blank lines between blocks
            max_inline_depth: Nesting limit for link text and emphasis content
            strip_dangerous_urls: Replace javascript:, vbscript: and data: URLs

        Raises:
            ConfigError: If a plugin name or option value is invalid
        """
        options = {
            "paragraph_breaks": paragraph_breaks,
            "max_inline_depth": max_inline_depth,
            "strip_dangerous_urls": strip_dangerous_urls,
        }
        if plugins is None:
            self._config = RenderConfig(**options)
        else:
            self._config = RenderConfig.from_plugins(plugins, **options)

    @property
    def config(self) -> RenderConfig:
        return self._config

    @property
    def plugins(self) -> list[str]:
        """Names of the enabled built-in features."""
        return [name for name, field in BUILTIN_PLUGINS.items() if getattr(self._config, field)]

    def __call__(self, text: str | None) -> str:
        """Render markdown text to HTML.

        Thread Safety:
            Sets config via ContextVar (thread-local). Safe for concurrent use.

        """
        with render_config_context(self._config):
            return HtmlRenderer().render(text)

    def render_many(self, texts: Iterable[str | None]) -> list[str]:
        """Render several texts; sets config once, renders all, resets once."""
        renderer = HtmlRenderer()
        with render_config_context(self._config):
            return [renderer.render(text) for text in texts]

    def __repr__(self) -> str:
        return f"Markdown(plugins={self.plugins!r})"


__all__ = [
    "BUILTIN_PLUGINS",
    "ChatmarkError",
    "ConfigError",
    "HtmlRenderer",
    "Markdown",
    "RenderConfig",
    "RenderError",
    "__version__",
    "get_render_config",
    "render",
    "render_config_context",
    "render_many",
    "reset_render_config",
    "set_render_config",
]
