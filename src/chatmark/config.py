"""ContextVar-based render configuration for chatmark.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The module-level ``render()`` reads the active config; ``Markdown``
instances install their own config for the duration of each call.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Via the Markdown class
    md = Markdown(plugins=["table"])
    html = md("| a | b |\\n|---|---|\\n| 1 | 2 |")

    # Or scope a config explicitly
    with render_config_context(RenderConfig(paragraph_breaks=False)):
        html = render(source)

"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator

from chatmark.errors import ConfigError

# Feature names accepted by Markdown(plugins=[...]), mapped to config fields
BUILTIN_PLUGINS: dict[str, str] = {
    "table": "tables_enabled",
    "task_lists": "task_lists_enabled",
    "strikethrough": "strikethrough_enabled",
    "autolinks": "autolinks_enabled",
}


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).
    Every feature is enabled by default.

    Attributes:
        tables_enabled: Render pipe tables
        task_lists_enabled: Render - [ ] checkboxes
        strikethrough_enabled: Render ~~deleted~~ text
        autolinks_enabled: Render <https://...> as links
        paragraph_breaks: Emit a <br/> marker for blank lines between blocks
        max_inline_depth: Nesting limit for link text and emphasis content
        strip_dangerous_urls: Replace javascript:, vbscript: and data: URLs with #

    """

    tables_enabled: bool = True
    task_lists_enabled: bool = True
    strikethrough_enabled: bool = True
    autolinks_enabled: bool = True
    paragraph_breaks: bool = True
    max_inline_depth: int = 16
    strip_dangerous_urls: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.max_inline_depth, bool) or not isinstance(self.max_inline_depth, int):
            raise ConfigError("max_inline_depth", "must be an integer")
        if self.max_inline_depth < 0:
            raise ConfigError("max_inline_depth", "must not be negative")

    @classmethod
    def from_dict(cls, config_dict: dict) -> "RenderConfig":
        """Create RenderConfig from dictionary.

        Only includes keys that are valid RenderConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = RenderConfig.from_dict({
            ...     "tables_enabled": False,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.tables_enabled
            False

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)

    @classmethod
    def from_plugins(cls, plugins: list[str], **options: object) -> "RenderConfig":
        """Create a config with exactly the named features enabled.

        Args:
            plugins: Feature names from BUILTIN_PLUGINS, or ["all"]
            **options: Other RenderConfig fields (paragraph_breaks, ...)

        Raises:
            ConfigError: If a plugin name is not recognized

        """
        if "all" in plugins:
            names = set(BUILTIN_PLUGINS)
        else:
            unknown = [name for name in plugins if name not in BUILTIN_PLUGINS]
            if unknown:
                available = ", ".join(sorted(BUILTIN_PLUGINS))
                raise ConfigError("plugins", f"unknown {unknown[0]!r}. Available: {available}")
            names = set(plugins)
        flags = {field: name in names for name, field in BUILTIN_PLUGINS.items()}
        return cls.from_dict({**options, **flags})


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: RenderConfig = RenderConfig()

# Thread-local configuration via ContextVar
_render_config: ContextVar[RenderConfig] = ContextVar(
    "render_config",
    default=_DEFAULT_CONFIG,
)


def get_render_config() -> RenderConfig:
    """Get current render configuration (thread-local)."""
    return _render_config.get()


def set_render_config(config: RenderConfig) -> None:
    """Set render configuration for current context.

    Only affects the current thread's context. Other threads are unaffected.
    """
    _render_config.set(config)


def reset_render_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.
    """
    _render_config.set(_DEFAULT_CONFIG)


@contextmanager
def render_config_context(config: RenderConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Properly restores the previous config even if an exception is raised.

    Example:
        >>> with render_config_context(RenderConfig(tables_enabled=False)):
        ...     html = render("| a | b |")
        >>> # Automatically reset to previous config

    """
    previous = _render_config.get()
    _render_config.set(config)
    try:
        yield
    finally:
        _render_config.set(previous)


__all__ = [
    "BUILTIN_PLUGINS",
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
]
