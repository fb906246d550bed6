"""Exception classes for chatmark.

Rendering itself never raises: malformed markdown degrades to best-effort
HTML. These exceptions cover misuse of the public API and invalid
configuration.
"""

from __future__ import annotations


class ChatmarkError(Exception):
    """Base exception for all chatmark errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(ChatmarkError, ValueError):
    """Invalid render configuration.

    Raised eagerly when a RenderConfig is constructed with a value the
    renderer cannot honor, or when an unknown feature name is requested.
    """

    def __init__(self, option: str, message: str) -> None:
        """Initialize config error.

        Args:
            option: Name of the offending option (e.g., "max_inline_depth")
            message: Description of the problem
        """
        self.option = option
        super().__init__(f"Invalid option '{option}': {message}")


class RenderError(ChatmarkError, TypeError):
    """Renderer called with something that is not markdown text.

    Raised when render() receives a value that is neither a string nor None.
    """

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Expected markdown text (str or None), got {type(value).__name__}")
