"""Block renderer states.

The renderer is a small finite state machine. At most one container is
open at any time, so a single state value describes everything:

- NORMAL: Between blocks
- IN_CODE_BLOCK: Inside a fenced code block; only a fence line leaves it
- IN_UNORDERED_LIST / IN_ORDERED_LIST: A <ul> or <ol> is open
- IN_BLOCKQUOTE: A <blockquote> is open
- IN_TABLE: Table rows are being buffered
"""

from __future__ import annotations

from enum import Enum, auto


class BlockState(Enum):
    """Renderer operating states."""

    NORMAL = auto()
    IN_CODE_BLOCK = auto()
    IN_UNORDERED_LIST = auto()
    IN_ORDERED_LIST = auto()
    IN_BLOCKQUOTE = auto()
    IN_TABLE = auto()


# Closing tag emitted when leaving each container state
CLOSING_TAGS: dict[BlockState, str] = {
    BlockState.IN_CODE_BLOCK: "</code></pre>",
    BlockState.IN_UNORDERED_LIST: "</ul>",
    BlockState.IN_ORDERED_LIST: "</ol>",
    BlockState.IN_BLOCKQUOTE: "</blockquote>",
}
