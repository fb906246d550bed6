"""StringBuilder for O(n) HTML accumulation.

Appends fragments to a list and joins once at the end: O(n) total vs
O(n²) for repeated string concatenation. Each append() is one fragment,
which lets the block renderer take back the paragraph it just emitted
when the next line turns out to be a setext underline.

Thread Safety:
StringBuilder instances are local to each render() call.
No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Append-only fragment accumulator with a one-step undo.

    Usage:
        >>> sb = StringBuilder().append("<p>Title</p>\\n")
        >>> sb.remove_last("<p>Title</p>\\n")
        True
        >>> sb.append("<h1>Title</h1>\\n").build()
        '<h1>Title</h1>\\n'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        """Initialize empty StringBuilder."""
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append one fragment (empty strings are skipped)."""
        if s:
            self._parts.append(s)
        return self

    def append_line(self, s: str = "") -> StringBuilder:
        """Append a fragment terminated by a newline."""
        self._parts.append(s + "\n")
        return self

    def remove_last(self, expected: str) -> bool:
        """Drop the last fragment if it equals expected.

        Args:
            expected: Fragment the caller believes was appended last

        Returns:
            True if the fragment was removed, False if the buffer is
            empty or ends with something else.
        """
        if self._parts and self._parts[-1] == expected:
            self._parts.pop()
            return True
        return False

    def build(self) -> str:
        """Join all fragments into the final string."""
        return "".join(self._parts)

    def __len__(self) -> int:
        """Return number of fragments (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        """Return True if any fragments have been appended."""
        return bool(self._parts)
