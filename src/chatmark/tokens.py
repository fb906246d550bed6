"""Line classification results produced by the classifier.

Each input line is classified into exactly one LineKind. The block
renderer dispatches on the kind and reads the extracted payload.

Thread Safety:
ClassifiedLine is frozen (immutable) and safe to share across threads.
LineKind is an enum (inherently immutable).

"""

from dataclasses import dataclass
from enum import Enum, auto


class LineKind(Enum):
    """Block-level kinds of a single source line, in classification order."""

    FENCE = auto()  # ```lang
    BLANK = auto()
    TABLE_ROW = auto()  # | a | b |
    SETEXT_UNDERLINE = auto()  # === or --- under a text line
    ATX_HEADING = auto()  # # Heading
    THEMATIC_BREAK = auto()  # ---, * * *, ___
    TASK_ITEM = auto()  # - [ ] todo
    UNORDERED_ITEM = auto()  # - item
    ORDERED_ITEM = auto()  # 1. item
    BLOCKQUOTE = auto()  # > quote
    PARAGRAPH = auto()


# Kinds that may not be folded into a running paragraph
SPECIAL_KINDS: frozenset[LineKind] = frozenset(
    kind for kind in LineKind if kind not in (LineKind.BLANK, LineKind.PARAGRAPH)
)

LIST_KINDS: frozenset[LineKind] = frozenset(
    (LineKind.TASK_ITEM, LineKind.UNORDERED_ITEM, LineKind.ORDERED_ITEM)
)


@dataclass(frozen=True, slots=True)
class ClassifiedLine:
    """A classified source line.

    Attributes:
        kind: What the line is
        line: The raw line
        content: Inline text payload (heading text, item text, quote text)
        level: Heading level (1-6)
        checked: Task item checkbox state
        language: Fence language token ("" when absent)
        start: First number of an ordered item

    """

    kind: LineKind
    line: str
    content: str = ""
    level: int = 0
    checked: bool = False
    language: str = ""
    start: int = 1

    def __repr__(self) -> str:
        return f"ClassifiedLine({self.kind.name}, {self.content!r})"
