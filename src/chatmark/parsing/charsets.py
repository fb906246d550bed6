"""Character sets for O(1) classification.

All sets are frozensets for:
- O(1) membership testing (vs O(n) for strings)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Usage:
    from chatmark.parsing.charsets import THEMATIC_BREAK_CHARS

    if char in THEMATIC_BREAK_CHARS:  # O(1) lookup
        ...
"""

# Horizontal rule characters
THEMATIC_BREAK_CHARS: frozenset[str] = frozenset("-*_")

# Setext underline characters: = for h1, - for h2
SETEXT_LEVELS: dict[str, int] = {"=": 1, "-": 2}

# Column delimiter for pipe tables
TABLE_DELIMITER = "|"

# Minimum run length for rules and setext underlines
MIN_RULE_LENGTH = 3

# Inline delimiter characters that may open formatted spans
EMPHASIS_DELIMITERS: frozenset[str] = frozenset("*_~")
