"""Precompiled pattern matchers shared by every render.

Compiled once at import time and never mutated, so a single set serves
all threads. Block patterns match one line (no newlines); inline patterns
run over escaped paragraph text in the order the InlineTransformer
documents.

Linear Time:
    No inline pattern rescans the rest of a line from an opener that never
    closes. Bracket and emphasis bodies stop at the next delimiter of their
    own kind and repeats are possessive, so each pass is linear in the
    length of its input.

Thread Safety:
    ``re.Pattern`` objects are immutable and safe to share.
"""

from __future__ import annotations

import re

# =========================================================================
# Block patterns (one line at a time)
# =========================================================================

# ```lang  (leading indentation allowed, language token is the first word)
FENCE = re.compile(r"^\s*(`{3,})\s*(\S*)")

# # Heading .. ###### Heading
ATX_HEADING = re.compile(r"^ {0,3}(#{1,6}) (.*)$")

# Optional closing sequence: "# Title ##" -> "Title"
ATX_CLOSING = re.compile(r"(?:^|(?<![ \t])[ \t]+)#+[ \t]*$")

# - [ ] todo / * [x] done
TASK_ITEM = re.compile(r"^\s*[-*+]\s+\[([ xX])\]\s+(.*)$")

# - item / * item / + item
UNORDERED_ITEM = re.compile(r"^\s*[-*+] (.*)$")

# 1. item (at most nine digits)
ORDERED_ITEM = re.compile(r"^\s*(\d{1,9})\.\s+(.*)$")

# > quote
BLOCKQUOTE = re.compile(r"^\s*> (.*)$")

# =========================================================================
# Inline patterns (applied in this order)
# =========================================================================

ESCAPABLE = "\\`*_{}[]()#+-.!"

# \* -> literal *
ESCAPE = re.compile(r"\\([" + re.escape(ESCAPABLE) + r"])")

# & that does not already start a character reference
BARE_AMPERSAND = re.compile(
    r"&(?!#[0-9]{1,7};|#[xX][0-9a-fA-F]{1,6};|[A-Za-z][A-Za-z0-9]{1,31};)"
)

# Bracketed text: no nested brackets
_LABEL = r"\[([^\[\]]*+)\]"

# Parenthesized URL: one level of balanced parentheses, e.g. Foo_(bar)
_DESTINATION = r"\(((?:[^()]++|\([^()]*+\))*+)\)"

# ![alt](url)
IMAGE = re.compile(r"!" + _LABEL + _DESTINATION)

# [text](url){_blank}
LINK_TARGET_BLANK = re.compile(_LABEL + _DESTINATION + r"\{_blank\}")

# [text](url)
LINK = re.compile(_LABEL + _DESTINATION)

# <https://example.com> in raw or already-neutralized form
AUTOLINK = re.compile(r"(?:<|&lt;)(https?://(?:[^\s<>&]++|&(?!gt;|lt;))++)(?:>|&gt;)")

# `code`, ``co`de``: runs are paired by InlineTransformer, not by a regex
BACKTICK_RUN = re.compile(r"`+")

# **strong** / __strong__, never inside a word. The body may hold single
# delimiters (and end with one, for ***x***) but never a doubled one.
STRONG = re.compile(
    r"(?<![\w*])\*\*(?!\s)((?:[^*]|\*(?!\*))+?\*?)(?<!\s)\*\*(?![\w*])"
    r"|(?<![\w_])__(?!\s)((?:[^_]|_(?!_))+?_?)(?<!\s)__(?![\w_])"
)

# *em* / _em_, never inside a word and never part of a longer run
EMPHASIS = re.compile(
    r"(?<![\w*])\*(?![\s*])([^*]+?)(?<![\s*])\*(?![\w*])"
    r"|(?<![\w_])_(?![\s_])([^_]+?)(?<![\s_])_(?![\w_])"
)

# ~~deleted~~
STRIKETHROUGH = re.compile(r"~~(?!\s)((?:[^~]|~(?!~))+?)(?<!\s)~~")

# Placeholder token written by PlaceholderMap.protect()
PLACEHOLDER = re.compile("\x00([0-9]+)\x00")
