"""URL safety checks for rendered links and images.

The renderer always neutralizes raw HTML. URL schemes are a separate
concern: a ``[click](javascript:...)`` link contains no markup at all.
When ``RenderConfig.strip_dangerous_urls`` is set, such URLs are replaced
before they reach an ``href`` or ``src`` attribute.

Example:
    >>> safe_url("javascript:alert(1)")
    '#'
    >>> safe_url("https://example.com")
    'https://example.com'
"""

import html

_DANGEROUS_SCHEMES = frozenset(("javascript:", "data:", "vbscript:"))

# Replacement for a rejected URL
BLOCKED_URL = "#"


def is_dangerous_url(url: str) -> bool:
    """Check if URL uses a dangerous scheme.

    Entities are decoded and whitespace removed first, since browsers
    ignore both when resolving a scheme (``java&#x09;script:``).
    """
    lower = "".join(html.unescape(url).split()).lower()
    return any(lower.startswith(s) for s in _DANGEROUS_SCHEMES)


def safe_url(url: str) -> str:
    """Return url unchanged, or BLOCKED_URL if its scheme is dangerous."""
    return BLOCKED_URL if is_dangerous_url(url) else url
