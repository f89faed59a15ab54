# =============================================================================
# core/sanitizer.py  -  HTML to plain text
# =============================================================================
#
# Article bodies and summaries arrive as HTML.  Before they reach the tool
# output we strip every tag, decode a FIXED set of six named entities and
# collapse whitespace.
#
# KNOWN LIMITATION:
#   Only &nbsp; &amp; &lt; &gt; &quot; and &#39; are decoded.  Anything else
#   (&eacute;, &#8217;, ...) passes through untouched.
# =============================================================================

import re
from typing import Optional

ELLIPSIS = "..."

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")

# Applied in this order, one after another ("&amp;lt;" ends up as "<").
_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)


def strip_html(html: Optional[str]) -> str:
    """Remove tags, decode the six known entities, collapse whitespace.

    Empty or None input yields "".
    """
    if not html:
        return ""
    text = _TAG_RE.sub("", html)
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return _WHITESPACE_RE.sub(" ", text).strip()


def truncate_preview(html: Optional[str], limit: int) -> str:
    """Sanitize ``html`` and cut it to ``limit`` characters plus "..."."""
    return strip_html(html)[:limit] + ELLIPSIS
