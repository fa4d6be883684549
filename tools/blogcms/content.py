from __future__ import annotations

from .config import (
    CONTENT_INDENT,
    DOCUMENT_TAGS,
    INLINE_FORMAT_TAG,
    LAYOUT_TAGS,
    PARAGRAPH_OPEN,
    TABLE_TAGS,
)


def has_inline_formatting(raw: str) -> bool:
    return INLINE_FORMAT_TAG.search(raw) is not None


def render_content(raw) -> str:
    """
    Normalize a content string into indented block markup.

    Markup that already carries paragraph/inline/list tags is re-indented
    line by line with its tags untouched; anything else is plain text and
    gets wrapped in a single paragraph. Entities are not escaped.
    """
    if not raw:
        return ""
    if has_inline_formatting(raw):
        lines = [
            f"{CONTENT_INDENT}{line.strip()}" if line.strip() else ""
            for line in raw.split("\n")
        ]
        return "\n".join(lines)
    return f"{CONTENT_INDENT}<p>{raw}</p>"


def preserve_formatting(html: str) -> str:
    """
    Drop layout/document/table wrapper tags but keep what they wrap,
    normalize `<p ...>` to `<p>`. Inline formatting, lists and links stay.
    """
    html = LAYOUT_TAGS.sub("", html)
    html = DOCUMENT_TAGS.sub("", html)
    html = TABLE_TAGS.sub("", html)
    html = PARAGRAPH_OPEN.sub("<p>", html)
    return html.strip()
