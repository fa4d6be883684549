from __future__ import annotations

import pathlib
import sys
from typing import List, Optional, Tuple

from .config import (
    AUTHOR_MARKER,
    CATEGORY_MARKER,
    CONTENT_IMAGE_PREFIX,
    DATE_MARKER,
    DEFAULT_VIDEO_URL,
    DIV_CLOSE,
    H1_ELEMENT,
    JSON_LD_BLOCK,
    MAIN_CONTENT_OPEN,
    STICKY_VIDEO_OPEN,
    TITLE_ELEMENT,
)
from .models import BlogDocument
from .sections import render_faqs, render_sections
from .structured_data import build_structured_data
from .templating import render_fragment
from .utils import format_display_date


def load_template(path: pathlib.Path) -> Optional[str]:
    try:
        return pathlib.Path(path).read_text(encoding="utf-8")
    except OSError as e:
        print(f"ERROR: could not load template {path}: {e}", file=sys.stderr)
        return None


def region_span(
    text: str,
    start_marker: str,
    end_marker: str,
    closing: str = DIV_CLOSE,
) -> Optional[Tuple[int, int]]:
    """
    Offsets of the span between two regions of `text`: from just after
    `start_marker` through the first `closing` after `end_marker`.
    None when either marker is missing.
    """
    start = text.find(start_marker)
    if start == -1:
        return None
    head_end = start + len(start_marker)
    end_open = text.find(end_marker, head_end)
    if end_open == -1:
        return None
    end_close = text.find(closing, end_open + len(end_marker))
    if end_close == -1:
        return None
    return head_end, end_close + len(closing)


def splice_region(
    text: str,
    start_marker: str,
    end_marker: str,
    replacement: str,
    closing: str = DIV_CLOSE,
) -> Optional[str]:
    """
    Replace the span between two regions of `text`.

    Keeps everything up to and including `start_marker`, drops everything
    from there through the first `closing` after `end_marker`, and puts
    `replacement` in between. None when either marker is missing.
    """
    span = region_span(text, start_marker, end_marker, closing)
    if span is None:
        return None
    return text[: span[0]] + replacement + text[span[1] :]


def apply_edits(text: str, edits: List[Tuple[int, int, str]]) -> str:
    """
    Apply `(start, end, replacement)` edits, all located on `text` itself.

    Inserted text is never searched again. An edit overlapping one listed
    before it is dropped.
    """
    accepted: List[Tuple[int, int, str]] = []
    for start, end, new in edits:
        if any(start < e and s < end for s, e, _ in accepted):
            continue
        accepted.append((start, end, new))
    for start, end, new in sorted(accepted, key=lambda edit: edit[0], reverse=True):
        text = text[:start] + new + text[end:]
    return text


def render_content_region(
    document: BlogDocument,
    default_video_url: str = DEFAULT_VIDEO_URL,
    image_prefix: str = CONTENT_IMAGE_PREFIX,
) -> str:
    """Main column body plus a rebuilt sticky video column."""
    return render_fragment(
        "content_region.html.j2",
        sections=render_sections(
            document.sections, document.content_image, image_prefix=image_prefix
        ),
        faqs=render_faqs(document.faqs),
        video_url=document.video_url or default_video_url,
    ).rstrip("\n")


def compose(
    template: Optional[str],
    document: BlogDocument,
    default_video_url: str = DEFAULT_VIDEO_URL,
    image_prefix: str = CONTENT_IMAGE_PREFIX,
) -> Optional[str]:
    """
    Merge a document into the page template.

    Every marker is located on the template as loaded, so document text
    that looks like a marker is never replaced itself. Returns None when
    there is no template, or the template lacks the main content / sticky
    video containers.
    """
    if not template:
        return None

    span = region_span(template, MAIN_CONTENT_OPEN, STICKY_VIDEO_OPEN)
    if span is None:
        print(
            "ERROR: template has no main content / sticky video containers",
            file=sys.stderr,
        )
        return None
    region = render_content_region(
        document, default_video_url=default_video_url, image_prefix=image_prefix
    )
    edits = [(span[0], span[1], region)]

    display_date = format_display_date(document.date)
    replacements = [
        (TITLE_ELEMENT, f"<title>{document.title}</title>"),
        (
            CATEGORY_MARKER,
            '<span class="blog-meta-category"><i class="fas fa-user-tie"></i> '
            f"{document.category}</span>",
        ),
        (
            AUTHOR_MARKER,
            f'<span class="blog-meta-author"><i class="fas fa-user"></i> {document.author}</span>',
        ),
        (
            DATE_MARKER,
            '<span class="blog-meta-date"><i class="fas fa-calendar-alt"></i> '
            f"{display_date}</span>",
        ),
        (H1_ELEMENT, f"<h1>{document.title}</h1>"),
    ]

    json_ld = build_structured_data(
        document.custom_json_ld,
        document.faqs,
        title=document.title,
        author=document.author,
        date=document.date,
    )
    if json_ld.strip():
        replacements.append((JSON_LD_BLOCK, json_ld))

    for pattern, new in replacements:
        m = pattern.search(template)
        if m is not None:
            edits.append((m.start(), m.end(), new))
    return apply_edits(template, edits)
