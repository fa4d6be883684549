#!/usr/bin/env python3
from __future__ import annotations

import pathlib
import re

# ---------- Paths

# This assumes config.py sits in tools/blogcms/ under the repo root.
ROOT = pathlib.Path(__file__).resolve().parents[2]
TEMPLATE_DIR = pathlib.Path(__file__).resolve().parent / "templates"
PAGE_TEMPLATE = ROOT / "tools" / "templates" / "blog-template.html"
MANIFEST_PATH = ROOT / "blog-manifest.yml"
BLOGS_OUT = ROOT / "blogs"
INDEX_PATH = ROOT / "blogs.json"

# ---------- Config

DEFAULT_TITLE = "Blog Post"
DEFAULT_AUTHOR = "xMonks"
FORM_DEFAULT_AUTHOR = "xmonks"
PUBLISHER_NAME = "xMonks"
DEFAULT_VIDEO_URL = "https://www.youtube.com/embed/9QZs51GUQ_Q?si=UD5JUqqZTKF1bi2v"
CONTENT_IMAGE_PREFIX = "./imagesofblog"
INDEX_IMAGE_PREFIX = "./blogs/imagesofblog"
INDEX_LINK_PREFIX = "./blogs"
CONTENT_INDENT = " " * 6

# Template region markers

MAIN_CONTENT_OPEN = '<div class="blog-main-content">'
STICKY_VIDEO_OPEN = '<div class="blog-sticky-video">'
DIV_CLOSE = "</div>"

# Some shared regexes

HEADING_OPEN = re.compile(r"<h(?P<level>[1-6])\b[^>]*>", re.IGNORECASE)
ANY_TAG = re.compile(r"<[^>]*>")
INLINE_FORMAT_TAG = re.compile(
    r"<(?:p|strong|em|b|i|a|ul|ol|li)\b[^>]*>", re.IGNORECASE
)
LAYOUT_TAGS = re.compile(
    r"</?(?:div|span|section|article|aside|nav|header|footer|main)\b[^>]*>",
    re.IGNORECASE,
)
DOCUMENT_TAGS = re.compile(
    r"</?(?:meta|link|script|style|head|html|body|title)\b[^>]*>",
    re.IGNORECASE,
)
TABLE_TAGS = re.compile(
    r"</?(?:table|tr|td|th|thead|tbody|tfoot)\b[^>]*>", re.IGNORECASE
)
PARAGRAPH_OPEN = re.compile(r"<p\b[^>]*>", re.IGNORECASE)
EMPTY_PARAGRAPH = re.compile(r"<p\b[^>]*>\s*</p>", re.IGNORECASE)

TITLE_ELEMENT = re.compile(r"<title>.*?</title>")
CATEGORY_MARKER = re.compile(r'<span class="blog-meta-category">.*?</span>')
AUTHOR_MARKER = re.compile(r'<span class="blog-meta-author">.*?</span>')
DATE_MARKER = re.compile(r'<span class="blog-meta-date">.*?</span>')
H1_ELEMENT = re.compile(r"<h1>.*?</h1>")
JSON_LD_BLOCK = re.compile(
    r'<script type="application/ld\+json">.*?</script>', re.DOTALL
)

DOC_H1 = re.compile(r"<h1\b[^>]*>(?P<text>.*?)</h1>", re.IGNORECASE | re.DOTALL)
DOC_STRONG = re.compile(
    r"<strong\b[^>]*>(?P<text>.*?)</strong>", re.IGNORECASE | re.DOTALL
)

SLUG_STRIP = re.compile(r"[^\w\s-]", re.ASCII)
WHITESPACE_RUN = re.compile(r"\s+")
HYPHEN_RUN = re.compile(r"-{2,}")
