from __future__ import annotations

import json
import pathlib
from typing import Any, Dict, Optional

from .compositor import compose
from .extraction import extract_document, extract_sections
from .index import build_index_entry
from .models import BlogDocument, IndexEntry
from .utils import _norm_text, post_slug, read_yaml

_HTML_SUFFIXES = {".html", ".htm"}


def _read_mapping(path: pathlib.Path) -> Dict[str, Any]:
    if path.suffix.lower() == ".json":
        data = json.loads(path.read_text(encoding="utf-8"))
    else:
        data = read_yaml(path)
    if not isinstance(data, dict):
        raise RuntimeError(f"Post file must contain a mapping: {path}")
    return data


def load_post_document(entry: Dict[str, Any], base_dir: pathlib.Path) -> BlogDocument:
    """
    Build a document from a manifest entry.

    `source` is either a YAML/JSON document or an HTML export (editor or
    converted document) that is split into sections. Other keys on the
    entry override the file's fields.
    """
    overrides = {k: v for k, v in entry.items() if k != "source"}
    source = entry.get("source")
    if not source:
        return BlogDocument.from_dict(overrides)

    path = base_dir / source
    if path.suffix.lower() not in _HTML_SUFFIXES:
        return BlogDocument.from_dict({**_read_mapping(path), **overrides})

    html = _norm_text(path.read_text(encoding="utf-8"))
    title = str(overrides.get("title") or "")
    if title:
        document = BlogDocument.from_dict(overrides)
        document.sections = extract_sections(html, title)
        return document

    outline = extract_document(html)
    fields = {"title": outline.title, **overrides}
    if outline.json_ld and not fields.get("customJsonLD"):
        fields["customJsonLD"] = outline.json_ld
    document = BlogDocument.from_dict(fields)
    document.sections = outline.sections
    return document


def publish_post(
    document: BlogDocument,
    template: Optional[str],
    settings: Dict[str, Any],
) -> Optional[IndexEntry]:
    """
    Render one post into `<output_dir>/<slug>.html`.

    Returns its index entry, or None when nothing was written.
    """
    missing = document.missing_fields()
    if missing:
        print(f"! skipping {document.title or '<untitled>'}: missing {', '.join(missing)}")
        return None

    slug = post_slug(document.title)
    filename = f"{slug}.html"
    html = compose(
        template,
        document,
        default_video_url=settings["default_video_url"],
        image_prefix=settings["content_image_prefix"],
    )
    if html is None:
        print(f"! failed to render {slug}")
        return None

    out_dir: pathlib.Path = settings["output_dir"]
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / filename
    if out_path.exists() and out_path.read_text(encoding="utf-8") == html:
        print(f"= {slug} unchanged, skip")
    else:
        out_path.write_text(html, encoding="utf-8")
        print(f"✓ rendered {out_path.name}")

    return build_index_entry(
        document,
        filename,
        image_prefix=settings["index_image_prefix"],
        link_prefix=settings["index_link_prefix"],
    )
