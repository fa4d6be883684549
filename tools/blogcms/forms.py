"""
Decode flat form submissions into a BlogDocument.

Multipart parsers hand back either a scalar or a list per field depending
on how the form was posted; `first_or_self` is the one place that shape
is normalized. Nested values arrive as bracketed keys, e.g.
`sections[0][subsections][1][title]`.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

from .config import FORM_DEFAULT_AUTHOR
from .extraction import extract_sections
from .models import BlogDocument, Faq, Image, Section, Subsection


def first_or_self(value):
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _field(fields: Mapping[str, Any], key: str, default: str = "") -> str:
    value = first_or_self(fields.get(key))
    if value is None or value == "":
        return default
    return str(value)


def _optional(fields: Mapping[str, Any], key: str) -> Optional[str]:
    value = _field(fields, key)
    return value if value.strip() else None


def _indexed(fields: Mapping[str, Any], key_for: Callable[[int], str]) -> List[int]:
    """Consecutive indexes whose key is present and non-empty."""
    found = []
    i = 0
    while _field(fields, key_for(i)):
        found.append(i)
        i += 1
    return found


def decode_sections(fields: Mapping[str, Any]) -> List[Section]:
    sections = []
    for i in _indexed(fields, lambda n: f"sections[{n}][title]"):
        base = f"sections[{i}]"
        subsections = [
            Subsection(
                title=_field(fields, f"{base}[subsections][{j}][title]"),
                content=_field(fields, f"{base}[subsections][{j}][content]"),
            )
            for j in _indexed(fields, lambda n: f"{base}[subsections][{n}][title]")
        ]
        sections.append(
            Section(
                title=_field(fields, f"{base}[title]"),
                content=_field(fields, f"{base}[content]"),
                subsections=subsections,
            )
        )
    return sections


def decode_faqs(fields: Mapping[str, Any]) -> List[Faq]:
    return [
        Faq(
            question=_field(fields, f"faqs[{i}][question]"),
            answer=_field(fields, f"faqs[{i}][answer]"),
        )
        for i in _indexed(fields, lambda n: f"faqs[{n}][question]")
    ]


def _base_document(
    fields: Mapping[str, Any], uploaded: Optional[Dict[str, str]]
) -> BlogDocument:
    uploaded = uploaded or {}
    return BlogDocument(
        title=_field(fields, "title"),
        category=_field(fields, "category"),
        author=_field(fields, "author", FORM_DEFAULT_AUTHOR),
        date=_optional(fields, "date"),
        video_url=_optional(fields, "videoUrl"),
        custom_json_ld=_optional(fields, "jsonLD"),
        feature_image=Image(
            name=uploaded.get("featureImage") or _field(fields, "featureImageName"),
            alt=_field(fields, "featureImageAlt", "Feature image"),
        ),
        content_image=Image(
            name=uploaded.get("contentImage") or _field(fields, "contentImageName"),
            alt=_field(fields, "contentImageAlt", "Content image"),
        ),
        faqs=decode_faqs(fields),
    )


def decode_form_fields(
    fields: Mapping[str, Any], uploaded: Optional[Dict[str, str]] = None
) -> BlogDocument:
    """
    Structured form: sections and subsections as bracketed fields.

    `uploaded` maps `featureImage`/`contentImage` to the stored file names
    of images that came with the request; they win over the name fields.
    """
    document = _base_document(fields, uploaded)
    document.sections = decode_sections(fields)
    return document


def decode_wysiwyg_fields(
    fields: Mapping[str, Any], uploaded: Optional[Dict[str, str]] = None
) -> BlogDocument:
    """Editor form: one `wysiwygContent` markup blob split into sections."""
    document = _base_document(fields, uploaded)
    document.sections = extract_sections(
        _field(fields, "wysiwygContent"), document.title
    )
    return document
