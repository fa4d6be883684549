from __future__ import annotations

from typing import Any, Dict, List, Optional

from .config import CONTENT_IMAGE_PREFIX
from .content import render_content
from .models import Faq, Image, Section
from .templating import render_fragment
from .utils import slugify


def section_id(section: Section, index: int) -> str:
    if section.id:
        return section.id
    return slugify(section.title) or f"section-{index}"


def image_position(section_count: int) -> int:
    """Index of the section the content image follows: the middle one."""
    return section_count // 2


def _section_view(
    section: Section, index: int, image: Optional[Dict[str, str]]
) -> Dict[str, Any]:
    heading = section.title if section.title.strip() else ""
    return {
        "id": section_id(section, index),
        "heading": heading,
        "subsections": [
            {"title": sub.title, "body": render_content(sub.content)}
            for sub in section.subsections
        ],
        "body": render_content(section.content),
        "image": image,
    }


def render_sections(
    sections: List[Section],
    content_image: Optional[Image] = None,
    image_prefix: str = CONTENT_IMAGE_PREFIX,
) -> str:
    image = None
    if content_image is not None and content_image.name:
        image = {
            "src": f"{image_prefix.rstrip('/')}/{content_image.name}",
            "alt": content_image.alt or "Blog Content Image",
        }

    at = image_position(len(sections))
    views = [
        _section_view(section, i, image if i == at else None)
        for i, section in enumerate(sections)
    ]
    return render_fragment("sections.html.j2", sections=views)


def render_faqs(faqs: List[Faq]) -> str:
    if not faqs:
        return ""
    return render_fragment("faqs.html.j2", faqs=faqs)
