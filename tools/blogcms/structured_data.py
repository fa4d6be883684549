from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from .config import DEFAULT_AUTHOR, DEFAULT_TITLE, PUBLISHER_NAME
from .models import Faq
from .templating import render_fragment
from .utils import iso_today

SCHEMA_CONTEXT = "https://schema.org"


def faq_page_schema(faqs: List[Faq]) -> Dict[str, Any]:
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "FAQPage",
        "mainEntity": [
            {
                "@type": "Question",
                "name": faq.question,
                "acceptedAnswer": {"@type": "Answer", "text": faq.answer},
            }
            for faq in faqs
        ],
    }


def article_schema(
    title: Optional[str] = None,
    author: Optional[str] = None,
    date: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "Article",
        "headline": title or DEFAULT_TITLE,
        "author": {"@type": "Person", "name": author or DEFAULT_AUTHOR},
        "datePublished": date or iso_today(),
        "publisher": {"@type": "Organization", "name": PUBLISHER_NAME},
    }


def build_schema(
    faqs: List[Faq],
    title: Optional[str] = None,
    author: Optional[str] = None,
    date: Optional[str] = None,
) -> Dict[str, Any]:
    if faqs:
        return faq_page_schema(faqs)
    return article_schema(title, author, date)


def script_fragment(payload: str) -> str:
    return render_fragment("json_ld.html.j2", payload=payload).rstrip("\n")


def is_valid_json(text: str) -> bool:
    try:
        json.loads(text)
    except ValueError:
        return False
    return True


def build_structured_data(
    custom_json_ld: Optional[str],
    faqs: List[Faq],
    title: Optional[str] = None,
    author: Optional[str] = None,
    date: Optional[str] = None,
) -> str:
    """
    JSON-LD `<script>` fragment for the page head.

    - A non-blank custom payload that parses as JSON is embedded verbatim.
    - Otherwise: FAQPage when there are FAQs, else Article.
    """
    if custom_json_ld and custom_json_ld.strip():
        if is_valid_json(custom_json_ld):
            return script_fragment(custom_json_ld)
        print("! invalid custom JSON-LD, falling back to generated schema")

    schema = build_schema(faqs, title, author, date)
    payload = json.dumps(schema, indent=4, ensure_ascii=False)
    # keep answer text from closing the script element early
    return script_fragment(payload.replace("</", "<\\/"))
