from __future__ import annotations

import html as html_lib
import json
import re
from dataclasses import dataclass, field, replace
from functools import reduce
from typing import Iterator, List, NamedTuple, Tuple, Union

from .config import ANY_TAG, DOC_H1, DOC_STRONG, EMPTY_PARAGRAPH, HEADING_OPEN
from .content import preserve_formatting
from .models import Section, Subsection
from .utils import _norm_text

_HEADING_CLOSE = {
    n: re.compile(rf"</h{n}\s*>", re.IGNORECASE) for n in range(1, 7)
}
_HEADING_OPEN_AT = {
    n: re.compile(rf"<h{n}\b[^>]*>", re.IGNORECASE) for n in range(1, 7)
}


class HeadingToken(NamedTuple):
    level: int
    text: str


class ContentToken(NamedTuple):
    markup: str


Token = Union[HeadingToken, ContentToken]


def heading_text(inner: str) -> str:
    return ANY_TAG.sub("", inner).strip()


def tokenize(html: str) -> Iterator[Token]:
    """
    Split markup into heading and content tokens, in document order.

    Two states: scanning content for the next `<hN>` opener, then scanning
    for its `</hN>`. An opener whose closer is missing (or comes after the
    next opener of the same level) is left in the content stream.
    """
    start = scan = 0
    while True:
        m = HEADING_OPEN.search(html, scan)
        if m is None:
            break
        level = int(m.group("level"))
        close = _HEADING_CLOSE[level].search(html, m.end())
        if close is not None:
            reopen = _HEADING_OPEN_AT[level].search(html, m.end(), close.start())
            if reopen is not None:
                close = None
        if close is None:
            scan = m.end()
            continue

        chunk = html[start : m.start()]
        if chunk.strip():
            yield ContentToken(chunk)
        yield HeadingToken(level, heading_text(html[m.end() : close.start()]))
        start = scan = close.end()

    tail = html[start:]
    if tail.strip():
        yield ContentToken(tail)


class _ScanState(NamedTuple):
    sections: Tuple[Section, ...] = ()
    title_handled: bool = False


def _join(existing: str, addition: str) -> str:
    return f"{existing} {addition}" if existing else addition


def _on_heading(state: _ScanState, token: HeadingToken, title: str) -> _ScanState:
    if not state.title_handled:
        state = state._replace(title_handled=True)
        # the post title is rendered by the page itself
        if title and token.text.lower() == title.strip().lower():
            return state

    if token.level <= 2:
        return state._replace(sections=state.sections + (Section(title=token.text),))

    if not state.sections:
        return state
    current = state.sections[-1]
    current = replace(
        current, subsections=current.subsections + [Subsection(title=token.text)]
    )
    return state._replace(sections=state.sections[:-1] + (current,))


def _on_content(state: _ScanState, token: ContentToken) -> _ScanState:
    # leading content gets an untitled section even if nothing survives cleaning
    sections = state.sections or (Section(),)
    cleaned = preserve_formatting(token.markup.strip())
    if not cleaned:
        return state._replace(sections=sections)

    current = sections[-1]
    if current.subsections:
        last = current.subsections[-1]
        last = replace(last, content=_join(last.content, cleaned))
        current = replace(current, subsections=current.subsections[:-1] + [last])
    else:
        current = replace(current, content=_join(current.content, cleaned))
    return state._replace(sections=sections[:-1] + (current,))


def _step(state: _ScanState, token: Token, title: str) -> _ScanState:
    if isinstance(token, HeadingToken):
        return _on_heading(state, token, title)
    return _on_content(state, token)


def extract_sections(html: str, title: str = "") -> List[Section]:
    """
    Turn rich markup (WYSIWYG output, converted documents) into Sections.

    - h1/h2 open a section, h3..h6 add a subsection to the current one.
    - A first heading equal to `title` (case-insensitive) is dropped.
    - Content before any heading becomes a section with no title.
    """
    if not html:
        return []
    html = _norm_text(html)

    final = reduce(
        lambda state, token: _step(state, token, title or ""),
        tokenize(html),
        _ScanState(),
    )
    if final.sections:
        return list(final.sections)

    cleaned = preserve_formatting(html)
    if cleaned:
        return [Section(content=cleaned)]
    return []


@dataclass
class ExtractedDocument:
    title: str = ""
    sections: List[Section] = field(default_factory=list)
    json_ld: str = ""
    text: str = ""


def detect_title(html: str) -> str:
    m = DOC_H1.search(html) or DOC_STRONG.search(html)
    return heading_text(m.group("text")) if m else ""


def find_embedded_json_ld(text: str) -> str:
    """
    Return the first schema.org JSON object pasted into a document, verbatim.
    """
    decoder = json.JSONDecoder()
    i = text.find("{")
    while i != -1:
        try:
            obj, end = decoder.raw_decode(text, i)
        except ValueError:
            i = text.find("{", i + 1)
            continue
        if isinstance(obj, dict) and "schema.org" in str(obj.get("@context", "")):
            return text[i:end]
        i = text.find("{", end)
    return ""


def strip_embedded_json_ld(html: str, payload: str) -> str:
    """
    Remove a pasted JSON-LD payload from the markup so it is not also
    rendered as body text. Matches the raw text or its entity-escaped form;
    a payload split across several elements is left in place.
    """
    if not payload:
        return html
    for form in (payload, html_lib.escape(payload, quote=False), html_lib.escape(payload)):
        at = html.find(form)
        if at != -1:
            return EMPTY_PARAGRAPH.sub("", html[:at] + html[at + len(form) :])
    return html


def extract_document(html: str, plain_text: str = "") -> ExtractedDocument:
    """
    Outline a converted document: title, sections, embedded JSON-LD.
    `plain_text` is the converter's raw text rendition, when it has one.
    """
    if not html:
        return ExtractedDocument(text=plain_text or "")
    html = _norm_text(html)
    title = detect_title(html)
    text = plain_text or html_lib.unescape(ANY_TAG.sub("", html))
    json_ld = find_embedded_json_ld(text)
    return ExtractedDocument(
        title=title,
        sections=extract_sections(strip_embedded_json_ld(html, json_ld), title),
        json_ld=json_ld,
        text=text,
    )
