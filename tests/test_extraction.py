from blogcms.extraction import (
    ContentToken,
    HeadingToken,
    extract_document,
    extract_sections,
    strip_embedded_json_ld,
    find_embedded_json_ld,
    tokenize,
)
from blogcms.models import Section, Subsection


def test_tokenize_alternates_headings_and_content() -> None:
    """Headings become tokens with their level and tag-free text."""
    tokens = list(tokenize("<p>a</p><h2 class='x'>T <em>i</em></h2><p>b</p>"))
    assert tokens == [
        ContentToken("<p>a</p>"),
        HeadingToken(2, "T i"),
        ContentToken("<p>b</p>"),
    ]


def test_tokenize_heading_spanning_lines() -> None:
    """A heading may wrap across lines."""
    tokens = list(tokenize("<H3>\n  Long\n  heading\n</H3>"))
    assert tokens == [HeadingToken(3, "Long\n  heading")]


def test_tokenize_unclosed_heading_stays_content() -> None:
    """An opener without a closer is left in the content stream."""
    tokens = list(tokenize("<h2>Broken <p>text</p>"))
    assert tokens == [ContentToken("<h2>Broken <p>text</p>")]


def test_tokenize_mismatched_close_does_not_swallow_next_heading() -> None:
    """A wrong closer does not make the heading run into the next one."""
    tokens = list(tokenize("<h2>A</h3><p>x</p><h2>B</h2><p>y</p>"))
    assert tokens == [
        ContentToken("<h2>A</h3><p>x</p>"),
        HeadingToken(2, "B"),
        ContentToken("<p>y</p>"),
    ]


def test_extract_sections_drops_title_heading_keeps_intro() -> None:
    """Title heading is dropped; intro before the first section keeps no title."""
    html = "<h1>My Title</h1><p>Intro</p><h2>Sec A</h2><p>Body A</p>"
    assert extract_sections(html, "My Title") == [
        Section(title="", content="<p>Intro</p>"),
        Section(title="Sec A", content="<p>Body A</p>", subsections=[]),
    ]


def test_extract_sections_title_match_is_case_insensitive() -> None:
    """Title dedup ignores case."""
    sections = extract_sections("<h1>MY TITLE</h1><h2>Next</h2>", "my title")
    assert [s.title for s in sections] == ["Next"]


def test_extract_sections_only_first_heading_is_checked() -> None:
    """A later heading equal to the title still opens a section."""
    sections = extract_sections("<h2>Intro</h2><p>x</p><h2>My Title</h2>", "My Title")
    assert [s.title for s in sections] == ["Intro", "My Title"]


def test_extract_sections_without_title_keeps_h1() -> None:
    """With no post title nothing is deduplicated."""
    sections = extract_sections("<h1>Heading</h1><p>x</p>")
    assert sections == [Section(title="Heading", content="<p>x</p>")]


def test_extract_sections_builds_subsections() -> None:
    """h3+ nest under the current section; content goes to the last subsection."""
    html = (
        "<h2>S</h2><p>intro</p>"
        "<h3>Sub1</h3><p>a</p><div><p>b</p></div>"
        "<h4>Sub2</h4><p>c</p>"
    )
    assert extract_sections(html) == [
        Section(
            title="S",
            content="<p>intro</p>",
            subsections=[
                Subsection(title="Sub1", content="<p>a</p><p>b</p>"),
                Subsection(title="Sub2", content="<p>c</p>"),
            ],
        )
    ]


def test_extract_sections_joins_chunks_with_space() -> None:
    """Content chunks landing in the same place are joined by one space."""
    html = "<p>a</p><h1>My Title</h1><p>b</p>"
    assert extract_sections(html, "My Title") == [Section(content="<p>a</p> <p>b</p>")]


def test_extract_sections_subheading_before_any_section_is_ignored() -> None:
    """An h3 with no section to attach to is a no-op."""
    sections = extract_sections("<h3>Lonely</h3><p>text</p>")
    assert sections == [Section(content="<p>text</p>")]


def test_extract_sections_falls_back_to_whole_input() -> None:
    """Input that yields no section becomes one untitled section."""
    sections = extract_sections("<h3>Only a subheading</h3>")
    assert sections == [Section(content="<h3>Only a subheading</h3>")]


def test_extract_sections_blank_input() -> None:
    """Blank input yields nothing."""
    assert extract_sections("") == []
    assert extract_sections("  \r\n ") == []


def test_extract_sections_is_deterministic() -> None:
    """Same input, same sections."""
    html = "<h2>A</h2><p>1</p><h3>B</h3><p>2</p>"
    assert extract_sections(html, "x") == extract_sections(html, "x")


def test_extract_document_detects_title_and_json_ld() -> None:
    """Converted documents yield a title, sections and any pasted JSON-LD."""
    json_ld = (
        '{"@context": "https://schema.org", "@type": "Article", '
        '"author": {"@type": "Person", "name": "A"}}'
    )
    html = f"<h1>Quarterly <b>Review</b></h1><p>Body</p><h2>Plan</h2><p>{json_ld}</p>"
    outline = extract_document(html)
    assert outline.title == "Quarterly Review"
    assert [s.title for s in outline.sections] == ["", "Plan"]
    assert outline.json_ld == json_ld
    assert all(json_ld not in s.content for s in outline.sections)
    assert outline.sections[1] == Section(title="Plan")


def test_extract_document_strong_title_fallback() -> None:
    """Without an h1 the first bold run is the title."""
    outline = extract_document("<p><strong>Bold Title</strong></p><h2>A</h2><p>x</p>")
    assert outline.title == "Bold Title"
    assert outline.json_ld == ""
    assert outline.sections[-1] == Section(title="A", content="<p>x</p>")


def test_find_embedded_json_ld_ignores_other_objects() -> None:
    """Only schema.org objects count."""
    text = 'config {"a": 1} then {not json} and {"@context": "http://schema.org"}'
    assert find_embedded_json_ld(text) == '{"@context": "http://schema.org"}'
    assert find_embedded_json_ld("no braces here") == ""


def test_strip_embedded_json_ld_handles_escaped_payload() -> None:
    """Entity-escaped payloads are removed along with their empty paragraph."""
    payload = '{"@context": "https://schema.org", "@type": "Article"}'
    html = '<p>Keep</p><p>{&quot;@context&quot;: &quot;https://schema.org&quot;, &quot;@type&quot;: &quot;Article&quot;}</p>'
    assert strip_embedded_json_ld(html, payload) == "<p>Keep</p>"
    assert strip_embedded_json_ld(html, "") == html


def test_extract_document_keeps_body_free_of_json_ld() -> None:
    """A payload in its own paragraph does not reach the section content."""
    payload = '{"@context": "https://schema.org", "@type": "Article"}'
    outline = extract_document(f"<h2>Intro</h2><p>Hello</p><p>{payload}</p>")
    assert outline.json_ld == payload
    assert outline.sections == [Section(title="Intro", content="<p>Hello</p>")]


def test_extract_sections_wrapper_only_lead_opens_untitled_section() -> None:
    """Leading markup that cleans to nothing still opens an untitled section."""
    sections = extract_sections("<div> </div><h2>A</h2><p>x</p>")
    assert sections == [Section(), Section(title="A", content="<p>x</p>")]
