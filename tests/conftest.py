import pytest

from blogcms.models import BlogDocument, Faq, Image, Section, Subsection

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <title>Old Title</title>
  <script type="application/ld+json">
  {"@context": "https://schema.org", "@type": "Article", "headline": "Old"}
  </script>
</head>
<body>
  <div class="blog-meta">
    <span class="blog-meta-category"><i class="fas fa-user-tie"></i> Old Category</span>
    <span class="blog-meta-author"><i class="fas fa-user"></i> Old Author</span>
    <span class="blog-meta-date"><i class="fas fa-calendar-alt"></i> Jan 1, 2020</span>
  </div>
  <h1>Old Title</h1>
  <main class="blog-layout">
  <div class="blog-main-content">
    <p>placeholder body</p>
  </div>
  <div class="blog-sticky-video">
    <iframe src="https://old.example/video"></iframe>
  </div>
  </main>
  <footer class="blog-footer"><p>keep me</p></footer>
</body>
</html>
"""


@pytest.fixture
def page_template() -> str:
    return PAGE_TEMPLATE


@pytest.fixture
def leadership_doc() -> BlogDocument:
    return BlogDocument(
        title="AI and Leadership",
        category="Leadership",
        author="xmonks",
        date="2025-09-15",
        sections=[
            Section(title="Why It Matters", content="Leaders face new tools."),
            Section(
                title="In Practice",
                subsections=[
                    Subsection(title="Decisions", content="<p>Use <strong>data</strong>.</p>"),
                    Subsection(title="Delegation", content="Hand off routine work."),
                ],
            ),
        ],
        faqs=[
            Faq(question="Will AI replace managers?", answer="No."),
            Faq(question="Where to start?", answer="With one workflow."),
        ],
        feature_image=Image(name="lead.jpg", alt="Leader"),
    )
