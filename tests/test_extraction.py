"""Tests for the extraction package."""

import pytest
from bs4 import BeautifulSoup

from src.extraction import (
    ContentExtractor,
    ExtractionOptions,
    SandboxOptions,
    convert_to_markdown,
    extract_metadata,
    parse_document,
)
from src.extraction.metadata import extract_schema_org
from tests.conftest import load_fixture


@pytest.mark.unit
class TestMetadata:
    """Test metadata sniffing."""

    def test_meta_tags(self) -> None:
        """Test title, author, description and image from meta tags."""
        soup = BeautifulSoup(load_fixture("simple-article.html"), "lxml")
        metadata = extract_metadata(soup)

        assert metadata.title == "Simple Test Article"
        assert metadata.author == "Jane Doe"
        assert metadata.description.startswith("A short article")
        assert metadata.published == "2024-03-15T09:30:00Z"
        assert metadata.image == "/images/lead.jpg"

    def test_domain_from_canonical_link(self) -> None:
        """Test the domain falls back to the canonical link."""
        soup = BeautifulSoup(load_fixture("simple-article.html"), "lxml")

        assert extract_metadata(soup).domain == "example.com"

    def test_domain_prefers_url(self) -> None:
        """Test an explicit URL wins over the canonical link."""
        soup = BeautifulSoup(load_fixture("simple-article.html"), "lxml")

        metadata = extract_metadata(soup, url="https://blog.example.org/post")
        assert metadata.domain == "blog.example.org"

    def test_schema_org_fallbacks(self) -> None:
        """Test JSON-LD fills fields missing from meta tags."""
        html = """
        <html><head>
        <script type="application/ld+json">
        {"@context": "https://schema.org", "@graph": [
            {"@type": "WebSite", "name": "Example"},
            {"@type": "Article", "headline": "Graph Headline",
             "datePublished": "2023-01-02",
             "author": [{"name": "Ann"}, {"name": "Bob"}],
             "image": {"url": "https://example.com/a.png"}}
        ]}
        </script>
        </head><body><p>Text</p></body></html>
        """
        metadata = extract_metadata(BeautifulSoup(html, "lxml"))

        assert metadata.title == "Graph Headline"
        assert metadata.author == "Ann, Bob"
        assert metadata.published == "2023-01-02"
        assert metadata.image == "https://example.com/a.png"

    def test_multiple_schema_blocks(self) -> None:
        """Test several JSON-LD blocks are returned as a list."""
        html = """
        <script type="application/ld+json">{"@type": "Article"}</script>
        <script type="application/ld+json">{"@type": "BreadcrumbList"}</script>
        <script type="application/ld+json">{not json</script>
        """
        schema = extract_schema_org(BeautifulSoup(html, "lxml"))

        assert schema == [{"@type": "Article"}, {"@type": "BreadcrumbList"}]

    def test_no_metadata(self) -> None:
        """Test a bare document yields no metadata."""
        metadata = extract_metadata(BeautifulSoup("<p>Hello</p>", "lxml"))

        assert metadata.title is None
        assert metadata.author is None
        assert metadata.description is None
        assert metadata.domain is None
        assert metadata.schema_org_data is None

    def test_byline_element(self) -> None:
        """Test the author falls back to a byline element."""
        html = '<article><p class="byline">By Sam Writer</p><p>Body</p></article>'

        assert extract_metadata(BeautifulSoup(html, "lxml")).author == "Sam Writer"


@pytest.mark.unit
class TestContentExtractor:
    """Test the readability based extractor."""

    def test_parse_simple_article(self) -> None:
        """Test content and word count of a simple article."""
        document = parse_document(load_fixture("simple-article.html"))
        result = ContentExtractor(document, ExtractionOptions()).parse()

        assert "first paragraph" in result.content
        assert "Copyright Example News" not in result.content
        assert result.word_count > 50
        assert result.content_markdown is None

    def test_exact_selectors_removed(self) -> None:
        """Test exact selector removal cleans the document."""
        document = parse_document(load_fixture("complex-article.html"))
        ContentExtractor(
            document, ExtractionOptions(remove_partial_selectors=False)
        ).parse()

        assert document.soup.find("nav") is None
        assert document.soup.find("aside") is None
        assert document.soup.select_one(".ad-container") is not None

    def test_partial_selectors_removed(self) -> None:
        """Test partial selector removal cleans the document."""
        document = parse_document(load_fixture("complex-article.html"))
        ContentExtractor(document, ExtractionOptions(remove_exact_selectors=False)).parse()

        assert document.soup.select_one(".ad-container") is None
        assert document.soup.select_one(".newsletter-signup") is None
        assert document.soup.find("nav") is not None
        assert document.soup.find("article") is not None

    def test_selectors_kept_when_disabled(self) -> None:
        """Test nothing is removed with both toggles off."""
        document = parse_document(load_fixture("complex-article.html"))
        ContentExtractor(
            document,
            ExtractionOptions(
                remove_exact_selectors=False, remove_partial_selectors=False
            ),
        ).parse()

        assert document.soup.find("nav") is not None
        assert document.soup.select_one(".ad-container") is not None

    def test_remove_images(self) -> None:
        """Test images are stripped from the content."""
        document = parse_document(load_fixture("complex-article.html"))
        result = ContentExtractor(document, ExtractionOptions(remove_images=True)).parse()

        assert "<img" not in result.content
        assert document.soup.find("img") is None

    def test_url_makes_domain(self) -> None:
        """Test the option URL sets the domain."""
        document = parse_document(load_fixture("complex-article.html"))
        result = ContentExtractor(
            document, ExtractionOptions(url="https://www.news.example.net/a/b")
        ).parse()

        assert result.domain == "news.example.net"

    def test_empty_document(self) -> None:
        """Test an empty body yields empty content."""
        document = parse_document(load_fixture("empty.html"))
        result = ContentExtractor(document, ExtractionOptions()).parse()

        assert result.content == ""
        assert result.word_count == 0

    def test_title_from_document_title(self) -> None:
        """Test the title falls back to the document title."""
        html = "<html><head><title>Only A Title</title></head><body><p>Some words here.</p></body></html>"
        result = ContentExtractor(parse_document(html), ExtractionOptions()).parse()

        assert result.title == "Only A Title"

    def test_short_page_unwrapped(self) -> None:
        """Test a short page yields its inner HTML without a body element."""
        result = ContentExtractor(
            parse_document("<p>Hello world</p>"), ExtractionOptions()
        ).parse()

        assert "<body" not in result.content
        assert "<p>Hello world</p>" in result.content
        assert result.word_count == 2

    def test_body_used_when_readability_keeps_nothing(self) -> None:
        """Test the cleaned body is used when readability drops everything."""
        result = ContentExtractor(
            parse_document("<div><h1>T</h1><pre><code>x=1</code></pre></div>"),
            ExtractionOptions(),
        ).parse()

        assert "<body" not in result.content
        assert "<h1>T</h1>" in result.content
        assert "<code>x=1</code>" in result.content


@pytest.mark.unit
class TestMarkdownConversion:
    """Test HTML to Markdown conversion."""

    def test_atx_headings(self) -> None:
        """Test headings use the ATX style."""
        markdown = convert_to_markdown("<h1>Title</h1><h2>Section</h2><p>Text</p>")

        assert "# Title" in markdown
        assert "## Section" in markdown
        assert "===" not in markdown
        assert "---" not in markdown

    def test_fenced_code_blocks(self) -> None:
        """Test code blocks are fenced."""
        markdown = convert_to_markdown("<pre><code>x = 1\ny = 2</code></pre>")

        assert markdown.startswith("```")
        assert markdown.endswith("```")
        assert "x = 1\ny = 2" in markdown

    def test_paragraphs_and_links(self) -> None:
        """Test paragraphs lose their tags and links are kept."""
        markdown = convert_to_markdown(
            '<div><p>Hello <a href="https://example.com">world</a></p><p>Bye</p></div>'
        )

        assert "<p>" not in markdown
        assert "[world](https://example.com)" in markdown
        assert "\n\n\n" not in markdown

    def test_empty_input(self) -> None:
        """Test empty HTML converts to an empty string."""
        assert convert_to_markdown("") == ""


@pytest.mark.unit
class TestSandboxOptions:
    """Test sandbox configuration."""

    def test_defaults_enable_everything(self) -> None:
        """Test all restrictions are on by default."""
        options = SandboxOptions()

        assert options.disable_scripts is True
        assert options.disable_external_resources is True
        assert options.headless is True

    def test_visual_mode_rejected(self) -> None:
        """Test a non-headless document cannot be requested."""
        with pytest.raises(ValueError):
            parse_document("<p>x</p>", sandbox=SandboxOptions(headless=False))

    def test_extraction_options_are_frozen(self) -> None:
        """Test extraction options cannot be changed after creation."""
        options = ExtractionOptions()

        with pytest.raises(Exception):
            options.debug = True
