"""Content extraction package.

Wraps the third-party stack used to turn untrusted HTML into readable
content: a sandboxed BeautifulSoup/lxml document, readability-lxml for the
main-content pass, meta tag and JSON-LD sniffing, and markdownify for
Markdown rendering.
"""

from .extractor import ContentExtractor
from .markdown import convert_to_markdown
from .metadata import PageMetadata, extract_metadata
from .models import ExtractionOptions, ExtractionResult, SandboxOptions
from .sandbox import SandboxedDocument, parse_document

__all__ = [
    "ContentExtractor",
    "ExtractionOptions",
    "ExtractionResult",
    "PageMetadata",
    "SandboxOptions",
    "SandboxedDocument",
    "convert_to_markdown",
    "extract_metadata",
    "parse_document",
]
