# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""Readable content extraction on top of readability-lxml."""

import logging
import time

from bs4 import BeautifulSoup
from readability import Document

from .metadata import extract_metadata
from .models import ExtractionOptions, ExtractionResult
from .sandbox import SandboxedDocument

logger = logging.getLogger(__name__)

# Page furniture removed by exact CSS selector
EXACT_SELECTORS = [
    "noscript",
    "template",
    "nav",
    "aside",
    "footer",
    "form",
    "button",
    "dialog",
    "[hidden]",
    "[aria-hidden='true']",
    "[role='banner']",
    "[role='navigation']",
    "[role='complementary']",
    "[role='contentinfo']",
    "[role='dialog']",
    ".ad",
    ".ads",
    ".advert",
    ".advertisement",
    ".sponsored",
    ".social",
    ".share",
    ".sharing",
    ".newsletter",
    ".related",
    ".comments",
    "#comments",
    ".breadcrumbs",
    ".pagination",
    ".popup",
    ".sidebar",
]

# Substrings matched against class and id attributes
PARTIAL_PATTERNS = [
    "advert",
    "adsense",
    "ad-slot",
    "ad-container",
    "banner",
    "breadcrumb",
    "cookie",
    "disqus",
    "newsletter",
    "outbrain",
    "popup",
    "promo",
    "related-",
    "share",
    "sidebar",
    "social",
    "sponsor",
    "subscribe",
    "taboola",
]

# Never removed by clutter rules, whatever their class says
PROTECTED_TAGS = {"html", "head", "body", "main", "article"}

IMAGE_TAGS = ["img", "picture", "source", "svg"]


class ContentExtractor:
    """Extract the readable main content and metadata from a document."""

    def __init__(self, document: SandboxedDocument, options: ExtractionOptions) -> None:
        """Initialize extractor.

        Args:
            document: Sandboxed document to extract from
            options: Extraction options for this document
        """
        self.document = document
        self.options = options
        # debug promotes step diagnostics to INFO so they show with default config
        self._log_level = logging.INFO if options.debug else logging.DEBUG

    def parse(self) -> ExtractionResult:
        """Run the extraction.

        Returns:
            ExtractionResult with content and every inferable metadata field
        """
        start = time.perf_counter()
        soup = self.document.soup
        url = self.options.url or self.document.url

        metadata = extract_metadata(soup, url)

        if self.options.remove_exact_selectors:
            self._log("Removed %d elements by exact selector", self._remove_exact(soup))
        if self.options.remove_partial_selectors:
            self._log(
                "Removed %d elements by partial selector", self._remove_partial(soup)
            )
        if self.options.remove_images:
            self._log("Removed %d image elements", self._remove_images(soup))

        content = ""
        if self._has_content(soup):
            summary = Document(str(soup), url=url).summary(html_partial=True)
            content = self._unwrap_body(summary)
            if not self._has_content(BeautifulSoup(content, "lxml")):
                self._log("Readability kept no content, using the cleaned body")
                content = (soup.body or soup).decode_contents().strip()
        else:
            self._log("Document has no readable content")

        word_count = 0
        if content:
            word_count = len(BeautifulSoup(content, "lxml").get_text(" ").split())

        self._log(
            "Extraction finished in %.1f ms (%d words)",
            (time.perf_counter() - start) * 1000,
            word_count,
        )
        return ExtractionResult(
            content=content,
            title=metadata.title,
            author=metadata.author,
            description=metadata.description,
            domain=metadata.domain,
            word_count=word_count,
            published=metadata.published,
            image=metadata.image,
            schema_org_data=metadata.schema_org_data,
        )

    def _log(self, message: str, *args: object) -> None:
        logger.log(self._log_level, message, *args)

    def _remove_exact(self, soup: BeautifulSoup) -> int:
        removed = 0
        for element in soup.select(", ".join(EXACT_SELECTORS)):
            if element.decomposed or element.name in PROTECTED_TAGS:
                continue
            element.decompose()
            removed += 1
        return removed

    def _remove_partial(self, soup: BeautifulSoup) -> int:
        removed = 0
        for element in soup.find_all(True):
            if element.decomposed or element.name in PROTECTED_TAGS:
                continue
            classes = element.get("class") or []
            haystack = " ".join([*classes, element.get("id") or ""]).lower()
            if haystack.strip() and any(p in haystack for p in PARTIAL_PATTERNS):
                element.decompose()
                removed += 1
        return removed

    def _remove_images(self, soup: BeautifulSoup) -> int:
        removed = 0
        for element in soup.find_all(IMAGE_TAGS):
            if element.decomposed:
                continue
            element.decompose()
            removed += 1
        return removed

    @staticmethod
    def _unwrap_body(summary: str) -> str:
        # Small pages come back as the whole <body id="readabilityBody">
        fragment = BeautifulSoup(summary, "html.parser")
        root = fragment.find(True)
        if root is not None and root.name == "body":
            return root.decode_contents().strip()
        return summary

    @staticmethod
    def _has_content(soup: BeautifulSoup) -> bool:
        root = soup.body or soup
        return bool(root.get_text(strip=True)) or root.find("img") is not None
