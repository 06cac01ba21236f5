# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""Page metadata sniffing from meta tags and schema.org JSON-LD."""

import json
import logging
from dataclasses import dataclass
from typing import Any, Iterator, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)


@dataclass
class PageMetadata:
    """Metadata describing the parsed page."""

    title: Optional[str] = None
    author: Optional[str] = None
    description: Optional[str] = None
    domain: Optional[str] = None
    published: Optional[str] = None
    image: Optional[str] = None
    schema_org_data: Any = None


def extract_metadata(soup: BeautifulSoup, url: Optional[str] = None) -> PageMetadata:
    """Collect page metadata, preferring explicit markup over heuristics.

    Args:
        soup: Sandboxed document tree
        url: Original page URL, used for the domain and to absolutise images

    Returns:
        PageMetadata with every field that could be inferred
    """
    schema = extract_schema_org(soup)
    items = list(_iter_schema_items(schema))

    title = (
        _meta_content(soup, "og:title", "twitter:title")
        or _schema_text(items, "headline", "name")
        or _document_title(soup)
    )
    author = (
        _meta_content(soup, "author", "article:author", "parsely-author", "dc.creator")
        or _schema_author(items)
        or _element_text(soup, '[rel="author"], [itemprop="author"], .byline, .author')
    )
    description = _meta_content(
        soup, "description", "og:description", "twitter:description"
    ) or _schema_text(items, "description")
    published = (
        _meta_content(
            soup,
            "article:published_time",
            "datePublished",
            "pubdate",
            "publishdate",
            "date",
            "dc.date",
        )
        or _schema_text(items, "datePublished", "dateCreated")
        or _time_datetime(soup)
    )
    image = _meta_content(
        soup, "og:image", "og:image:url", "twitter:image"
    ) or _schema_image(items)
    if image and url:
        image = urljoin(url, image)

    return PageMetadata(
        title=title,
        author=author,
        description=description,
        domain=_domain(soup, url),
        published=published,
        image=image,
        schema_org_data=schema,
    )


def extract_schema_org(soup: BeautifulSoup) -> Any:
    """Parse every JSON-LD block in the document.

    Returns:
        The single parsed object, a list when the page carries several blocks,
        or None when there is no valid JSON-LD at all
    """
    blocks: list[Any] = []
    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        raw = script.string or script.get_text()
        if not raw or not raw.strip():
            continue
        try:
            blocks.append(json.loads(raw, strict=False))
        except json.JSONDecodeError as e:
            logger.debug(f"Skipping malformed JSON-LD block: {e}")
    if not blocks:
        return None
    return blocks[0] if len(blocks) == 1 else blocks


def _iter_schema_items(data: Any) -> Iterator[dict[str, Any]]:
    if isinstance(data, list):
        for entry in data:
            yield from _iter_schema_items(entry)
    elif isinstance(data, dict):
        yield data
        if "@graph" in data:
            yield from _iter_schema_items(data["@graph"])


def _meta_content(soup: BeautifulSoup, *keys: str) -> Optional[str]:
    wanted = [key.lower() for key in keys]
    found: dict[str, str] = {}
    for meta in soup.find_all("meta"):
        key = meta.get("property") or meta.get("name") or meta.get("itemprop")
        content = meta.get("content")
        if not key or not content or not content.strip():
            continue
        key = key.lower()
        if key in wanted and key not in found:
            found[key] = content.strip()
    for key in wanted:
        if key in found:
            return found[key]
    return None


def _schema_text(items: list[dict[str, Any]], *keys: str) -> Optional[str]:
    for key in keys:
        for item in items:
            value = item.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


def _schema_author(items: list[dict[str, Any]]) -> Optional[str]:
    for item in items:
        author = item.get("author")
        names = []
        for entry in author if isinstance(author, list) else [author]:
            if isinstance(entry, str):
                names.append(entry.strip())
            elif isinstance(entry, dict) and isinstance(entry.get("name"), str):
                names.append(entry["name"].strip())
        names = [name for name in names if name]
        if names:
            return ", ".join(names)
    return None


def _schema_image(items: list[dict[str, Any]]) -> Optional[str]:
    for item in items:
        image = item.get("image")
        if isinstance(image, list):
            image = image[0] if image else None
        if isinstance(image, dict):
            image = image.get("url")
        if isinstance(image, str) and image.strip():
            return image.strip()
    return None


def _element_text(soup: BeautifulSoup, selector: str) -> Optional[str]:
    element = soup.select_one(selector)
    if element is None:
        return None
    text = element.get_text(" ", strip=True)
    if text.lower().startswith("by "):
        text = text[3:].strip()
    return text or None


def _time_datetime(soup: BeautifulSoup) -> Optional[str]:
    time_tag = soup.find("time", attrs={"datetime": True})
    if time_tag and time_tag["datetime"].strip():
        return time_tag["datetime"].strip()
    return None


def _document_title(soup: BeautifulSoup) -> Optional[str]:
    if soup.title and soup.title.string and soup.title.string.strip():
        return soup.title.string.strip()
    return None


def _domain(soup: BeautifulSoup, url: Optional[str]) -> Optional[str]:
    candidates = [url]
    canonical = soup.find("link", rel="canonical")
    if canonical is not None:
        candidates.append(canonical.get("href"))
    candidates.append(_meta_content(soup, "og:url"))

    for candidate in candidates:
        if not candidate:
            continue
        netloc = urlparse(candidate).netloc.lower()
        if netloc:
            return netloc[4:] if netloc.startswith("www.") else netloc
    return None
