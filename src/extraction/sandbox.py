# SPDX-License-Identifier: Apache 2.0
# Copyright (c) 2025 IBM

"""Sandboxed document construction for untrusted HTML.

The HTML handed to the node comes straight from arbitrary web pages. It is
parsed with BeautifulSoup on top of lxml, which never executes scripts and
never performs network requests. On top of that the tree is scrubbed so that
nothing executable or externally loaded survives into the extracted content.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from bs4 import BeautifulSoup

from .models import SandboxOptions

logger = logging.getLogger(__name__)

# Script types that only carry data (structured metadata) and never run
DATA_SCRIPT_TYPES = {"application/ld+json", "application/json"}

EMBEDDING_TAGS = ["iframe", "frame", "frameset", "object", "embed", "applet", "base"]

EXTERNAL_LINK_RELS = {
    "stylesheet",
    "preload",
    "prefetch",
    "modulepreload",
    "import",
    "preconnect",
    "dns-prefetch",
    "prerender",
}

URL_ATTRIBUTES = ["href", "src", "action", "formaction", "xlink:href", "data"]


@dataclass
class SandboxedDocument:
    """Parsed, inert document scoped to a single extraction."""

    soup: BeautifulSoup
    url: Optional[str] = None
    neutralised: dict[str, int] = field(default_factory=dict)


def parse_document(
    html: str, url: Optional[str] = None, sandbox: Optional[SandboxOptions] = None
) -> SandboxedDocument:
    """Parse HTML into a sandboxed document.

    Args:
        html: Raw, untrusted HTML markup
        url: Original page URL, kept for resolving relative references
        sandbox: Sandbox restrictions (all enabled by default)

    Returns:
        SandboxedDocument wrapping the scrubbed tree

    Raises:
        ValueError: If a visual (non-headless) document is requested
    """
    sandbox = sandbox or SandboxOptions()
    if not sandbox.headless:
        raise ValueError("Visual rendering is not supported; documents are headless")

    soup = BeautifulSoup(html, "lxml")
    neutralised: dict[str, int] = {}

    if sandbox.disable_scripts:
        neutralised.update(_disable_scripts(soup))
    if sandbox.disable_external_resources:
        neutralised.update(_disable_external_resources(soup))

    logger.debug(f"Sandboxed document built (url={url}, neutralised={neutralised})")
    return SandboxedDocument(soup=soup, url=url or None, neutralised=neutralised)


def _disable_scripts(soup: BeautifulSoup) -> dict[str, int]:
    """Remove executable scripts, inline handlers and javascript: URLs."""
    scripts = 0
    for script in soup.find_all("script"):
        script_type = (script.get("type") or "").split(";")[0].strip().lower()
        if script_type in DATA_SCRIPT_TYPES:
            continue
        script.decompose()
        scripts += 1

    handlers = 0
    js_urls = 0
    for tag in soup.find_all(True):
        for attr in list(tag.attrs):
            if attr.lower().startswith("on"):
                del tag[attr]
                handlers += 1
        for attr in URL_ATTRIBUTES:
            value = tag.get(attr)
            if isinstance(value, str) and _is_javascript_url(value):
                del tag[attr]
                js_urls += 1

    refreshes = 0
    for meta in soup.find_all("meta"):
        if (meta.get("http-equiv") or "").lower() == "refresh":
            meta.decompose()
            refreshes += 1

    return {
        "scripts": scripts,
        "event_handlers": handlers,
        "javascript_urls": js_urls,
        "meta_refresh": refreshes,
    }


def _disable_external_resources(soup: BeautifulSoup) -> dict[str, int]:
    """Drop elements that would make a browser load external resources."""
    embeds = 0
    for tag in soup.find_all(EMBEDDING_TAGS):
        # Nested embeds go away with their container
        if tag.decomposed:
            continue
        tag.decompose()
        embeds += 1

    links = 0
    for link in soup.find_all("link"):
        rels = {rel.lower() for rel in link.get("rel") or []}
        if rels & EXTERNAL_LINK_RELS:
            link.decompose()
            links += 1

    return {"embeds": embeds, "resource_links": links}


def _is_javascript_url(value: str) -> bool:
    # Browsers ignore embedded whitespace and control characters in schemes
    compact = "".join(ch for ch in value if ch > " ").lower()
    return compact.startswith("javascript:") or compact.startswith("vbscript:")
