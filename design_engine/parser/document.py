"""
Document loader.
Splits a pasted HTML document into the markup fragment to convert and the CSS
found in its ``<style>`` elements.
"""

import logging
import re
from typing import Tuple

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

DOCUMENT_MARKERS = re.compile(r'<\s*(?:!doctype|html|head|body|style)\b', re.IGNORECASE)

# Control characters that confuse the tag scanner
CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f]')

BODY_OPEN_PATTERN = re.compile(r'<body\b[^>]*>', re.IGNORECASE)
BODY_CLOSE_PATTERN = re.compile(r'</body\s*>', re.IGNORECASE)

# Elements whose content is never converted
RAW_BLOCK_PATTERN = re.compile(r'<(head|style|script|title)\b[^>]*>.*?</\1\s*>', re.IGNORECASE | re.DOTALL)
WRAPPER_TAG_PATTERN = re.compile(r'</?(?:html|body)\b[^>]*>|<!doctype[^>]*>', re.IGNORECASE)


def clean_html_content(html_content: str) -> str:
    """
    Remove a leading BOM and stray control characters.

    Args:
        html_content: HTML content to clean

    Returns:
        str: Cleaned HTML content
    """
    if html_content.startswith('\ufeff'):
        logger.debug("Removing BOM marker from the beginning of HTML content")
        html_content = html_content[1:]
    return CONTROL_CHARS.sub('', html_content)


def is_full_document(html_content: str) -> bool:
    """Whether the markup carries document structure or embedded styles."""
    return bool(DOCUMENT_MARKERS.search(html_content))


def _make_soup(html_content: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(html_content, 'html5lib')
    except Exception as e:
        logger.warning(f"html5lib parser failed: {e}, falling back to 'html.parser'")
        return BeautifulSoup(html_content, 'html.parser')


def extract_body(html_content: str) -> str:
    """
    Cut the markup to convert out of a document's source text.

    The inner text of ``<body>`` is taken verbatim, so malformed markup reaches
    the fragment parser exactly as written. Without a ``<body>`` tag the whole
    document is used. ``<head>``, ``<style>``, ``<script>`` and ``<title>``
    blocks and the document wrapper tags are removed.

    Args:
        html_content: HTML document

    Returns:
        str: Markup fragment
    """
    body = html_content
    body_open = BODY_OPEN_PATTERN.search(html_content)
    if body_open:
        body_close = BODY_CLOSE_PATTERN.search(html_content, body_open.end())
        end = body_close.start() if body_close else len(html_content)
        body = html_content[body_open.end():end]

    body = RAW_BLOCK_PATTERN.sub('', body)
    body = WRAPPER_TAG_PATTERN.sub('', body)
    return body.strip()


def load_document(html_content: str, css_content: str = "") -> Tuple[str, str]:
    """
    Prepare user input for conversion.

    Plain fragments pass through untouched apart from cleaning. For full
    documents, the CSS of every ``<style>`` element is prepended to
    ``css_content`` (so explicitly supplied CSS wins on conflicts) and the
    source of ``<body>`` becomes the fragment. Only the stylesheet text is read
    through the html5lib tree; the fragment never is, so the tree builder's
    error recovery cannot re-nest the markup.

    Args:
        html_content: HTML fragment or document
        css_content: Stylesheet supplied alongside the markup

    Returns:
        Tuple[str, str]: (fragment, css)
    """
    html_content = clean_html_content(html_content or "")
    css_content = css_content or ""

    if not is_full_document(html_content):
        return html_content, css_content

    soup = _make_soup(html_content)
    embedded = [style.get_text() for style in soup.find_all('style')]
    if embedded:
        logger.debug(f"Extracted {len(embedded)} <style> block(s) from document")

    css = "\n".join(embedded + ([css_content] if css_content else []))
    return extract_body(html_content), css
