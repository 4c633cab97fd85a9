"""
Text Utilities

Helper functions for text processing and cleanup.
"""

import re

from bs4 import BeautifulSoup


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces and trim."""
    if not text:
        return ""
    return re.sub(r'\s+', ' ', text).strip()


def strip_html(html: str) -> str:
    """
    Convert an HTML fragment to plain text.

    Script and style blocks are dropped entirely; the remaining tags are
    replaced by spaces and whitespace is collapsed.

    Args:
        html: HTML markup (page or fragment)

    Returns:
        Plain text
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, 'lxml')
    for tag in soup(['script', 'style']):
        tag.decompose()

    return collapse_whitespace(soup.get_text(separator=' '))


def slugify(text: str, fallback: str = "store") -> str:
    """
    Lowercase slug with every non-alphanumeric character replaced by '-'.

    Example:
        >>> slugify("Acme Goods Co.")
        'acme-goods-co-'
    """
    return re.sub(r'[^a-z0-9]', '-', (text or fallback).lower())


def normalize_title(title: str) -> str:
    """Case- and whitespace-normalized product title used as a grouping key."""
    return collapse_whitespace(title).casefold()
