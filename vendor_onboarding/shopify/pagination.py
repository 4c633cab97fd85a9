"""
Shopify REST pagination helpers.

Shopify paginates REST collections with a cursor carried in the Link
response header:

    <https://shop.myshopify.com/admin/api/2025-01/products.json?limit=50&page_info=abc>; rel="next"
"""

import re
from typing import Optional

_NEXT_LINK = re.compile(r'<([^>]*)>;\s*rel="next"')
_PAGE_INFO = re.compile(r'[?&]page_info=([^&>]+)')


def next_page_info(link_header: str) -> Optional[str]:
    """
    Extract the page_info cursor of the rel="next" link.

    Args:
        link_header: Raw Link header value (may hold "previous" and "next")

    Returns:
        Cursor string, or None when there is no next page
    """
    if not link_header:
        return None

    for part in link_header.split(','):
        match = _NEXT_LINK.search(part)
        if match:
            cursor = _PAGE_INFO.search(match.group(1))
            return cursor.group(1) if cursor else None

    return None
