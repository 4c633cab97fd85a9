"""
Shopify integration modules.

Modules:
    api_client - Admin REST and Storefront GraphQL client
    pagination - Link-header cursor parsing
"""

from .api_client import ShopifyAPIClient
from .pagination import next_page_info

__all__ = [
    'ShopifyAPIClient',
    'next_page_info',
]
