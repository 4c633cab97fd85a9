"""
Ribbon import modules.

Modules:
    payloads   - Vendor and product payload builders
    client     - RibbonClient (create vendor, bulk create products)
    committer  - ImportCommitter and ImportResult
"""

from .client import RibbonClient
from .committer import ImportCommitter, ImportResult
from .payloads import build_product_payloads, build_store_payload, build_vendor_payload

__all__ = [
    'ImportCommitter',
    'ImportResult',
    'RibbonClient',
    'build_product_payloads',
    'build_store_payload',
    'build_vendor_payload',
]
