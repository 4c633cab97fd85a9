"""
Data models for the catalog draft.

This module contains pure data classes with no business logic.
"""

from .catalog import (
    CatalogDraft,
    CuratedImage,
    Product,
    Store,
    StoreLink,
    Variant,
    VariantInfo,
    VariantOption,
    Vendor,
    wire_field_map,
)

__all__ = [
    'CatalogDraft',
    'CuratedImage',
    'Product',
    'Store',
    'StoreLink',
    'Variant',
    'VariantInfo',
    'VariantOption',
    'Vendor',
    'wire_field_map',
]
