"""
Schema normalization modules.

Modules:
    normalizer        - CatalogNormalizer (folding, defaulting, link policy)
    variant_grouping  - VariantGroupingEngine for native Shopify products
    shopify_mapper    - ShopifyCatalogMapper (shop/products → draft)
    options           - Option value aggregation
    facets            - FacetInferrer (color/material keyword matching)
    address           - AddressInferrer (country from state/postal code)
"""

from .address import AddressInferrer
from .facets import FacetInferrer, get_facet_inferrer
from .normalizer import CatalogNormalizer, ensure_variant_info, instagram_url, merge_products, sku_prefix
from .options import aggregate_options, distinct_values
from .shopify_mapper import ShopifyCatalogMapper, curated_images_from
from .variant_grouping import VariantGroupingEngine

__all__ = [
    'AddressInferrer',
    'CatalogNormalizer',
    'FacetInferrer',
    'ShopifyCatalogMapper',
    'VariantGroupingEngine',
    'aggregate_options',
    'curated_images_from',
    'distinct_values',
    'ensure_variant_info',
    'get_facet_inferrer',
    'instagram_url',
    'merge_products',
    'sku_prefix',
]
