"""
Catalog Normalizer

Post-processing applied to every draft, whatever the source:

1. Every product gets a variantInfo with at least one variant
2. Products sharing a normalized title are folded into one product;
   untitled entries join the product with the same SKU prefix, else the
   preceding product
3. Option values are re-aggregated from the variants
4. Blank address fields are inferred from the present ones
5. Store links are reduced to 'Link' and 'Instagram'; other links are
   demoted to top-level vendor fields
6. Curated images are filled from product images when empty
"""

import logging
import re
from typing import Dict, List, Optional

from ..common.text_utils import normalize_title
from ..models import CatalogDraft, Product, StoreLink, Variant, VariantOption, Vendor
from .address import AddressInferrer
from .options import aggregate_options
from .shopify_mapper import curated_images_from

logger = logging.getLogger(__name__)

LINK = "Link"
INSTAGRAM = "Instagram"

_WEBSITE_LINK_NAMES = {"link", "website", "web site", "site", "homepage", "home page", "web"}


def sku_prefix(sku: str) -> str:
    """
    SKU with its last '-'/'_' separated segment removed.

    Example:
        >>> sku_prefix("TEE-100-RED")
        'TEE-100'
        >>> sku_prefix("TEE100")
        'TEE100'
    """
    sku = (sku or "").strip()
    parts = re.split(r'[-_](?=[^-_]*$)', sku, maxsplit=1)
    return parts[0] if parts and parts[0] else sku


def instagram_url(handle: str) -> str:
    """
    Canonical Instagram profile URL for a handle or URL.

    Example:
        >>> instagram_url("@acme.goods")
        'https://instagram.com/acme.goods'
    """
    handle = (handle or "").strip()
    if not handle:
        return ""
    match = re.search(r'instagram\.com/([^/?#\s]+)', handle)
    if match:
        handle = match.group(1)
    return f"https://instagram.com/{handle.lstrip('@').strip('/')}"


def ensure_variant_info(product: Product) -> bool:
    """
    Give a product without variants a single variant built from its own fields.

    Returns:
        True if a variant was synthesized
    """
    if product.variant_info.variants:
        return False

    product.variant_info.variants.append(Variant(
        sku=product.sku,
        price=product.price,
        wholesale=product.wholesale,
        stock=product.stock,
        qty=product.qty,
        max_qty=product.max_qty,
        availability=product.availability,
        variant_image=product.primary_image,
    ))
    return True


def _merge_variants(target: Product, source: Product) -> None:
    """Append source's variants to target, remapping option positions by key."""
    target_options = target.variant_info.options
    keys = [o.key.lower() for o in target_options]

    positions = []
    for option in source.variant_info.options:
        key = option.key.lower()
        if key not in keys:
            target_options.append(VariantOption(key=option.key, value=option.value))
            keys.append(key)
        positions.append(keys.index(key))

    for variant in source.variant_info.variants:
        remapped = [""] * max(len(keys), len(variant.options))
        for index, value in enumerate(variant.options):
            dest = positions[index] if index < len(positions) else index
            if dest >= len(remapped):
                remapped.extend([""] * (dest + 1 - len(remapped)))
            remapped[dest] = value
        while remapped and not remapped[-1]:
            remapped.pop()
        variant.options = remapped
        target.variant_info.variants.append(variant)


def merge_products(target: Product, source: Product) -> None:
    """
    Fold `source` into `target` as additional variants.

    Blank descriptive fields on target are filled from source; images are
    unioned; product stock becomes the sum of variant stocks.
    """
    _merge_variants(target, source)

    for url in source.images_url:
        if url not in target.images_url:
            target.images_url.append(url)

    if not target.description:
        target.description = source.description
    if not target.category:
        target.category = list(source.category)
    if not target.sku:
        target.sku = source.sku
    if not target.price and source.price:
        target.price = source.price

    target.stock = sum(v.stock for v in target.variant_info.variants)


class CatalogNormalizer:
    """
    Applies the canonical schema policy to a draft in place.

    Usage:
        normalizer = CatalogNormalizer()
        draft = normalizer.normalize(draft)
    """

    def __init__(self, address_inferrer: Optional[AddressInferrer] = None, fill_curated_images: bool = True):
        """
        Initialize the normalizer.

        Args:
            address_inferrer: Address inference helper. If None, built from config.
            fill_curated_images: Populate empty curated images from product images
        """
        self.address_inferrer = address_inferrer or AddressInferrer()
        self.fill_curated_images = fill_curated_images

    def normalize(self, draft: CatalogDraft) -> CatalogDraft:
        synthesized = sum(ensure_variant_info(p) for p in draft.products)
        before = len(draft.products)

        draft.products = self.fold_products(draft.products)
        for product in draft.products:
            product.variant_info.options = aggregate_options(
                product.variant_info.options, product.variant_info.variants
            )

        self.address_inferrer.fill(draft.vendor)
        self.apply_link_policy(draft.vendor)

        if self.fill_curated_images and not draft.vendor.store.curated_images:
            draft.vendor.store.curated_images = curated_images_from(draft.products)

        logger.info("Normalized %d entries into %d products (%d variants, %d synthesized)",
                    before, len(draft.products), draft.variant_count, synthesized)
        return draft

    def fold_products(self, products: List[Product]) -> List[Product]:
        """
        Fold duplicate-title and untitled entries into variants.

        Args:
            products: Entries in source order, each with at least one variant

        Returns:
            Products with unique normalized titles (plus at most one
            leading untitled product)
        """
        result: List[Product] = []
        by_title: Dict[str, Product] = {}
        by_sku: Dict[str, Product] = {}

        for product in products:
            title_key = normalize_title(product.name)

            if title_key:
                target = by_title.get(title_key)
                if target is None:
                    by_title[title_key] = product
                    result.append(product)
                    self._register_skus(by_sku, product)
                    continue
            else:
                target = self._match_by_sku(by_sku, product)
                if target is None and result:
                    target = result[-1]
                if target is None:
                    result.append(product)
                    self._register_skus(by_sku, product)
                    continue

            merge_products(target, product)
            self._register_skus(by_sku, target)

        return result

    @staticmethod
    def _skus(product: Product) -> List[str]:
        skus = [product.sku] + [v.sku for v in product.variant_info.variants]
        return [s for s in skus if s]

    def _register_skus(self, by_sku: Dict[str, Product], product: Product) -> None:
        for sku in self._skus(product):
            by_sku.setdefault(sku, product)
            by_sku.setdefault(sku_prefix(sku), product)

    def _match_by_sku(self, by_sku: Dict[str, Product], product: Product) -> Optional[Product]:
        for sku in self._skus(product):
            match = by_sku.get(sku_prefix(sku))
            if match is not None:
                return match
        return None

    @staticmethod
    def apply_link_policy(vendor: Vendor) -> None:
        """
        Keep only 'Link' and 'Instagram' in store.links.

        Website-like links fill webSite, catalog links fill catalogURL,
        lookbook links fill store.lookbookURL (each only when blank);
        anything else fills webSite only when no website link exists.
        """
        store = vendor.store
        link_value = ""
        instagram = ""
        other = ""

        for link in store.links:
            name = link.link_name.strip().lower()
            value = link.link_value.strip()
            if not value:
                continue

            if "instagram" in name or "instagram.com" in value.lower():
                instagram = instagram or instagram_url(value)
            elif name in _WEBSITE_LINK_NAMES:
                link_value = link_value or value
            elif "catalog" in name:
                vendor.catalog_url = vendor.catalog_url or value
            elif "lookbook" in name:
                store.lookbook_url = store.lookbook_url or value
            else:
                other = other or value

        vendor.web_site = vendor.web_site or link_value or other
        link_value = link_value or vendor.web_site

        links = []
        if link_value:
            links.append(StoreLink(link_name=LINK, link_value=link_value))
        if instagram:
            links.append(StoreLink(link_name=INSTAGRAM, link_value=instagram))
        store.links = links
