"""
Shopify Catalog Mapper

Deterministic mapping of Shopify shop info, Storefront brand info and
native products into the canonical vendor + products draft.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from ..common.text_utils import slugify, strip_html
from ..models import CatalogDraft, CuratedImage, Product, Store, StoreLink, Vendor
from ..models.coercion import as_str
from .variant_grouping import IN_STOCK, OUT_OF_STOCK, VariantGroupingEngine

logger = logging.getLogger(__name__)

CURATED_IMAGE_LIMIT = 6
DEFAULT_CALL_TO_ACTION = "#"
DEFAULT_CATEGORY = "General"


def _brand_image(brand: Dict[str, Any], key: str) -> str:
    """brand.<key>.image.url, tolerating any missing level."""
    node = brand.get(key) or {}
    return as_str((node.get("image") or {}).get("url"))


def curated_images_from(products: Sequence[Product], limit: int = CURATED_IMAGE_LIMIT) -> List[CuratedImage]:
    """First `limit` non-empty product image URLs, in product order."""
    images = []
    for product in products:
        for url in product.images_url:
            if url:
                images.append(CuratedImage(image_src=url, call_to_action=DEFAULT_CALL_TO_ACTION))
                if len(images) >= limit:
                    return images
    return images


class ShopifyCatalogMapper:
    """
    Maps raw Shopify data to a CatalogDraft.

    Usage:
        mapper = ShopifyCatalogMapper()
        draft = mapper.map_catalog(shop, brand, products, inventories, store_url)
    """

    def __init__(self, engine: Optional[VariantGroupingEngine] = None):
        self.engine = engine or VariantGroupingEngine()

    def map_vendor(self, shop: Dict[str, Any], brand: Optional[Dict[str, Any]], store_url: str) -> Vendor:
        """
        Build the vendor profile from shop info and optional brand info.

        Args:
            shop: Admin API 'shop' object
            brand: Storefront 'shop.brand' object, or None if unavailable
            store_url: Store URL as entered by the user

        Returns:
            Vendor with a single 'Link' store link
        """
        brand = brand or {}
        name = as_str(shop.get("name"))
        domain = as_str(shop.get("domain")) or store_url
        owner = as_str(shop.get("shop_owner")).split()

        short_description = as_str(brand.get("shortDescription"))
        description = (
            short_description
            or as_str(shop.get("description"))
            or f"{name} - Premium products and exceptional service"
        )

        store = Store(
            about=short_description or as_str(shop.get("description")),
            heading=name or "Our Store",
            profile_url=_brand_image(brand, "coverImage"),
            payment_terms="Credit Card, Net 30",
            vendor_notes=f"Imported from Shopify store: {name}",
            links=[StoreLink(link_name="Link", link_value=domain)],
        )

        return Vendor(
            first_name=owner[0] if owner else "",
            last_name=" ".join(owner[1:]),
            email=as_str(shop.get("email")),
            brand_name=name or "Unknown Store",
            description=description,
            phone=as_str(shop.get("phone")),
            username=slugify(name),
            web_site=domain,
            avatar_url=_brand_image(brand, "logo") or _brand_image(brand, "squareLogo"),
            address=as_str(shop.get("address1") or shop.get("address")),
            address2=as_str(shop.get("address2")),
            city=as_str(shop.get("city")),
            state=as_str(shop.get("province")),
            zip_code=as_str(shop.get("zip")),
            country=as_str(shop.get("country_name") or shop.get("country")),
            currency_code=as_str(shop.get("currency")) or "USD",
            store=store,
        )

    def map_product(
        self,
        product: Dict[str, Any],
        inventory: Optional[Dict[int, int]] = None,
        currency: str = "USD",
    ) -> Optional[Product]:
        """
        Map one native product.

        Returns:
            Product, or None when the product has no title
        """
        title = as_str(product.get("title"))
        if not title:
            logger.debug("Dropping titleless Shopify product %s", product.get("id"))
            return None

        variant_info = self.engine.group(product, inventory)
        native_variants = product.get("variants") or []
        main_variant = native_variants[0] if native_variants else {}
        main = variant_info.variants[0]

        total_stock = sum(v.stock for v in variant_info.variants)
        active = product.get("status") == "active"
        tags = as_str(product.get("tags"))

        return Product(
            name=title,
            sku=as_str(main_variant.get("sku")) or f"{product.get('handle', '')}-{product.get('id')}",
            description=strip_html(as_str(product.get("body_html"))) or title,
            short_description=title,
            price=main.price or 0.0,
            wholesale=main.wholesale,
            stock=total_stock,
            qty=1,
            max_qty=0,
            currency_code=currency,
            tax_status="taxable" if main_variant.get("taxable") else "none",
            availability=IN_STOCK if active and total_stock > 0 else OUT_OF_STOCK,
            category=[as_str(product.get("product_type"))] if product.get("product_type") else [DEFAULT_CATEGORY],
            tags=tags,
            product_type=[tag.strip() for tag in tags.split(",") if tag.strip()],
            images_url=[as_str(img.get("src")) for img in product.get("images") or [] if img.get("src")],
            listing_type=0 if active else 1,
            is_shopify_synced_product=True,
            shopify_product_info={
                "product_id": as_str(product.get("id")),
                "variant_id": as_str(main_variant.get("id")),
            },
            variant_info=variant_info,
        )

    def map_catalog(
        self,
        shop: Dict[str, Any],
        brand: Optional[Dict[str, Any]],
        products: Sequence[Dict[str, Any]],
        inventories: Sequence[Optional[Dict[int, int]]],
        store_url: str = "",
    ) -> CatalogDraft:
        """
        Map the whole catalog.

        Args:
            shop: Admin API 'shop' object
            brand: Storefront brand object or None
            products: Native products in fetch order
            inventories: Inventory join per product, same order (None = unavailable)
            store_url: Store URL as entered by the user

        Returns:
            CatalogDraft with titleless products dropped and curated images
            filled from the retained products

        Raises:
            ValueError: If products and inventories differ in length
        """
        if len(products) != len(inventories):
            raise ValueError(
                f"Got {len(inventories)} inventory joins for {len(products)} products"
            )

        vendor = self.map_vendor(shop, brand, store_url)
        currency = vendor.currency_code

        mapped = [
            self.map_product(product, inventory, currency)
            for product, inventory in zip(products, inventories)
        ]
        retained = [p for p in mapped if p is not None]
        if len(retained) < len(mapped):
            logger.info("Dropped %d titleless products", len(mapped) - len(retained))

        vendor.store.curated_images = curated_images_from(retained)

        summary = {
            "totalProducts": len(retained),
            "totalValue": round(sum(p.price for p in retained), 2),
            "currency": currency,
            "shopName": as_str(shop.get("name")),
            "shopDomain": as_str(shop.get("domain")),
        }

        return CatalogDraft(vendor=vendor, products=retained, source="shopify", summary=summary)
