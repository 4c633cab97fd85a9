"""
Ribbon Payload Builders

Maps the reviewed draft to the Ribbon create-vendor and bulk-create
products request bodies. Optional vendor business fields left blank in
the draft are filled from config/commit_defaults.yaml.
"""

from typing import Any, Dict, List, Optional, Sequence

from ..models import Product, Variant, Vendor
from ..normalization.facets import FacetInferrer


def _first(*values: Any, default: Any = "") -> Any:
    """First truthy value, else default."""
    for value in values:
        if value:
            return value
    return default


def build_store_payload(vendor: Vendor, store_defaults: Dict[str, Any]) -> Dict[str, Any]:
    """
    Store section of the vendor payload.

    Blank strings fall back to store_defaults; heading falls back to the
    brand name before the configured default.
    """
    store = vendor.store.to_dict()

    for key, default in store_defaults.items():
        if key == "heading":
            continue
        if not store.get(key):
            store[key] = default

    store["heading"] = _first(vendor.store.heading, vendor.brand_name, default=store_defaults.get("heading", ""))
    store["vendorNotes"] = _first(
        vendor.store.vendor_notes,
        default=f"Imported from source: {vendor.brand_name or 'Unknown'}",
    )
    return store


def build_vendor_payload(vendor: Vendor, defaults: Dict[str, Any]) -> Dict[str, Any]:
    """
    Build the create-vendor payload (sent as {"user": payload}).

    Args:
        vendor: Reviewed vendor
        defaults: Output of load_commit_defaults()

    Returns:
        Payload dictionary
    """
    constants = defaults.get("vendor", {})
    brand_words = vendor.brand_name.split()

    return {
        "firstName": _first(vendor.first_name, brand_words[0] if brand_words else "",
                            default=constants.get("firstName", "")),
        "lastName": _first(vendor.last_name, " ".join(brand_words[1:]),
                           default=constants.get("lastName", "")),
        "email": vendor.email,
        "brandName": _first(vendor.brand_name, default=constants.get("brandName", "")),
        "description": vendor.description,
        "webSite": vendor.web_site,
        "catalogURL": vendor.catalog_url,
        "address": vendor.address,
        "address2": vendor.address2,
        "city": vendor.city,
        "state": vendor.state,
        "zipCode": vendor.zip_code,
        "country": _first(vendor.country, default=constants.get("country", "")),
        "currencyCode": _first(vendor.currency_code, default=constants.get("currencyCode", "USD")),
        "tel": vendor.phone,
        "resellerId": "",
        "interests": list(constants.get("interests", [])),
        "paymentMethod": "",
        "password": "",
        "roleType": constants.get("roleType", 1),
        "access": constants.get("access", 0),
        "agencyCommissionPercentage": constants.get("agencyCommissionPercentage", 0),
        "showroomImageURL": _first(vendor.store.profile_url, vendor.showroom_image_url,
                                   default=constants.get("showroomImageURL", "")),
        "store": build_store_payload(vendor, defaults.get("store", {})),
        "contractType": constants.get("contractType", ""),
        "vendorSalesLocation": [],
        "paymentTerms": list(constants.get("paymentTerms", [])),
        "currentAgencyId": constants.get("currentAgencyId", ""),
        "avatarURL": vendor.avatar_url,
    }


def build_variant_payload(
    variant: Variant,
    product: Product,
    placeholder_sku: str,
    inferrer: FacetInferrer,
) -> Dict[str, Any]:
    """
    One variant of a product payload.

    Color and materials already set on the variant are kept; otherwise
    they are inferred from the option values.
    """
    price = _first(variant.price, product.price, default=0)
    return {
        "options": list(variant.options),
        "price": price,
        "sku": variant.sku or placeholder_sku,
        "wholesale": _first(variant.wholesale, variant.price, product.price, default=0),
        "color": variant.color or inferrer.infer_colors(variant.options),
        "room": [],
        "values": [],
        "origin": [],
        "materials": variant.materials or inferrer.infer_materials(variant.options),
        "size": variant.size or [],
        "qty": variant.qty or 1,
        "variantImage": variant.variant_image or product.primary_image,
        "availability": str(variant.stock),
        "stock": variant.stock,
        "inActive": variant.in_active,
        "type": 0,
        "upc": variant.upc,
        "shopifyProductInfo": dict(variant.shopify_product_info),
    }


def build_product_payloads(
    products: Sequence[Product],
    vendor: Vendor,
    vendor_id: str,
    agency_id: Optional[str],
    inferrer: FacetInferrer,
    stamp: str,
    product_defaults: Optional[Dict[str, Any]] = None,
) -> List[Dict[str, Any]]:
    """
    Build the bulk-create products payload list.

    Args:
        products: Reviewed products
        vendor: Reviewed vendor (brand name, currency)
        vendor_id: Identifier returned by the create-vendor call
        agency_id: Owning agency returned by the create-vendor call
        inferrer: Color/material inference
        stamp: Commit timestamp used in placeholder SKUs
        product_defaults: 'product' section of the commit defaults

    Returns:
        One payload per product, in draft order
    """
    product_defaults = product_defaults or {}
    payloads = []

    for index, product in enumerate(products):
        sku = product.sku or f"SKU-{stamp}-{index + 1}"
        payload: Dict[str, Any] = {
            "vendorId": vendor_id,
            "agencyID": agency_id,
            "brandName": vendor.brand_name,
            "type": str(product.listing_type),
            "name": product.name or product_defaults.get("untitledName", ""),
            "description": product.description,
            "shortDescription": product.short_description,
            "imagesURL": list(product.images_url),
            "price": product.price or 0,
            "wholesale": _first(product.wholesale, product.price, default=0),
            "sku": sku,
            "availability": str(product.stock),
            "category": list(product.category),
            "tags": product.tags,
            "stock": product.stock,
            "qty": product.qty or product_defaults.get("qty", 1),
            "maxQty": product.max_qty or product_defaults.get("maxQty", 0),
            "favoriteProduct": False,
            "isDemo": False,
            "productType": list(product.product_type),
            "currencyCode": _first(vendor.currency_code, default="USD"),
            "taxStatus": _first(product.tax_status, default=product_defaults.get("taxStatus", "")),
            "isShopifySyncedProduct": product.is_shopify_synced_product,
            "shopifyProductInfo": dict(product.shopify_product_info),
        }

        info = product.variant_info
        if info.variants:
            payload["variantInfo"] = {
                "options": [option.to_dict() for option in info.options],
                "variants": [
                    build_variant_payload(variant, product, f"{sku}-{stamp}-{position + 1}", inferrer)
                    for position, variant in enumerate(info.variants)
                ],
            }

        payloads.append(payload)

    return payloads
