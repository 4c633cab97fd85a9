"""
Catalog data models.

Canonical vendor + products tree shared by every source adapter, the
review session and the Ribbon committer. Attribute names are snake_case;
the wire (JSON) names are camelCase and are produced by to_dict().

from_dict() is deliberately forgiving: the extraction service returns
loose JSON where any field may be missing, null, a string or a number.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Dict, List, Optional

from .coercion import (
    as_dict,
    as_float,
    as_int,
    as_optional_float,
    as_optional_str_list,
    as_str,
    as_str_list,
)

# Variant facets without a dedicated attribute; kept verbatim in Variant.facets
LONG_TAIL_FACETS = (
    "facets", "origin", "room", "values", "collectionFacet", "categoryFacet",
    "priceFacet", "gallery", "artist", "galleryCity", "galleryCountry",
    "yearFacet", "paymentFacet",
)


def _camel(name: str) -> str:
    head, *rest = name.split('_')
    return head + ''.join(part.title() for part in rest)


def wire_name(f) -> str:
    """Wire (JSON) name of a dataclass field."""
    return f.metadata.get("wire") or _camel(f.name)


def wire_field_map(cls) -> Dict[str, str]:
    """Map wire names to attribute names for a catalog dataclass."""
    return {wire_name(f): f.name for f in fields(cls)}


def _to_wire(value: Any) -> Any:
    if is_dataclass(value):
        return value.to_dict()
    if isinstance(value, list):
        return [_to_wire(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_wire(v) for k, v in value.items()}
    return value


def _wire_dict(obj) -> Dict[str, Any]:
    return {wire_name(f): _to_wire(getattr(obj, f.name)) for f in fields(obj)}


@dataclass
class StoreLink:
    """Named link shown on the vendor's store page."""
    link_name: str = ""
    link_value: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "StoreLink":
        data = as_dict(data)
        return cls(
            link_name=as_str(data.get("linkName") or data.get("name")),
            link_value=as_str(data.get("linkValue") or data.get("url") or data.get("value")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _wire_dict(self)


@dataclass
class CuratedImage:
    """Highlight image on the vendor's store page."""
    image_src: str = ""
    call_to_action: str = "#"

    @classmethod
    def from_dict(cls, data: Any) -> "CuratedImage":
        if isinstance(data, str):
            return cls(image_src=data.strip())
        data = as_dict(data)
        return cls(
            image_src=as_str(data.get("imageSrc") or data.get("src") or data.get("url")),
            call_to_action=as_str(data.get("callToAction")) or "#",
        )

    def to_dict(self) -> Dict[str, Any]:
        return _wire_dict(self)


@dataclass
class Store:
    """Vendor store profile and commerce terms."""
    about: str = ""
    heading: str = ""
    profile_url: str = field(default="", metadata={"wire": "profileURL"})
    opening_order_amt: float = 0.0
    reorder_amt: float = 0.0
    price_range: str = ""
    payment_terms: str = ""
    shipping_policy: str = ""
    estimated_ship_times: str = ""
    returns_and_exchanges: str = ""
    vendor_notes: str = ""
    vendor_highlight_message: str = ""
    video_link: str = ""
    links: List[StoreLink] = field(default_factory=list)
    curated_images: List[CuratedImage] = field(default_factory=list)
    lookbook_url: str = field(default="", metadata={"wire": "lookbookURL"})
    profile_steps: List[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Store":
        data = as_dict(data)

        lookbook = data.get("lookbookURL") or data.get("lookBookURL")
        if isinstance(lookbook, list):
            first = lookbook[0] if lookbook else ""
            lookbook = first.get("imageSrc") if isinstance(first, dict) else first

        return cls(
            about=as_str(data.get("about")),
            heading=as_str(data.get("heading")),
            profile_url=as_str(data.get("profileURL")),
            opening_order_amt=as_float(data.get("openingOrderAmt")),
            reorder_amt=as_float(data.get("reorderAmt")),
            price_range=as_str(data.get("priceRange")),
            payment_terms=as_str(data.get("paymentTerms")),
            shipping_policy=as_str(data.get("shippingPolicy")),
            estimated_ship_times=as_str(data.get("estimatedShipTimes")),
            returns_and_exchanges=as_str(data.get("returnsAndExchanges")),
            vendor_notes=as_str(data.get("vendorNotes")),
            vendor_highlight_message=as_str(data.get("vendorHighlightMessage")),
            video_link=as_str(data.get("videoLink")),
            links=[StoreLink.from_dict(link) for link in data.get("links") or []
                   if isinstance(link, dict)],
            curated_images=[CuratedImage.from_dict(img) for img in data.get("curatedImages") or []],
            lookbook_url=as_str(lookbook),
            profile_steps=list(data.get("profileSteps") or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _wire_dict(self)

    def get_link(self, name: str) -> Optional[StoreLink]:
        for link in self.links:
            if link.link_name.lower() == name.lower():
                return link
        return None


@dataclass
class Vendor:
    """Seller/brand profile being onboarded. One per import run."""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    brand_name: str = ""
    description: str = ""
    phone: str = ""
    title: str = ""
    business_words: str = ""
    username: str = ""
    web_site: str = ""
    catalog_url: str = field(default="", metadata={"wire": "catalogURL"})
    showroom_image_url: str = field(default="", metadata={"wire": "showroomImageURL"})
    avatar_url: str = field(default="", metadata={"wire": "avatarURL"})
    address: str = ""
    address2: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = ""
    currency_code: str = ""
    store: Store = field(default_factory=Store)

    @classmethod
    def from_dict(cls, data: Any) -> "Vendor":
        data = as_dict(data)
        return cls(
            first_name=as_str(data.get("firstName")),
            last_name=as_str(data.get("lastName")),
            email=as_str(data.get("email")),
            brand_name=as_str(data.get("brandName")),
            description=as_str(data.get("description")),
            phone=as_str(data.get("phone") or data.get("tel") or data.get("phone no")),
            title=as_str(data.get("title")),
            business_words=as_str(data.get("businessWords")),
            username=as_str(data.get("username")),
            web_site=as_str(data.get("webSite") or data.get("website")),
            catalog_url=as_str(data.get("catalogURL") or data.get("catalogUrl")),
            showroom_image_url=as_str(data.get("showroomImageURL")),
            avatar_url=as_str(data.get("avatarURL") or data.get("logoURL") or data.get("logo")),
            address=as_str(data.get("address") or data.get("address1")),
            address2=as_str(data.get("address2")),
            city=as_str(data.get("city")),
            state=as_str(data.get("state") or data.get("province")),
            zip_code=as_str(data.get("zipCode") or data.get("zip") or data.get("zipcode")),
            country=as_str(data.get("country")),
            currency_code=as_str(data.get("currencyCode") or data.get("currency")),
            store=Store.from_dict(data.get("store")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _wire_dict(self)


@dataclass
class VariantOption:
    """Axis of variation with every distinct value, comma-joined."""
    key: str = ""
    value: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "VariantOption":
        data = as_dict(data)
        value = data.get("value", data.get("values"))
        if isinstance(value, (list, tuple)):
            value = ",".join(as_str(v) for v in value if as_str(v))
        return cls(key=as_str(data.get("key") or data.get("name")), value=as_str(value))

    def to_dict(self) -> Dict[str, Any]:
        return _wire_dict(self)

    @property
    def values(self) -> List[str]:
        return [v.strip() for v in self.value.split(',') if v.strip()]


@dataclass
class Variant:
    """
    Sellable configuration of a product.

    ``options`` is positional: options[i] is the value for the product's
    variantInfo.options[i].key. Facets are independently nullable.
    """
    sku: str = ""
    options: List[str] = field(default_factory=list)
    price: Optional[float] = None
    wholesale: Optional[float] = None
    stock: int = 0
    qty: int = 0
    max_qty: int = 0
    availability: str = ""
    in_active: int = 0
    variant_image: str = ""
    upc: str = ""
    color: Optional[List[str]] = None
    materials: Optional[List[str]] = None
    size: Optional[List[str]] = None
    facets: Dict[str, Any] = field(default_factory=dict)
    shopify_product_info: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "Variant":
        data = as_dict(data)
        raw_options = data.get("options")
        if isinstance(raw_options, list):
            options = [as_str(o) for o in raw_options]
        else:
            options = as_str_list(raw_options)

        return cls(
            sku=as_str(data.get("sku")),
            options=options,
            price=as_optional_float(data.get("price")),
            wholesale=as_optional_float(data.get("wholesale")),
            stock=as_int(data.get("stock")),
            qty=as_int(data.get("qty")),
            max_qty=as_int(data.get("maxQty")),
            availability=as_str(data.get("availability")),
            in_active=as_int(data.get("inActive")),
            variant_image=as_str(data.get("variantImage")),
            upc=as_str(data.get("upc")),
            color=as_optional_str_list(data.get("color")),
            materials=as_optional_str_list(data.get("materials") or data.get("material")),
            size=as_optional_str_list(data.get("size")),
            facets={key: data[key] for key in LONG_TAIL_FACETS if data.get(key) is not None},
            shopify_product_info=as_dict(data.get("shopifyProductInfo")),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = _wire_dict(self)
        result.pop("facets")
        for key in LONG_TAIL_FACETS:
            result[key] = _to_wire(self.facets.get(key))
        return result


@dataclass
class VariantInfo:
    options: List[VariantOption] = field(default_factory=list)
    variants: List[Variant] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "VariantInfo":
        data = as_dict(data)
        return cls(
            options=[VariantOption.from_dict(o) for o in data.get("options") or []
                     if isinstance(o, dict)],
            variants=[Variant.from_dict(v) for v in data.get("variants") or []
                      if isinstance(v, dict)],
        )

    def to_dict(self) -> Dict[str, Any]:
        return _wire_dict(self)

    @property
    def option_keys(self) -> List[str]:
        return [o.key for o in self.options]


@dataclass
class Product:
    """Sellable catalog entry owned by the vendor."""
    name: str = ""
    sku: str = ""
    description: str = ""
    short_description: str = ""
    brand_name: str = ""
    price: float = 0.0
    wholesale: Optional[float] = None
    sale_price: Optional[float] = None
    stock: int = 0
    qty: int = 0
    max_qty: int = 0
    currency_code: str = ""
    tax_status: str = ""
    availability: str = ""
    category: List[str] = field(default_factory=list)
    tags: str = ""
    product_type: List[str] = field(default_factory=list)
    images_url: List[str] = field(default_factory=list, metadata={"wire": "imagesURL"})
    shipping_class: str = ""
    product_eta: str = field(default="", metadata={"wire": "productETA"})
    listing_type: int = field(default=0, metadata={"wire": "type"})  # 0 = published, 1 = draft
    is_shopify_synced_product: bool = False
    shopify_product_info: Dict[str, Any] = field(default_factory=dict)
    variant_info: VariantInfo = field(default_factory=VariantInfo)

    @classmethod
    def from_dict(cls, data: Any) -> "Product":
        data = as_dict(data)
        return cls(
            name=as_str(data.get("name") or data.get("title")),
            sku=as_str(data.get("sku")),
            description=as_str(data.get("description")),
            short_description=as_str(data.get("shortDescription")),
            brand_name=as_str(data.get("brandName")),
            price=as_float(data.get("price")),
            wholesale=as_optional_float(data.get("wholesale")),
            sale_price=as_optional_float(data.get("salePrice")),
            stock=as_int(data.get("stock")),
            qty=as_int(data.get("qty")),
            max_qty=as_int(data.get("maxQty")),
            currency_code=as_str(data.get("currencyCode")),
            tax_status=as_str(data.get("taxStatus")),
            availability=as_str(data.get("availability")),
            category=as_str_list(data.get("category")),
            tags=as_str(data.get("tags")),
            product_type=as_str_list(data.get("productType")),
            images_url=as_str_list(data.get("imagesURL") or data.get("images")),
            shipping_class=as_str(data.get("shippingClass")),
            product_eta=as_str(data.get("productETA")),
            listing_type=as_int(data.get("type")),
            is_shopify_synced_product=bool(data.get("isShopifySyncedProduct")),
            shopify_product_info=as_dict(data.get("shopifyProductInfo")),
            variant_info=VariantInfo.from_dict(data.get("variantInfo")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _wire_dict(self)

    @property
    def primary_image(self) -> str:
        return self.images_url[0] if self.images_url else ""


@dataclass
class CatalogDraft:
    """
    Normalized {vendor, products[]} tree for one import attempt.

    ``source`` records which adapter produced it ("csv", "pdf", "website",
    "shopify"); ``summary`` carries adapter-specific reporting figures.
    """
    vendor: Vendor = field(default_factory=Vendor)
    products: List[Product] = field(default_factory=list)
    source: str = ""
    summary: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any, source: str = "") -> "CatalogDraft":
        data = as_dict(data)
        return cls(
            vendor=Vendor.from_dict(data.get("vendor")),
            products=[Product.from_dict(p) for p in data.get("products") or []
                      if isinstance(p, dict)],
            source=source or as_str(data.get("source")),
            summary=as_dict(data.get("summary")),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "vendor": self.vendor.to_dict(),
            "products": [p.to_dict() for p in self.products],
        }
        if self.source:
            result["source"] = self.source
        if self.summary:
            result["summary"] = dict(self.summary)
        return result

    @property
    def variant_count(self) -> int:
        return sum(len(p.variant_info.variants) for p in self.products)
