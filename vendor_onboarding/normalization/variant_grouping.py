"""
Variant Grouping Engine

Turns one Shopify product (as returned by the Admin REST products.json
resource) into the canonical variantInfo tree:

- options: one entry per native option definition, value = distinct
  option values across the product's variants, comma-joined
- variants: one canonical Variant per native variant, with resolved
  stock, availability and pricing

Stock resolution order for a variant:
1. Sum of per-location inventory levels joined by inventory_item_id
2. The variant's embedded inventory_quantity
3. Zero
"""

from typing import Any, Dict, List, Optional

from ..models import Variant, VariantInfo, VariantOption
from ..models.coercion import as_float, as_int, as_optional_float, as_str
from .options import distinct_values

IN_STOCK = "In Stock"
OUT_OF_STOCK = "Out of Stock"

# Shopify's implicit option on products without real variants
PLACEHOLDER_OPTION_NAME = "Title"
PLACEHOLDER_OPTION_VALUE = "Default Title"


def availability_for(stock: int) -> str:
    return IN_STOCK if stock > 0 else OUT_OF_STOCK


def parse_price(value: Any) -> float:
    """Parse a Shopify decimal string ("19.99") to float; blank → 0.0."""
    return as_float(value)


class VariantGroupingEngine:
    """
    Builds canonical variantInfo for native Shopify products.

    Usage:
        engine = VariantGroupingEngine()
        info = engine.group(shopify_product, inventory={808950810: 7})
    """

    def group(self, product: Dict[str, Any], inventory: Optional[Dict[int, int]] = None) -> VariantInfo:
        """
        Build the variantInfo for one native product.

        Args:
            product: Shopify product dict (title, handle, options, variants, images)
            inventory: inventory_item_id → available quantity summed over
                locations; only items with at least one level are present

        Returns:
            VariantInfo with at least one variant
        """
        inventory = inventory or {}
        native_variants = product.get("variants") or []

        variants = [self.build_variant(product, v, inventory) for v in native_variants]
        if not variants:
            variants = [self._fallback_variant(product)]

        options = self.build_options(product)

        return VariantInfo(options=options, variants=variants)

    def build_options(self, product: Dict[str, Any]) -> List[VariantOption]:
        """
        One option per native option definition.

        Values come from the variants' option1..option3 fields in order of
        first appearance; the definition's declared values are used only
        when no variant carries a value for that position.
        """
        native_variants = product.get("variants") or []
        options = []

        for index, definition in enumerate(product.get("options") or []):
            name = as_str(definition.get("name"))
            position = as_int(definition.get("position"), default=index + 1)

            values = distinct_values(
                as_str(v.get(f"option{position}")) for v in native_variants
            )
            if not values:
                values = distinct_values(as_str(v) for v in definition.get("values") or [])

            if name == PLACEHOLDER_OPTION_NAME and values == [PLACEHOLDER_OPTION_VALUE]:
                continue

            options.append(VariantOption(key=name, value=",".join(values)))

        return options

    @staticmethod
    def resolve_stock(native_variant: Dict[str, Any], inventory: Dict[int, int]) -> int:
        """Inventory join, else embedded inventory_quantity, else 0."""
        item_id = native_variant.get("inventory_item_id")
        if item_id is not None and item_id in inventory:
            return int(inventory[item_id])

        embedded = native_variant.get("inventory_quantity")
        if embedded is not None:
            return as_int(embedded)

        return 0

    def build_variant(
        self,
        product: Dict[str, Any],
        native_variant: Dict[str, Any],
        inventory: Dict[int, int],
    ) -> Variant:
        stock = self.resolve_stock(native_variant, inventory)
        price = parse_price(native_variant.get("price"))
        compare_at = as_optional_float(native_variant.get("compare_at_price"))

        option_values = [
            as_str(native_variant.get(f"option{n}")) for n in (1, 2, 3)
        ]
        option_values = [
            value for value in option_values
            if value and value != PLACEHOLDER_OPTION_VALUE
        ]

        return Variant(
            sku=as_str(native_variant.get("sku")) or f"{product.get('handle', '')}-{native_variant.get('id')}",
            options=option_values,
            price=price,
            wholesale=compare_at if compare_at else price,
            stock=stock,
            qty=1,
            max_qty=0,
            availability=availability_for(stock),
            in_active=0 if stock > 0 else 1,
            variant_image=self._variant_image(product, native_variant),
            upc=as_str(native_variant.get("barcode")),
            color=[],
            materials=[],
            size=[],
            shopify_product_info={"variant_id": as_str(native_variant.get("id"))},
        )

    @staticmethod
    def _variant_image(product: Dict[str, Any], native_variant: Dict[str, Any]) -> str:
        image_id = native_variant.get("image_id")
        if not image_id:
            return ""
        for image in product.get("images") or []:
            if image.get("id") == image_id:
                return as_str(image.get("src"))
        return ""

    @staticmethod
    def _fallback_variant(product: Dict[str, Any]) -> Variant:
        # Products always come with at least one variant from Shopify;
        # this covers hand-built or truncated payloads.
        return Variant(
            sku=f"{product.get('handle', '')}-{product.get('id')}",
            qty=1,
            availability=OUT_OF_STOCK,
            in_active=1,
        )
