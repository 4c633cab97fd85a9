"""
Shopify Catalog Source

Reads a vendor's Shopify store and maps it to a CatalogDraft:

1. Shop info (connectivity check; fatal on failure)
2. Storefront token + brand query (best-effort)
3. Products, cursor-paginated, capped at 250
4. Locations and per-product inventory levels (best-effort, concurrent)
5. Deterministic mapping through ShopifyCatalogMapper + CatalogNormalizer
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, List, Optional

from ..exceptions import InputValidationError, UpstreamConnectError
from ..models import CatalogDraft
from ..normalization import CatalogNormalizer, ShopifyCatalogMapper
from ..shopify import ShopifyAPIClient, next_page_info

logger = logging.getLogger(__name__)

PAGE_SIZE = 50
MAX_PRODUCTS = 250
INVENTORY_WORKERS = 4

STOREFRONT_TOKEN_TITLE = "Ribbon Import Tool Storefront Access Token"
STOREFRONT_SCOPES = (
    "unauthenticated_read_product_listings,"
    "unauthenticated_read_product_inventory,"
    "unauthenticated_read_content"
)

BRAND_QUERY = """
query getBrandInfo {
  shop {
    brand {
      coverImage { image { url } }
      logo { image { url } }
      squareLogo { image { url } }
      shortDescription
    }
  }
}
"""


class ShopifyCatalogSource:
    """
    Fetches and maps a Shopify store's catalog.

    Usage:
        with ShopifyCatalogSource("acme.myshopify.com", "shpat_xxx") as source:
            draft = source.fetch_catalog()
    """

    def __init__(
        self,
        store_url: str,
        access_token: str,
        client: Optional[ShopifyAPIClient] = None,
        mapper: Optional[ShopifyCatalogMapper] = None,
        normalizer: Optional[CatalogNormalizer] = None,
        max_products: int = MAX_PRODUCTS,
        workers: int = INVENTORY_WORKERS,
    ):
        """
        Initialize the source.

        Args:
            store_url: Store URL or shop name
            access_token: Admin API access token
            client: Pre-built API client (tests)
            mapper: Catalog mapper
            normalizer: Canonical normalizer applied after mapping
            max_products: Product cap across all pages
            workers: Concurrent inventory lookups

        Raises:
            InputValidationError: If the store URL or token is missing
        """
        if not store_url or not access_token:
            raise InputValidationError(
                "Shopify URL and admin token are required",
                field="shopifyUrl" if not store_url else "adminToken",
            )

        self.store_url = store_url
        self.client = client or ShopifyAPIClient(shop=store_url, access_token=access_token)
        self.mapper = mapper or ShopifyCatalogMapper()
        self.normalizer = normalizer or CatalogNormalizer()
        self.max_products = max_products
        self.workers = workers

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.client.close()

    def fetch_shop(self) -> Dict[str, Any]:
        """
        Fetch shop info.

        Raises:
            UpstreamConnectError: Store unreachable or token rejected
        """
        shop = self.client.get_shop()
        if shop is None:
            raise UpstreamConnectError(
                "Failed to connect to Shopify. Please check your store URL and admin token.",
                status_code=self.client.last_status_code,
            )
        return shop

    def create_storefront_token(self) -> Optional[str]:
        """Provision a Storefront API token (best-effort, None on failure)."""
        result = self.client.rest_request("POST", "storefront_access_tokens.json", data={
            "storefront_access_token": {
                "title": STOREFRONT_TOKEN_TITLE,
                "access_scope": STOREFRONT_SCOPES,
            }
        })
        token = ((result or {}).get("storefront_access_token") or {}).get("access_token")
        if token:
            logger.info("Storefront access token generated")
        else:
            logger.warning("Failed to generate Storefront access token")
        return token

    def fetch_brand(self) -> Optional[Dict[str, Any]]:
        """Fetch brand assets through the Storefront API (best-effort)."""
        token = self.create_storefront_token()
        if not token:
            return None

        data = self.client.storefront_request(BRAND_QUERY, token)
        brand = ((data or {}).get("shop") or {}).get("brand")
        if brand is None:
            logger.warning("Brand info not available from Storefront API")
        return brand

    def fetch_products(self) -> List[Dict[str, Any]]:
        """
        Fetch products page by page.

        Stops when the Link header has no rel="next" cursor or when
        max_products have been accumulated, whichever comes first.

        Raises:
            UpstreamConnectError: If a page request fails
        """
        products: List[Dict[str, Any]] = []
        cursor: Optional[str] = None

        while len(products) < self.max_products:
            params: Dict[str, Any] = {"limit": PAGE_SIZE}
            if cursor:
                params["page_info"] = cursor

            page, link_header = self.client.rest_get_page("products.json", params)
            if page is None:
                raise UpstreamConnectError(
                    f"Failed to fetch products after {len(products)} items",
                    status_code=self.client.last_status_code,
                )

            products.extend(page.get("products") or [])
            cursor = next_page_info(link_header)
            if not cursor:
                break

        logger.info("Fetched %d products", min(len(products), self.max_products))
        return products[:self.max_products]

    def fetch_location_ids(self) -> List[int]:
        """Location ids for the inventory query (best-effort, [] on failure)."""
        result = self.client.rest_request("GET", "locations.json")
        if result is None:
            logger.warning("Failed to fetch locations; inventory query will not filter by location")
            return []
        return [loc["id"] for loc in result.get("locations") or [] if loc.get("id") is not None]

    def fetch_inventory(self, product: Dict[str, Any], location_ids: List[int]) -> Optional[Dict[int, int]]:
        """
        Per-location inventory levels for one product's variants.

        Returns:
            inventory_item_id → available summed over locations, or None
            when the lookup failed (callers fall back to embedded quantities)
        """
        item_ids = [v["inventory_item_id"] for v in product.get("variants") or []
                    if v.get("inventory_item_id") is not None]
        if not item_ids:
            return {}

        params = {"inventory_item_ids": ",".join(str(i) for i in item_ids)}
        if location_ids:
            params["location_ids"] = ",".join(str(i) for i in location_ids)

        result = self.client.rest_request("GET", "inventory_levels.json", params=params)
        if result is None:
            logger.warning("Failed to fetch inventory for product: %s", product.get("id"))
            return None

        inventory: Dict[int, int] = {}
        for level in result.get("inventory_levels") or []:
            item_id = level.get("inventory_item_id")
            if item_id is None:
                continue
            inventory[item_id] = inventory.get(item_id, 0) + int(level.get("available") or 0)
        return inventory

    def fetch_inventories(self, products: List[Dict[str, Any]], location_ids: List[int]) -> List[Optional[Dict[int, int]]]:
        """
        Inventory joins for all products, fetched concurrently.

        Results complete in any order and are joined back by product index.
        """
        inventories: List[Optional[Dict[int, int]]] = [None] * len(products)
        if not products:
            return inventories

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = {
                executor.submit(self.fetch_inventory, product, location_ids): index
                for index, product in enumerate(products)
            }
            for future in as_completed(futures):
                inventories[futures[future]] = future.result()

        return inventories

    def fetch_catalog(self) -> CatalogDraft:
        """
        Run the whole Shopify read and return the normalized draft.

        Raises:
            UpstreamConnectError: Shop info or a product page failed
        """
        shop = self.fetch_shop()
        brand = self.fetch_brand()
        products = self.fetch_products()
        location_ids = self.fetch_location_ids()
        inventories = self.fetch_inventories(products, location_ids)

        draft = self.mapper.map_catalog(shop, brand, products, inventories, self.store_url)
        logger.info("Transformed %d valid products", len(draft.products))

        return self.normalizer.normalize(draft)
