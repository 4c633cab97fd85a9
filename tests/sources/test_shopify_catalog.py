"""Tests for the Shopify catalog source."""

from unittest.mock import MagicMock, patch

import pytest

from vendor_onboarding.exceptions import InputValidationError, UpstreamConnectError
from vendor_onboarding.shopify.api_client import ShopifyAPIClient
from vendor_onboarding.sources.shopify_catalog import MAX_PRODUCTS, PAGE_SIZE, ShopifyCatalogSource

NEXT_LINK = '<https://acme.myshopify.com/admin/api/2024-01/products.json?limit=50&page_info={cursor}>; rel="next"'


def _client():
    client = MagicMock()
    client.last_status_code = None
    return client


def _page(start, count):
    return {"products": [{"id": start + i, "title": f"Product {start + i}"} for i in range(count)]}


class TestConstruction:
    def test_missing_store_url(self):
        with pytest.raises(InputValidationError) as exc:
            ShopifyCatalogSource("", "shpat_x", client=_client())
        assert exc.value.field == "shopifyUrl"

    def test_missing_token(self):
        with pytest.raises(InputValidationError) as exc:
            ShopifyCatalogSource("acme", "", client=_client())
        assert exc.value.field == "adminToken"

    def test_context_manager_closes_client(self):
        client = _client()
        with ShopifyCatalogSource("acme", "shpat_x", client=client):
            pass
        client.close.assert_called_once()


class TestFetchShop:
    def test_returns_shop(self, shopify_shop):
        client = _client()
        client.get_shop.return_value = shopify_shop
        assert ShopifyCatalogSource("acme", "t", client=client).fetch_shop() is shopify_shop

    def test_failure_is_fatal(self):
        client = _client()
        client.get_shop.return_value = None
        client.last_status_code = 401
        with pytest.raises(UpstreamConnectError) as exc:
            ShopifyCatalogSource("acme", "t", client=client).fetch_shop()
        assert exc.value.status_code == 401
        assert "Failed to connect to Shopify" in exc.value.message


class TestFetchBrand:
    def test_brand_from_storefront(self):
        client = _client()
        client.rest_request.return_value = {"storefront_access_token": {"access_token": "sf_1"}}
        client.storefront_request.return_value = {"shop": {"brand": {"shortDescription": "Linen"}}}

        brand = ShopifyCatalogSource("acme", "t", client=client).fetch_brand()

        assert brand == {"shortDescription": "Linen"}
        assert client.storefront_request.call_args[0][1] == "sf_1"

    def test_token_failure_skips_query(self):
        client = _client()
        client.rest_request.return_value = None

        assert ShopifyCatalogSource("acme", "t", client=client).fetch_brand() is None
        client.storefront_request.assert_not_called()

    def test_missing_brand_is_none(self):
        client = _client()
        client.rest_request.return_value = {"storefront_access_token": {"access_token": "sf_1"}}
        client.storefront_request.return_value = None

        assert ShopifyCatalogSource("acme", "t", client=client).fetch_brand() is None


class TestFetchProducts:
    def test_follows_cursor_until_last_page(self):
        client = _client()
        client.rest_get_page.side_effect = [
            (_page(0, PAGE_SIZE), NEXT_LINK.format(cursor="abc")),
            (_page(PAGE_SIZE, 3), ""),
        ]

        products = ShopifyCatalogSource("acme", "t", client=client).fetch_products()

        assert len(products) == PAGE_SIZE + 3
        first_params = client.rest_get_page.call_args_list[0][0][1]
        second_params = client.rest_get_page.call_args_list[1][0][1]
        assert "page_info" not in first_params
        assert second_params["page_info"] == "abc"

    def test_stops_at_product_cap(self):
        client = _client()
        client.rest_get_page.side_effect = [
            (_page(i * PAGE_SIZE, PAGE_SIZE), NEXT_LINK.format(cursor=f"c{i}")) for i in range(10)
        ]

        products = ShopifyCatalogSource("acme", "t", client=client).fetch_products()

        assert len(products) == MAX_PRODUCTS
        assert client.rest_get_page.call_count == MAX_PRODUCTS // PAGE_SIZE

    def test_custom_cap_truncates_page(self):
        client = _client()
        client.rest_get_page.return_value = (_page(0, PAGE_SIZE), NEXT_LINK.format(cursor="abc"))

        products = ShopifyCatalogSource("acme", "t", client=client, max_products=10).fetch_products()

        assert len(products) == 10
        assert client.rest_get_page.call_count == 1

    def test_failed_page_raises(self):
        client = _client()
        client.rest_get_page.return_value = (None, "")
        client.last_status_code = 500

        with pytest.raises(UpstreamConnectError) as exc:
            ShopifyCatalogSource("acme", "t", client=client).fetch_products()
        assert exc.value.status_code == 500


class TestInventory:
    def test_levels_summed_per_item(self, shopify_product):
        client = _client()
        client.rest_request.return_value = {"inventory_levels": [
            {"inventory_item_id": 101, "location_id": 1, "available": 2},
            {"inventory_item_id": 101, "location_id": 2, "available": 4},
            {"inventory_item_id": 102, "location_id": 1, "available": None},
        ]}

        inventory = ShopifyCatalogSource("acme", "t", client=client).fetch_inventory(shopify_product, [1, 2])

        assert inventory == {101: 6, 102: 0}
        params = client.rest_request.call_args[1]["params"]
        assert params == {"inventory_item_ids": "101,102", "location_ids": "1,2"}

    def test_no_location_filter_without_locations(self, shopify_product):
        client = _client()
        client.rest_request.return_value = {"inventory_levels": []}

        ShopifyCatalogSource("acme", "t", client=client).fetch_inventory(shopify_product, [])

        assert "location_ids" not in client.rest_request.call_args[1]["params"]

    def test_failure_returns_none(self, shopify_product):
        client = _client()
        client.rest_request.return_value = None
        assert ShopifyCatalogSource("acme", "t", client=client).fetch_inventory(shopify_product, []) is None

    def test_product_without_items_skips_request(self):
        client = _client()
        result = ShopifyCatalogSource("acme", "t", client=client).fetch_inventory({"variants": [{"id": 1}]}, [])
        assert result == {}
        client.rest_request.assert_not_called()

    def test_locations_failure_is_empty(self):
        client = _client()
        client.rest_request.return_value = None
        assert ShopifyCatalogSource("acme", "t", client=client).fetch_location_ids() == []

    def test_inventories_joined_by_index(self):
        source = ShopifyCatalogSource("acme", "t", client=_client(), workers=3)
        source.fetch_inventory = lambda product, location_ids: {product["id"]: product["id"] * 10}

        products = [{"id": i} for i in range(6)]
        inventories = source.fetch_inventories(products, [])

        assert inventories == [{i: i * 10} for i in range(6)]


class TestFetchCatalog:
    def test_end_to_end(self, shopify_shop, shopify_product, single_variant_product):
        client = _client()
        client.get_shop.return_value = shopify_shop
        client.rest_get_page.return_value = ({"products": [shopify_product, single_variant_product]}, "")

        def rest_request(method, endpoint, data=None, params=None):
            if endpoint == "storefront_access_tokens.json":
                return None
            if endpoint == "locations.json":
                return {"locations": [{"id": 1}]}
            if "101" in params["inventory_item_ids"]:
                return {"inventory_levels": [
                    {"inventory_item_id": 101, "available": 8},
                    {"inventory_item_id": 102, "available": 0},
                ]}
            return None

        client.rest_request.side_effect = rest_request

        with ShopifyCatalogSource("acme", "t", client=client) as source:
            draft = source.fetch_catalog()

        assert draft.source == "shopify"
        assert draft.vendor.brand_name == "Acme Goods"
        assert [p.name for p in draft.products] == ["Linen Shirt", "Gift Card"]

        shirt, gift = draft.products
        assert [v.stock for v in shirt.variant_info.variants] == [8, 0]
        assert shirt.stock == 8
        # Inventory lookup failed for the gift card; embedded quantity is used
        assert gift.variant_info.variants[0].stock == 5


class TestMaintenancePage:
    """A store answering 200 with an HTML page instead of JSON."""

    @pytest.fixture
    def api_client(self):
        client = ShopifyAPIClient("acme", "shpat_x")
        client.min_request_interval = 0
        page = MagicMock()
        page.status_code = 200
        page.headers = {}
        page.text = "<html>maintenance</html>"
        page.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
        with patch.object(client.session, "get", return_value=page), \
                patch.object(client.session, "post", return_value=page):
            yield client

    def test_inventory_is_skipped(self, api_client, shopify_product):
        source = ShopifyCatalogSource("acme", "shpat_x", client=api_client)
        assert source.fetch_inventory(shopify_product, []) is None

    def test_inventories_do_not_raise(self, api_client, shopify_product, single_variant_product):
        source = ShopifyCatalogSource("acme", "shpat_x", client=api_client, workers=2)
        assert source.fetch_inventories([shopify_product, single_variant_product], []) == [None, None]

    def test_brand_is_skipped(self, api_client):
        assert ShopifyCatalogSource("acme", "shpat_x", client=api_client).fetch_brand() is None

    def test_shop_failure_is_typed(self, api_client):
        with pytest.raises(UpstreamConnectError) as exc:
            ShopifyCatalogSource("acme", "shpat_x", client=api_client).fetch_shop()
        assert exc.value.status_code == 200
