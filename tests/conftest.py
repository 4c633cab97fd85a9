"""Shared test fixtures."""

import json
from typing import List, Optional

import pytest

from vendor_onboarding.extraction.service import Attachment
from vendor_onboarding.models import CatalogDraft, Product, Store, StoreLink, Variant, VariantInfo, VariantOption, Vendor

REGIONS = {
    "United States": {
        "postal_pattern": r"^\d{5}(-\d{4})?$",
        "regions": {"CA": "California", "NY": "New York", "TX": "Texas"},
    },
    "Canada": {
        "postal_pattern": r"^[A-Za-z]\d[A-Za-z][ -]?\d[A-Za-z]\d$",
        "regions": {"ON": "Ontario", "BC": "British Columbia"},
    },
}

FACETS = {
    "color": {
        "keywords": ["red", "blue", "green", "yellow", "black", "white",
                     "pink", "purple", "orange", "brown", "gray", "grey"],
        "fallback": "black",
    },
    "material": {
        "keywords": ["cotton", "silk", "wool", "polyester", "leather",
                     "denim", "linen", "cashmere", "nylon"],
        "fallback": "Cotton",
    },
}


class FakeExtractionService:
    """Stands in for the Gemini service: records prompts, returns canned replies."""

    def __init__(self, replies: Optional[List[str]] = None):
        self.replies = list(replies or [])
        self.prompts: List[str] = []
        self.attachments: List[Optional[Attachment]] = []

    def generate(self, prompt: str, attachment: Optional[Attachment] = None) -> str:
        self.prompts.append(prompt)
        self.attachments.append(attachment)
        return self.replies.pop(0) if self.replies else ""


@pytest.fixture
def regions():
    return REGIONS


@pytest.fixture
def facets():
    return FACETS


@pytest.fixture
def fake_service():
    return FakeExtractionService()


@pytest.fixture
def service_factory():
    """Build a fake extraction service with canned replies."""
    return FakeExtractionService


@pytest.fixture
def shopify_shop():
    """Admin API shop.json 'shop' object."""
    return {
        "id": 548380009,
        "name": "Acme Goods",
        "email": "owner@acme.example",
        "domain": "shop.acme.example",
        "shop_owner": "Jane Q Doe",
        "phone": "555-0100",
        "address1": "1 Main St",
        "address2": "",
        "city": "Austin",
        "province": "Texas",
        "zip": "73301",
        "country_name": "United States",
        "currency": "USD",
    }


@pytest.fixture
def shopify_product():
    """Admin API product with two Color x Size variants."""
    return {
        "id": 632910392,
        "title": "Linen Shirt",
        "handle": "linen-shirt",
        "body_html": "<p>Breathable <strong>linen</strong> shirt.</p>",
        "product_type": "Shirts",
        "tags": "summer, linen",
        "status": "active",
        "options": [
            {"name": "Color", "position": 1, "values": ["Red", "Blue"]},
            {"name": "Size", "position": 2, "values": ["M", "L"]},
        ],
        "variants": [
            {"id": 1, "sku": "LS-RED-M", "price": "40.00", "compare_at_price": "55.00",
             "option1": "Red", "option2": "M", "inventory_item_id": 101,
             "inventory_quantity": 3, "barcode": "0001", "image_id": 9001, "taxable": True},
            {"id": 2, "sku": "", "price": "40.00", "compare_at_price": None,
             "option1": "Blue", "option2": "L", "inventory_item_id": 102,
             "inventory_quantity": 0, "barcode": "", "image_id": None, "taxable": True},
        ],
        "images": [
            {"id": 9001, "src": "https://cdn.example/ls-red.jpg"},
            {"id": 9002, "src": "https://cdn.example/ls-blue.jpg"},
        ],
    }


@pytest.fixture
def single_variant_product():
    """Admin API product without real variants (Title / Default Title)."""
    return {
        "id": 77,
        "title": "Gift Card",
        "handle": "gift-card",
        "body_html": "",
        "product_type": "",
        "tags": "",
        "status": "draft",
        "options": [{"name": "Title", "position": 1, "values": ["Default Title"]}],
        "variants": [
            {"id": 700, "sku": "GC", "price": "25.00", "option1": "Default Title",
             "inventory_item_id": 7001, "inventory_quantity": 5},
        ],
        "images": [],
    }


@pytest.fixture
def sample_draft():
    """Normalized draft with one two-variant product."""
    vendor = Vendor(
        first_name="Jane",
        last_name="Doe",
        email="jane@acme.example",
        brand_name="Acme Goods",
        web_site="https://acme.example",
        currency_code="USD",
        store=Store(links=[StoreLink(link_name="Link", link_value="https://acme.example")]),
    )
    product = Product(
        name="Linen Shirt",
        sku="LS-100",
        price=40.0,
        stock=5,
        images_url=["https://cdn.example/ls.jpg"],
        variant_info=VariantInfo(
            options=[VariantOption(key="Color", value="Red,Blue")],
            variants=[
                Variant(sku="LS-100-RED", options=["Red"], price=40.0, stock=3),
                Variant(sku="LS-100-BLUE", options=["Blue"], price=40.0, stock=2),
            ],
        ),
    )
    return CatalogDraft(vendor=vendor, products=[product], source="csv")


@pytest.fixture
def ai_reply():
    """Fenced extraction reply with two rows that share a title."""
    data = {
        "vendor": {
            "brandName": "Acme Goods",
            "email": "jane@acme.example",
            "state": "CA",
            "store": {"links": [
                {"linkName": "Website", "linkValue": "https://acme.example"},
                {"linkName": "Instagram", "linkValue": "@acmegoods"},
                {"linkName": "Catalog", "linkValue": "https://acme.example/catalog.pdf"},
            ]},
        },
        "products": [
            {"name": "Linen Shirt", "sku": "LS-RED", "price": "$40.00", "imagesURL": ["https://cdn.example/a.jpg"],
             "variantInfo": {"options": [{"key": "Color", "value": "Red"}],
                             "variants": [{"sku": "LS-RED", "options": ["Red"], "stock": 2}]}},
            {"name": "linen shirt ", "sku": "LS-BLUE", "price": 40,
             "variantInfo": {"options": [{"key": "Color", "value": "Blue"}],
                             "variants": [{"sku": "LS-BLUE", "options": ["Blue"], "stock": 1}]}},
        ],
    }
    return "```json\n" + json.dumps(data) + "\n```"
