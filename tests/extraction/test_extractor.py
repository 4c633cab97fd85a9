"""Tests for CatalogExtractor."""

import pytest

from vendor_onboarding.exceptions import ExtractionError, InputValidationError
from vendor_onboarding.extraction import SOURCE_CSV, SOURCE_PDF, SOURCE_WEBSITE, CatalogExtractor
from vendor_onboarding.normalization import AddressInferrer, CatalogNormalizer


@pytest.fixture
def normalizer(regions):
    return CatalogNormalizer(address_inferrer=AddressInferrer(regions))


class TestExtract:
    def test_csv_reply_is_normalized(self, service_factory, normalizer, ai_reply):
        service = service_factory([ai_reply])
        draft = CatalogExtractor(service, normalizer).extract("Row 1: Company: Acme", SOURCE_CSV)

        assert draft.source == "csv"
        assert len(service.prompts) == 1
        assert "Row 1: Company: Acme" in service.prompts[0]
        assert service.attachments == [None]

        # Two rows with the same title fold into one product
        assert len(draft.products) == 1
        product = draft.products[0]
        assert product.name == "Linen Shirt"
        assert product.price == 40.0
        assert [v.sku for v in product.variant_info.variants] == ["LS-RED", "LS-BLUE"]
        assert [(o.key, o.value) for o in product.variant_info.options] == [("Color", "Red,Blue")]
        assert product.stock == 3

    def test_vendor_links_and_address(self, service_factory, normalizer, ai_reply):
        draft = CatalogExtractor(service_factory([ai_reply]), normalizer).extract("x", SOURCE_PDF)
        vendor = draft.vendor

        assert vendor.country == "United States"
        assert vendor.web_site == "https://acme.example"
        assert vendor.catalog_url == "https://acme.example/catalog.pdf"
        assert [(l.link_name, l.link_value) for l in vendor.store.links] == [
            ("Link", "https://acme.example"),
            ("Instagram", "https://instagram.com/acmegoods"),
        ]
        assert [img.image_src for img in vendor.store.curated_images] == ["https://cdn.example/a.jpg"]

    def test_website_prompt_carries_url(self, service_factory, normalizer, ai_reply):
        service = service_factory([ai_reply])
        CatalogExtractor(service, normalizer).extract("Welcome", SOURCE_WEBSITE, url="https://acme.example")
        assert "WEBSITE URL: https://acme.example" in service.prompts[0]

    def test_unusable_reply_raises(self, service_factory, normalizer):
        extractor = CatalogExtractor(service_factory(["not json at all"]), normalizer)
        with pytest.raises(ExtractionError) as exc:
            extractor.extract("x", SOURCE_CSV)
        assert exc.value.raw_response == "not json at all"

    def test_service_called_once_on_failure(self, service_factory, normalizer):
        service = service_factory(["{}", "never used"])
        with pytest.raises(ExtractionError):
            CatalogExtractor(service, normalizer).extract("x", SOURCE_CSV)
        assert len(service.prompts) == 1

    def test_unknown_source(self, fake_service, normalizer):
        with pytest.raises(InputValidationError) as exc:
            CatalogExtractor(fake_service, normalizer).extract("x", "xlsx")
        assert exc.value.field == "source"
        assert fake_service.prompts == []
