"""
Catalog Extractor

Text-to-catalog capability for the AI-backed sources (CSV, PDF,
website): builds the source's prompt, calls the extraction service once,
parses the reply and runs the canonical normalizer over the result.
"""

import logging
from typing import Optional

from ..exceptions import InputValidationError
from ..models import CatalogDraft
from ..normalization import CatalogNormalizer
from .prompts import build_document_prompt, build_tabular_prompt, build_website_prompt
from .response_parser import parse_catalog_response
from .service import ExtractionService

logger = logging.getLogger(__name__)

SOURCE_CSV = "csv"
SOURCE_PDF = "pdf"
SOURCE_WEBSITE = "website"


class CatalogExtractor:
    """
    Turns raw source text into a normalized CatalogDraft.

    Usage:
        extractor = CatalogExtractor(GeminiExtractionService(api_key))
        draft = extractor.extract(flattened_csv_text, source="csv")
        draft = extractor.extract(page_text, source="website", url="https://acme.example")
    """

    def __init__(self, service: ExtractionService, normalizer: Optional[CatalogNormalizer] = None):
        self.service = service
        self.normalizer = normalizer or CatalogNormalizer()

    def build_prompt(self, text: str, source: str, url: str = "") -> str:
        if source == SOURCE_CSV:
            return build_tabular_prompt(text)
        if source == SOURCE_PDF:
            return build_document_prompt(text)
        if source == SOURCE_WEBSITE:
            return build_website_prompt(url, text)
        raise InputValidationError(f"Unsupported source: {source}", field="source")

    def extract(self, text: str, source: str, url: str = "") -> CatalogDraft:
        """
        Extract a draft from raw text.

        Args:
            text: Flattened rows, document text or page text
            source: 'csv', 'pdf' or 'website'
            url: Page URL (website source only)

        Returns:
            Normalized CatalogDraft

        Raises:
            ExtractionError: Service failure or unusable reply (no retry)
        """
        prompt = self.build_prompt(text, source, url)
        logger.info("Extracting catalog from %s (%d chars of input)", source, len(text))

        reply = self.service.generate(prompt)
        data = parse_catalog_response(reply)

        draft = CatalogDraft.from_dict(data, source=source)
        logger.info("AI returned %d product entries for vendor %r",
                    len(draft.products), draft.vendor.brand_name)

        return self.normalizer.normalize(draft)
