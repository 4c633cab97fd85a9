"""
AI-backed extraction modules.

Modules:
    service          - ExtractionService protocol and GeminiExtractionService
    prompts          - Prompt templates per source
    response_parser  - Code-fence stripping and structural validation
    extractor        - CatalogExtractor (text → normalized CatalogDraft)
"""

from .extractor import SOURCE_CSV, SOURCE_PDF, SOURCE_WEBSITE, CatalogExtractor
from .response_parser import parse_catalog_response, strip_code_fences
from .service import Attachment, ExtractionService, GeminiExtractionService

__all__ = [
    'Attachment',
    'CatalogExtractor',
    'ExtractionService',
    'GeminiExtractionService',
    'SOURCE_CSV',
    'SOURCE_PDF',
    'SOURCE_WEBSITE',
    'parse_catalog_response',
    'strip_code_fences',
]
