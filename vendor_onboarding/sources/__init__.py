"""
Source adapters: input medium → raw text or raw platform records.

Modules:
    uploads          - Upload size limit shared by file sources
    tabular          - CSV upload validation and row flattening
    document         - PDF upload validation and text extraction
    web              - Website fetch, tag stripping and truncation
    shopify_catalog  - ShopifyCatalogSource (store → normalized draft)
"""

from .document import PDF_MIME_TYPE, DocumentTextSource, validate_document_upload
from .shopify_catalog import MAX_PRODUCTS, ShopifyCatalogSource
from .tabular import csv_to_text, flatten_rows, validate_csv_upload
from .uploads import MAX_UPLOAD_BYTES, validate_upload_size
from .web import MAX_TEXT_CHARS, WebPageSource, validate_url

__all__ = [
    'DocumentTextSource',
    'MAX_PRODUCTS',
    'MAX_TEXT_CHARS',
    'MAX_UPLOAD_BYTES',
    'PDF_MIME_TYPE',
    'ShopifyCatalogSource',
    'WebPageSource',
    'csv_to_text',
    'flatten_rows',
    'validate_csv_upload',
    'validate_document_upload',
    'validate_upload_size',
    'validate_url',
]
