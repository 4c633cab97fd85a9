"""
Document (PDF) Source

The uploaded document is not parsed locally: its bytes are sent to the
extraction service as an inline attachment with a fixed "extract all
text" instruction.
"""

import logging

from ..exceptions import InputValidationError
from ..extraction.prompts import DOCUMENT_TEXT_INSTRUCTION
from ..extraction.service import Attachment, ExtractionService
from .uploads import validate_upload_size

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


def validate_document_upload(filename: str, content_type: str, size: int) -> None:
    """
    Check an uploaded document before sending it.

    Raises:
        InputValidationError: Missing file, not a PDF, empty or >10MB
    """
    if not filename:
        raise InputValidationError("No file provided", field="file")
    if "pdf" not in (content_type or "").lower():
        raise InputValidationError("Please upload a PDF file", field="file")
    validate_upload_size(size, "PDF file")


class DocumentTextSource:
    """
    Extracts plain text from a document via the extraction service.

    Usage:
        source = DocumentTextSource(service)
        text = source.extract_text(pdf_bytes)
    """

    def __init__(self, service: ExtractionService):
        self.service = service

    def extract_text(self, data: bytes, mime_type: str = PDF_MIME_TYPE) -> str:
        """
        Ask the service for the document's text content.

        Raises:
            InputValidationError: If the service found no text
            ExtractionError: If the service call fails
        """
        text = self.service.generate(DOCUMENT_TEXT_INSTRUCTION, Attachment(data=data, mime_type=mime_type))

        if not text or not text.strip():
            raise InputValidationError("No text content found in PDF", field="file")

        logger.info("Extracted %d characters of document text", len(text))
        return text
