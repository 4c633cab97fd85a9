"""Tests for vendor_onboarding/sources/document.py"""

import pytest

from vendor_onboarding.exceptions import InputValidationError
from vendor_onboarding.extraction.prompts import DOCUMENT_TEXT_INSTRUCTION
from vendor_onboarding.sources.document import PDF_MIME_TYPE, DocumentTextSource, validate_document_upload
from vendor_onboarding.sources.uploads import MAX_UPLOAD_BYTES


class TestValidateDocumentUpload:
    def test_accepts_pdf(self):
        validate_document_upload("sheet.pdf", "application/pdf", 2048)

    def test_rejects_other_types(self):
        with pytest.raises(InputValidationError, match="PDF"):
            validate_document_upload("sheet.docx", "application/msword", 2048)

    def test_missing_file(self):
        with pytest.raises(InputValidationError, match="No file provided"):
            validate_document_upload("", "application/pdf", 2048)

    def test_oversized(self):
        with pytest.raises(InputValidationError, match="10MB"):
            validate_document_upload("sheet.pdf", "application/pdf", MAX_UPLOAD_BYTES + 1)


class TestDocumentTextSource:
    def test_sends_bytes_as_attachment(self, service_factory):
        service = service_factory(["Acme Goods\nLinen Shirt $40"])
        text = DocumentTextSource(service).extract_text(b"%PDF-1.7 ...")

        assert text == "Acme Goods\nLinen Shirt $40"
        assert service.prompts == [DOCUMENT_TEXT_INSTRUCTION]
        attachment = service.attachments[0]
        assert attachment.data == b"%PDF-1.7 ..."
        assert attachment.mime_type == PDF_MIME_TYPE

    def test_empty_text_is_rejected(self, service_factory):
        service = service_factory(["  \n "])
        with pytest.raises(InputValidationError, match="No text content found"):
            DocumentTextSource(service).extract_text(b"%PDF")
