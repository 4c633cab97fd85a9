"""Tests for the Gemini extraction service."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from vendor_onboarding.exceptions import ExtractionError, InputValidationError
from vendor_onboarding.extraction.service import Attachment, GeminiExtractionService


@pytest.fixture
def genai_client():
    client = MagicMock()
    client.models.generate_content.return_value = SimpleNamespace(text='{"vendor": {}, "products": []}')
    return client


class TestGeminiExtractionService:
    def test_requires_api_key(self):
        with pytest.raises(InputValidationError) as exc:
            GeminiExtractionService("")
        assert exc.value.field == "GEMINI_API_KEY"

    def test_generate_returns_text(self, genai_client):
        service = GeminiExtractionService("", model="gemini-test", client=genai_client)

        assert service.generate("Extract") == '{"vendor": {}, "products": []}'

        kwargs = genai_client.models.generate_content.call_args[1]
        assert kwargs["model"] == "gemini-test"
        assert kwargs["contents"] == ["Extract"]
        assert kwargs["config"].temperature == 0.1

    def test_attachment_sent_inline(self, genai_client):
        service = GeminiExtractionService("key", client=genai_client)
        service.generate("Extract all text", Attachment(b"%PDF-1.7", "application/pdf"))

        contents = genai_client.models.generate_content.call_args[1]["contents"]
        assert contents[0] == "Extract all text"
        assert contents[1].inline_data.data == b"%PDF-1.7"
        assert contents[1].inline_data.mime_type == "application/pdf"

    def test_missing_text_is_empty(self, genai_client):
        genai_client.models.generate_content.return_value = SimpleNamespace(text=None)
        assert GeminiExtractionService("key", client=genai_client).generate("x") == ""

    def test_api_failure_raises(self, genai_client):
        genai_client.models.generate_content.side_effect = RuntimeError("quota exceeded")
        with pytest.raises(ExtractionError, match="AI processing failed: quota exceeded"):
            GeminiExtractionService("key", client=genai_client).generate("x")
