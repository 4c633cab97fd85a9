"""
Extraction Service

Black-box "prompt in, text out" generative-language service. The only
production implementation talks to Gemini through google-genai; tests
substitute any object with the same generate() method.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from google import genai
from google.genai import types

from ..common.settings import DEFAULT_GEMINI_MODEL
from ..exceptions import ExtractionError, InputValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Attachment:
    """Inline binary sent alongside a prompt (e.g. an uploaded PDF)."""
    data: bytes
    mime_type: str


class ExtractionService(Protocol):
    def generate(self, prompt: str, attachment: Optional[Attachment] = None) -> str:
        """Return the model's raw text reply for one prompt."""
        ...


class GeminiExtractionService:
    """
    Gemini-backed extraction service.

    Usage:
        service = GeminiExtractionService(api_key=settings.gemini_api_key)
        text = service.generate(prompt)
        text = service.generate("Extract all text...", Attachment(pdf_bytes, "application/pdf"))
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_GEMINI_MODEL,
        temperature: float = 0.1,
        client: Optional[genai.Client] = None,
    ):
        """
        Initialize the service.

        Args:
            api_key: Gemini API key
            model: Model name
            temperature: Sampling temperature (low: extraction, not prose)
            client: Pre-built genai client (tests)

        Raises:
            InputValidationError: If no API key is configured
        """
        if not api_key and client is None:
            raise InputValidationError(
                "AI service not configured. Please add GEMINI_API_KEY.",
                field="GEMINI_API_KEY",
            )
        self.model = model
        self.temperature = temperature
        self.client = client or genai.Client(api_key=api_key)

    def generate(self, prompt: str, attachment: Optional[Attachment] = None) -> str:
        """
        Send one prompt (plus optional inline attachment) to Gemini.

        Returns:
            Reply text ('' if the model returned no text)

        Raises:
            ExtractionError: If the call itself fails; no retry is attempted
        """
        contents = [prompt]
        if attachment is not None:
            contents.append(types.Part.from_bytes(data=attachment.data, mime_type=attachment.mime_type))

        logger.debug("Gemini request: model=%s, prompt=%d chars, attachment=%s",
                     self.model, len(prompt), attachment.mime_type if attachment else None)

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=contents,
                config=types.GenerateContentConfig(temperature=self.temperature),
            )
        except Exception as e:
            logger.error("Gemini API Error: %s", e)
            raise ExtractionError(f"AI processing failed: {e}") from e

        return response.text or ""
