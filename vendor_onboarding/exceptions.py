"""
Onboarding Exceptions

Every failure the pipeline surfaces carries a human-readable message and a
machine-usable ``kind``.
"""

from typing import Any, Dict, Optional


class OnboardingError(Exception):
    """Base exception for all pipeline errors."""

    kind = "onboarding"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def details(self) -> Dict[str, Any]:
        """Extra machine-readable context (empty values are omitted)."""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"error": self.message, "kind": self.kind}
        for key, value in self.details().items():
            if value not in (None, ""):
                result[key] = value
        return result


class InputValidationError(OnboardingError):
    """Missing, oversized or wrong-type input; nothing was attempted."""

    kind = "input_validation"

    def __init__(self, message: str, field: str = ""):
        super().__init__(message)
        self.field = field

    def details(self) -> Dict[str, Any]:
        return {"field": self.field}


class UpstreamConnectError(OnboardingError):
    """Source platform or website unreachable, or credentials rejected."""

    kind = "upstream_connect"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

    def details(self) -> Dict[str, Any]:
        return {"statusCode": self.status_code}


class ExtractionError(OnboardingError):
    """Extraction service reply was not a usable catalog JSON object."""

    kind = "extraction"

    def __init__(self, message: str, raw_response: str = ""):
        super().__init__(message)
        self.raw_response = raw_response

    def details(self) -> Dict[str, Any]:
        return {"rawResponse": self.raw_response}


class ImportCommitError(OnboardingError):
    """
    Ribbon rejected the vendor or product payload, or returned no identifier.

    ``vendor_id`` is set when the vendor was created before the failure,
    so the caller can see that a vendor exists without its products.
    """

    kind = "import"

    def __init__(
        self,
        message: str,
        vendor_id: Optional[str] = None,
        status_code: Optional[int] = None,
        response_body: str = "",
    ):
        super().__init__(message)
        self.vendor_id = vendor_id
        self.status_code = status_code
        self.response_body = response_body

    def details(self) -> Dict[str, Any]:
        return {
            "vendorId": self.vendor_id,
            "statusCode": self.status_code,
            "responseBody": self.response_body,
        }
