"""
Ribbon API Client

Write client for the Ribbon platform's vendor and product creation
endpoints. Calls are made once; any failure is an ImportCommitError.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from ..exceptions import ImportCommitError

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINTS = {
    "vendor_create": "/vendor-create",
    "products_bulk_create": "/products-bulk-create",
    "timeout": 60,
}


class RibbonClient:
    """
    Client for Ribbon vendor/product creation.

    Usage:
        with RibbonClient("http://localhost:9088") as client:
            content = client.create_vendor(vendor_payload)
            created = client.bulk_create_products(product_payloads)
    """

    def __init__(
        self,
        base_url: str,
        endpoints: Optional[Dict[str, Any]] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Ribbon base URL (e.g. http://localhost:9088)
            endpoints: Endpoint paths and timeout ('endpoints' section of
                commit_defaults.yaml). Missing keys use DEFAULT_ENDPOINTS.
            session: Optional pre-configured session
        """
        self.base_url = base_url.rstrip("/")
        self.endpoints = {**DEFAULT_ENDPOINTS, **(endpoints or {})}
        self.timeout = self.endpoints["timeout"]

        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def _post(self, endpoint: str, body: Dict[str, Any], action: str) -> Dict[str, Any]:
        """
        POST a JSON body and return the decoded reply.

        Raises:
            ImportCommitError: Network failure, non-2xx status or non-JSON reply
        """
        url = f"{self.base_url}{self.endpoints[endpoint]}"
        try:
            response = self.session.post(url, json=body, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error("Failed to %s: %s", action, e)
            raise ImportCommitError(f"Failed to {action}: {e}") from e

        if not response.ok:
            logger.error("Failed to %s: %d %s", action, response.status_code, response.text)
            raise ImportCommitError(
                f"Failed to {action}: {response.status_code} {response.text}",
                status_code=response.status_code,
                response_body=response.text,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ImportCommitError(
                f"Failed to {action}: response is not JSON",
                status_code=response.status_code,
                response_body=response.text,
            ) from e

    def create_vendor(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create the vendor.

        Args:
            payload: Output of build_vendor_payload()

        Returns:
            The reply's 'content' object ({'_id' or 'id', 'agencyID', ...})
        """
        result = self._post("vendor_create", {"user": payload}, "create vendor")
        content = result.get("content") if isinstance(result, dict) else None
        return content if isinstance(content, dict) else {}

    def bulk_create_products(self, payloads: List[Dict[str, Any]]) -> Optional[List[Any]]:
        """
        Create all products in one call.

        Returns:
            The reply's 'data' list, or None when the reply carries no list
        """
        result = self._post("products_bulk_create", {"products": payloads}, "create products")
        data = result.get("data") if isinstance(result, dict) else None
        return data if isinstance(data, list) else None
