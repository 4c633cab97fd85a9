"""
Import Committer

Two-phase, non-transactional commit of a reviewed draft to Ribbon:

1. Create the vendor; its id and owning agency id come back in the reply
2. Bulk-create every product (with variants) attached to that vendor

A product failure after a successful vendor creation is reported with
the created vendor's id; nothing is rolled back.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..common.config_loader import load_commit_defaults
from ..exceptions import ImportCommitError, InputValidationError
from ..models import CatalogDraft
from ..normalization.facets import FacetInferrer, get_facet_inferrer
from .client import RibbonClient
from .payloads import build_product_payloads, build_vendor_payload

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    """Outcome of a successful commit."""
    success: bool
    vendor_id: str
    products_imported: int
    import_stats: Dict[str, int] = field(default_factory=dict)
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "vendorId": self.vendor_id,
            "productsImported": self.products_imported,
            "importStats": dict(self.import_stats),
            "message": self.message,
        }


class ImportCommitter:
    """
    Commits a reviewed CatalogDraft to Ribbon.

    Usage:
        committer = ImportCommitter(RibbonClient(settings.ribbon_base_url))
        result = committer.commit(draft)
        print(result.vendor_id, result.products_imported)
    """

    def __init__(
        self,
        client: RibbonClient,
        defaults: Optional[Dict[str, Any]] = None,
        inferrer: Optional[FacetInferrer] = None,
    ):
        """
        Initialize the committer.

        Args:
            client: Ribbon API client
            defaults: Commit defaults. If None, loads commit_defaults.yaml.
            inferrer: Color/material inference. If None, uses the shared one.
        """
        self.client = client
        self.defaults = defaults if defaults is not None else load_commit_defaults()
        self.inferrer = inferrer or get_facet_inferrer()

    def commit(self, draft: CatalogDraft) -> ImportResult:
        """
        Create the vendor, then its products.

        Args:
            draft: Reviewed draft

        Returns:
            ImportResult with per-kind counts

        Raises:
            InputValidationError: Vendor email missing (nothing is sent)
            ImportCommitError: Either call failed or no vendor id came back;
                vendor_id is set when the vendor had already been created
        """
        vendor = draft.vendor
        if not vendor.email.strip():
            raise InputValidationError("Vendor email is required before import", field="email")

        logger.info("Starting import for vendor: %s (%d products)", vendor.brand_name, len(draft.products))

        content = self.client.create_vendor(build_vendor_payload(vendor, self.defaults))
        vendor_id = content.get("_id") or content.get("id")
        agency_id = content.get("agencyID")
        if not vendor_id:
            raise ImportCommitError("Vendor ID not found in response")
        vendor_id = str(vendor_id)
        logger.info("Vendor created: %s", vendor_id)

        stamp = str(int(time.time() * 1000))
        payloads = build_product_payloads(
            draft.products, vendor, vendor_id, agency_id, self.inferrer, stamp,
            product_defaults=self.defaults.get("product", {}),
        )

        try:
            created = self.client.bulk_create_products(payloads)
        except ImportCommitError as e:
            raise ImportCommitError(
                f"Vendor {vendor_id} was created but products were not: {e.message}",
                vendor_id=vendor_id,
                status_code=e.status_code,
                response_body=e.response_body,
            ) from e

        imported = len(created) if created is not None else len(payloads)
        stats = {
            "vendor": 1,
            "products": imported,
            "variants": sum(len(p.variant_info.variants) for p in draft.products),
            "failed": len(payloads) - imported,
        }
        logger.info("Imported %d/%d products (%d variants)", imported, len(payloads), stats["variants"])

        return ImportResult(
            success=True,
            vendor_id=vendor_id,
            products_imported=imported,
            import_stats=stats,
            message="Successfully imported to Ribbon",
        )
