"""
Address Inference

Fills a blank vendor country from the address parts that are present:
a known state/province (code or name) or the ZIP/postal code format.

Region tables and postal patterns are loaded from config/address_regions.yaml.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from ..common.config_loader import get_region_lookup, load_address_regions
from ..models import Vendor

logger = logging.getLogger(__name__)


class AddressInferrer:
    """
    Infers missing address fields in place.

    Usage:
        inferrer = AddressInferrer()
        filled = inferrer.fill(vendor)   # e.g. ['country']
    """

    def __init__(self, countries: Optional[Dict[str, Dict[str, Any]]] = None):
        """
        Initialize the inferrer.

        Args:
            countries: Region tables keyed by country name. If None, loads from config.
        """
        if countries is None:
            countries = load_address_regions()

        self.region_lookup = get_region_lookup(countries)
        self.postal_patterns = [
            (country, re.compile(data['postal_pattern']))
            for country, data in countries.items()
            if data.get('postal_pattern')
        ]

    def country_for_region(self, state: str) -> str:
        match = self.region_lookup.get((state or "").strip().lower())
        return match[0] if match else ""

    def country_for_postal_code(self, zip_code: str) -> str:
        zip_code = (zip_code or "").strip()
        if not zip_code:
            return ""
        for country, pattern in self.postal_patterns:
            if pattern.match(zip_code):
                return country
        return ""

    def fill(self, vendor: Vendor) -> List[str]:
        """
        Fill blank address fields that can be inferred.

        Present values are never overwritten.

        Returns:
            Names of the fields that were filled
        """
        filled = []

        if not vendor.country:
            country = self.country_for_region(vendor.state) or self.country_for_postal_code(vendor.zip_code)
            if country:
                vendor.country = country
                filled.append('country')

        if filled:
            logger.debug("Inferred address fields for %s: %s", vendor.brand_name or "vendor", filled)

        return filled
