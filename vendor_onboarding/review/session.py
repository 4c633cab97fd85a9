"""
Review Session

Caller-owned edit context for one import attempt. Created from a
normalized draft, edited by the reviewer, then committed or discarded.
Once closed, every further call raises InputValidationError.
"""

import json
import logging
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..exceptions import InputValidationError
from ..models import CatalogDraft, CuratedImage, Product, StoreLink, Variant
from ..models.catalog import LONG_TAIL_FACETS, wire_field_map
from ..models.coercion import as_optional_float, as_optional_str_list, coerce_like
from ..normalization.normalizer import INSTAGRAM, instagram_url
from ..normalization.options import aggregate_options

logger = logging.getLogger(__name__)

# List fields holding nested records rather than plain strings
_RECORD_LISTS = {
    "links": StoreLink,
    "curated_images": CuratedImage,
}

# Fields whose structure is maintained by the session itself
_READ_ONLY = {"store", "variant_info", "facets"}


def _coerce(obj: Any, attr: str, value: Any) -> Any:
    """Coerce an edited value to the declared type of obj.attr."""
    if attr in _RECORD_LISTS:
        record = _RECORD_LISTS[attr]
        if not isinstance(value, list):
            raise InputValidationError(f"'{attr}' expects a list", field=attr)
        return [record.from_dict(item) for item in value]

    declared = {f.name: f.type for f in fields(obj)}.get(attr)
    if declared == Optional[float]:
        return as_optional_float(value)
    if declared == Optional[List[str]]:
        return as_optional_str_list(value)
    return coerce_like(getattr(obj, attr), value)


def _resolve_attr(obj: Any, name: str, path: str) -> str:
    attr = wire_field_map(type(obj)).get(name)
    if attr is None:
        raise InputValidationError(f"Unknown field: {path}", field=path)
    return attr


class ReviewSession:
    """
    Editable draft awaiting commit.

    Usage:
        session = ReviewSession(draft)
        session.update_vendor("email", "hello@acme.com")
        session.update_vendor("store.paymentTerms", "Net 60")
        session.update_variant(0, 1, "price", "24.00")
        result = session.commit(committer)
    """

    def __init__(self, draft: CatalogDraft):
        self._draft = draft
        self.closed = False

    @property
    def draft(self) -> CatalogDraft:
        self._ensure_open()
        return self._draft

    def _ensure_open(self) -> None:
        if self.closed:
            raise InputValidationError("Review session is closed; start a new import", field="session")

    def _product(self, index: int) -> Product:
        self._ensure_open()
        if not 0 <= index < len(self._draft.products):
            raise InputValidationError(f"No product at index {index}", field="productIndex")
        return self._draft.products[index]

    # Vendor

    def update_vendor(self, path: str, value: Any) -> None:
        """
        Set a vendor field by its wire path.

        Args:
            path: Dotted wire path, e.g. "brandName" or "store.shippingPolicy"
            value: New value; coerced to the field's type ("12" → 12.0)

        Raises:
            InputValidationError: Unknown or non-editable path, or closed session
        """
        self._ensure_open()
        *parents, leaf = path.split(".")

        target: Any = self._draft.vendor
        for name in parents:
            attr = _resolve_attr(target, name, path)
            target = getattr(target, attr)
            if not is_dataclass(target):
                raise InputValidationError(f"Unknown field: {path}", field=path)

        attr = _resolve_attr(target, leaf, path)
        if attr in _READ_ONLY:
            raise InputValidationError(f"Field cannot be edited directly: {path}", field=path)

        setattr(target, attr, _coerce(target, attr, value))
        logger.debug("Vendor %s updated", path)

    def set_instagram_handle(self, handle: str) -> None:
        """Set or remove (empty handle) the store's Instagram link."""
        self._ensure_open()
        store = self._draft.vendor.store
        links = [link for link in store.links if link.link_name != INSTAGRAM]

        handle = (handle or "").strip()
        if handle:
            links.append(StoreLink(link_name=INSTAGRAM, link_value=instagram_url(handle)))
        store.links = links

    def set_lookbook_url(self, url: str) -> None:
        self._ensure_open()
        self._draft.vendor.store.lookbook_url = (url or "").strip()

    # Products

    def update_product(self, index: int, name: str, value: Any) -> None:
        """
        Set a product field by its wire name (e.g. "price", "imagesURL").

        Raises:
            InputValidationError: Bad index, unknown or non-editable field
        """
        product = self._product(index)
        attr = _resolve_attr(product, name, name)
        if attr in _READ_ONLY:
            raise InputValidationError(f"Field cannot be edited directly: {name}", field=name)
        setattr(product, attr, _coerce(product, attr, value))

    def update_variant(self, index: int, variant_index: int, name: str, value: Any) -> None:
        """
        Set a variant field by its wire name.

        Long-tail facets (origin, room, ...) are stored verbatim. Editing
        "options" re-aggregates the product's option values; editing
        "stock" updates the product's total stock.

        Raises:
            InputValidationError: Bad index, unknown or non-editable field
        """
        product = self._product(index)
        variants = product.variant_info.variants
        if not 0 <= variant_index < len(variants):
            raise InputValidationError(f"No variant at index {variant_index}", field="variantIndex")
        variant: Variant = variants[variant_index]

        if name in LONG_TAIL_FACETS and name != "facets":
            variant.facets[name] = value
            return

        attr = _resolve_attr(variant, name, name)
        if attr in _READ_ONLY:
            raise InputValidationError(f"Field cannot be edited directly: {name}", field=name)
        setattr(variant, attr, _coerce(variant, attr, value))

        if attr == "options":
            product.variant_info.options = aggregate_options(product.variant_info.options, variants)
        elif attr == "stock":
            product.stock = sum(v.stock for v in variants)

    def remove_product(self, index: int) -> Product:
        """Drop a product from the draft and return it."""
        self._product(index)
        return self._draft.products.pop(index)

    # Lifecycle

    def commit(self, committer):
        """
        Commit the draft through an ImportCommitter.

        The session closes on success. On failure the exception
        propagates and the session stays open so the commit can be retried.

        Returns:
            ImportResult
        """
        self._ensure_open()
        result = committer.commit(self._draft)
        self.closed = True
        logger.info("Review session committed as vendor %s", result.vendor_id)
        return result

    def discard(self) -> None:
        self.closed = True

    # Persistence

    def to_dict(self) -> Dict[str, Any]:
        self._ensure_open()
        return self._draft.to_dict()

    def save(self, path: Union[str, Path]) -> None:
        """Write the draft as JSON for a later review step."""
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ReviewSession":
        """
        Open a session from a saved draft.

        Raises:
            InputValidationError: File missing or not a JSON object
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise InputValidationError(f"Draft file not found: {path}", field="draft") from e
        except json.JSONDecodeError as e:
            raise InputValidationError(f"Draft file is not valid JSON: {e}", field="draft") from e

        if not isinstance(data, dict):
            raise InputValidationError("Draft file must contain a JSON object", field="draft")
        return cls(CatalogDraft.from_dict(data))
