"""
Option aggregation helpers.

A product's variantInfo.options lists each axis of variation once, with
every distinct value seen across its variants joined by commas:

    {"key": "Color", "value": "Red,Blue"}
"""

from typing import Iterable, List, Sequence

from ..models import Variant, VariantOption


def distinct_values(values: Iterable[str]) -> List[str]:
    """Non-empty values, de-duplicated, in order of first appearance."""
    seen = set()
    result = []
    for value in values:
        value = (value or "").strip()
        if value and value not in seen:
            seen.add(value)
            result.append(value)
    return result


def aggregate_options(
    options: Sequence[VariantOption],
    variants: Sequence[Variant],
) -> List[VariantOption]:
    """
    Recompute option values from the variants' positional option tuples.

    Declared values are kept for an axis no variant carries a value for.
    Positions used by variants beyond the declared axes get a generic
    "Option N" key.

    Args:
        options: Declared option axes (key order defines positions)
        variants: The product's variants

    Returns:
        New list of VariantOption
    """
    width = max([len(options)] + [len(v.options) for v in variants])
    result = []

    for position in range(width):
        declared = options[position] if position < len(options) else None
        key = declared.key if declared and declared.key else f"Option {position + 1}"

        observed = distinct_values(
            v.options[position] for v in variants if position < len(v.options)
        )
        if not observed and declared is not None:
            observed = distinct_values(declared.values)
        if not observed and declared is None:
            continue

        result.append(VariantOption(key=key, value=",".join(observed)))

    return result
