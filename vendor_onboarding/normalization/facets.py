"""
Facet Inferrer

Infers variant color and material facets from free-form option values
by case-insensitive substring matching against closed vocabularies.

This is a heuristic: "Blue Steel" yields "blue", "Bored" yields "red".
When nothing matches, a fixed fallback value is returned unless the
inferrer is built with use_fallback=False.

The vocabularies are loaded from config/facet_keywords.yaml.
"""

from typing import Any, Dict, Iterable, List, Optional

from ..common.config_loader import get_keyword_list, load_facet_keywords


class FacetInferrer:
    """
    Infers color/material facets from variant option values.

    Usage:
        inferrer = FacetInferrer()
        inferrer.infer_colors(["Red", "Blue Steel"])   # ['red', 'blue']
        inferrer.infer_colors(["Medium"])              # ['black']
        inferrer.infer_materials(["Silk Blend"])       # ['silk']
    """

    def __init__(
        self,
        facets: Optional[Dict[str, Dict[str, Any]]] = None,
        use_fallback: bool = True,
    ):
        """
        Initialize the inferrer.

        Args:
            facets: Facet vocabularies ({'color': {'keywords': [...], 'fallback': ...}}).
                If None, loads from config.
            use_fallback: Return the configured fallback when nothing matches
        """
        self.facets = load_facet_keywords() if facets is None else facets
        self.use_fallback = use_fallback

    def infer(self, facet: str, option_values: Optional[Iterable[str]]) -> List[str]:
        """
        Collect every vocabulary keyword contained in any option value.

        Args:
            facet: Facet name ('color' or 'material')
            option_values: Variant option values, e.g. ["Red", "XL"]

        Returns:
            Matched keywords (lowercase, de-duplicated, in order of first
            match), or [fallback] when nothing matched
        """
        keywords = get_keyword_list(self.facets, facet)
        matches: List[str] = []

        for option in option_values or []:
            lower_option = str(option or "").lower()
            for keyword in keywords:
                if keyword in lower_option and keyword not in matches:
                    matches.append(keyword)

        if matches or not self.use_fallback:
            return matches

        fallback = (self.facets.get(facet) or {}).get('fallback')
        return [fallback] if fallback else []

    def infer_colors(self, option_values: Optional[Iterable[str]]) -> List[str]:
        return self.infer('color', option_values)

    def infer_materials(self, option_values: Optional[Iterable[str]]) -> List[str]:
        return self.infer('material', option_values)


_default_inferrer: Optional[FacetInferrer] = None


def get_facet_inferrer() -> FacetInferrer:
    """Shared inferrer built from config (loaded once per process)."""
    global _default_inferrer
    if _default_inferrer is None:
        _default_inferrer = FacetInferrer()
    return _default_inferrer
