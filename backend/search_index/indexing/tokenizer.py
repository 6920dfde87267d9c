from typing import Any, Dict, List, Optional

from ..config import KEY_FIELD, MAX_BEDROOM_SPAN, SCOPE_TOKEN, SLUG_FIELD
from ..schemas import IndexEntry
from .normalizer import to_lower_str


def bedroom_span_ok(bedrooms_min: Optional[int], bedrooms_max: Optional[int]) -> bool:
    if bedrooms_min is None or bedrooms_max is None:
        return False
    return bedrooms_max - bedrooms_min < MAX_BEDROOM_SPAN


def bedroom_tokens(bedrooms_min: Optional[int], bedrooms_max: Optional[int]) -> List[str]:
    """Tokens 1br..3br for the range 1..3 inclusive; inverted, open or implausibly wide ranges give nothing."""
    if not bedroom_span_ok(bedrooms_min, bedrooms_max):
        return []
    return [f"{b}br" for b in range(bedrooms_min, bedrooms_max + 1)]


def build_tokens(raw: Dict[str, Any], entry: IndexEntry) -> List[str]:
    """
    Search tokens for one project, deduplicated in first-seen order:
    raw key/slug, developer/emirate/area, property types, bedroom range,
    then the global scope token.
    """
    candidates: List[str] = []

    # raw identifiers, not the fallbacks
    if raw.get(KEY_FIELD):
        candidates.append(to_lower_str(raw[KEY_FIELD]))
    if raw.get(SLUG_FIELD):
        candidates.append(to_lower_str(raw[SLUG_FIELD]))

    for value in (entry.developer, entry.emirate, entry.area):
        if value:
            candidates.append(value)

    candidates.extend(entry.property_types)
    candidates.extend(bedroom_tokens(entry.bedrooms_min, entry.bedrooms_max))
    candidates.append(SCOPE_TOKEN)

    return list(dict.fromkeys(t for t in candidates if t))
