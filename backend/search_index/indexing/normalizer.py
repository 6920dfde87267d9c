# Field normalizer: raw project document -> canonical IndexEntry fields.
# Every lookup degrades to "" / None instead of dropping the record.

from __future__ import annotations
import re
from typing import Any, Dict, List, Optional, Tuple

from ..config import KEY_FIELD, METADATA_KEY, SLUG_FIELD, SOURCE_SUFFIX
from ..schemas import Diagnostic, IndexEntry, SourceRecord

_NON_INT_CHARS = re.compile(r"[^0-9-]")
_LEADING_INT = re.compile(r"-?[0-9]+")

STRING_FIELDS = ("emirate", "city", "area", "developer")
INT_FIELDS = ("bedrooms_min", "bedrooms_max", "handover_year", "price_from_aed", "size_from_sqft")

# size is often unknown for off-plan projects, so its absence is not reported
SILENT_FIELDS = {"size_from_sqft"}


def to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def to_lower_str(value: Any) -> str:
    return to_str(value).lower()


def normalize_array(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    out: List[str] = []
    for item in value:
        s = to_lower_str(item)
        if s and s not in out:
            out.append(s)
    return out


def parse_int_safe(value: Any) -> Optional[int]:
    """
    Loose integer coercion used for price/size/bedroom fields.

    - None or blank -> None (never 0)
    - everything but ASCII digits and '-' is stripped ("AED 1,250,000" -> 1250000)
    - the leading "-?digits" run is parsed; nothing parseable -> None
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    s = str(value).strip()
    if not s:
        return None
    m = _LEADING_INT.match(_NON_INT_CHARS.sub("", s))
    if m is None:
        return None
    try:
        return int(m.group(0))
    except ValueError:
        # over the int-string digit limit
        return None


def _metadata(data: Dict[str, Any]) -> Dict[str, Any]:
    block = data.get(METADATA_KEY)
    return block if isinstance(block, dict) else {}


def _file_stem(record: SourceRecord) -> str:
    name = record.path.name
    if name.endswith(SOURCE_SUFFIX):
        return name[: -len(SOURCE_SUFFIX)]
    return record.path.stem


def normalize_record(record: SourceRecord) -> Tuple[IndexEntry, List[Diagnostic]]:
    """Map one source record onto an IndexEntry (tokens left empty). Never raises."""
    data = record.data
    meta = _metadata(data)
    missing: List[str] = []
    hard_miss = False

    slug = to_str(data.get(SLUG_FIELD))
    if not slug:
        slug = _file_stem(record)
        missing.append(f"{SLUG_FIELD} (fallback used)")

    key = to_str(data.get(KEY_FIELD))
    if not key:
        key = slug
        missing.append(f"{KEY_FIELD} (fallback used)")

    values: Dict[str, Any] = {}
    for name in STRING_FIELDS:
        values[name] = to_lower_str(meta.get(name))
        if not values[name]:
            missing.append(f"{METADATA_KEY}.{name}")
            hard_miss = True

    values["property_types"] = normalize_array(meta.get("property_types"))
    if not values["property_types"]:
        missing.append(f"{METADATA_KEY}.property_types")
        hard_miss = True

    for name in INT_FIELDS:
        values[name] = parse_int_safe(meta.get(name))
        if values[name] is None and name not in SILENT_FIELDS:
            missing.append(f"{METADATA_KEY}.{name}")
            hard_miss = True

    entry = IndexEntry(key=key, slug=slug, **values)

    diagnostics: List[Diagnostic] = []
    if missing:
        diagnostics.append(Diagnostic(
            level="warning" if hard_miss else "info",
            source=record.filename,
            message="Missing fields",
            fields=missing,
        ))
    return entry, diagnostics
