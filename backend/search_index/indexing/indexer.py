from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from ..config import INDEX_VERSION, PROJECTS_DIR, INDEX_PATH
from ..schemas import Diagnostic, IndexDocument, IndexEntry, SourceRecord
from ..ingest.loader import load_records
from ..storage.index_store import IndexStore
from ..utils.logging import get_logger
from ..utils.timing import timer_ms
from .normalizer import normalize_record
from .tokenizer import bedroom_span_ok, build_tokens

logger = get_logger(__name__)

_LOG_LEVELS = {"info": logging.INFO, "warning": logging.WARNING}


def _to_iso(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def index_record(record: SourceRecord) -> Tuple[IndexEntry, List[Diagnostic]]:
    entry, diagnostics = normalize_record(record)
    if (
        entry.bedrooms_min is not None
        and entry.bedrooms_max is not None
        and not bedroom_span_ok(entry.bedrooms_min, entry.bedrooms_max)
    ):
        diagnostics.append(Diagnostic(
            source=record.filename,
            message=f"Bedroom range {entry.bedrooms_min}-{entry.bedrooms_max} too wide, no bedroom tokens",
        ))
    entry.tokens = build_tokens(record.data, entry)
    return entry, diagnostics


def find_collisions(records: List[SourceRecord], entries: List[IndexEntry]) -> List[Diagnostic]:
    """Warn about repeated key/slug values. Colliding entries are all kept."""
    diagnostics: List[Diagnostic] = []
    for attr in ("key", "slug"):
        seen: Dict[str, List[str]] = defaultdict(list)
        for record, entry in zip(records, entries):
            seen[getattr(entry, attr)].append(record.filename)
        for value, files in seen.items():
            if len(files) > 1:
                diagnostics.append(Diagnostic(
                    source=", ".join(files),
                    message=f"Duplicate {attr} '{value}'",
                ))
    return diagnostics


def build_index(
    records: Iterable[SourceRecord],
    now: Optional[datetime] = None,
) -> Tuple[IndexDocument, List[Diagnostic]]:
    """Normalize + tokenize every record, in discovery order, into one document."""
    records = list(records)
    entries: List[IndexEntry] = []
    diagnostics: List[Diagnostic] = []

    for record in records:
        entry, diags = index_record(record)
        entries.append(entry)
        diagnostics.extend(diags)

    diagnostics.extend(find_collisions(records, entries))

    document = IndexDocument(
        version=INDEX_VERSION,
        generated_at=_to_iso(now or datetime.now(timezone.utc)),
        projects=entries,
    )
    return document, diagnostics


def log_diagnostics(diagnostics: Iterable[Diagnostic]) -> None:
    for d in diagnostics:
        logger.log(_LOG_LEVELS[d.level], "%s", d)


def run(projects_dir: Path = PROJECTS_DIR, index_path: Path = INDEX_PATH) -> IndexDocument:
    """Full batch: load -> normalize -> tokenize -> write. OSError on output is fatal."""
    store = IndexStore(index_path)

    with timer_ms() as elapsed:
        previous = store.load_if_exists()
        if previous is not None:
            logger.info(
                "Replacing index with %d projects generated at %s",
                len(previous.projects),
                previous.generated_datetime().isoformat(),
            )

        records, load_diags = load_records(projects_dir)
        document, index_diags = build_index(records)
        log_diagnostics(load_diags + index_diags)

        out = store.save(document)

    logger.info("Generated %d projects -> %s (%d ms)", len(document.projects), out, elapsed())
    return document
