"""Record loader: discover project JSON files and parse them.

Files that cannot be read or parsed are skipped with a diagnostic; a missing
source directory simply yields nothing.
"""
from __future__ import annotations
import json
from pathlib import Path
from typing import List, Optional, Tuple

from ..config import SOURCE_SUFFIX
from ..schemas import Diagnostic, SourceRecord
from ..utils.logging import get_logger

logger = get_logger(__name__)


def list_source_files(directory: Path, suffix: str = SOURCE_SUFFIX) -> List[Path]:
    directory = Path(directory)
    if not directory.is_dir():
        logger.debug("Source directory %s does not exist", directory)
        return []
    return sorted(p for p in directory.iterdir() if p.is_file() and p.name.endswith(suffix))


def read_record(path: Path) -> Tuple[Optional[SourceRecord], List[Diagnostic]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError, RecursionError) as e:
        return None, [Diagnostic(source=path.name, message=f"JSON parse error ({e}), skipped")]

    if not isinstance(data, dict):
        return None, [Diagnostic(
            source=path.name,
            message=f"expected a JSON object, got {type(data).__name__}, skipped",
        )]
    return SourceRecord(path=path, data=data), []


def load_records(directory: Path, suffix: str = SOURCE_SUFFIX) -> Tuple[List[SourceRecord], List[Diagnostic]]:
    records: List[SourceRecord] = []
    diagnostics: List[Diagnostic] = []
    for path in list_source_files(directory, suffix):
        record, diags = read_record(path)
        diagnostics.extend(diags)
        if record is not None:
            records.append(record)
    logger.debug("Loaded %d records from %s (%d skipped)", len(records), directory, len(diagnostics))
    return records, diagnostics
