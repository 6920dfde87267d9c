from __future__ import annotations
from typing import Optional
from pathlib import Path
import json
import os
import stat
import tempfile

from pydantic import ValidationError

from ..schemas import IndexDocument
from ..config import INDEX_PATH
from ..utils.logging import get_logger

logger = get_logger(__name__)


class IndexStore:
    """Search index artifact on disk:
    - save() fully replaces data/search/search_index.json (no merge)
    - load_if_exists() reads back a previous run's document
    """

    def __init__(self, index_path: Optional[Path] = None):
        self.index_path = Path(index_path or INDEX_PATH)

    def save(self, document: IndexDocument) -> Path:
        # OSError here (mkdir/write/replace) is fatal for the run
        self.index_path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(document.model_dump(mode="json"), ensure_ascii=False, indent=2)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.index_path.name}.", suffix=".tmp", dir=self.index_path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.chmod(tmp_name, self._file_mode())
            os.replace(tmp_name, self.index_path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
        return self.index_path

    def _file_mode(self) -> int:
        """Keep the replaced artifact's mode, else what a plain open() would give."""
        try:
            return stat.S_IMODE(self.index_path.stat().st_mode)
        except FileNotFoundError:
            pass
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask

    def load_if_exists(self) -> Optional[IndexDocument]:
        if not self.index_path.exists():
            return None
        try:
            return IndexDocument.model_validate_json(self.index_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            logger.warning("Existing index at %s is unreadable: %s", self.index_path, e)
            return None
