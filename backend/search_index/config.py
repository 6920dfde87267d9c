from pathlib import Path
from typing import Optional, Tuple

# Batch job convention: paths resolve against the working directory
PROJECT_ROOT = Path.cwd()

DATA_DIR = PROJECT_ROOT / "data"
PROJECTS_DIR = DATA_DIR / "projects"
SEARCH_DIR = DATA_DIR / "search"
INDEX_PATH = SEARCH_DIR / "search_index.json"

SOURCE_SUFFIX = ".json"

# Source record fields
KEY_FIELD = "project_key"
SLUG_FIELD = "slug"
METADATA_KEY = "_search"

INDEX_VERSION = 1
SCOPE_TOKEN = "uae"

# Widest bedroom range expanded into tokens; wider ranges are bad data
MAX_BEDROOM_SPAN = 20


def resolve_paths(root: Optional[Path] = None) -> Tuple[Path, Path]:
    """Return (projects_dir, index_path) under ``root`` (default: PROJECT_ROOT)."""
    if root is None:
        return PROJECTS_DIR, INDEX_PATH
    root = Path(root)
    data_dir = root / "data"
    return data_dir / "projects", data_dir / "search" / "search_index.json"
