"""Build data/search/search_index.json from data/projects/*.json.
Usage (from the site root):
  python scripts/build_index.py [--root DIR] [--projects-dir DIR] [--out FILE]
"""
import sys
from pathlib import Path

# Allow running from repo root without installing
sys.path.append(str(Path(__file__).resolve().parents[1] / "backend"))

from search_index.ingest.runner import main

if __name__ == "__main__":
    sys.exit(main())
