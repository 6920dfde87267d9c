import json
from pathlib import Path

import pytest


@pytest.fixture
def projects_dir(tmp_path: Path) -> Path:
    d = tmp_path / "data" / "projects"
    d.mkdir(parents=True)
    return d


@pytest.fixture
def write_project(projects_dir: Path):
    """Write a project document; ``raw`` bypasses JSON encoding."""
    def _write(name: str, data=None, raw: str = None) -> Path:
        path = projects_dir / name
        path.write_text(raw if raw is not None else json.dumps(data), encoding="utf-8")
        return path
    return _write


FULL_PROJECT = {
    "project_key": "Marina-Vista",
    "slug": "marina-vista",
    "_search": {
        "emirate": " Dubai ",
        "city": "Dubai",
        "area": "Dubai Marina",
        "developer": "Emaar",
        "property_types": ["Apartment", " Penthouse ", ""],
        "bedrooms_min": 1,
        "bedrooms_max": "3",
        "handover_year": "2027",
        "price_from_aed": "AED 1,250,000",
        "size_from_sqft": 650,
    },
}
