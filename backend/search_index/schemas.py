from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from dateutil import parser as dtparser
from pydantic import BaseModel, Field, field_validator

from .config import INDEX_VERSION


@dataclass
class SourceRecord:
    """One raw project document as read from disk. Never mutated."""
    path: Path
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def filename(self) -> str:
        return self.path.name


class Diagnostic(BaseModel):
    level: Literal["info", "warning"] = "warning"
    source: str
    message: str
    fields: List[str] = Field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.message} in {self.source}" + (f": {', '.join(self.fields)}" if self.fields else "")


class IndexEntry(BaseModel):
    key: str
    slug: str

    emirate: str = ""
    city: str = ""
    area: str = ""

    developer: str = ""
    property_types: List[str] = Field(default_factory=list)

    bedrooms_min: Optional[int] = None
    bedrooms_max: Optional[int] = None

    handover_year: Optional[int] = None
    price_from_aed: Optional[int] = None
    size_from_sqft: Optional[int] = None

    tokens: List[str] = Field(default_factory=list)


class IndexDocument(BaseModel):
    version: int = INDEX_VERSION
    generated_at: str  # ISO string, UTC
    projects: List[IndexEntry] = Field(default_factory=list)

    @field_validator("generated_at")
    @classmethod
    def check_iso(cls, v: str) -> str:
        dtparser.isoparse(v)
        return v

    def generated_datetime(self) -> datetime:
        dt = dtparser.isoparse(self.generated_at)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt
