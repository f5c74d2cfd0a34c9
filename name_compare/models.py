from __future__ import annotations

from typing import List
from pydantic import BaseModel, Field


class DatasetSummary(BaseModel):
    filename: str
    headers: List[str] = Field(default_factory=list)
    default_column: str = Field(default="", examples=["Name"])
    rows: int = 0


class ComparisonResponse(BaseModel):
    missing_in_first: List[str] = Field(default_factory=list)
    missing_in_second: List[str] = Field(default_factory=list)
    total_first: int = 0
    total_second: int = 0
    missing_in_first_count: int = 0
    missing_in_second_count: int = 0

class HealthResponse(BaseModel):
    ok: bool = True
