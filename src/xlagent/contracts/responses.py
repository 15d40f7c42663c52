"""Command-specific result models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SheetData(BaseModel):
    """Text content of a single worksheet."""

    name: str
    row_count: int = 0
    rows: list[list[str]] = Field(default_factory=list)


class ReadResult(BaseModel):
    """Result of reading a workbook."""

    path: str
    fingerprint: str
    sheets: list[SheetData] = Field(default_factory=list)
    summary: str | None = None

    def as_mapping(self) -> dict[str, list[list[str]]]:
        return {s.name: s.rows for s in self.sheets}


class CreateResult(BaseModel):
    """Result of creating an empty workbook."""

    path: str
    fingerprint: str
    sheets: list[str] = Field(default_factory=list)


class WriteResult(BaseModel):
    """Result of writing cell data into a new workbook."""

    path: str
    fingerprint: str
    rows_written: int = 0
    cells_written: int = 0
