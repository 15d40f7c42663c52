"""WorkbookContext: loads a workbook and exposes its sheets as text rows."""

from __future__ import annotations

from datetime import date, datetime, time
from io import BytesIO
from pathlib import Path
from typing import Any, Callable

import openpyxl
from openpyxl.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from xlagent.contracts.common import (
    WorkbookCorruptError,
    WorkbookNotFoundError,
    WorkbookWriteError,
)
from xlagent.contracts.responses import SheetData
from xlagent.io.fileops import fingerprint, replace_file

DEFAULT_SHEET_NAME = "Sheet1"


def cell_text(value: Any) -> str:
    """Render a cell value the way it reads in the sheet."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def sheet_rows(ws: Worksheet) -> list[list[str]]:
    """All rows of the sheet's used range, every cell as text."""
    # iter_rows starts at A1 unless told where the data begins
    raw = [
        list(row)
        for row in ws.iter_rows(min_row=ws.min_row, min_col=ws.min_column, values_only=True)
    ]
    # openpyxl reports a single empty A1 cell for blank sheets
    if all(v is None for row in raw for v in row):
        return []
    return [[cell_text(v) for v in row] for row in raw]


def save_workbook(wb: Workbook, path: str | Path) -> str:
    """Serialize ``wb``, replace ``path`` with it and return the fingerprint."""
    if Path(path).is_dir():
        raise WorkbookWriteError(
            f"No se pudo guardar el archivo {path}: es un directorio", path=str(path)
        )
    buf = BytesIO()
    wb.save(buf)
    try:
        return replace_file(path, buf.getvalue())
    except OSError as e:
        raise WorkbookWriteError(
            f"No se pudo guardar el archivo {path}: {e.strerror or e}", path=str(path)
        ) from e


class WorkbookContext:
    """Wraps an openpyxl workbook with its fingerprint and text accessors."""

    @classmethod
    def create(
        cls,
        path: str | Path,
        *,
        populate: Callable[[Worksheet], None] | None = None,
    ) -> "WorkbookContext":
        """Create a new single-sheet workbook, replacing any file at ``path``.

        ``populate`` receives the sheet before the first save so callers can
        fill it in.
        """
        p = Path(path)
        wb = Workbook()
        ws = wb.active
        ws.title = DEFAULT_SHEET_NAME
        if populate is not None:
            populate(ws)
        save_workbook(wb, p)
        wb.close()
        return cls(p)

    def __init__(self, path: str | Path, *, data_only: bool = True) -> None:
        self.path = Path(path)
        if not self.path.exists():
            raise WorkbookNotFoundError(
                f"No se pudo abrir el archivo {path}: no existe", path=str(path)
            )
        try:
            self.fp = fingerprint(self.path)
            self.wb: Workbook = openpyxl.load_workbook(
                str(self.path), data_only=data_only
            )
        except Exception as e:
            raise WorkbookCorruptError(
                f"No se pudo abrir el archivo {path}: {e}", path=str(path)
            ) from e

    def sheet_names(self) -> list[str]:
        return list(self.wb.sheetnames)

    def read_sheets(self) -> list[SheetData]:
        """Read every sheet in workbook order."""
        sheets: list[SheetData] = []
        for name in self.wb.sheetnames:
            rows = sheet_rows(self.wb[name])
            sheets.append(SheetData(name=name, row_count=len(rows), rows=rows))
        return sheets

    def close(self) -> None:
        self.wb.close()

    def __enter__(self) -> "WorkbookContext":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
