"""openpyxl-based workbook operations: read, create, write cell data."""

from __future__ import annotations

from pathlib import Path

from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import IllegalCharacterError
from openpyxl.worksheet.worksheet import Worksheet

from xlagent.contracts.common import CellWriteError
from xlagent.contracts.responses import CreateResult, ReadResult, WriteResult
from xlagent.engine.context import WorkbookContext

MAX_ROWS = 1_048_576
MAX_COLUMNS = 16_384

ROW_SEPARATOR = ";"
CELL_SEPARATOR = ","


def parse_cell_data(raw: str) -> list[list[str]]:
    """Split ``a,b;c,d`` into rows of trimmed cells.

    Empty segments are kept, so ``1,,2`` yields three cells and a trailing
    ``;`` yields a final row holding one empty cell.
    """
    return [
        [value.strip() for value in line.split(CELL_SEPARATOR)]
        for line in raw.split(ROW_SEPARATOR)
    ]


def write_cell(ws: Worksheet, row_idx: int, col_idx: int, value: str) -> None:
    """Write ``value`` as a text cell at zero-based (row_idx, col_idx)."""
    if row_idx >= MAX_ROWS or col_idx >= MAX_COLUMNS:
        raise CellWriteError(
            f"Posición fuera de rango: fila {row_idx}, columna {col_idx}"
        )
    try:
        cell = ws.cell(row=row_idx + 1, column=col_idx + 1, value=value)
    except IllegalCharacterError as e:
        ref = f"{get_column_letter(col_idx + 1)}{row_idx + 1}"
        raise CellWriteError(f"Valor no válido en la celda {ref}: {value!r}") from e
    # Text always stays text, even when it looks like a formula
    cell.data_type = "s"


def read_workbook(path: str | Path) -> ReadResult:
    """Read every sheet of the workbook at ``path`` as rows of text."""
    with WorkbookContext(path) as ctx:
        return ReadResult(path=str(path), fingerprint=ctx.fp, sheets=ctx.read_sheets())


def create_workbook(path: str | Path) -> CreateResult:
    """Create an empty single-sheet workbook, overwriting ``path``."""
    with WorkbookContext.create(path) as ctx:
        return CreateResult(path=str(path), fingerprint=ctx.fp, sheets=ctx.sheet_names())


def write_data(path: str | Path, raw: str) -> WriteResult:
    """Write ``raw`` cell data into a new workbook, overwriting ``path``."""
    rows = parse_cell_data(raw)

    def populate(ws: Worksheet) -> None:
        for row_idx, cells in enumerate(rows):
            for col_idx, value in enumerate(cells):
                try:
                    write_cell(ws, row_idx, col_idx, value)
                except CellWriteError as e:
                    e.path = str(path)
                    raise

    with WorkbookContext.create(path, populate=populate) as ctx:
        return WriteResult(
            path=str(path),
            fingerprint=ctx.fp,
            rows_written=len(rows),
            cells_written=sum(len(cells) for cells in rows),
        )
