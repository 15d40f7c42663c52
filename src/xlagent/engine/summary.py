"""Compact text digest of workbook contents for the conversation context."""

from __future__ import annotations

from typing import Mapping, Sequence

# Header row plus up to four data rows
PREVIEW_ROWS = 5


def summarize_sheets(sheets: Mapping[str, Sequence[Sequence[str]]]) -> str:
    """Describe each sheet by name, row count, headers and first data rows."""
    lines: list[str] = []
    for name, rows in sheets.items():
        lines.append(f"Hoja: {name} ({len(rows)} filas)\n")
        if rows:
            lines.append("Encabezados: " + ", ".join(rows[0]) + "\n")
        max_rows = min(PREVIEW_ROWS, len(rows))
        if max_rows > 1:
            lines.append("Primeras filas de datos:\n")
            for row in rows[1:max_rows]:
                lines.append("  " + ", ".join(row) + "\n")
    return "".join(lines)


def context_message(path: str, sheets: Mapping[str, Sequence[Sequence[str]]]) -> str:
    """The system message added to the history after a successful read."""
    return f"Datos del archivo Excel '{path}': {summarize_sheets(sheets)}"
