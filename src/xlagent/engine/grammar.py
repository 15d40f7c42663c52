"""Command grammar for REPL input lines."""

from __future__ import annotations

from typing import Optional

from xlagent.contracts.common import Command, CreateFile, ReadFile, WriteData

READ_WORD = "leer_excel"
CREATE_WORD = "crear_excel"
WRITE_WORD = "escribir_excel"
HELP_WORD = "ayuda"
QUIT_WORD = "salir"


def is_quit(line: str) -> bool:
    return line.strip().casefold() == QUIT_WORD


def is_help(line: str) -> bool:
    return line.strip().casefold() == HELP_WORD


def parse_command(line: str) -> Optional[Command]:
    """Parse a workbook command, or return None if the line is chat text.

    The first whitespace-separated token selects the command (case
    sensitive). ``escribir_excel`` rejoins everything after the file name
    with single spaces into one data string.
    """
    parts = line.split()
    if not parts:
        return None

    word = parts[0]
    if word == READ_WORD and len(parts) >= 2:
        return ReadFile(path=parts[1])
    if word == CREATE_WORD and len(parts) >= 2:
        return CreateFile(path=parts[1])
    if word == WRITE_WORD and len(parts) >= 3:
        return WriteData(path=parts[1], data=" ".join(parts[2:]))
    return None
