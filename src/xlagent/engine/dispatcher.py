"""Command execution and response envelope helpers."""

from __future__ import annotations

import sys
from typing import Any, TextIO

import orjson

from xlagent.contracts.common import (
    Command,
    CreateFile,
    ErrorDetail,
    Metrics,
    ReadFile,
    ResponseEnvelope,
    Target,
    WorkbookError,
    WriteData,
)
from xlagent.observe.events import Timer

# Exit code mapping
EXIT_CODES = {
    "success": 0,
    "io": 50,
    "config": 80,
    "internal": 90,
}

COMMAND_NAMES = {
    "read": "wb.read",
    "create": "wb.create",
    "write": "wb.write",
}


def success_envelope(
    command: str,
    result: Any,
    *,
    target: Target | None = None,
    duration_ms: int = 0,
) -> ResponseEnvelope:
    return ResponseEnvelope(
        ok=True,
        command=command,
        target=target or Target(),
        result=result,
        metrics=Metrics(duration_ms=duration_ms),
    )


def error_envelope(
    command: str,
    code: str,
    message: str,
    *,
    target: Target | None = None,
    details: dict | None = None,
    duration_ms: int = 0,
) -> ResponseEnvelope:
    return ResponseEnvelope(
        ok=False,
        command=command,
        target=target or Target(),
        errors=[ErrorDetail(code=code, message=message, details=details)],
        metrics=Metrics(duration_ms=duration_ms),
    )


def execute_command(command: Command, *, summary: bool = False) -> ResponseEnvelope:
    """Run a workbook command and wrap the outcome in an envelope.

    Workbook failures never raise; they come back as ``ok=False``.
    """
    from xlagent.adapters.openpyxl_engine import create_workbook, read_workbook, write_data

    name = COMMAND_NAMES[command.kind]
    target = Target(file=command.path)
    with Timer() as t:
        try:
            if isinstance(command, ReadFile):
                result = read_workbook(command.path)
                if summary:
                    from xlagent.engine.summary import summarize_sheets
                    result.summary = summarize_sheets(result.as_mapping())
            elif isinstance(command, CreateFile):
                result = create_workbook(command.path)
            elif isinstance(command, WriteData):
                result = write_data(command.path, command.data)
            else:
                raise TypeError(f"Unknown command: {command!r}")
        except WorkbookError as e:
            failure = error_envelope(name, e.code, str(e), target=target)
        except Exception as e:
            failure = error_envelope(name, "ERR_INTERNAL", str(e), target=target)
        else:
            failure = None

    if failure is not None:
        failure.metrics.duration_ms = t.elapsed_ms
        return failure
    return success_envelope(name, result.model_dump(), target=target, duration_ms=t.elapsed_ms)


def output_json(envelope: ResponseEnvelope) -> str:
    """Serialize envelope to JSON string using orjson."""
    data = envelope.model_dump(mode="json")
    return orjson.dumps(data, option=orjson.OPT_INDENT_2).decode()


def print_response(envelope: ResponseEnvelope, stream: TextIO | None = None) -> None:
    """Print response as JSON to stdout."""
    (stream or sys.stdout).write(output_json(envelope) + "\n")


def exit_code_for(envelope: ResponseEnvelope) -> int:
    """Determine exit code from envelope errors."""
    if envelope.ok:
        return EXIT_CODES["success"]
    if not envelope.errors:
        return EXIT_CODES["internal"]
    code = envelope.errors[0].code.upper()
    if code.startswith("ERR_IO") or code.endswith("NOT_FOUND") or "CORRUPT" in code or "WRITE" in code:
        return EXIT_CODES["io"]
    return EXIT_CODES["internal"]
