"""Pydantic models for messages, commands, envelopes and results."""

from xlagent.contracts.common import (
    CellWriteError,
    Command,
    CompletionError,
    ConfigError,
    CreateFile,
    ErrorDetail,
    Message,
    Metrics,
    ReadFile,
    ResponseEnvelope,
    Role,
    Target,
    WarningDetail,
    WorkbookCorruptError,
    WorkbookError,
    WorkbookNotFoundError,
    WorkbookWriteError,
    WriteData,
)
from xlagent.contracts.responses import (
    CreateResult,
    ReadResult,
    SheetData,
    WriteResult,
)

__all__ = [
    "CellWriteError",
    "Command",
    "CompletionError",
    "ConfigError",
    "CreateFile",
    "CreateResult",
    "ErrorDetail",
    "Message",
    "Metrics",
    "ReadFile",
    "ReadResult",
    "ResponseEnvelope",
    "Role",
    "SheetData",
    "Target",
    "WarningDetail",
    "WorkbookCorruptError",
    "WorkbookError",
    "WorkbookNotFoundError",
    "WorkbookWriteError",
    "WriteData",
    "WriteResult",
]
