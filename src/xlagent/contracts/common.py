"""Common Pydantic models: messages, commands, response envelope, errors."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class ConfigError(Exception):
    """Raised when configuration is missing or invalid. Fatal at startup."""


class WorkbookError(Exception):
    """Base class for recoverable workbook operation failures."""

    code = "ERR_IO"

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class WorkbookNotFoundError(WorkbookError):
    """Raised when a workbook file does not exist."""

    code = "ERR_WORKBOOK_NOT_FOUND"


class WorkbookCorruptError(WorkbookError):
    """Raised when a workbook file cannot be parsed."""

    code = "ERR_WORKBOOK_CORRUPT"


class WorkbookWriteError(WorkbookError):
    """Raised when a workbook cannot be created, written or saved."""


class CellWriteError(WorkbookWriteError):
    """Raised when a single cell cannot be written."""

    code = "ERR_CELL_WRITE"


class CompletionError(Exception):
    """Raised when the completion endpoint gives no usable response."""

    def __init__(self, message: str, *, reason: str = "") -> None:
        super().__init__(message)
        self.reason = reason


# ---------------------------------------------------------------------------
# Conversation
# ---------------------------------------------------------------------------
class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single role-tagged message in the conversation."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    role: Role
    content: str


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
class ReadFile(BaseModel):
    """Read every sheet of a workbook."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["read"] = "read"
    path: str


class CreateFile(BaseModel):
    """Create an empty workbook with one sheet."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["create"] = "create"
    path: str


class WriteData(BaseModel):
    """Write ``;``/``,`` separated cell data into a new workbook."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["write"] = "write"
    path: str
    data: str


Command = Annotated[Union[ReadFile, CreateFile, WriteData], Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------
class Target(BaseModel):
    """Identifies the target workbook for a command."""

    file: str | None = None
    sheet: str | None = None


class WarningDetail(BaseModel):
    """Structured warning."""

    code: str
    message: str


class ErrorDetail(BaseModel):
    """Structured error."""

    code: str
    message: str
    details: dict[str, Any] | None = None


class Metrics(BaseModel):
    """Execution metrics."""

    duration_ms: int = 0


class ResponseEnvelope(BaseModel):
    """Standard response envelope returned by every workbook command."""

    ok: bool = True
    command: str = ""
    target: Target = Field(default_factory=Target)
    result: Any = None
    warnings: list[WarningDetail] = Field(default_factory=list)
    errors: list[ErrorDetail] = Field(default_factory=list)
    metrics: Metrics = Field(default_factory=Metrics)
