"""Typer CLI application: interactive chat plus one-shot workbook commands."""

from __future__ import annotations

import sys
from typing import Annotated, Optional

import typer

import xlagent
from xlagent.contracts.common import ConfigError, CreateFile, ReadFile, WriteData
from xlagent.engine.dispatcher import (
    EXIT_CODES,
    error_envelope,
    execute_command,
    exit_code_for,
    print_response,
)

_MAIN_HELP = """\
Chat agent for Excel workbooks backed by a DeepSeek-compatible completion endpoint.

Run `xlagent` (or `xlagent chat`) for the interactive session. Inside it:

- `leer_excel <file.xlsx>` reads a workbook and adds a digest to the conversation
- `crear_excel <file.xlsx>` creates an empty workbook
- `escribir_excel <file.xlsx> a,b;c,d` writes cells into a new workbook
- `ayuda` shows help, `salir` quits; anything else is sent to the model

**Environment:** `DEEPSEEK_API_KEY` (required), `DEEPSEEK_API_URL`, `DEEPSEEK_MODEL`.
A `.env` file and an `xlagent.yaml` in the working directory are read when present.

The `read`, `create` and `write` subcommands run the workbook operations once
and print a JSON envelope. They need no API key.

**Exit codes:** 0=success, 50=io, 80=config, 90=internal
"""

app = typer.Typer(
    name="xlagent",
    help=_MAIN_HELP,
    rich_markup_mode="markdown",
)

FilePath = Annotated[str, typer.Option("--file", "-f", help="Path to .xlsx workbook file")]
ConfigOpt = Annotated[Optional[str], typer.Option("--config", "-c", help="Path to a YAML config file (default: ./xlagent.yaml)")]
EventsFlag = Annotated[bool, typer.Option("--events", help="Emit NDJSON lifecycle events to stderr")]


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(xlagent.__version__)
        raise typer.Exit()


def _emit(envelope, code=None):
    print_response(envelope)
    raise typer.Exit(code if code is not None else exit_code_for(envelope))


def _start_chat(config: Optional[str], events: bool) -> None:
    from xlagent.config import load_settings
    from xlagent.console.repl import ReplSession
    from xlagent.engine.history import ConversationHistory
    from xlagent.llm.client import CompletionClient
    from xlagent.observe.events import EventEmitter

    try:
        settings = load_settings(config_path=config)
    except ConfigError as e:
        typer.echo(f"Error de configuración: {e}", err=True)
        raise typer.Exit(EXIT_CODES["config"])

    emitter = EventEmitter(enabled=events or settings.events)
    client = CompletionClient.from_settings(settings, events=emitter)
    session = ReplSession(
        client,
        history=ConversationHistory(settings.system_prompt),
        window=settings.window,
        events=emitter,
    )
    try:
        session.run()
    except KeyboardInterrupt:
        typer.echo()
    finally:
        client.close()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        bool, typer.Option("--version", "-V", help="Print version and exit.", is_eager=True)
    ] = False,
    config: ConfigOpt = None,
    events: EventsFlag = False,
) -> None:
    if version:
        _version_callback(True)
    if ctx.invoked_subcommand is None:
        _start_chat(config, events)


# ---------------------------------------------------------------------------
# xlagent chat
# ---------------------------------------------------------------------------
@app.command()
def chat(
    config: ConfigOpt = None,
    events: EventsFlag = False,
):
    """Start the interactive chat session.

    Example: `xlagent chat --config team.yaml`
    """
    _start_chat(config, events)


# ---------------------------------------------------------------------------
# xlagent version
# ---------------------------------------------------------------------------
@app.command()
def version():
    """Print the xlagent version."""
    typer.echo(xlagent.__version__)


# ---------------------------------------------------------------------------
# xlagent read
# ---------------------------------------------------------------------------
@app.command("read")
def read_cmd(
    file: FilePath,
    summary: Annotated[bool, typer.Option("--summary", help="Include the digest sent to the model")] = False,
):
    """Read every sheet of a workbook as rows of text.

    Example: `xlagent read -f data.xlsx --summary`
    """
    _emit(execute_command(ReadFile(path=file), summary=summary))


# ---------------------------------------------------------------------------
# xlagent create
# ---------------------------------------------------------------------------
@app.command("create")
def create_cmd(
    file: FilePath,
):
    """Create an empty workbook with one sheet, overwriting any existing file.

    Example: `xlagent create -f new.xlsx`
    """
    _emit(execute_command(CreateFile(path=file)))


# ---------------------------------------------------------------------------
# xlagent write
# ---------------------------------------------------------------------------
@app.command("write")
def write_cmd(
    file: FilePath,
    data: Annotated[str, typer.Option("--data", "-d", help="Rows separated by ';', cells by ','")],
):
    """Write cell data into a new workbook, overwriting any existing file.

    Cells are trimmed and written as text starting at A1.

    Example: `xlagent write -f out.xlsx --data "Name,Qty;Apples,3"`
    """
    _emit(execute_command(WriteData(path=file, data=data)))


# ---------------------------------------------------------------------------
# Entrypoint (for `python -m xlagent`)
# ---------------------------------------------------------------------------
def main() -> None:
    try:
        app()
    except SystemExit:
        raise
    except Exception as exc:
        env = error_envelope("unknown", "ERR_INTERNAL", str(exc))
        print_response(env, stream=sys.stderr)
        raise SystemExit(EXIT_CODES["internal"]) from exc


if __name__ == "__main__":
    main()
