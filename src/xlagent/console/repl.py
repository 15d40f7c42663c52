"""Interactive chat loop over stdin/stdout."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from xlagent.contracts.common import (
    Command,
    CompletionError,
    CreateFile,
    ReadFile,
    ResponseEnvelope,
    WriteData,
)
from xlagent.engine.dispatcher import execute_command
from xlagent.engine.grammar import is_help, is_quit, parse_command
from xlagent.engine.history import ConversationHistory
from xlagent.engine.summary import context_message
from xlagent.llm.client import CompletionClient
from xlagent.observe.events import EventEmitter

PROMPT = "> "
FAREWELL = "Adiós!"

BANNER = """\
=== Agente de IA con Deepseek para Excel ===
Escribe 'ayuda' para ver comandos disponibles
Escribe 'salir' para terminar"""

HELP_TEXT = """\
Comandos disponibles:
  leer_excel <archivo.xlsx> - Lee un archivo Excel
  crear_excel <archivo.xlsx> - Crea un nuevo archivo Excel
  escribir_excel <archivo.xlsx> <datos> - Escribe datos en un archivo Excel
  ayuda - Muestra esta información
  salir - Termina el programa

También puedes hacer preguntas sobre manipulación de Excel o solicitar ayuda."""


def status_line(command: Command, envelope: ResponseEnvelope) -> str:
    """The ✅/❌ line printed after a workbook command."""
    error = envelope.errors[0].message if envelope.errors else ""
    if isinstance(command, ReadFile):
        if envelope.ok:
            return "✅ Archivo leído correctamente"
        return f"❌ Error al leer el archivo: {error}"
    if isinstance(command, CreateFile):
        if envelope.ok:
            return f"✅ Archivo creado correctamente: {command.path}"
        return f"❌ Error al crear el archivo: {error}"
    if isinstance(command, WriteData):
        if envelope.ok:
            return f"✅ Datos escritos correctamente en {command.path}"
        return f"❌ Error al escribir datos: {error}"
    raise TypeError(f"Unknown command: {command!r}")


class ReplSession:
    """Read-eval-print loop dispatching to workbook commands or chat.

    Each line is handled to completion, including the network call, before
    the next prompt. Only ``salir`` or end of input stops the loop.
    """

    def __init__(
        self,
        client: CompletionClient,
        *,
        history: Optional[ConversationHistory] = None,
        window: Optional[int] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        events: Optional[EventEmitter] = None,
    ) -> None:
        self.client = client
        self.history = history if history is not None else ConversationHistory()
        self.window = window
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.events = events or EventEmitter()

    def _print(self, text: str = "") -> None:
        self.stdout.write(text + "\n")
        self.stdout.flush()

    def handle_line(self, line: str) -> bool:
        """Process one input line. Returns False when the loop should end."""
        line = line.strip()

        if is_quit(line):
            self._print(FAREWELL)
            return False

        if is_help(line):
            self._print(HELP_TEXT)
            return True

        command = parse_command(line)
        if command is not None:
            self.run_command(command)
        else:
            self.chat(line)
        return True

    def run_command(self, command: Command) -> ResponseEnvelope:
        envelope = execute_command(command)
        self._print(status_line(command, envelope))
        self.events.emit("command.executed", {
            "kind": command.kind,
            "path": command.path,
            "ok": envelope.ok,
            "duration_ms": envelope.metrics.duration_ms,
        })
        if envelope.ok and isinstance(command, ReadFile):
            sheets = {s["name"]: s["rows"] for s in envelope.result["sheets"]}
            self.history.append_system(context_message(command.path, sheets))
        return envelope

    def chat(self, text: str) -> Optional[str]:
        """Send ``text`` with the whole history. The user message is kept even on failure."""
        self.history.append_user(text)
        payload = self.history.payload(self.window)
        self.events.emit("chat.sent", {"message_count": len(payload)})
        try:
            response = self.client.send(payload)
        except CompletionError as e:
            self._print(f"Error al comunicarse con Deepseek: {e}")
            return None
        self._print(response)
        self.history.append_assistant(response)
        return response

    def run(self) -> None:
        """Main loop: prompt, read, dispatch until quit or end of input."""
        self._print(BANNER)
        self.events.emit("session.start")
        while True:
            self.stdout.write(PROMPT)
            self.stdout.flush()
            line = self.stdin.readline()
            if not line:
                # End of input ends the session like 'salir'
                self._print()
                self._print(FAREWELL)
                break
            if not self.handle_line(line):
                break
        self.events.emit("session.end", {"messages": len(self.history)})
