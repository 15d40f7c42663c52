"""Append-only conversation history."""

from __future__ import annotations

from typing import Iterator, Optional

from xlagent.contracts.common import Message, Role

DEFAULT_SYSTEM_PROMPT = (
    "Eres un asistente especializado en manipular archivos Excel. Puedes "
    "analizar datos, crear gráficos, realizar cálculos y generar informes "
    "basados en datos de Excel. Responde de manera concisa y enfocada en la "
    "tarea solicitada."
)


class ConversationHistory:
    """Ordered log of messages, starting with one system preamble.

    Messages are only ever appended. ``window`` limits how many of the most
    recent messages after the preamble go into a request; the log itself
    keeps everything.
    """

    def __init__(self, system_prompt: str = DEFAULT_SYSTEM_PROMPT) -> None:
        self._messages: list[Message] = [Message(role=Role.SYSTEM, content=system_prompt)]

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))

    def append(self, role: Role, content: str) -> Message:
        message = Message(role=role, content=content)
        self._messages.append(message)
        return message

    def append_system(self, content: str) -> Message:
        return self.append(Role.SYSTEM, content)

    def append_user(self, content: str) -> Message:
        return self.append(Role.USER, content)

    def append_assistant(self, content: str) -> Message:
        return self.append(Role.ASSISTANT, content)

    def payload(self, window: Optional[int] = None) -> list[dict[str, str]]:
        """Messages as ``{role, content}`` dicts for a completion request."""
        selected = self._messages
        if window is not None and len(selected) - 1 > window:
            selected = [selected[0], *selected[-window:]]
        return [m.model_dump(mode="json") for m in selected]
