"""Chat-completion client for DeepSeek-compatible endpoints."""

from __future__ import annotations

from typing import Any, NoReturn, Optional, Sequence

import requests

from xlagent.config import DEFAULT_API_URL, DEFAULT_MODEL
from xlagent.contracts.common import CompletionError, Message
from xlagent.observe.events import EventEmitter, Timer

NO_RESPONSE_MESSAGE = "No se pudo obtener una respuesta válida de Deepseek"


def _first_choice_content(data: Any) -> str:
    """Extract ``choices[0].message.content`` or raise ValueError."""
    if not isinstance(data, dict):
        raise ValueError("response body is not an object")
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        raise ValueError("no choices in response")
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        raise ValueError("first choice has no message content")
    return content


class CompletionClient:
    """Sends the conversation to the completion endpoint.

    Every failure, whether transport, HTTP status or body shape, surfaces as
    one :class:`CompletionError` with a generic message. The underlying cause
    is kept on ``CompletionError.reason`` and emitted as an event.
    """

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str = DEFAULT_API_URL,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.7,
        max_tokens: int = 500,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        events: Optional[EventEmitter] = None,
    ) -> None:
        self.api_url = api_url
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.events = events or EventEmitter()
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        })

    @classmethod
    def from_settings(cls, settings: Any, **kwargs: Any) -> "CompletionClient":
        return cls(
            settings.api_key,
            api_url=settings.api_url,
            model=settings.model,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            timeout=settings.timeout,
            **kwargs,
        )

    def build_payload(self, messages: Sequence[Message | dict[str, str]]) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                m.model_dump(mode="json") if isinstance(m, Message) else dict(m)
                for m in messages
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    def send(self, messages: Sequence[Message | dict[str, str]]) -> str:
        """Return the first choice's content for ``messages``."""
        payload = self.build_payload(messages)
        with Timer() as t:
            try:
                resp = self.session.post(self.api_url, json=payload, timeout=self.timeout)
            except requests.RequestException as e:
                self._fail(f"transport: {e}", t.elapsed_ms)
            if not resp.ok:
                self._fail(f"http {resp.status_code}", t.elapsed_ms)
            try:
                content = _first_choice_content(resp.json())
            except ValueError as e:
                # requests' JSONDecodeError is a ValueError too
                self._fail(f"body: {e}", t.elapsed_ms)

        self.events.emit("completion.ok", {"duration_ms": t.elapsed_ms, "model": self.model})
        return content

    def _fail(self, reason: str, duration_ms: int) -> NoReturn:
        self.events.emit("completion.failed", {"duration_ms": duration_ms, "reason": reason})
        raise CompletionError(NO_RESPONSE_MESSAGE, reason=reason)

    def close(self) -> None:
        self.session.close()
