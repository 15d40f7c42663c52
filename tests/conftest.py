"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import requests
from openpyxl import Workbook

from xlagent.llm.client import CompletionClient


@pytest.fixture()
def raw_data_workbook(tmp_path: Path) -> Path:
    """Create a workbook with one sheet of plain data."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Data"
    ws.append(["Name", "Value", "Category"])
    ws.append(["Alpha", 100, "A"])
    ws.append(["Beta", 200.5, "B"])
    ws.append(["Gamma", 300.0, "A"])
    path = tmp_path / "raw_data.xlsx"
    wb.save(str(path))
    wb.close()
    return path


@pytest.fixture()
def multi_sheet_workbook(tmp_path: Path) -> Path:
    """Create a workbook with three sheets, one of them empty."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Revenue"
    ws.append(["Region", "Sales"])
    for i in range(1, 8):
        ws.append([f"R{i}", i * 10])
    ws2 = wb.create_sheet("Flags")
    ws2.append(["Active", True])
    ws2.append(["Closed", False])
    wb.create_sheet("Empty")
    path = tmp_path / "multi.xlsx"
    wb.save(str(path))
    wb.close()
    return path


class FakeResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(self, status_code: int = 200, body: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        self._body = body
        self._text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        if self._text is not None:
            raise requests.exceptions.JSONDecodeError("Expecting value", self._text, 0)
        return self._body


class FakeSession:
    """Records posted requests and replays queued responses or exceptions."""

    def __init__(self, *replies: Any) -> None:
        self.replies = list(replies)
        self.calls: list[dict[str, Any]] = []
        self.headers: dict[str, str] = {}
        self.closed = False

    def post(self, url: str, json: Any = None, timeout: Any = None) -> FakeResponse:
        self.calls.append({"url": url, "json": json, "timeout": timeout, "headers": dict(self.headers)})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def close(self) -> None:
        self.closed = True


def completion(content: str) -> FakeResponse:
    return FakeResponse(200, {"choices": [{"message": {"role": "assistant", "content": content}}]})


@pytest.fixture()
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture()
def client(fake_session: FakeSession) -> CompletionClient:
    return CompletionClient("sk-test", api_url="https://llm.example/v1/chat/completions", session=fake_session)
