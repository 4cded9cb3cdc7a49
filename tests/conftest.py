from __future__ import annotations

import io

import pytest


class FakeClipboard:
  name = "fake"

  def __init__(self, text: str = "", changes: list[str] | None = None):
    self.text = text
    self.changes = list(changes or [])
    self.written: list[str] = []
    self.seen_last: list[str | None] = []

  def read(self) -> str:
    return self.text

  def write(self, text: str) -> None:
    self.written.append(text)
    self.text = text

  def wait_for_change(self, last=None, **kwargs) -> str:
    self.seen_last.append(last)
    self.text = self.changes.pop(0)
    return self.text


@pytest.fixture
def fake_clipboard() -> FakeClipboard:
  return FakeClipboard()


@pytest.fixture
def set_stdin(monkeypatch: pytest.MonkeyPatch):
  """Replace stdin with a text stream over raw bytes, like a real pipe."""
  def _set(data: bytes) -> None:
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(data), encoding="utf-8"))
  return _set
