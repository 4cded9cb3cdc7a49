from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

import tidy_lists.command as command
from tidy_lists.command import (
  MSG_CHANGED,
  MSG_UNCHANGED,
  apply_to_document,
  record_outcome,
  run_clean_command,
  watch_clipboard,
)
from tidy_lists.document import Document, document_from_text
from tidy_lists.run_log import RUN_LOG_HEADER, run_log_row


def test_run_clean_command_changed():
  outcome = run_clean_command("- a\n\n- b", strict=False)
  assert outcome.changed
  assert outcome.after == "- a\n- b"
  assert outcome.message == MSG_CHANGED
  assert outcome.blank_lines_before == 1
  assert outcome.blank_lines_after == 0


def test_run_clean_command_unchanged():
  outcome = run_clean_command("- a\n\n- b", strict=True)
  assert not outcome.changed
  assert outcome.after == outcome.before
  assert outcome.message == MSG_UNCHANGED


@pytest.fixture
def writes(monkeypatch: pytest.MonkeyPatch) -> list[tuple[Document, str]]:
  calls: list[tuple[Document, str]] = []
  monkeypatch.setattr(command, "write_document", lambda doc, text, clipboard=None: calls.append((doc, text)))
  return calls


def test_apply_writes_only_when_changed(writes):
  doc = Document(text="- a\n- b", source="file", path=Path("x.md"))
  apply_to_document(doc, strict=True)
  assert writes == []

  doc = Document(text="- a\n\t\n- b", source="file", path=Path("x.md"))
  apply_to_document(doc, strict=True)
  assert writes == [(doc, "- a\n- b")]


def test_apply_always_passes_stdin_through(writes):
  doc = Document(text="text", source="stdin")
  outcome = apply_to_document(doc, strict=True)
  assert not outcome.changed
  assert writes == [(doc, "text")]


def test_apply_dry_run_never_writes(writes):
  doc = Document(text="- a\n\t\n- b", source="file", path=Path("x.md"))
  outcome = apply_to_document(doc, strict=True, dry_run=True)
  assert outcome.changed
  assert writes == []


def test_record_outcome_appends_csv_rows(tmp_path: Path):
  log = tmp_path / "logs" / "run_log.csv"
  doc = Document(text="", source="file", path=Path("notes.md"))

  record_outcome(doc, run_clean_command("- a\n\n- b", strict=False), csv_log=str(log))
  record_outcome(doc, run_clean_command("plain", strict=False), csv_log=str(log))

  rows = log.read_text(encoding="utf-8").splitlines()
  assert rows[0] == ",".join(RUN_LOG_HEADER)
  assert len(rows) == 3
  assert rows[1].split(",")[1:] == ["file", "notes.md", "False", "True", "3", "2", "1", "0"]
  assert rows[2].split(",")[4] == "False"


def test_record_outcome_transform_log_only_when_changed(tmp_path: Path):
  log = tmp_path / "transforms.log"
  doc = Document(text="", source="clipboard")

  record_outcome(doc, run_clean_command("plain", strict=True), transform_log=str(log))
  assert not log.exists()

  record_outcome(doc, run_clean_command("- a\n\t\n- b", strict=True), transform_log=str(log))
  content = log.read_text(encoding="utf-8")
  assert "<clipboard> (strict) ---" in content
  assert "blank lines: 1 -> 0" in content
  assert "BEFORE:\n- a\n\t\n- b" in content
  assert "AFTER:\n- a\n- b" in content


def test_watch_clipboard_cleans_and_copies_back(fake_clipboard, capsys):
  fake_clipboard.changes = ["- a\r\n\r\n- b", "plain text"]

  changed = watch_clipboard(fake_clipboard, strict=False, max_items=2)

  assert changed == 1
  assert fake_clipboard.written == ["- a\r\n- b"]
  # the cleaned text written back is not picked up as a new change
  assert fake_clipboard.seen_last == [None, "- a\r\n- b"]

  err = capsys.readouterr().err
  assert f"<clipboard>: {MSG_CHANGED}" in err
  assert f"<clipboard>: {MSG_UNCHANGED}" in err


def test_run_log_row_follows_header():
  doc = Document(text="", source="stdin")
  outcome = run_clean_command("- a\n  \n- b\n", strict=True)

  row = run_log_row(doc, outcome, timestamp=datetime(2024, 5, 1, 9, 30))

  assert list(row) == RUN_LOG_HEADER
  assert row["timestamp"] == "2024-05-01T09:30:00"
  assert row["document"] == "<stdin>"
  assert row["changed"] == "True"
  assert (row["lines_in"], row["lines_out"]) == ("4", "2")
  assert (row["blank_lines_in"], row["blank_lines_out"]) == ("2", "0")


def test_document_from_text_feeds_command():
  doc = document_from_text("- a\r\n  \r\n- b\r\n", "clipboard")
  outcome = run_clean_command(doc.text, strict=True)
  assert outcome.after == "- a\n- b"
