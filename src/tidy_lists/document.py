"""Where document text comes from and where the cleaned text goes.

The list rules only ever see "\\n"-separated text. A document whose every
line ends in "\\r\\n" is converted on the way in and restored on the way
out. Mixed endings are left alone: the stray "\\r"s stay line content.
stdin is read as bytes so its "\\r\\n"s survive to be detected; stdout is
written in text mode.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from .clipboard_tools import Clipboard

logger = logging.getLogger(__name__)

LF = "\n"
CRLF = "\r\n"


@dataclass
class Document:
  text: str
  source: str                      # "file" | "stdin" | "clipboard"
  path: Path | None = None
  newline: str = LF

  @property
  def label(self) -> str:
    return str(self.path) if self.path else f"<{self.source}>"


def split_newline_style(text: str) -> tuple[str, str]:
  crlf = text.count(CRLF)
  if crlf and crlf == text.count(LF):
    return text.replace(CRLF, LF), CRLF
  return text, LF


def restore_newline_style(text: str, newline: str) -> str:
  if newline == LF:
    return text
  return text.replace(LF, newline)


def document_from_text(
  text: str,
  source: str,
  path: Path | None = None,
  *,
  keep_newline_style: bool = True,
) -> Document:
  if keep_newline_style:
    text, newline = split_newline_style(text)
  else:
    newline = LF
  return Document(text=text, source=source, path=path, newline=newline)


def read_document(path: Path, *, keep_newline_style: bool = True) -> Document:
  if not path.exists():
    raise FileNotFoundError(f"Document not found: {path}")
  # newline="" keeps "\r\n" intact so the style can be detected
  with path.open("r", encoding="utf-8", newline="") as f:
    raw = f.read()
  doc = document_from_text(raw, "file", path, keep_newline_style=keep_newline_style)
  logger.debug("Read %s (%d chars, newline=%r)", path, len(raw), doc.newline)
  return doc


def read_stdin(*, keep_newline_style: bool = True) -> Document:
  raw = sys.stdin.buffer.read().decode("utf-8")
  return document_from_text(raw, "stdin", keep_newline_style=keep_newline_style)


def read_clipboard(clipboard: Clipboard, *, keep_newline_style: bool = True) -> Document:
  return document_from_text(clipboard.read(), "clipboard", keep_newline_style=keep_newline_style)


def write_document(doc: Document, text: str, *, clipboard: Clipboard | None = None) -> None:
  """Replace the whole document content with `text` (LF-separated)."""
  out = restore_newline_style(text, doc.newline)

  if doc.source == "file":
    if doc.path is None:
      raise ValueError("File document has no path.")
    with doc.path.open("w", encoding="utf-8", newline="") as f:
      f.write(out)
    logger.debug("Wrote %s", doc.path)
  elif doc.source == "clipboard":
    (clipboard or Clipboard.detect()).write(out)
  elif doc.source == "stdin":
    sys.stdout.write(out)
    sys.stdout.flush()
  else:
    raise ValueError(f"Unknown document source: {doc.source}")

  doc.text = text
