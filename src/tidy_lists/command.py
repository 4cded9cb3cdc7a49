from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from .clipboard_tools import Clipboard
from .document import Document, document_from_text, restore_newline_style, write_document
from .list_rules import remove_blank_lines_between_list_items
from .run_log import append_run_log, append_transform_log
from .text_utils import count_blank_lines

logger = logging.getLogger(__name__)

COMMAND_ID = "remove-blank-lines-between-list-items"
COMMAND_NAME = "Remove blank lines between list items"

MSG_CHANGED = "Removed blank lines between list items"
MSG_UNCHANGED = "No changes"


@dataclass
class CleanOutcome:
  before: str
  after: str
  strict: bool
  changed: bool
  message: str
  blank_lines_before: int = 0
  blank_lines_after: int = 0


def run_clean_command(text: str, strict: bool) -> CleanOutcome:
  cleaned = remove_blank_lines_between_list_items(text, strict)
  changed = cleaned != text
  return CleanOutcome(
    before=text,
    after=cleaned,
    strict=strict,
    changed=changed,
    message=MSG_CHANGED if changed else MSG_UNCHANGED,
    blank_lines_before=count_blank_lines(text),
    blank_lines_after=count_blank_lines(cleaned),
  )


def apply_to_document(
  doc: Document,
  strict: bool,
  *,
  dry_run: bool = False,
  clipboard: Clipboard | None = None,
) -> CleanOutcome:
  outcome = run_clean_command(doc.text, strict)
  logger.debug(
    "%s: strict=%s blank lines %d -> %d",
    doc.label, strict, outcome.blank_lines_before, outcome.blank_lines_after,
  )

  if dry_run:
    return outcome

  # stdin is a pipe: the text must come out the other end either way
  if outcome.changed or doc.source == "stdin":
    write_document(doc, outcome.after, clipboard=clipboard)

  return outcome


def record_outcome(
  doc: Document,
  outcome: CleanOutcome,
  *,
  csv_log: str = "",
  transform_log: str = "",
) -> None:
  if csv_log:
    append_run_log(Path(csv_log).expanduser(), doc, outcome)
  if transform_log:
    append_transform_log(Path(transform_log).expanduser(), doc, outcome)


def watch_clipboard(
  clipboard: Clipboard,
  strict: bool,
  *,
  keep_newline_style: bool = True,
  poll_seconds: float = 0.25,
  timeout_seconds: float | None = None,
  max_items: int | None = None,
  csv_log: str = "",
  transform_log: str = "",
) -> int:
  """
  Clean every new clipboard value and copy the result back.
  Returns the number of clipboard values that were changed.
  """
  handled = 0
  changed = 0
  last: str | None = None

  while max_items is None or handled < max_items:
    raw = clipboard.wait_for_change(
      last,
      poll_seconds=poll_seconds,
      timeout_seconds=timeout_seconds,
    )
    doc = document_from_text(raw, "clipboard", keep_newline_style=keep_newline_style)
    outcome = apply_to_document(doc, strict, clipboard=clipboard)
    handled += 1

    if outcome.changed:
      changed += 1
      # our own write must not count as the next change
      last = restore_newline_style(outcome.after, doc.newline)
    else:
      last = raw

    record_outcome(doc, outcome, csv_log=csv_log, transform_log=transform_log)
    print(f"{doc.label}: {outcome.message}", file=sys.stderr)

  return changed
