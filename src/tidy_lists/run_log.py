# Per-document records of what a clean did: a CSV summary and a before/after text log

from __future__ import annotations

import csv
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from .text_utils import count_lines

if TYPE_CHECKING:
  from .command import CleanOutcome
  from .document import Document

RUN_LOG_HEADER = [
  "timestamp",
  "source",
  "document",
  "strict",
  "changed",
  "lines_in",
  "lines_out",
  "blank_lines_in",
  "blank_lines_out",
]


def run_log_row(doc: Document, outcome: CleanOutcome, *, timestamp: datetime | None = None) -> dict[str, str]:
  ts = timestamp or datetime.now()
  values = [
    ts.strftime("%Y-%m-%dT%H:%M:%S"),
    doc.source,
    doc.label,
    outcome.strict,
    outcome.changed,
    count_lines(outcome.before),
    count_lines(outcome.after),
    outcome.blank_lines_before,
    outcome.blank_lines_after,
  ]
  return dict(zip(RUN_LOG_HEADER, (str(v) for v in values)))


def append_run_log(csv_path: Path, doc: Document, outcome: CleanOutcome) -> None:
  csv_path.parent.mkdir(parents=True, exist_ok=True)
  new_file = not csv_path.exists()
  with csv_path.open("a", encoding="utf-8", newline="") as f:
    writer = csv.DictWriter(f, fieldnames=RUN_LOG_HEADER, lineterminator="\n")
    if new_file:
      writer.writeheader()
    writer.writerow(run_log_row(doc, outcome))


def append_transform_log(log_path: Path, doc: Document, outcome: CleanOutcome) -> None:
  """Keep the text a clean replaced, next to what replaced it."""
  if not outcome.changed:
    return

  mode = "strict" if outcome.strict else "merge"
  ts = datetime.now().isoformat(timespec="seconds")
  log_path.parent.mkdir(parents=True, exist_ok=True)
  with log_path.open("a", encoding="utf-8") as f:
    f.write(f"--- {ts} {doc.label} ({mode}) ---\n")
    f.write(f"blank lines: {outcome.blank_lines_before} -> {outcome.blank_lines_after}\n")
    f.write("BEFORE:\n")
    f.write(outcome.before)
    f.write("\n\nAFTER:\n")
    f.write(outcome.after)
    f.write("\n\n")
