from __future__ import annotations

import re
from enum import Enum
from typing import Iterator, NamedTuple, Sequence


# Bullets (- + *), task boxes (- [ ] / - [x]) and ordered markers (1. / 1) )
_LIST_ITEM_RE = re.compile(r"^\s*(?:[-+*]\s+(?:\[[ xX]\]\s+)?|[0-9]+[.)]\s+)")

# Spaces/tabs only, possibly empty
_WHITESPACE_ONLY_RE = re.compile(r"^[ \t]*$")


class LineKind(Enum):
  LIST_ITEM = "list_item"
  WHITESPACE_ONLY = "whitespace_only"
  OTHER = "other"


def is_list_item(line: str) -> bool:
  return _LIST_ITEM_RE.match(line) is not None


def is_whitespace_only(line: str) -> bool:
  return _WHITESPACE_ONLY_RE.match(line) is not None


def is_pure_empty(line: str) -> bool:
  return line == ""


def is_indented_blank(line: str) -> bool:
  # whitespace-only and non-empty means at least one space or tab
  return is_whitespace_only(line) and len(line) > 0


def classify_line(line: str) -> LineKind:
  if is_whitespace_only(line):
    return LineKind.WHITESPACE_ONLY
  if is_list_item(line):
    return LineKind.LIST_ITEM
  return LineKind.OTHER


def resolve_blank_run(
  run: Sequence[str],
  *,
  prev_is_list: bool,
  next_is_list: bool | None,
  strict: bool,
) -> list[str]:
  """
  Decide what replaces a buffered run of whitespace-only lines.

  next_is_list=None means the run reaches end of input.
  """
  if not run:
    return []

  if not prev_is_list:
    return list(run)

  # after a list item at end of input nothing is kept, in either mode
  if next_is_list is None:
    return []

  if not strict:
    return []

  # strict: indented blanks go, pure empties collapse to a single separator
  if any(is_pure_empty(b) for b in run):
    return [""]
  return []


class Segment(NamedTuple):
  """A (possibly empty) blank run and the non-blank line that ends it."""
  start: int                       # index of the first line of the run
  run: list[str]
  prev_is_list: bool
  line: str | None                 # None once input is exhausted
  next_is_list: bool | None        # None at end of input


def iter_segments(lines: Sequence[str]) -> Iterator[Segment]:
  blank_buffer: list[str] = []
  run_start = 0
  prev_is_list = False

  for i, line in enumerate(lines):
    if is_whitespace_only(line):
      if not blank_buffer:
        run_start = i
      blank_buffer.append(line)
      continue

    curr_is_list = is_list_item(line)
    yield Segment(run_start if blank_buffer else i, blank_buffer, prev_is_list, line, curr_is_list)
    blank_buffer = []
    prev_is_list = curr_is_list

  yield Segment(run_start if blank_buffer else len(lines), blank_buffer, prev_is_list, None, None)


def normalize_lines(lines: Sequence[str], strict: bool) -> list[str]:
  out: list[str] = []

  for seg in iter_segments(lines):
    out.extend(resolve_blank_run(
      seg.run,
      prev_is_list=seg.prev_is_list,
      next_is_list=seg.next_is_list,
      strict=strict,
    ))
    if seg.line is not None:
      out.append(seg.line)

  return out


def remove_blank_lines_between_list_items(text: str, strict: bool) -> str:
  """
  Strict mode:
    - between two list items, or a list item and following content: drop
      indented blanks, keep one pure empty line if the run had any.
    - after the last list item at end of document: keep nothing.
  Non-strict mode:
    - drop every blank after a list item (consecutive lists merge).

  Only "\\n" separates lines; a "\\r" stays part of the line it ends.
  """
  return "\n".join(normalize_lines(text.split("\n"), strict))


def validate_list_spacing(text: str, strict: bool) -> list[str]:
  errors: list[str] = []

  for seg in iter_segments(text.split("\n")):
    kept = resolve_blank_run(
      seg.run,
      prev_is_list=seg.prev_is_list,
      next_is_list=seg.next_is_list,
      strict=strict,
    )
    if kept == seg.run:
      continue

    first = seg.start + 1
    last = seg.start + len(seg.run)
    where = f"Line {first}" if first == last else f"Lines {first}-{last}"
    indented = sum(1 for b in seg.run if is_indented_blank(b))

    if seg.next_is_list is None:
      what = "trailing blank line(s) after list item at end of document"
    elif seg.next_is_list:
      what = "blank line(s) between list items"
    else:
      what = "blank line(s) after list item"

    detail = f"{len(seg.run)} blank, {indented} indented, {len(kept)} kept"
    errors.append(f"{where}: {what} ({detail})")

  return errors
