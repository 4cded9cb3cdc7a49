from __future__ import annotations

from .list_rules import is_whitespace_only


def count_lines(text: str) -> int:
  return len(text.split("\n"))


def count_blank_lines(text: str) -> int:
  return sum(1 for line in text.split("\n") if is_whitespace_only(line))
