from .list_rules import (
  LineKind,
  classify_line,
  normalize_lines,
  remove_blank_lines_between_list_items,
  validate_list_spacing,
)

normalize = remove_blank_lines_between_list_items

__all__ = [
  "LineKind",
  "classify_line",
  "normalize",
  "normalize_lines",
  "remove_blank_lines_between_list_items",
  "validate_list_spacing",
]
