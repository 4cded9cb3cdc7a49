from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path

import yaml


STRICT_SETTING_NAME = "Strict In-List Only"
STRICT_SETTING_DESC = (
  "If enabled, remove only indented blank lines between list items; keep a single "
  "pure empty line to separate lists. Also remove trailing indented blanks after a "
  "list; at end-of-file no trailing blank line is kept. If disabled, remove all "
  "blanks between list items and trailing after lists."
)

_TRUE_WORDS = {"on", "true", "yes", "1", "strict"}
_FALSE_WORDS = {"off", "false", "no", "0", "merge"}


@dataclass
class Settings:
  strict_in_list_only: bool = True


def parse_toggle(value: str) -> bool:
  v = (value or "").strip().lower()
  if v in _TRUE_WORDS:
    return True
  if v in _FALSE_WORDS:
    return False
  raise ValueError(f"Expected on/off, got: {value!r}")


def load_settings(path: Path) -> Settings:
  """Stored keys override defaults; unknown keys are ignored."""
  settings = Settings()
  if not path.exists():
    return settings

  try:
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
  except yaml.YAMLError as e:
    raise ValueError(f"Settings file is not valid YAML: {path}\n{e}") from e
  if not isinstance(data, dict):
    raise ValueError(f"Settings file must hold a mapping: {path}")

  known = {f.name for f in fields(Settings)}
  for key, value in data.items():
    if key not in known:
      continue
    if isinstance(value, str):
      value = parse_toggle(value)
    elif not isinstance(value, bool):
      raise ValueError(f"Setting {key!r} must be a boolean, got: {value!r}")
    setattr(settings, key, value)

  return settings


def save_settings(path: Path, settings: Settings) -> None:
  path.parent.mkdir(parents=True, exist_ok=True)
  path.write_text(yaml.safe_dump(asdict(settings), sort_keys=True), encoding="utf-8")


def describe_settings(settings: Settings) -> str:
  state = "on" if settings.strict_in_list_only else "off"
  return f"{STRICT_SETTING_NAME}: {state}\n  {STRICT_SETTING_DESC}"
