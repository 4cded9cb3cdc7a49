from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

# ----------------------------
# TOML loading (py3.11+ tomllib, fallback to tomli if installed)
# ----------------------------
try:
  import tomllib  # py3.11+
except Exception:  # pragma: no cover
  tomllib = None  # type: ignore[assignment]
  try:
    import tomli as tomllib  # type: ignore[assignment]
  except Exception:
    tomllib = None  # type: ignore[assignment]


DEFAULT_CONFIG_PATH = Path("~/.config/tidy_lists/config.toml")
DEFAULT_SETTINGS_PATH = Path("~/.config/tidy_lists/settings.yaml")


@dataclass
class CleanerConfig:
  # behavior
  strict_in_list_only: bool = True

  # document handling
  keep_newline_style: bool = True

  # paths ("" = disabled)
  paths_csv_log: str = ""
  paths_transform_log: str = ""
  paths_settings: str = str(DEFAULT_SETTINGS_PATH)


def load_config(path: Path | None) -> CleanerConfig:
  cfg = CleanerConfig()

  if path is None:
    return cfg

  if not path.exists():
    raise FileNotFoundError(f"Config not found: {path}")

  if tomllib is None:
    raise RuntimeError("TOML parser not available. Use Python 3.11+ (tomllib) or install tomli.")

  data = tomllib.loads(path.read_text(encoding="utf-8")) or {}

  # top-level flags
  cfg.strict_in_list_only = bool(data.get("strict_in_list_only", cfg.strict_in_list_only))

  # sections
  document = data.get("document") or {}
  paths = data.get("paths") or {}

  if isinstance(document, dict):
    cfg.keep_newline_style = bool(document.get("keep_newline_style", cfg.keep_newline_style))

  if isinstance(paths, dict):
    if "csv_log" in paths:
      cfg.paths_csv_log = str(paths.get("csv_log") or "")
    if "transform_log" in paths:
      cfg.paths_transform_log = str(paths.get("transform_log") or "")
    if "settings" in paths:
      cfg.paths_settings = str(paths.get("settings") or cfg.paths_settings)

  return cfg


def find_config(explicit: str | None) -> Path | None:
  """Explicit --config must exist; the default location is optional."""
  if explicit:
    return Path(explicit).expanduser()
  default = DEFAULT_CONFIG_PATH.expanduser()
  return default if default.exists() else None
