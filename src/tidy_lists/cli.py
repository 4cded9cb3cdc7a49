from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from .cleaner_config import CleanerConfig, find_config, load_config
from .clipboard_tools import Clipboard, ClipboardError
from .command import COMMAND_NAME, apply_to_document, record_outcome, watch_clipboard
from .document import Document, read_clipboard, read_document, read_stdin, restore_newline_style
from .list_rules import validate_list_spacing
from .settings_store import (
  STRICT_SETTING_DESC,
  describe_settings,
  load_settings,
  parse_toggle,
  save_settings,
)

logger = logging.getLogger(__name__)


def build_argparser() -> argparse.ArgumentParser:
  ap = argparse.ArgumentParser(prog="tidy-lists", description=COMMAND_NAME)
  ap.add_argument("paths", nargs="*", help="Markdown files (default: read stdin, write stdout)")
  ap.add_argument("--clipboard", action="store_true", help="Clean the clipboard contents in place")
  ap.add_argument("--watch", action="store_true", help="Keep cleaning whatever is copied to the clipboard")
  ap.add_argument("--in-place", action="store_true", help="Rewrite files instead of printing the result")
  ap.add_argument("--check", action="store_true", help="Report blank runs that would change; exit 1 if any")
  ap.add_argument("--dry-run", action="store_true", help="Report outcomes without writing anything")

  mode = ap.add_mutually_exclusive_group()
  mode.add_argument("--strict", dest="strict", action="store_const", const=True, default=None,
                    help="Strict in-list only (keep one empty line between lists)")
  mode.add_argument("--merge", dest="strict", action="store_const", const=False,
                    help="Remove every blank line between list items")

  ap.add_argument("--config", default=None, help="Optional TOML config")
  ap.add_argument("--settings", default=None, help="Settings file (YAML) holding the persisted toggle")
  ap.add_argument("--set-strict", default=None, metavar="on|off", help=STRICT_SETTING_DESC)
  ap.add_argument("--show-settings", action="store_true", help="Print the persisted settings and exit")

  ap.add_argument("--log-csv", default=None, help="Append a row to this CSV file per document")
  ap.add_argument("-v", "--verbose", action="store_true")
  return ap


def resolve_strict(flag: bool | None, cfg: CleanerConfig, settings_path: Path) -> bool:
  # CLI flag > persisted setting > config file > default
  if flag is not None:
    return flag
  if settings_path.exists():
    return load_settings(settings_path).strict_in_list_only
  return cfg.strict_in_list_only


def _collect_documents(args, cfg: CleanerConfig) -> list[Document]:
  keep = cfg.keep_newline_style
  docs: list[Document] = []
  for p in args.paths:
    docs.append(read_document(Path(p), keep_newline_style=keep))
  if args.clipboard:
    docs.append(read_clipboard(Clipboard.detect(), keep_newline_style=keep))
  if not docs:
    docs.append(read_stdin(keep_newline_style=keep))
  return docs


def _run(args) -> int:
  cfg = load_config(find_config(args.config))
  settings_path = Path(args.settings or cfg.paths_settings).expanduser()
  csv_log = args.log_csv or cfg.paths_csv_log

  if args.set_strict is not None:
    settings = load_settings(settings_path)
    settings.strict_in_list_only = parse_toggle(args.set_strict)
    save_settings(settings_path, settings)
    logger.info("Saved settings to %s", settings_path)
    print(describe_settings(settings))
    return 0

  if args.show_settings:
    print(describe_settings(load_settings(settings_path)))
    return 0

  strict = resolve_strict(args.strict, cfg, settings_path)
  logger.debug("strict_in_list_only=%s", strict)

  if args.watch:
    print("Watching clipboard (Ctrl-C to stop)...", file=sys.stderr)
    try:
      watch_clipboard(
        Clipboard.detect(),
        strict,
        keep_newline_style=cfg.keep_newline_style,
        csv_log=csv_log,
        transform_log=cfg.paths_transform_log,
      )
    except KeyboardInterrupt:
      print("Stopped.", file=sys.stderr)
    return 0

  docs = _collect_documents(args, cfg)

  if args.check:
    failed = False
    for doc in docs:
      problems = validate_list_spacing(doc.text, strict)
      for p in problems:
        print(f"{doc.label}: {p}")
      failed = failed or bool(problems)
    return 1 if failed else 0

  # a document printed without a final newline must not run into the next one
  line_open = False

  for doc in docs:
    to_stdout = doc.source == "file" and not args.in_place
    outcome = apply_to_document(doc, strict, dry_run=args.dry_run or to_stdout)

    if to_stdout and not args.dry_run:
      out = restore_newline_style(outcome.after, doc.newline)
      if line_open:
        sys.stdout.write(doc.newline)
      sys.stdout.write(out)
      line_open = bool(out) and not out.endswith("\n")

    if not args.dry_run:
      record_outcome(doc, outcome, csv_log=csv_log, transform_log=cfg.paths_transform_log)

    print(f"{doc.label}: {outcome.message}", file=sys.stderr)

  return 0


def fatal(msg: str, *, code: int = 2) -> NoReturn:
  sys.stderr.write(msg.rstrip() + "\n")
  raise SystemExit(code)


def main(argv: list[str] | None = None) -> int:
  args = build_argparser().parse_args(argv)

  logging.basicConfig(
    level=logging.DEBUG if args.verbose else logging.WARNING,
    format="%(levelname)s %(name)s: %(message)s",
  )

  try:
    return _run(args)
  except (OSError, ClipboardError, TimeoutError, ValueError, RuntimeError) as e:
    fatal(f"tidy-lists: {e}")
