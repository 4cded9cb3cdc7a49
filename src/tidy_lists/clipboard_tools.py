from __future__ import annotations

import logging
import shutil
import subprocess
import time
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class ClipboardError(RuntimeError):
  pass


# (name, paste command, copy command); first one whose tools are on PATH wins
_BACKENDS: tuple[tuple[str, list[str], list[str]], ...] = (
  ("macos-pbcopy", ["pbpaste"], ["pbcopy"]),
  ("linux-xclip", ["xclip", "-selection", "clipboard", "-o"], ["xclip", "-selection", "clipboard"]),
  ("linux-xsel", ["xsel", "--clipboard", "--output"], ["xsel", "--clipboard", "--input"]),
  ("wayland", ["wl-paste", "--no-newline"], ["wl-copy"]),
)


@dataclass(frozen=True)
class Clipboard:
  """The system clipboard seen as a document holding one piece of text."""
  name: str
  paste_cmd: list[str]
  copy_cmd: list[str]

  @classmethod
  def detect(cls) -> "Clipboard":
    for name, paste_cmd, copy_cmd in _BACKENDS:
      if shutil.which(paste_cmd[0]) and shutil.which(copy_cmd[0]):
        logger.debug("Using clipboard backend %s", name)
        return cls(name=name, paste_cmd=paste_cmd, copy_cmd=copy_cmd)
    tools = ", ".join(paste[0] for _, paste, _ in _BACKENDS)
    raise ClipboardError(f"No clipboard tool found (looked for {tools}).")

  def _call(self, cmd: list[str], action: str, text: str | None = None) -> str:
    try:
      result = subprocess.run(cmd, input=text, text=True, capture_output=True)
    except OSError as e:
      raise ClipboardError(f"Clipboard {action} failed using {self.name}: {e}") from e
    if result.returncode != 0:
      raise ClipboardError(f"Clipboard {action} failed using {self.name}: {result.stderr.strip()}")
    return result.stdout

  def read(self) -> str:
    return self._call(self.paste_cmd, "paste")

  def write(self, text: str) -> None:
    self._call(self.copy_cmd, "copy", text)
    logger.debug("Copied %d chars to clipboard via %s", len(text), self.name)

  def wait_for_change(
    self,
    last: str | None = None,
    *,
    poll_seconds: float = 0.25,
    timeout_seconds: float | None = None,
  ) -> str:
    """
    Block until the clipboard holds new, non-blank text and return it.
    last=None compares against whatever the clipboard holds on entry.
    """
    start = time.monotonic()
    if last is None:
      last = self.read()

    while True:
      if timeout_seconds is not None and time.monotonic() - start >= timeout_seconds:
        raise TimeoutError("Timed out waiting for clipboard change.")

      current = self.read()
      if current != last:
        if current.strip():
          return current
        # a cleared clipboard is not something to clean
        last = current

      time.sleep(poll_seconds)
