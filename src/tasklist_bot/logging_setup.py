# src/tasklist_bot/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path


# Console thresholds by logger prefix; the longest matching prefix wins.
# Store and session loggers emit a DEBUG line per mutation, which belongs in the file only.
CONSOLE_LEVELS: dict[str, int] = {
    "tasklist_bot": logging.DEBUG,
    "tasklist_bot.tasks": logging.INFO,
    "tasklist_bot.core.sessions": logging.INFO,
    "tasklist_bot.connectors.matrix_": logging.WARNING,
}

_THIRD_PARTY_LEVEL = logging.ERROR


class _ConsoleNoiseFilter(logging.Filter):
    """Apply CONSOLE_LEVELS so the REPL prompt is not buried in per-message chatter."""

    def __init__(self, levels: dict[str, int] | None = None) -> None:
        super().__init__()
        self._levels = sorted((levels or CONSOLE_LEVELS).items(), key=lambda kv: len(kv[0]), reverse=True)

    def threshold(self, name: str) -> int:
        for prefix, level in self._levels:
            if name == prefix or name.startswith(prefix if prefix.endswith("_") else prefix + "."):
                return level
        return _THIRD_PARTY_LEVEL

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= self.threshold(record.name)


def setup_logging(
    *,
    log_dir: str | Path = ".local/tasklist_bot",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    matrix_sdk_level: int = logging.INFO,
) -> Path:
    """
    Route every record to <log_dir>/tasklist_bot.log and a filtered copy to stderr.

    Replaces any handlers already on the root logger, so call it once at start-up.
    Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "tasklist_bot.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s [%(threadName)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    # nio logs every sync response at DEBUG.
    logging.getLogger("nio").setLevel(max(console_level, matrix_sdk_level))

    logging.captureWarnings(True)
    return log_file
