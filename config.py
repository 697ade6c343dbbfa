from __future__ import annotations

import logging
import os
from pathlib import Path


DATA_DIR = Path(os.environ.get("WORD_TYPING_HOME", Path.home() / ".word-typing-test"))
PASSAGES_FILE = DATA_DIR / "passages.json"
HISTORY_FILE = DATA_DIR / "history.json"
LOG_FILE = DATA_DIR / "word-typing-test.log"

LOG_LEVEL = os.environ.get("WORD_TYPING_LOG_LEVEL", "INFO").upper()

DEFAULT_DURATION_MINUTES = 1
# Floor for elapsed time so WPM never divides by zero.
MIN_ELAPSED_MINUTES = 0.01

# An 800-word passage typed in full is 640k cells; warn well past that.
ALIGNMENT_WARN_CELLS = 4_000_000

PREVIEW_WORDS = 5


def configure_logging(log_file: Path = LOG_FILE, level: str = LOG_LEVEL) -> None:
    """Send log output to a file; the terminal belongs to the UI."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(log_file),
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
