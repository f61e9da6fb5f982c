from __future__ import annotations
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional
import logging
import os
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def setup_logging(level: Optional[str] = None, log_file: Optional[Path] = None) -> None:
    """Console + optional file logging for the CLI and the runner."""
    lvl = (level or os.environ.get("HOTSPOT_LOG_LEVEL") or "INFO").upper()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, lvl, logging.INFO))

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler(stream=sys.stdout)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            root.warning("Cannot write log file %s: %s", log_file, e)
        else:
            fh.setFormatter(formatter)
            root.addHandler(fh)


def log_action(audit_file: Path, action: str, params: Dict[str, Any], outcome: str) -> None:
    """
    Append a line to the audit log.
    outcome examples: 'success', 'failed', 'skipped: another instance'
    """
    line = (
        f"{datetime.now().isoformat()} | "
        f"{action} | "
        f"{params} | "
        f"{outcome}\n"
    )
    try:
        audit_file.parent.mkdir(parents=True, exist_ok=True)
        with open(audit_file, "a", encoding="utf-8") as f:
            f.write(line)
    except OSError as e:
        logging.getLogger(__name__).warning("Cannot write audit log %s: %s", audit_file, e)
