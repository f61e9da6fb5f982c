from __future__ import annotations
from typing import List, Optional
import logging
import os
import subprocess
import sys

log = logging.getLogger(__name__)


def is_elevated() -> bool:
    """True when this process runs as Administrator. Always False off Windows."""
    if os.name != "nt":
        return False
    try:
        import ctypes
        return bool(ctypes.windll.shell32.IsUserAnAdmin())
    except (AttributeError, OSError) as e:
        log.debug("IsUserAnAdmin failed: %s", e)
        return False


def _ps_arg(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def relaunch_elevated(argv: Optional[List[str]] = None) -> bool:
    """
    Start this program again as Administrator (UAC prompt).
    Returns True when the elevated process was requested; the caller exits.
    """
    if os.name != "nt":
        return False

    args = list(sys.argv[1:] if argv is None else argv)
    # Start-Process joins the list with spaces, so each item carries its own quotes.
    arg_list = ",".join(_ps_arg(f'"{a}"') for a in ["-m", "hotspot.cli", *args])
    ps = (
        f"$argsList = @({arg_list}); "
        f"Start-Process -Verb RunAs -FilePath {_ps_arg(sys.executable)} "
        f"-ArgumentList $argsList -WorkingDirectory {_ps_arg(os.getcwd())} | Out-Null"
    )

    p = subprocess.run(
        ["powershell", "-NoProfile", "-ExecutionPolicy", "Bypass", "-Command", ps],
        capture_output=True,
        text=True,
    )
    if p.returncode != 0:
        log.error("Elevated relaunch failed (%s): %s", p.returncode, (p.stderr or "").strip())
        return False
    return True
