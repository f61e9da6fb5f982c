from __future__ import annotations
from typing import Callable, List, Optional
import logging
import os
import sys
import time

import psutil

log = logging.getLogger(__name__)

TERMINAL = "terminal"
UNATTENDED = "unattended"

# Parents that mean we were started by Task Scheduler or a service host.
SCHEDULER_PARENTS = {"svchost.exe", "taskeng.exe", "taskhostw.exe", "services.exe", "wininit.exe"}


def _parent_names(proc: Optional[psutil.Process] = None, depth: int = 3) -> List[str]:
    names: List[str] = []
    try:
        p = (proc or psutil.Process(os.getpid())).parent()
        while p is not None and len(names) < depth:
            names.append(p.name().lower())
            p = p.parent()
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        pass
    return names


def detect_context() -> str:
    """`terminal` when a person can answer prompts, `unattended` otherwise."""
    interactive = bool(sys.stdin and sys.stdin.isatty())
    parents = _parent_names()
    if not interactive:
        return UNATTENDED
    if parents and parents[0] in SCHEDULER_PARENTS:
        return UNATTENDED
    return TERMINAL


def startup_delay(context: str, seconds: float, sleep: Callable[[float], None] = time.sleep) -> None:
    """Unattended runs at logon give the network stack some time first."""
    if context != UNATTENDED or seconds <= 0:
        return
    log.info("Unattended run, waiting %.0fs before toggling", seconds)
    sleep(seconds)


# Subcommands that never toggle; everything else (including no subcommand) does.
READ_ONLY_COMMANDS = {"status", "adapters", "serve"}


def _is_toggle_cmdline(cmdline: List[str]) -> bool:
    joined = " ".join(cmdline).lower()
    if "hotspot-toggle" not in joined and "hotspot.cli" not in joined:
        return False
    args = {c.lower() for c in cmdline[1:]}
    return not (args & READ_ONLY_COMMANDS)


def another_instance_running() -> bool:
    """True when some other live process is running `hotspot-toggle toggle`."""
    me = os.getpid()
    parent = os.getppid()
    for proc in psutil.process_iter(["pid", "cmdline"]):
        pid = proc.info.get("pid")
        if pid in (me, parent):
            continue
        cmdline = proc.info.get("cmdline") or []
        if cmdline and _is_toggle_cmdline(cmdline):
            log.debug("Found running toggle process %s: %s", pid, cmdline)
            return True
    return False
