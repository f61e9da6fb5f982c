from __future__ import annotations
from pathlib import Path
from typing import Callable
import logging
import os
import signal
import subprocess
import sys
import time

from .runner_client import RunnerClient

log = logging.getLogger(__name__)

RUNNER_PID_FILE = Path("logs/runner.pid")


def ensure_runner_started(
    client: RunnerClient,
    pid_file: Path = RUNNER_PID_FILE,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    if client.health():
        return

    host, port = client.address()
    cmd = [sys.executable, "-m", "hotspot_runner.server", "--host", host, "--port", str(port)]

    proc = subprocess.Popen(
        cmd,
        env=os.environ.copy(),
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        creationflags=getattr(subprocess, "CREATE_NEW_PROCESS_GROUP", 0),
    )
    log.info("Started runner (pid %s) on %s:%s", proc.pid, host, port)

    # Save PID so we can stop it later if needed
    pid_file.parent.mkdir(parents=True, exist_ok=True)
    try:
        pid_file.write_text(str(proc.pid), encoding="utf-8")
    except OSError as e:
        log.warning("Could not record runner pid: %s", e)

    # Wait until healthy
    for _ in range(40):
        if client.health():
            return
        sleep(0.25)

    raise RuntimeError(f"Runner failed to start on {host}:{port}. Try: python -m hotspot_runner.server --port {port}")


def stop_runner(pid_file: Path = RUNNER_PID_FILE) -> None:
    """
    Best-effort stop for a runner that we started (tracked via PID file).
    """
    if not pid_file.exists():
        return

    try:
        pid = int(pid_file.read_text(encoding="utf-8").strip())
    except (OSError, ValueError):
        return

    try:
        if os.name == "nt":
            subprocess.run(["taskkill", "/PID", str(pid), "/T", "/F"], check=False)
        else:
            os.kill(pid, signal.SIGTERM)
    except ProcessLookupError:
        pass
    finally:
        try:
            pid_file.unlink()
        except OSError:
            pass
