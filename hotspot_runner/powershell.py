from __future__ import annotations
from typing import Any, Dict, Optional, Tuple
import json
import logging
import subprocess

from hotspot.errors import AsyncBridgeUnavailable, AsyncFailure

log = logging.getLogger(__name__)


def _run_powershell(script: str, timeout: Optional[float] = None) -> Tuple[int, str, str]:
    """Run a PowerShell script and return (code, stdout, stderr)."""
    p = subprocess.run(
        ["powershell", "-NoProfile", "-NonInteractive", "-ExecutionPolicy", "Bypass", "-Command", script],
        capture_output=True,
        text=True,
        timeout=timeout,
    )
    return p.returncode, (p.stdout or "").strip(), (p.stderr or "").strip()


# Resolves the generic AsTask<T> once. If the runtime cannot provide it the
# script reports `bridge_error` and stops before touching any WinRT object.
_PS_AWAIT_HELPERS = r"""
Add-Type -AssemblyName System.Runtime.WindowsRuntime -ErrorAction SilentlyContinue | Out-Null

$script:AsTaskGeneric = [System.WindowsRuntimeSystemExtensions].GetMethods() | Where-Object {
  $_.Name -eq 'AsTask' -and $_.GetParameters().Count -eq 1 -and
  $_.GetParameters()[0].ParameterType.Name -eq 'IAsyncOperation`1'
} | Select-Object -First 1

$script:AsTaskAction = [System.WindowsRuntimeSystemExtensions].GetMethods() | Where-Object {
  $_.Name -eq 'AsTask' -and $_.GetParameters().Count -eq 1 -and -not $_.IsGenericMethod -and
  $_.GetParameters()[0].ParameterType.Name -eq 'IAsyncAction'
} | Select-Object -First 1

if (-not $script:AsTaskGeneric -or -not $script:AsTaskAction) {
  @{ bridge_error = "System.WindowsRuntimeSystemExtensions.AsTask could not be resolved" } | ConvertTo-Json -Compress
  exit 0
}

function Wait-Task($task) {
  if (__POLL_ATTEMPTS__ -le 0) {
    $task.Wait(-1) | Out-Null
    return
  }
  for ($i = 0; $i -lt __POLL_ATTEMPTS__; $i++) {
    if ($task.IsCompleted) { break }
    Start-Sleep -Milliseconds __POLL_INTERVAL_MS__
  }
  if (-not $task.IsCompleted) {
    throw "Async operation still running after __POLL_ATTEMPTS__ polls"
  }
  if ($task.IsFaulted) { throw $task.Exception.InnerException }
}

function Await-Operation($op, [Type]$resultType) {
  $task = $script:AsTaskGeneric.MakeGenericMethod($resultType).Invoke($null, @($op))
  Wait-Task $task
  $task.Result
}

function Await-Action($op) {
  $task = $script:AsTaskAction.Invoke($null, @($op))
  Wait-Task $task
}
"""


def ps_quote(value: str) -> str:
    """Escape for a PowerShell single-quoted string literal."""
    return "'" + (value or "").replace("'", "''") + "'"


class PowerShellBridge:
    """
    Runs WinRT snippets through PowerShell and blocks until their async
    operations finish.

    A body must assign the value to report to `$result`; it is serialized to
    JSON and handed back as a dict. With `poll_attempts=0` (default) the
    helpers wait without a timeout; otherwise they poll the task that many
    times, `poll_interval_ms` apart, and fail when it is still running.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        poll_attempts: int = 0,
        poll_interval_ms: int = 250,
    ) -> None:
        self.timeout = timeout
        self.poll_attempts = max(0, int(poll_attempts))
        self.poll_interval_ms = max(1, int(poll_interval_ms))

    def script(self, body: str) -> str:
        helpers = (
            _PS_AWAIT_HELPERS
            .replace("__POLL_ATTEMPTS__", str(self.poll_attempts))
            .replace("__POLL_INTERVAL_MS__", str(self.poll_interval_ms))
        )
        return (
            helpers
            + "\ntry {\n  $result = $null\n"
            + body
            + "\n  $result | ConvertTo-Json -Depth 6 -Compress\n"
            + "} catch {\n  @{ error = $_.Exception.Message } | ConvertTo-Json -Compress\n}\n"
        )

    def run(self, body: str) -> Dict[str, Any]:
        try:
            code, out, err = _run_powershell(self.script(body), timeout=self.timeout)
        except FileNotFoundError as e:
            raise AsyncBridgeUnavailable(f"PowerShell is not available: {e}") from e
        except subprocess.TimeoutExpired as e:
            raise AsyncFailure(f"PowerShell did not finish within {self.timeout}s") from e

        if not out:
            raise AsyncFailure(err or f"PowerShell exited with {code} and no output")

        data = _parse_json(out)
        if data is None:
            snippet = out[:400].replace("\n", "\\n")
            raise AsyncFailure(f"Could not parse PowerShell output: {snippet}")

        if isinstance(data, dict):
            if data.get("bridge_error"):
                raise AsyncBridgeUnavailable(str(data["bridge_error"]))
            if data.get("error"):
                raise AsyncFailure(str(data["error"]))
            return data

        raise AsyncFailure(f"Unexpected PowerShell result: {data!r}")


def _parse_json(out: str) -> Optional[Any]:
    try:
        return json.loads(out)
    except ValueError:
        pass
    # Stray host output ahead of the JSON document: use the last line.
    last = out.splitlines()[-1].strip()
    try:
        return json.loads(last)
    except ValueError:
        log.debug("Unparsable PowerShell output: %s", out[:400])
        return None
