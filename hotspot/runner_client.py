from __future__ import annotations
from typing import Any, Dict, Tuple
from urllib.parse import urlsplit

import requests

from .config import DEFAULT_RUNNER_URL


class RunnerClient:
    def __init__(self, base_url: str = DEFAULT_RUNNER_URL, timeout: float = 15) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def address(self) -> Tuple[str, int]:
        """Host and port the runner has to listen on to be reachable at `base_url`."""
        parts = urlsplit(self.base_url)
        return parts.hostname or "127.0.0.1", parts.port or (443 if parts.scheme == "https" else 80)

    def health(self) -> bool:
        try:
            r = requests.get(f"{self.base_url}/health", timeout=0.8)
            return r.status_code == 200
        except requests.RequestException:
            return False

    def capabilities(self) -> Dict[str, Any]:
        r = requests.get(f"{self.base_url}/capabilities", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def run_tool(self, tool_name: str, params: Dict[str, Any] | None = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"params": params or {}}
        # The toggle can legitimately take minutes (profile wait + radio cycle).
        timeout = None if tool_name == "hotspot.toggle" else self.timeout
        r = requests.post(f"{self.base_url}/tool/{tool_name}", json=payload, timeout=timeout)
        r.raise_for_status()
        return r.json()
