from __future__ import annotations
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
import json
import logging

from .errors import AdapterNotFound
from .models import WifiAdapter
from .platform import HotspotPlatform

log = logging.getLogger(__name__)

WIFI_HINTS = ["wi-fi", "wifi", "wireless", "wlan", "802.11"]


def is_wifi_adapter(a: Dict[str, Any]) -> bool:
    desc = (a.get("InterfaceDescription") or "").lower()
    name = (a.get("Name") or "").lower()
    return any(h in desc for h in WIFI_HINTS) or any(h in name for h in WIFI_HINTS)


def pick_wifi_adapter(adapters: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    wifi = [a for a in adapters if is_wifi_adapter(a)]
    if not wifi:
        return None

    # Prefer one that is Up first
    for a in wifi:
        if (a.get("Status") or "").lower() == "up":
            return a

    return wifi[0]


def _to_adapter(a: Dict[str, Any]) -> WifiAdapter:
    return WifiAdapter(name=str(a.get("Name") or ""), description=str(a.get("InterfaceDescription") or ""))


class AdapterResolver:
    """
    Decides which WiFi adapter a run works with.

    The choice is saved to a small JSON file and reused as long as that adapter
    still exists. Only terminal runs are asked to pick when there are several.
    """

    def __init__(
        self,
        platform: HotspotPlatform,
        path: Path,
        prompt: Optional[Callable[[str], str]] = None,
        out: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.platform = platform
        self.path = Path(path)
        self.prompt = prompt or input
        self.out = out or print

    # ---- persistence ----

    def load_saved(self) -> Optional[WifiAdapter]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            # Corrupted file: behave as if nothing was saved
            log.warning("Ignoring unreadable adapter file %s: %s", self.path, e)
            return None
        if not isinstance(data, dict) or not data.get("name"):
            return None
        return WifiAdapter(name=str(data["name"]), description=str(data.get("description") or ""))

    def save(self, adapter: WifiAdapter) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"name": adapter.name, "description": adapter.description}, f, indent=2)

    def forget(self) -> None:
        if self.path.exists():
            self.path.unlink()

    # ---- discovery ----

    def wifi_adapters(self) -> List[Dict[str, Any]]:
        return [a for a in self.platform.list_adapters() if is_wifi_adapter(a)]

    def resolve(self, interactive: bool = False) -> WifiAdapter:
        adapters = self.wifi_adapters()
        if not adapters:
            raise AdapterNotFound("No WiFi adapter detected on this device")

        saved = self.load_saved()
        if saved is not None:
            for a in adapters:
                if a.get("Name") == saved.name:
                    return _to_adapter(a)
            log.warning("Saved adapter %r is no longer present, choosing again", saved.name)

        if interactive and len(adapters) > 1:
            chosen = self.choose(adapters)
        else:
            chosen = _to_adapter(pick_wifi_adapter(adapters) or adapters[0])

        self.save(chosen)
        log.info("Using WiFi adapter %r (%s)", chosen.name, chosen.description)
        return chosen

    def choose(self, adapters: List[Dict[str, Any]]) -> WifiAdapter:
        self.out("WiFi adapters:")
        for idx, a in enumerate(adapters, start=1):
            self.out(f"{idx}. {a.get('Name')} - {a.get('InterfaceDescription')} [{a.get('Status')}]")

        while True:
            answer = self.prompt(f"Select adapter [1-{len(adapters)}] (Enter = 1): ").strip()
            if not answer:
                return _to_adapter(adapters[0])
            if answer.isdigit() and 1 <= int(answer) <= len(adapters):
                return _to_adapter(adapters[int(answer) - 1])
            self.out("Please enter one of the listed numbers.")
