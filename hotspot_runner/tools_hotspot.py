from __future__ import annotations
from typing import Any, Dict, Optional
import logging
import os
import threading

from hotspot.adapters import AdapterResolver
from hotspot.config import HotspotConfig
from hotspot.elevation import is_elevated
from hotspot.errors import HotspotError
from hotspot.models import WifiAdapter
from hotspot.notify import ToastNotifier
from hotspot.orchestrator import HotspotOrchestrator
from hotspot.radio import RadioController

from .powershell import PowerShellBridge
from .winrt import WinRTPlatform

log = logging.getLogger(__name__)

# One toggle at a time per runner process.
_toggle_lock = threading.Lock()
_cache: Dict[str, Any] = {}


def _supported() -> bool:
    return os.name == "nt"


def _config() -> HotspotConfig:
    if "config" not in _cache:
        _cache["config"] = HotspotConfig.load()
    return _cache["config"]


def _platform() -> WinRTPlatform:
    if "platform" not in _cache:
        _cache["platform"] = WinRTPlatform(PowerShellBridge(timeout=_config().powershell_timeout))
    return _cache["platform"]


def _orchestrator() -> HotspotOrchestrator:
    cfg = _config()
    notifier = ToastNotifier() if cfg.notifications else None
    return HotspotOrchestrator(_platform(), cfg, notifier=notifier)


def _unsupported(tool: str) -> Optional[Dict[str, Any]]:
    if not _supported():
        return {"error": f"{tool} is only implemented on Windows."}
    return None


def hotspot_get_state(params: Dict[str, Any]) -> Dict[str, Any]:
    """Read-only: internet profile, hotspot state and WiFi radio."""
    err = _unsupported("hotspot.get_state")
    if err:
        return err
    try:
        return {"result": _orchestrator().current_state()}
    except HotspotError as e:
        return {"error": str(e)}


def hotspot_toggle(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Toggle the mobile hotspot.
    params:
      - adapter: str (optional)  # adapter name; defaults to the saved/auto-picked one
    """
    err = _unsupported("hotspot.toggle")
    if err:
        return err

    if not _toggle_lock.acquire(blocking=False):
        return {"error": "A hotspot toggle is already running."}
    try:
        name = (params.get("adapter") or "").strip()
        if name:
            adapter = WifiAdapter(name=name)
        else:
            try:
                adapter = AdapterResolver(_platform(), _config().adapter_file).resolve(interactive=False)
            except HotspotError as e:
                return {"error": str(e)}

        orchestrator = _orchestrator()
        ok = orchestrator.toggle_hotspot(adapter)
        return {
            "result": {
                "ok": ok,
                "adapter": adapter.name,
                "states": [s.value for s in orchestrator.history],
            }
        }
    finally:
        _toggle_lock.release()


def radio_get_state(params: Dict[str, Any]) -> Dict[str, Any]:
    err = _unsupported("radio.get_state")
    if err:
        return err
    try:
        radio = RadioController(_platform()).find_wifi_radio()
    except HotspotError as e:
        return {"error": str(e)}
    return {"result": {"name": radio.name, "kind": radio.kind, "state": radio.state.value}}


def adapters_list(params: Dict[str, Any]) -> Dict[str, Any]:
    err = _unsupported("adapters.list")
    if err:
        return err
    resolver = AdapterResolver(_platform(), _config().adapter_file)
    try:
        adapters = resolver.wifi_adapters()
    except HotspotError as e:
        return {"error": str(e)}
    saved = resolver.load_saved()
    return {
        "result": {
            "adapters": adapters,
            "saved": saved.name if saved else None,
        }
    }


def runner_is_elevated(params: Dict[str, Any]) -> Dict[str, Any]:
    """Returns whether the RUNNER process is elevated (admin) on Windows."""
    return {"result": {"elevated": is_elevated(), "supported": _supported()}}
