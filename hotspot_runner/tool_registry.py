from __future__ import annotations
from typing import Any, Callable, Dict
import platform

from .tools_hotspot import (
    adapters_list,
    hotspot_get_state,
    hotspot_toggle,
    radio_get_state,
    runner_is_elevated,
)


TOOL_FUNCS: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    "hotspot.get_state": hotspot_get_state,
    "hotspot.toggle": hotspot_toggle,

    "radio.get_state": radio_get_state,
    "adapters.list": adapters_list,

    "runner.is_elevated": runner_is_elevated,
}


def capabilities() -> Dict[str, Any]:
    return {
        "os": platform.platform(),
        "tools": sorted(TOOL_FUNCS.keys()),
    }


def run_tool(name: str, params: Dict[str, Any]) -> Dict[str, Any]:
    return TOOL_FUNCS[name](params)
