from __future__ import annotations
from typing import Any, Dict, List, Optional
import argparse
import json
import logging
import os
import sys

import requests

from hotspot_runner.powershell import PowerShellBridge
from hotspot_runner.winrt import WinRTPlatform

from .adapters import AdapterResolver
from .config import HotspotConfig
from .context import TERMINAL, another_instance_running, detect_context, startup_delay
from .elevation import is_elevated, relaunch_elevated
from .errors import ConfigError, HotspotError
from .logs import log_action, setup_logging
from .models import WifiAdapter
from .notify import ToastNotifier
from .orchestrator import HotspotOrchestrator
from .platform import HotspotPlatform
from .runner_client import RunnerClient
from .runner_manager import ensure_runner_started, stop_runner

log = logging.getLogger("hotspot")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_BUSY = 3
EXIT_RELAUNCHED = 4

RUNNER_TOOLS = {
    "toggle": "hotspot.toggle",
    "status": "hotspot.get_state",
    "adapters": "adapters.list",
}


def _supported() -> bool:
    return os.name == "nt"


def build_platform(cfg: HotspotConfig) -> HotspotPlatform:
    return WinRTPlatform(PowerShellBridge(timeout=cfg.powershell_timeout))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="hotspot-toggle",
        description="Toggle the Windows mobile hotspot, cycling the WiFi radio when needed.",
    )
    p.add_argument("--config", help="Path to hotspot.yaml (default: config/hotspot.yaml or $HOTSPOT_CONFIG)")
    p.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR (default: $HOTSPOT_LOG_LEVEL or INFO)")
    p.add_argument("--via-runner", action="store_true", help="Run the command through the local runner service")

    sub = p.add_subparsers(dest="command")

    t = sub.add_parser("toggle", help="Turn the hotspot on if it is off, off if it is on (default)")
    t.add_argument("--no-delay", action="store_true", help="Skip the unattended startup delay")
    t.add_argument("--adapter", help="Adapter name to use instead of the saved one")

    sub.add_parser("status", help="Show hotspot, internet profile and WiFi radio state")

    a = sub.add_parser("adapters", help="List WiFi adapters and the saved selection")
    a.add_argument("--select", action="store_true", help="Choose the adapter again")
    a.add_argument("--forget", action="store_true", help="Delete the saved adapter")

    s = sub.add_parser("serve", help="Run the local runner service")
    s.add_argument("--host", help="Interface to listen on (default: host of runner_url)")
    s.add_argument("--port", type=int, help="Port to listen on (default: port of runner_url)")
    s.add_argument("--stop", action="store_true", help="Stop a runner started by --via-runner and exit")

    return p


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


# -------------------------
# Commands
# -------------------------


def cmd_toggle(args: argparse.Namespace, cfg: HotspotConfig, platform: HotspotPlatform, argv: List[str]) -> int:
    context = detect_context()
    log.debug("Run context: %s", context)

    if cfg.require_elevation and not is_elevated():
        if context == TERMINAL:
            if relaunch_elevated(argv):
                log.info("Relaunched with administrator rights")
                return EXIT_RELAUNCHED
            log.error("Administrator rights are required; run the terminal as Administrator")
            return EXIT_FAILED
        log.warning("Not running as Administrator; adapter restarts may fail")

    if another_instance_running():
        log.warning("Another hotspot toggle is already running, exiting")
        log_action(cfg.audit_file, "hotspot.toggle", {"context": context}, "skipped: another instance")
        return EXIT_BUSY

    if not getattr(args, "no_delay", False):
        startup_delay(context, cfg.startup_delay)

    name = getattr(args, "adapter", None)
    if name:
        adapter = WifiAdapter(name=name)
    else:
        try:
            adapter = AdapterResolver(platform, cfg.adapter_file).resolve(interactive=context == TERMINAL)
        except HotspotError as e:
            log.error("%s", e)
            log_action(cfg.audit_file, "hotspot.toggle", {"context": context}, f"error: {e}")
            return EXIT_FAILED

    notifier = ToastNotifier() if cfg.notifications else None
    orchestrator = HotspotOrchestrator(platform, cfg, notifier=notifier)
    ok = orchestrator.toggle_hotspot(adapter)

    log_action(
        cfg.audit_file,
        "hotspot.toggle",
        {"adapter": adapter.name, "context": context, "states": [s.value for s in orchestrator.history]},
        "success" if ok else "failed",
    )
    return EXIT_OK if ok else EXIT_FAILED


def cmd_status(cfg: HotspotConfig, platform: HotspotPlatform) -> int:
    try:
        state = HotspotOrchestrator(platform, cfg).current_state()
    except HotspotError as e:
        log.error("%s", e)
        return EXIT_FAILED
    _print_json(state)
    return EXIT_OK


def cmd_adapters(args: argparse.Namespace, cfg: HotspotConfig, platform: HotspotPlatform) -> int:
    resolver = AdapterResolver(platform, cfg.adapter_file)
    if args.forget:
        resolver.forget()
        print("Saved adapter removed.")
        return EXIT_OK

    try:
        if args.select:
            adapters = resolver.wifi_adapters()
            if not adapters:
                log.error("No WiFi adapter detected on this device")
                return EXIT_FAILED
            chosen = resolver.choose(adapters)
            resolver.save(chosen)
            print(f"Saved adapter: {chosen.name}")
            return EXIT_OK

        saved = resolver.load_saved()
        _print_json({"adapters": resolver.wifi_adapters(), "saved": saved.name if saved else None})
    except HotspotError as e:
        log.error("%s", e)
        return EXIT_FAILED
    return EXIT_OK


def cmd_serve(args: argparse.Namespace, cfg: HotspotConfig) -> int:
    if args.stop:
        stop_runner()
        print("Runner stopped.")
        return EXIT_OK

    from hotspot_runner.server import serve

    host, port = RunnerClient(cfg.runner_url).address()
    serve(host=args.host or host, port=args.port or port)
    return EXIT_OK


def _local_only(command: str, args: argparse.Namespace) -> bool:
    """Saving or forgetting the adapter only touches local files, never the runner."""
    return command == "adapters" and bool(args.select or args.forget)


def cmd_via_runner(command: str, cfg: HotspotConfig, params: Dict[str, Any]) -> int:
    client = RunnerClient(cfg.runner_url)
    try:
        ensure_runner_started(client)
        res = client.run_tool(RUNNER_TOOLS[command], params)
    except (requests.RequestException, RuntimeError) as e:
        log.error("Runner call failed: %s", e)
        return EXIT_FAILED

    _print_json(res)
    if res.get("error"):
        return EXIT_FAILED
    if command == "toggle":
        return EXIT_OK if (res.get("result") or {}).get("ok") else EXIT_FAILED
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    args = build_parser().parse_args(argv)

    try:
        cfg = HotspotConfig.load(args.config)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return EXIT_USAGE

    setup_logging(args.log_level, cfg.log_file)
    command = args.command or "toggle"

    if command == "serve":
        return cmd_serve(args, cfg)

    if args.via_runner and not _local_only(command, args):
        params: Dict[str, Any] = {}
        if command == "toggle" and getattr(args, "adapter", None):
            params["adapter"] = args.adapter
        return cmd_via_runner(command, cfg, params)

    if not _supported():
        log.error("hotspot-toggle only runs on Windows")
        return EXIT_USAGE

    platform = build_platform(cfg)
    if command == "status":
        return cmd_status(cfg, platform)
    if command == "adapters":
        return cmd_adapters(args, cfg, platform)
    return cmd_toggle(args, cfg, platform, argv)


if __name__ == "__main__":
    sys.exit(main())
