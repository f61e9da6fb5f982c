import json

import pytest

from hotspot.adapters import AdapterResolver, is_wifi_adapter, pick_wifi_adapter
from hotspot.errors import AdapterNotFound
from hotspot.models import WifiAdapter

WIFI_1 = {"Name": "Wi-Fi", "InterfaceDescription": "Intel(R) Wi-Fi 6 AX201", "Status": "Disconnected"}
WIFI_2 = {"Name": "Wi-Fi 2", "InterfaceDescription": "TP-Link Wireless USB Adapter", "Status": "Up"}
ETH = {"Name": "Ethernet", "InterfaceDescription": "Realtek PCIe GbE", "Status": "Up"}


def _resolver(platform, tmp_path, answers=()):
    answers = list(answers)
    printed = []
    resolver = AdapterResolver(
        platform,
        tmp_path / "adapter.json",
        prompt=lambda _: answers.pop(0),
        out=printed.append,
    )
    return resolver, printed


def test_is_wifi_adapter():
    assert is_wifi_adapter(WIFI_1)
    assert is_wifi_adapter(WIFI_2)
    assert not is_wifi_adapter(ETH)


def test_pick_prefers_adapter_that_is_up():
    assert pick_wifi_adapter([ETH, WIFI_1, WIFI_2]) == WIFI_2
    assert pick_wifi_adapter([ETH]) is None


def test_resolve_auto_picks_and_saves(make_platform, tmp_path):
    platform = make_platform()
    platform.adapters = [ETH, WIFI_1, WIFI_2]
    resolver, _ = _resolver(platform, tmp_path)

    adapter = resolver.resolve()

    assert adapter == WifiAdapter("Wi-Fi 2", "TP-Link Wireless USB Adapter")
    saved = json.loads((tmp_path / "adapter.json").read_text(encoding="utf-8"))
    assert saved["name"] == "Wi-Fi 2"


def test_saved_adapter_is_reused(make_platform, tmp_path):
    platform = make_platform()
    platform.adapters = [WIFI_1, WIFI_2]
    resolver, _ = _resolver(platform, tmp_path)
    resolver.save(WifiAdapter("Wi-Fi"))

    assert resolver.resolve(interactive=True).name == "Wi-Fi"


def test_vanished_saved_adapter_is_replaced(make_platform, tmp_path):
    platform = make_platform()
    platform.adapters = [WIFI_2]
    resolver, _ = _resolver(platform, tmp_path)
    resolver.save(WifiAdapter("Old USB dongle"))

    assert resolver.resolve().name == "Wi-Fi 2"
    assert resolver.load_saved().name == "Wi-Fi 2"


def test_interactive_choice_reprompts_on_bad_input(make_platform, tmp_path):
    platform = make_platform()
    platform.adapters = [WIFI_1, WIFI_2]
    resolver, printed = _resolver(platform, tmp_path, answers=["7", "abc", "2"])

    assert resolver.resolve(interactive=True).name == "Wi-Fi 2"
    assert printed.count("Please enter one of the listed numbers.") == 2


def test_interactive_enter_picks_first(make_platform, tmp_path):
    platform = make_platform()
    platform.adapters = [WIFI_1, WIFI_2]
    resolver, _ = _resolver(platform, tmp_path, answers=[""])

    assert resolver.resolve(interactive=True).name == "Wi-Fi"


def test_no_wifi_adapter(make_platform, tmp_path):
    platform = make_platform()
    platform.adapters = [ETH]
    resolver, _ = _resolver(platform, tmp_path)

    with pytest.raises(AdapterNotFound):
        resolver.resolve()


def test_corrupt_saved_file_is_ignored(make_platform, tmp_path):
    (tmp_path / "adapter.json").write_text("{not json", encoding="utf-8")
    resolver, _ = _resolver(make_platform(), tmp_path)

    assert resolver.load_saved() is None
    assert resolver.resolve().name == "Wi-Fi"


def test_forget(make_platform, tmp_path):
    resolver, _ = _resolver(make_platform(), tmp_path)
    resolver.save(WifiAdapter("Wi-Fi"))

    resolver.forget()
    resolver.forget()

    assert resolver.load_saved() is None
