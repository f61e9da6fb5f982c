from types import SimpleNamespace

import hotspot.context as context
from hotspot.context import TERMINAL, UNATTENDED


class _Stdin:
    def __init__(self, tty):
        self.tty = tty

    def isatty(self):
        return self.tty


def test_terminal_context(monkeypatch):
    monkeypatch.setattr(context.sys, "stdin", _Stdin(True))
    monkeypatch.setattr(context, "_parent_names", lambda: ["cmd.exe", "explorer.exe"])

    assert context.detect_context() == TERMINAL


def test_no_tty_is_unattended(monkeypatch):
    monkeypatch.setattr(context.sys, "stdin", _Stdin(False))
    monkeypatch.setattr(context, "_parent_names", lambda: ["cmd.exe"])

    assert context.detect_context() == UNATTENDED


def test_scheduler_parent_is_unattended(monkeypatch):
    monkeypatch.setattr(context.sys, "stdin", _Stdin(True))
    monkeypatch.setattr(context, "_parent_names", lambda: ["svchost.exe", "services.exe"])

    assert context.detect_context() == UNATTENDED


def test_startup_delay_only_when_unattended():
    sleeps = []

    context.startup_delay(TERMINAL, 30, sleep=sleeps.append)
    context.startup_delay(UNATTENDED, 0, sleep=sleeps.append)
    context.startup_delay(UNATTENDED, 30, sleep=sleeps.append)

    assert sleeps == [30]


def _procs(*cmdlines):
    return [
        SimpleNamespace(info={"pid": 900000 + i, "cmdline": c})
        for i, c in enumerate(cmdlines)
    ]


def test_other_toggle_process_is_detected(monkeypatch):
    procs = _procs(
        ["C:\\Python\\python.exe", "-m", "hotspot.cli", "status"],
        None,
        ["C:\\Tools\\hotspot-toggle.exe", "toggle"],
    )
    monkeypatch.setattr(context.psutil, "process_iter", lambda attrs: iter(procs))

    assert context.another_instance_running() is True


def test_read_only_commands_are_not_instances(monkeypatch):
    procs = _procs(
        ["hotspot-toggle", "status"],
        ["python", "-m", "hotspot.cli", "adapters", "--select"],
        ["notepad.exe"],
    )
    monkeypatch.setattr(context.psutil, "process_iter", lambda attrs: iter(procs))

    assert context.another_instance_running() is False


def test_own_process_is_ignored(monkeypatch):
    me = SimpleNamespace(info={"pid": context.os.getpid(), "cmdline": ["hotspot-toggle"]})
    monkeypatch.setattr(context.psutil, "process_iter", lambda attrs: iter([me]))

    assert context.another_instance_running() is False


def test_bare_command_counts_as_toggle():
    assert context._is_toggle_cmdline(["hotspot-toggle"])
    assert context._is_toggle_cmdline(["python", "-m", "hotspot.cli", "--no-delay"]) is True
    assert not context._is_toggle_cmdline(["python", "-m", "hotspot.cli", "serve"])
