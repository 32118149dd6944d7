from __future__ import annotations

import subprocess

import pytest

from ocutils.auth import whoami_token
from ocutils.openshift import NotLoggedIn


def _fake_run(code: int, out: str = "", err: str = ""):
    calls = []

    def run(cmd, **kw):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, code, out, err)
    return run, calls


def test_token_is_trimmed(monkeypatch) -> None:
    run, calls = _fake_run(0, "sha256~abc\n")
    monkeypatch.setattr(subprocess, "run", run)
    assert whoami_token() == "sha256~abc"
    assert calls == [["oc", "whoami", "-t"]]


def test_custom_binary(monkeypatch) -> None:
    run, calls = _fake_run(0, "tok")
    monkeypatch.setattr(subprocess, "run", run)
    whoami_token("/usr/local/bin/oc")
    assert calls[0][0] == "/usr/local/bin/oc"


def test_not_logged_in(monkeypatch) -> None:
    run, _ = _fake_run(1, "", "error: You must be logged in to the server (Unauthorized)")
    monkeypatch.setattr(subprocess, "run", run)
    with pytest.raises(NotLoggedIn, match="oc login https://ocp.test:8443"):
        whoami_token(server="https://ocp.test:8443")


def test_empty_token(monkeypatch) -> None:
    run, _ = _fake_run(0, "  \n")
    monkeypatch.setattr(subprocess, "run", run)
    with pytest.raises(NotLoggedIn):
        whoami_token()


def test_missing_client(monkeypatch) -> None:
    def run(cmd, **kw):
        raise FileNotFoundError(cmd[0])
    monkeypatch.setattr(subprocess, "run", run)
    with pytest.raises(NotLoggedIn, match="not found on PATH"):
        whoami_token()
