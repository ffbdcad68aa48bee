import subprocess

import gateway
from gateway import XdgMimeGateway


class _Recorder:
    def __init__(self, returncode: int = 0, stdout: bytes = b"", stderr: bytes = b"", exc=None) -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.exc = exc
        self.calls = []

    def __call__(self, argv, **kwargs):
        self.calls.append((list(argv), kwargs))
        if self.exc is not None:
            raise self.exc
        return subprocess.CompletedProcess(argv, self.returncode, self.stdout, self.stderr)


def test_query_returns_trimmed_handler(monkeypatch) -> None:
    run = _Recorder(stdout=b"  org.gnome.gedit.desktop\n")
    monkeypatch.setattr(gateway.subprocess, "run", run)
    assert XdgMimeGateway().query("text/plain") == "org.gnome.gedit.desktop"
    argv, kwargs = run.calls[0]
    assert argv == ["xdg-mime", "query", "default", "text/plain"]
    assert kwargs["timeout"] == gateway.DEFAULT_TIMEOUT


def test_query_empty_output_is_none(monkeypatch) -> None:
    monkeypatch.setattr(gateway.subprocess, "run", _Recorder(stdout=b"\n"))
    assert XdgMimeGateway().query("text/plain") is None


def test_query_nonzero_exit_is_none(monkeypatch) -> None:
    monkeypatch.setattr(gateway.subprocess, "run", _Recorder(returncode=2, stdout=b"gedit.desktop\n", stderr=b"boom"))
    assert XdgMimeGateway().query("text/plain") is None


def test_query_missing_tool_is_none(monkeypatch) -> None:
    monkeypatch.setattr(gateway.subprocess, "run", _Recorder(exc=FileNotFoundError("xdg-mime")))
    assert XdgMimeGateway().query("text/plain") is None


def test_query_timeout_is_none(monkeypatch) -> None:
    monkeypatch.setattr(gateway.subprocess, "run", _Recorder(exc=subprocess.TimeoutExpired("xdg-mime", 1.0)))
    assert XdgMimeGateway(timeout=1.0).query("text/plain") is None


def test_query_undecodable_output_is_none(monkeypatch) -> None:
    monkeypatch.setattr(gateway.subprocess, "run", _Recorder(stdout=b"\xff\xfe"))
    assert XdgMimeGateway().query("text/plain") is None


def test_query_is_not_cached(monkeypatch) -> None:
    run = _Recorder(stdout=b"a.desktop\n")
    monkeypatch.setattr(gateway.subprocess, "run", run)
    gw = XdgMimeGateway()
    assert gw.query("text/plain") == "a.desktop"
    run.stdout = b"b.desktop\n"
    assert gw.query("text/plain") == "b.desktop"
    assert len(run.calls) == 2


def test_set_invokes_command(monkeypatch) -> None:
    run = _Recorder()
    monkeypatch.setattr(gateway.subprocess, "run", run)
    assert XdgMimeGateway(command="/usr/bin/xdg-mime").set("text/plain", "vim.desktop") is None
    argv, _kwargs = run.calls[0]
    assert argv == ["/usr/bin/xdg-mime", "default", "vim.desktop", "text/plain"]


def test_set_failure_is_silent(monkeypatch) -> None:
    run = _Recorder(exc=PermissionError("denied"))
    monkeypatch.setattr(gateway.subprocess, "run", run)
    XdgMimeGateway().set("text/plain", "vim.desktop")
    monkeypatch.setattr(gateway.subprocess, "run", _Recorder(returncode=1))
    XdgMimeGateway().set("text/plain", "vim.desktop")
    assert len(run.calls) == 1
