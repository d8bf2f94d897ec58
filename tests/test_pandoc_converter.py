import asyncio
import subprocess
from pathlib import Path

import pytest

from latexextr.converters import pandoc as pandoc_mod
from latexextr.converters.pandoc import aconvert_to_latex, build_command, convert_to_latex
from latexextr.extractor.models import ConversionFailed


def _completed(stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr=stderr)


def test_build_command():
    assert build_command("in.docx", "out.txt") == [
        "pandoc",
        "in.docx",
        "-o",
        "out.txt",
        "--to=latex",
    ]


def test_convert_success(monkeypatch):
    seen = {}

    def _run(cmd, **kwargs):
        seen["cmd"] = cmd
        seen["timeout"] = kwargs.get("timeout")
        return _completed()

    monkeypatch.setattr(pandoc_mod.subprocess, "run", _run)
    out = convert_to_latex("in.docx", "out.txt", pandoc_binary="/opt/pandoc", timeout=5)

    assert out == Path("out.txt")
    assert seen["cmd"][0] == "/opt/pandoc"
    assert seen["timeout"] == 5


def test_convert_warning_on_stderr_is_not_fatal(monkeypatch):
    monkeypatch.setattr(
        pandoc_mod.subprocess, "run", lambda cmd, **kw: _completed("[WARNING] Could not fetch resource")
    )
    assert convert_to_latex("in.docx", "out.txt") == Path("out.txt")


def test_convert_error_on_stderr_fails_even_with_zero_exit(monkeypatch):
    monkeypatch.setattr(
        pandoc_mod.subprocess, "run", lambda cmd, **kw: _completed("parse error at line 3")
    )
    with pytest.raises(ConversionFailed, match="parse error at line 3"):
        convert_to_latex("in.docx", "out.txt")


def test_convert_nonzero_exit(monkeypatch):
    def _run(cmd, **kwargs):
        raise subprocess.CalledProcessError(64, cmd, output="", stderr="Unknown input format")

    monkeypatch.setattr(pandoc_mod.subprocess, "run", _run)
    with pytest.raises(ConversionFailed, match="Unknown input format"):
        convert_to_latex("in.xyz", "out.txt")


def test_convert_missing_binary(monkeypatch):
    def _run(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(pandoc_mod.subprocess, "run", _run)
    with pytest.raises(ConversionFailed, match="not found") as excinfo:
        convert_to_latex("in.docx", "out.txt", pandoc_binary="no-such-pandoc")
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_convert_timeout(monkeypatch):
    def _run(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr(pandoc_mod.subprocess, "run", _run)
    with pytest.raises(ConversionFailed, match="timed out"):
        convert_to_latex("in.docx", "out.txt", timeout=1)


def test_async_convert_runs_in_thread(monkeypatch):
    monkeypatch.setattr(pandoc_mod.subprocess, "run", lambda cmd, **kw: _completed())
    out = asyncio.run(aconvert_to_latex("in.docx", "out.txt"))
    assert out == Path("out.txt")


def test_pandoc_available(monkeypatch):
    monkeypatch.setattr(pandoc_mod.shutil, "which", lambda name: None)
    assert pandoc_mod.pandoc_available() is False
    monkeypatch.setattr(pandoc_mod.shutil, "which", lambda name: "/usr/bin/" + name)
    assert pandoc_mod.pandoc_available() is True
