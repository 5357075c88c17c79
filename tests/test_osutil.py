import os

import pytest

from colima.osutil import ENV_COLIMA_BINARY, executable


@pytest.fixture(autouse=True)
def _no_override(monkeypatch):
    monkeypatch.delenv(ENV_COLIMA_BINARY, raising=False)


def _make_executable(path):
    path.write_text("#!/bin/sh\n")
    path.chmod(0o755)
    return path


def test_env_variable_takes_priority(monkeypatch):
    monkeypatch.setenv(ENV_COLIMA_BINARY, "/opt/tools/colima")
    assert executable("anything") == "/opt/tools/colima"


def test_absolute_path_returned_as_is():
    assert executable("/usr/local/bin/colima") == "/usr/local/bin/colima"


def test_looks_up_in_path(monkeypatch, tmp_path):
    binary = _make_executable(tmp_path / "colima-tool")
    monkeypatch.setenv("PATH", str(tmp_path))
    assert executable("colima-tool") == str(binary)


def test_relative_path_made_absolute(monkeypatch, tmp_path):
    _make_executable(tmp_path / "tool")
    monkeypatch.chdir(tmp_path)
    result = executable("./tool")
    assert result == os.path.join(os.getcwd(), "tool")


def test_falls_back_to_argument(monkeypatch, tmp_path):
    monkeypatch.setenv("PATH", str(tmp_path))
    assert executable("missing-tool") == "missing-tool"