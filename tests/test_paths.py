import pytest

from colima.paths import (
    append_to_path,
    clean_path,
    home_dir,
    is_macos,
    random_available_port,
    remove_from_path,
    shell_split,
)


@pytest.mark.parametrize(
    "path, directory, want",
    [
        ("/another/you", "/user/me", "/user/me:/another/you"),
        ("/another/you:/user/me", "/another/me", "/another/me:/another/you:/user/me"),
        ("", "/another/me", "/another/me"),
        ("/another/me", "", "/another/me"),
        (
            "/another/you/me:/user/me/me:/user/me/you",
            "/new",
            "/new:/another/you/me:/user/me/me:/user/me/you",
        ),
    ],
)
def test_append_to_path(path, directory, want):
    assert append_to_path(path, directory) == want


@pytest.mark.parametrize(
    "path, directory, want",
    [
        ("/user/me:/another/you", "/another/you", "/user/me"),
        ("/another/me:/another/you:/user/me", "/another/me", "/another/you:/user/me"),
        ("/another/me:/another/you:/user/me", "/another/you", "/another/me:/user/me"),
        ("", "/another/me", ""),
        ("/another/me", "", "/another/me"),
        (
            "/another/you/me:/user/me/me:/user/me/you:/new",
            "/new",
            "/another/you/me:/user/me/me:/user/me/you",
        ),
        (
            "/another/you/me:/user/me/me:/user/me/you:/new:",
            "/new",
            "/another/you/me:/user/me/me:/user/me/you",
        ),
    ],
)
def test_remove_from_path(path, directory, want):
    assert remove_from_path(path, directory) == want


def test_remove_from_path_ignores_trailing_slash():
    assert remove_from_path("/a/:/b", "/a") == "/b"
    assert remove_from_path("/a:/b", "/a/") == "/b"


def test_append_then_remove_round_trip():
    original = "/usr/bin:/bin"
    assert remove_from_path(append_to_path(original, "/opt/tool/bin"), "/opt/tool/bin") == original


def test_clean_path_empty():
    assert clean_path("") == ""


def test_clean_path_absolute_gets_trailing_slash():
    assert clean_path("/a/b") == "/a/b/"
    assert clean_path("/a/b/") == "/a/b/"
    assert clean_path("/a/./c/../b") == "/a/b/"


def test_clean_path_relative_rejected():
    with pytest.raises(ValueError, match="relative paths not supported"):
        clean_path("User/one")


def test_clean_path_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert clean_path("~/x") == str(tmp_path) + "/x/"
    assert home_dir() == str(tmp_path)


def test_clean_path_expands_env(monkeypatch):
    monkeypatch.setenv("COLIMA_TEST_DIR", "/data")
    monkeypatch.delenv("COLIMA_UNDEFINED_DIR", raising=False)
    assert clean_path("$COLIMA_TEST_DIR/sub") == "/data/sub/"
    assert clean_path("/x/${COLIMA_UNDEFINED_DIR}/y") == "/x/y/"


def test_shell_split_quotes():
    assert shell_split('ssh -o "Port=22" host') == ["ssh", "-o", "Port=22", "host"]


def test_shell_split_falls_back_to_whitespace():
    assert shell_split('echo "unterminated arg') == ["echo", '"unterminated', "arg"]


def test_random_available_port_in_range():
    port = random_available_port()
    assert 1 <= port <= 65535


def test_is_macos_matches_platform():
    import sys

    assert is_macos() == (sys.platform == "darwin")