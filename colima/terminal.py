"""Terminal output helpers: line clearing and a scrolling verbose writer."""

from __future__ import annotations

import codecs
import json
import os
import sys
import time
from collections import deque
from typing import Callable, TextIO

_CLEAR_LINE = "\033[1A \033[2K \r"
_GREY = "\x1b[90m"
_RESET = "\x1b[0m"
_REFRESH_INTERVAL = 2.0


def _isatty(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def _flush(stream: TextIO) -> None:
    flush = getattr(stream, "flush", None)
    if flush is not None:
        flush()


def clear_line(stream: TextIO | None = None, is_terminal: bool | None = None) -> None:
    """Clear the previous line of the terminal; does nothing off a terminal."""
    target = stream if stream is not None else sys.stdout
    if is_terminal is None:
        is_terminal = _isatty(target)
    if not is_terminal:
        return
    target.write(_CLEAR_LINE)
    _flush(target)


def _unquote(text: str) -> str:
    if len(text) < 2 or text[0] != text[-1]:
        raise ValueError("not a quoted string")
    quote, inner = text[0], text[1:-1]
    if quote == "`":
        if "`" in inner:
            raise ValueError("invalid raw string")
        return inner.replace("\r", "")
    if quote == '"':
        return json.loads(text)
    if quote == "'":
        if len(inner) != 1:
            raise ValueError("invalid character literal")
        return inner
    raise ValueError("not a quoted string")


def sanitize_line(line: str) -> str:
    """Strip structured-log noise from ``line`` and prefix it with ``> ``."""
    if line.startswith("time=") and "msg=" in line:
        line = line[line.index("msg=") + 4 :]
        try:
            line = _unquote(line)
        except ValueError:
            pass
    return "> " + line


def _grey(text: str) -> str:
    return f"{_GREY}{text}{_RESET}"


class VerboseWriter:
    """Pipe output to the terminal while only showing the last few lines.

    With a ``line_height`` of zero or less, lines are not scrolled but printed
    to standard error. Off a terminal, everything is passed straight through.
    Call ``close`` when done to clear what is still shown.
    """

    def __init__(
        self,
        line_height: int,
        *,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        is_terminal: bool | None = None,
        terminal_width: Callable[[], int] | None = None,
    ) -> None:
        self.line_height = line_height
        self._stdout = stdout if stdout is not None else sys.stdout
        self._stderr = stderr if stderr is not None else sys.stderr
        self._is_terminal = _isatty(self._stdout) if is_terminal is None else is_terminal
        self._terminal_width = terminal_width or self._default_width
        self._buf = bytearray()
        self._lines: deque[str] = deque(maxlen=line_height if line_height > 0 else None)
        self._overflow = 0
        self._width = 0
        self._last_update: float | None = None
        self._passthrough = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def _default_width(self) -> int:
        return os.get_terminal_size(self._stdout.fileno()).columns

    def write(self, data: bytes | str) -> int:
        """Take output from a process; return the number of bytes consumed."""
        if isinstance(data, str):
            data = data.encode()

        if not self._is_terminal:
            self._stdout.write(self._passthrough.decode(data))
            _flush(self._stdout)
            return len(data)

        *complete, rest = data.split(b"\n")
        for chunk in complete:
            self._buf += chunk
            self._refresh()
        self._buf += rest
        return len(data)

    def close(self) -> None:
        """Show any unfinished line, then clear the shown output."""
        if self._buf:
            self._refresh()
        self._clear_screen()

    def __enter__(self) -> VerboseWriter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _refresh(self) -> None:
        self._clear_screen()
        self._add_line()
        self._print_screen()

    def _add_line(self) -> None:
        text = self._buf.decode("utf-8", "replace")
        self._buf.clear()

        if self.line_height <= 0:
            print(_grey(sanitize_line(text)), file=self._stderr)
            return

        self._lines.append(text)

    def _print_screen(self) -> None:
        self._update_width()

        self._overflow = 0
        for line in self._lines:
            line = sanitize_line(line)
            if self._width > 0 and len(line) > self._width:
                self._overflow += len(line) // self._width
            print(_grey(line), file=self._stdout)
        _flush(self._stdout)

    def _clear_screen(self) -> None:
        for _ in range(len(self._lines) + self._overflow):
            clear_line(self._stdout, self._is_terminal)

    def _update_width(self) -> None:
        now = time.monotonic()
        if self._last_update is not None and now - self._last_update < _REFRESH_INTERVAL:
            return
        self._last_update = now

        try:
            self._width = self._terminal_width()
        except OSError as exc:
            raise OSError(f"error getting terminal size: {exc}") from exc