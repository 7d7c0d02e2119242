from __future__ import annotations

import os
import subprocess
import sys
from collections import deque
from dataclasses import dataclass, field
from typing import Iterator, Optional, Protocol, Sequence

from pocketrotate.core.errors import SensorStartError
from pocketrotate.core.types import Orientation, match_keyword

CHANGED_MARKER = "changed: "
_CHUNK = 4096


def parse_line(raw: str) -> Optional[Orientation]:
    """
    monitor-sensor prints lines like
        === Has accelerometer (orientation: normal)
            Accelerometer orientation changed: left-up
    Only the text after "changed: " counts when present.
    """
    line = raw.rstrip("\n")
    pos = line.find(CHANGED_MARKER)
    if pos != -1:
        line = line[pos + len(CHANGED_MARKER):]
    return match_keyword(line)


class OrientationEventSource(Protocol):
    """
    Anything the control loop can select() on and pull orientation lines from.
    """
    exhausted: bool

    def fileno(self) -> int: ...

    def read_available_lines(self) -> Iterator[str]: ...

    def drain(self) -> int: ...

    def close(self) -> None: ...


class _LineBuffer:
    """Splits non-blocking reads into complete lines."""

    def __init__(self) -> None:
        self._buf = b""

    def feed(self, chunk: bytes) -> None:
        self._buf += chunk

    def pop_line(self) -> Optional[str]:
        nl = self._buf.find(b"\n")
        if nl == -1:
            return None
        raw, self._buf = self._buf[:nl], self._buf[nl + 1:]
        return raw.decode("utf-8", errors="replace")

    def clear(self) -> None:
        self._buf = b""


@dataclass
class MonitorSensorSource:
    """
    Owns the long-lived `monitor-sensor` child.
    stdout is non-blocking; reads never wait for the sensor.
    """
    proc: subprocess.Popen
    exhausted: bool = False
    _lines: _LineBuffer = field(default_factory=_LineBuffer, repr=False)

    @classmethod
    def start(cls, cmd: Sequence[str] = ("monitor-sensor",)) -> "MonitorSensorSource":
        try:
            proc = subprocess.Popen(
                list(cmd),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise SensorStartError(f"failed to start {cmd[0]}: {e}") from e
        assert proc.stdout is not None
        os.set_blocking(proc.stdout.fileno(), False)
        return cls(proc=proc)

    def fileno(self) -> int:
        assert self.proc.stdout is not None
        return self.proc.stdout.fileno()

    def _fill(self) -> bool:
        """Pull one chunk from the pipe. False when nothing is buffered."""
        if self.exhausted:
            return False
        try:
            chunk = os.read(self.fileno(), _CHUNK)
        except BlockingIOError:
            return False
        if not chunk:
            self.exhausted = True
            print(f"[PocketRotate] sensor process exited (pid {self.proc.pid})", file=sys.stderr, flush=True)
            return False
        self._lines.feed(chunk)
        return True

    def read_available_lines(self) -> Iterator[str]:
        while True:
            line = self._lines.pop_line()
            if line is not None:
                yield line
                continue
            if not self._fill():
                return

    def drain(self) -> int:
        dropped = sum(1 for _ in self.read_available_lines())
        # a half-written line belongs to the stale burst as well
        self._lines.clear()
        return dropped

    def close(self) -> None:
        if self.proc.poll() is None:
            self.proc.terminate()
            try:
                self.proc.wait(timeout=1.0)
            except subprocess.TimeoutExpired:
                self.proc.kill()
        if self.proc.stdout is not None:
            self.proc.stdout.close()


class FixtureSource:
    """
    In-memory stand-in for the sensor process.
    feed() queues lines and makes fileno() readable so select() sees them.
    """

    def __init__(self, lines: Sequence[str] = ()) -> None:
        self.exhausted = False
        self._pending: deque[str] = deque()
        self._r, self._w = os.pipe()
        os.set_blocking(self._r, False)
        self.feed(*lines)

    def feed(self, *lines: str) -> None:
        if not lines:
            return
        self._pending.extend(lines)
        os.write(self._w, b"!")

    def fileno(self) -> int:
        return self._r

    def _clear_wakeups(self) -> None:
        try:
            while os.read(self._r, _CHUNK):
                pass
        except BlockingIOError:
            pass

    def read_available_lines(self) -> Iterator[str]:
        self._clear_wakeups()
        while self._pending:
            yield self._pending.popleft()

    def drain(self) -> int:
        return sum(1 for _ in self.read_available_lines())

    def close(self) -> None:
        os.close(self._r)
        os.close(self._w)
