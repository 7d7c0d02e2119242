from __future__ import annotations

import subprocess
import sys
from typing import Callable

from pocketrotate.core.types import Orientation

QUERY_CMD = [
    "dbus-send",
    "--system",
    "--print-reply",
    "--dest=net.hadess.SensorProxy",
    "/net/hadess/SensorProxy",
    "org.freedesktop.DBus.Properties.Get",
    "string:net.hadess.SensorProxy",
    "string:AccelerometerOrientation",
]


def parse_reply(output: str) -> Orientation:
    """
    Reply looks like:
        method return time=... sender=... -> destination=... serial=...
           variant       string "left-up"
    """
    variant = output.find("variant")
    if variant == -1:
        return Orientation.UNDEFINED
    start = output.find('"', variant)
    if start == -1:
        return Orientation.UNDEFINED
    end = output.find('"', start + 1)
    if end == -1:
        return Orientation.UNDEFINED
    return Orientation.from_keyword(output[start + 1:end])


def query_current(
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    timeout_s: float = 5.0,
) -> Orientation:
    """
    Ask iio-sensor-proxy for AccelerometerOrientation right now.
    Returns UNDEFINED on any failure; callers treat that as "no news".
    """
    try:
        proc = runner(
            QUERY_CMD,
            check=False,
            capture_output=True,
            text=True,
            timeout=timeout_s,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        print(f"[PocketRotate] failed to query current orientation: {e}", file=sys.stderr, flush=True)
        return Orientation.UNDEFINED
    return parse_reply(proc.stdout or "")
