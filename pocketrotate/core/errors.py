from __future__ import annotations


class PocketRotateError(Exception):
    pass


class WatchSetupError(PocketRotateError):
    """The toggle file watch could not be created or attached."""


class SensorStartError(PocketRotateError):
    """The sensor-reporting helper could not be spawned."""
