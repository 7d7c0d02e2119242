"""
PocketRotate — device defaults

Values are tuned for the GPD Pocket 4 panel running Hyprland.
Another device gets its own DisplayConfig; nothing reads these as globals.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple


@dataclass(frozen=True)
class DisplayConfig:
    monitor: str
    resolution: str
    position: str
    scale: str
    hyprctl: str = "hyprctl"


@dataclass(frozen=True)
class HotkeyConfig:
    # pynput GlobalHotKeys syntax
    toggle: str = "<ctrl>+<alt>+r"


GPD_POCKET_4 = DisplayConfig(
    monitor="eDP-1",
    resolution="1600x2560@144",
    position="0x0",
    scale="2",  # personal preference; the panel is usable at 1.5 too
)


@dataclass(frozen=True)
class DaemonConfig:
    toggle_path: Path
    display: DisplayConfig = GPD_POCKET_4
    sensor_cmd: Tuple[str, ...] = ("monitor-sensor",)
    poll_timeout_s: float = 0.1
    query_timeout_s: float = 5.0
    hotkeys: HotkeyConfig = HotkeyConfig()


def default_toggle_path() -> Path:
    return Path.home() / ".config" / "hypr" / "rotation-toggle"


def default_config() -> DaemonConfig:
    return DaemonConfig(toggle_path=default_toggle_path(), display=GPD_POCKET_4)
