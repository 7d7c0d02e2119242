from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass
from typing import Callable, List

from pocketrotate.core.config import DisplayConfig


@dataclass
class HyprctlDispatcher:
    """
    Pushes a transform code to the monitor, touchscreen and pen.
    Keep it boring. The control loop decides when.
    """
    display: DisplayConfig
    runner: Callable[..., object] = subprocess.run

    def commands(self, transform: int) -> List[List[str]]:
        d = self.display
        monitor = f"{d.monitor},{d.resolution},{d.position},{d.scale},transform,{transform}"
        return [
            [d.hyprctl, "keyword", "monitor", monitor],
            [d.hyprctl, "keyword", "input:touchdevice:transform", str(transform)],
            [d.hyprctl, "keyword", "input:tablet:transform", str(transform)],
        ]

    def apply(self, transform: int) -> None:
        if transform not in (0, 1, 2, 3):
            raise ValueError(f"transform must be 0..3, got {transform!r}")
        for argv in self.commands(transform):
            # exit status is ignored; one failing call must not skip the rest
            try:
                self.runner(argv, check=False, stdout=subprocess.DEVNULL)
            except OSError as e:
                print(f"[PocketRotate] {argv[0]} failed: {e}", file=sys.stderr, flush=True)
