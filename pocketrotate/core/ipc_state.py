from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class ToggleStore:
    """
    File-based on/off flag shared with whatever toggles rotation
    (a bar button, the hotkey daemon, `echo 0 > ...`).
    Content is a leading integer: 0 = disabled, anything else = enabled.
    """
    path: Path

    def ensure_exists(self, default: bool = True) -> None:
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.write(default)

    def read(self) -> bool:
        # Missing, empty or garbage content reads as disabled.
        try:
            text = self.path.read_text(errors="replace")
        except OSError:
            return False
        m = _LEADING_INT.match(text)
        if not m:
            return False
        return int(m.group(1)) != 0

    def write(self, enabled: bool) -> None:
        self.path.write_text("1" if enabled else "0")

    def toggle(self) -> bool:
        enabled = not self.read()
        self.write(enabled)
        return enabled
