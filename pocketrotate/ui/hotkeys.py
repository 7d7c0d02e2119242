from __future__ import annotations

from pynput import keyboard

from pocketrotate.core.config import HotkeyConfig
from pocketrotate.core.ipc_state import ToggleStore


def run_hotkeys(store: ToggleStore, hotkeys: HotkeyConfig = HotkeyConfig()) -> None:
    """
    Global hotkey (X11 / XWayland focus only):
    - Ctrl+Alt+R: flip the rotation toggle file

    The rotation daemon notices the write through its inotify watch.
    """

    def on_toggle():
        enabled = store.toggle()
        print(f"[PocketRotate] auto-rotate {'ON' if enabled else 'OFF'} ({hotkeys.toggle})", flush=True)

    with keyboard.GlobalHotKeys({hotkeys.toggle: on_toggle}) as listener:
        listener.join()
