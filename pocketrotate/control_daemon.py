from __future__ import annotations

from pocketrotate.core.config import default_config
from pocketrotate.core.ipc_state import ToggleStore
from pocketrotate.ui.hotkeys import run_hotkeys


def main():
    cfg = default_config()
    store = ToggleStore(cfg.toggle_path)
    store.ensure_exists()

    print("[PocketRotate] Hotkey daemon started.")
    print(f"  Toggle file: {cfg.toggle_path}")
    print(f"  Hotkey: {cfg.hotkeys.toggle} = Toggle auto-rotate ON/OFF")

    try:
        run_hotkeys(store, cfg.hotkeys)
    except KeyboardInterrupt:
        print("\n[PocketRotate] exiting")


if __name__ == "__main__":
    main()
