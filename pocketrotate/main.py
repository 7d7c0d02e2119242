from __future__ import annotations

import sys
from functools import partial

from pocketrotate.core.config import DaemonConfig, default_config
from pocketrotate.core.errors import SensorStartError, WatchSetupError
from pocketrotate.core.ipc_state import ToggleStore
from pocketrotate.injector.hyprctl import HyprctlDispatcher
from pocketrotate.runtime.run_loop import ControlLoop
from pocketrotate.runtime.toggle_watch import ToggleWatch
from pocketrotate.sensor.monitor_sensor import MonitorSensorSource
from pocketrotate.sensor.sensor_proxy import query_current


def run(cfg: DaemonConfig) -> int:
    store = ToggleStore(cfg.toggle_path)
    store.ensure_exists()

    try:
        watch = ToggleWatch.create(cfg.toggle_path)
    except WatchSetupError as e:
        print(f"[PocketRotate] {e}", file=sys.stderr, flush=True)
        return 1

    try:
        source = MonitorSensorSource.start(cfg.sensor_cmd)
    except SensorStartError as e:
        print(f"[PocketRotate] {e}", file=sys.stderr, flush=True)
        watch.close()
        return 1

    loop = ControlLoop(
        store=store,
        source=source,
        dispatcher=HyprctlDispatcher(cfg.display),
        watch=watch,
        query=partial(query_current, timeout_s=cfg.query_timeout_s),
        poll_timeout_s=cfg.poll_timeout_s,
    )

    print(f"[PocketRotate] watching {cfg.toggle_path} and {' '.join(cfg.sensor_cmd)}", flush=True)
    try:
        loop.run_forever()
    except KeyboardInterrupt:
        print("\n[PocketRotate] exiting")
    finally:
        source.close()
        watch.close()
    return 0


def main() -> int:
    return run(default_config())


if __name__ == "__main__":
    sys.exit(main())
