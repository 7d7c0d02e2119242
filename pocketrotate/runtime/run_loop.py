from __future__ import annotations

import select
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol

from pocketrotate.core.ipc_state import ToggleStore
from pocketrotate.core.types import ControlState, Orientation, transform_for
from pocketrotate.sensor.monitor_sensor import OrientationEventSource, parse_line
from pocketrotate.sensor.sensor_proxy import query_current


class Dispatcher(Protocol):
    def apply(self, transform: int) -> None: ...


class Watch(Protocol):
    def fileno(self) -> int: ...

    def consume(self) -> bool: ...

    def ensure_armed(self) -> bool: ...


@dataclass
class ControlLoop:
    """
    Single-threaded reconciler between the toggle file and the sensor stream.

    - the toggle watch is always waited on
    - the sensor is only waited on while enabled
    - a transform is applied only when the orientation actually changes
    """
    store: ToggleStore
    source: OrientationEventSource
    dispatcher: Dispatcher
    watch: Optional[Watch] = None
    query: Callable[[], Orientation] = query_current
    poll_timeout_s: float = 0.1

    state: ControlState = field(init=False)

    def __post_init__(self) -> None:
        self.state = ControlState(enabled=self.store.read())
        print(f"[PocketRotate] rotation {'enabled' if self.state.enabled else 'disabled'} at startup", flush=True)

    def apply(self, orientation: Optional[Orientation]) -> bool:
        """Apply `orientation` unless it is unknown or already applied."""
        if not self.state.should_apply(orientation):
            return False
        transform = transform_for(orientation)
        print(f"[PocketRotate] {orientation.value} -> transform {transform}", flush=True)
        self.dispatcher.apply(transform)
        self.state.last_applied = orientation
        return True

    def on_toggle_changed(self) -> None:
        enabled = self.store.read()
        if enabled == self.state.enabled:
            return

        if not enabled:
            # The device may be turned while we are off; forget what we applied.
            self.state.disable()
            print("[PocketRotate] rotation OFF", flush=True)
            return

        self.state.enabled = True
        print("[PocketRotate] rotation ON", flush=True)
        dropped = self.source.drain()
        if dropped:
            print(f"[PocketRotate] dropped {dropped} stale sensor line(s)", flush=True)
        self.apply(self.query())

    def on_sensor_readable(self) -> None:
        if not self.state.enabled:
            return
        for line in self.source.read_available_lines():
            self.apply(parse_line(line))

    def _readers(self) -> List[object]:
        readers: List[object] = []
        if self.watch is not None:
            readers.append(self.watch)
        if self.state.enabled and not self.source.exhausted:
            readers.append(self.source)
        return readers

    def step(self) -> None:
        """One bounded wait plus whatever handling it calls for."""
        # a watch lost to a delete is retried every tick until the file is back
        if self.watch is not None and self.watch.ensure_armed():
            self.on_toggle_changed()

        readers = self._readers()
        try:
            ready, _, _ = select.select(readers, [], [], self.poll_timeout_s)
        except InterruptedError:
            return

        if self.watch is not None and self.watch in ready:
            if self.watch.consume():
                self.on_toggle_changed()

        # re-check: the toggle above may just have switched us off
        if self.state.enabled and self.source in ready:
            self.on_sensor_readable()

    def run_forever(self) -> None:
        while True:
            self.step()
