from __future__ import annotations

import sys
from pathlib import Path

from inotify_simple import INotify, flags

from pocketrotate.core.errors import WatchSetupError

WATCH_FLAGS = flags.MODIFY


class ToggleWatch:
    """
    inotify watch on the toggle file. Readable via fileno() whenever the
    file was written; consume() empties the event queue.
    """

    def __init__(self, inotify: INotify, path: Path) -> None:
        self.inotify = inotify
        self.path = path
        self.wd = inotify.add_watch(str(path), WATCH_FLAGS)

    @classmethod
    def create(cls, path: Path) -> "ToggleWatch":
        try:
            inotify = INotify()
        except OSError as e:
            raise WatchSetupError(f"failed to initialize inotify: {e}") from e
        try:
            return cls(inotify, path)
        except OSError as e:
            inotify.close()
            raise WatchSetupError(f"failed to add inotify watch for {path}: {e}") from e

    def fileno(self) -> int:
        return self.inotify.fileno()

    @property
    def armed(self) -> bool:
        return self.wd is not None

    def consume(self) -> bool:
        events = self.inotify.read(timeout=0)
        for ev in events:
            if ev.mask & flags.IGNORED and ev.wd == self.wd:
                self._rearm()
        return bool(events)

    def _add(self) -> None:
        self.wd = self.inotify.add_watch(str(self.path), WATCH_FLAGS)

    def _rearm(self) -> None:
        # Editors that save via rename drop the old inode and our watch with it.
        self.wd = None
        try:
            self._add()
        except OSError as e:
            print(f"[PocketRotate] lost watch on {self.path}, retrying: {e}", file=sys.stderr, flush=True)

    def ensure_armed(self) -> bool:
        """
        Retry a lost watch. True only when it was just re-added, in which
        case the file may hold a new value nobody was notified about.
        """
        if self.armed:
            return False
        try:
            self._add()
        except OSError:
            return False
        print(f"[PocketRotate] watch on {self.path} restored", flush=True)
        return True

    def close(self) -> None:
        self.inotify.close()
