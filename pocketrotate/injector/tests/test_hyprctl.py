import pytest

from pocketrotate.core.config import GPD_POCKET_4, DisplayConfig
from pocketrotate.injector.hyprctl import HyprctlDispatcher


class Recorder:
    def __init__(self, fail_on=None):
        self.calls = []
        self.fail_on = fail_on

    def __call__(self, argv, **kwargs):
        self.calls.append(argv)
        if self.fail_on is not None and self.fail_on in argv:
            raise FileNotFoundError(argv[0])


def test_apply_issues_monitor_touch_tablet():
    rec = Recorder()
    HyprctlDispatcher(GPD_POCKET_4, runner=rec).apply(2)
    assert rec.calls == [
        ["hyprctl", "keyword", "monitor", "eDP-1,1600x2560@144,0x0,2,transform,2"],
        ["hyprctl", "keyword", "input:touchdevice:transform", "2"],
        ["hyprctl", "keyword", "input:tablet:transform", "2"],
    ]


def test_display_config_is_injected():
    rec = Recorder()
    cfg = DisplayConfig(monitor="DSI-1", resolution="800x1280@60", position="0x0", scale="1.5", hyprctl="/usr/bin/hyprctl")
    HyprctlDispatcher(cfg, runner=rec).apply(0)
    assert rec.calls[0] == ["/usr/bin/hyprctl", "keyword", "monitor", "DSI-1,800x1280@60,0x0,1.5,transform,0"]


def test_one_failing_call_does_not_skip_the_rest():
    rec = Recorder(fail_on="monitor")
    HyprctlDispatcher(GPD_POCKET_4, runner=rec).apply(3)
    assert len(rec.calls) == 3
    assert rec.calls[2][-1] == "3"


def test_rejects_out_of_range_transform():
    rec = Recorder()
    with pytest.raises(ValueError):
        HyprctlDispatcher(GPD_POCKET_4, runner=rec).apply(4)
    assert rec.calls == []
