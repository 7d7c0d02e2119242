import pytest

from pocketrotate.core.config import GPD_POCKET_4, DisplayConfig, default_config


def test_display_config_needs_explicit_device_values():
    with pytest.raises(TypeError):
        DisplayConfig()


def test_default_config_uses_gpd_pocket_4():
    cfg = default_config()
    assert cfg.display == GPD_POCKET_4
    assert cfg.display.hyprctl == "hyprctl"
    assert cfg.toggle_path.parts[-3:] == (".config", "hypr", "rotation-toggle")
