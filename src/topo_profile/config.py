"""Configuration file loading."""

import json
from pathlib import Path

from topo_profile.models import ProfileParams

CONFIG_DIR = Path.home() / ".config" / "topo-profile"
CONFIG_PATH = CONFIG_DIR / "topo-profile.json"
LOCAL_CONFIG_PATH = Path("topo-profile.json")

DEFAULTS = {
    "axis_width": 45.0,
    "top_row_height": 24.0,
    "resolution": 5.0,
    "scrollbar_allowance": 20.0,
    "height": 220.0,
    "dpi": 100,
}


def load_config() -> dict:
    """Load configuration from config files.

    Merges config from global and local files:
    1. ~/.config/topo-profile/topo-profile.json (global, loaded first)
    2. ./topo-profile.json (local, overrides global)

    Returns:
        Dict with merged config values, empty dict if no files exist.
    """
    config = {}
    for config_path in [CONFIG_PATH, LOCAL_CONFIG_PATH]:
        if config_path.exists():
            try:
                with config_path.open() as f:
                    config.update(json.load(f))
            except (json.JSONDecodeError, OSError):
                continue
    return config


def get_default(config: dict | None, key: str):
    """Config value for key, falling back to DEFAULTS."""
    if config is None:
        config = {}
    return config.get(key, DEFAULTS[key])


def build_params(config: dict | None = None) -> ProfileParams:
    """Layout parameters from config, with DEFAULTS for anything unset."""
    return ProfileParams(
        axis_width=float(get_default(config, "axis_width")),
        top_row_height=float(get_default(config, "top_row_height")),
        resolution=float(get_default(config, "resolution")),
        scrollbar_allowance=float(get_default(config, "scrollbar_allowance")),
    )
