from __future__ import annotations

from pathlib import Path
from typing import Any
import copy

from bufrng.common.deep_merge import deep_merge_json, load_json_optional
from bufrng.log import error, set_verbose


ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = ROOT / "config" / "config.json"
USER_CONFIG_PATH = ROOT / "config" / "config_user.json"

DEFAULT_SETTINGS: dict[str, Any] = {
    "random": {
        "profiles": {
            "fast": {"buffer_bytes": 1024},
            "secure": {"buffer_bytes": 8192},
            "local": {"buffer_bytes": 8192},
        },
        "local_entropy": {"samples": 64},
    },
    "log": {"verbose": False},
    "check": {
        "samples_per_bucket": 20,
        "buckets": [5, 127, 128, 255, 256, 65535, 65536],
    },
}


def _load_config(path: Path) -> Any:
    try:
        return load_json_optional(path, None)
    except ValueError as ex:
        error(f"Failed to load settings from {path}: {ex}")
        raise


def reload_settings() -> Any:
    """Rebuild SETTINGS from built-in defaults, config.json and config_user.json."""
    merged = deep_merge_json(
        copy.deepcopy(DEFAULT_SETTINGS),
        _load_config(DEFAULT_CONFIG_PATH),
        _load_config(USER_CONFIG_PATH),
    )

    global SETTINGS
    SETTINGS = merged
    set_verbose(bool(SETTINGS.get("log", {}).get("verbose", False)))
    return merged


def get_profile(name: str) -> dict[str, Any]:
    try:
        profiles = SETTINGS['random']['profiles']
    except Exception:
        raise ValueError("Missing required 'random.profiles' section in config/config.json")
    if name not in profiles or not isinstance(profiles[name], dict):
        available = ', '.join(profiles.keys())
        raise ValueError(f"Unknown generator profile: {name}. Available options: {available}")
    return profiles[name]


def get_buffer_bytes(name: str) -> int:
    profile = get_profile(name)
    if 'buffer_bytes' not in profile:
        raise ValueError(f"Missing 'random.profiles.{name}.buffer_bytes' in config/config.json")
    return int(profile['buffer_bytes'])


SETTINGS: Any = {}
reload_settings()


__all__ = [
    "ROOT",
    "SETTINGS",
    "DEFAULT_SETTINGS",
    "reload_settings",
    "get_profile",
    "get_buffer_bytes",
]
