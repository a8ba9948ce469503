# sonoff/common/paths.py
from __future__ import annotations

import os
from pathlib import Path

BINDING_ID = "sonoff"
USERDATA_ENV = "SONOFF_USERDATA"
DEVICES_FILENAME = "devices.yml"


def userdata_root() -> Path:
    # $SONOFF_USERDATA, else ./userdata
    env = os.environ.get(USERDATA_ENV)
    return Path(env) if env else Path.cwd() / "userdata"


def cache_dir() -> Path:
    return userdata_root() / BINDING_ID


def default_devices_file() -> Path:
    return userdata_root() / DEVICES_FILENAME
