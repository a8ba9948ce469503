# sonoff/cli/commands.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from sonoff.app.device_registry import DeviceRegistry
from sonoff.app.poll_plan import AccountMode, ResetWindows, plan_polls
from sonoff.common.paths import default_devices_file
from sonoff.core.cache_provider import CacheProvider


# ---------------- Logging ----------------

def configure_file_logging(app_log_path: Path) -> None:
    """Route registry and cache events to `app_log_path` (--log-file). Safe to call twice."""
    root = logging.getLogger()
    app_log_path.parent.mkdir(parents=True, exist_ok=True)
    target = str(app_log_path.resolve())

    for h in root.handlers:
        if isinstance(h, logging.FileHandler) and getattr(h, "baseFilename", None) == target:
            return

    fh = logging.FileHandler(app_log_path, encoding="utf-8", delay=True)
    fh.setLevel(logging.INFO)
    fh.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    root.addHandler(fh)

    if root.level > logging.INFO:
        root.setLevel(logging.INFO)


def _load_registry(config_path: Optional[str]) -> DeviceRegistry:
    return DeviceRegistry.load(Path(config_path) if config_path else default_devices_file())


# ---------------- Commands ----------------

def cmd_devices(*, config_path: Optional[str]) -> int:
    registry = _load_registry(config_path)
    if not len(registry):
        print("No devices configured.")
        return 0
    for config in registry.list():
        print(f"{config.device_id}: {config}")
    return 0


def cmd_show(*, config_path: Optional[str], device_id: str, overrides: Mapping[str, Any]) -> int:
    registry = _load_registry(config_path)
    config = registry.reconfigure(device_id, overrides) if overrides else registry.get(device_id)
    windows = ResetWindows.from_config(config)

    print(config)
    print(f"  button reset: {windows.button_s:g}s")
    print(f"  motion reset: {windows.motion_s:g}s")
    return 0


def cmd_polls(*, config_path: Optional[str], mode: str, cloud_online: bool) -> int:
    registry = _load_registry(config_path)
    account_mode = AccountMode.parse(mode)

    for config in registry.list():
        tasks = plan_polls(config, mode=account_mode, cloud_online=cloud_online)
        if not tasks:
            print(f"{config.device_id}: no polling")
            continue
        for task in tasks:
            print(
                f"{task.device_id}: {task.name} every {task.interval_s}s "
                f"(first after {task.initial_delay_s}s)"
            )
    return 0


def cmd_cache_list(*, cache_dir: Optional[str]) -> int:
    provider = CacheProvider(cache_dir)
    states = provider.get_states()
    if not states:
        print("Cache is empty.")
        return 0
    for device_id in sorted(states):
        state = states[device_id]
        print(f"{device_id}: {state.name or '-'}")
    return 0


def cmd_cache_show(*, cache_dir: Optional[str], device_id: str) -> int:
    provider = CacheProvider(cache_dir)
    state = provider.get_state(device_id)
    if state is None:
        print(f"No cached state for '{device_id}'.")
        return 1
    print(json.dumps(state.raw, indent=2, ensure_ascii=False))
    return 0
