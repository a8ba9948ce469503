# sonoff/config/loader.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import yaml

from sonoff.config.binder import DeviceConfigBinder
from sonoff.config.device_config import DeviceConfig


class DeviceConfigLoader:
    """
    Loads per-device configuration from a YAML devices file.

    Expected layout:

        devices:
          <deviceid>:
            localPoll: 30
            local: true

    Device ids must be YAML strings. Unquoted numeric keys (`0123`, `0x10`)
    are rejected rather than converted, quote them instead.

    After calling load_all(), exposes:
        self.devices : dict[str, DeviceConfig]
    """

    def __init__(self, path: str | Path, *, binder: Optional[DeviceConfigBinder] = None):
        self.path = Path(path)
        self.devices: Dict[str, DeviceConfig] = {}
        self._binder = binder or DeviceConfigBinder()

    def _load_yaml(self) -> dict:
        if not self.path.exists():
            raise FileNotFoundError(f"Missing devices file: {self.path}")

        with open(self.path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def load_all(self) -> None:
        self.devices.clear()

        data = self._load_yaml()
        if not isinstance(data, dict):
            raise ValueError(f"{self.path.name} must contain a mapping")

        devices = data.get("devices")
        if not isinstance(devices, dict):
            raise ValueError(f"{self.path.name} is missing 'devices' root node")

        for did_raw, entry in devices.items():
            if not isinstance(did_raw, str):
                raise ValueError(
                    f"Device id {did_raw!r} must be a string (quote it in {self.path.name})"
                )
            device_id = did_raw
            entry = entry or {}
            if not isinstance(entry, dict):
                raise ValueError(f"Device {device_id} entry must be a mapping")

            declared = entry.get("deviceid")
            if declared is not None and str(declared) != device_id:
                raise ValueError(
                    f"Device {device_id} declares a different deviceid '{declared}'"
                )

            raw = dict(entry)
            raw["deviceid"] = device_id
            self.devices[device_id] = self._binder.bind(raw)

    def get_device(self, device_id: str) -> Optional[DeviceConfig]:
        return self.devices.get(device_id)
