# sonoff/app/device_registry.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from sonoff.config.binder import DeviceConfigBinder
from sonoff.config.device_config import DeviceConfig
from sonoff.config.loader import DeviceConfigLoader
from sonoff.core.errors import DeviceConfigError, UnknownDeviceError

_log = logging.getLogger(__name__)


class DeviceRegistry:
    """
    Holds the current DeviceConfig of every registered device entity.

    Records are never mutated in place: registering or reconfiguring a
    device replaces its record wholesale.

    Notes:
      - Use `load()` to populate from a devices file (cli/tests).
    """

    def __init__(self, *, binder: Optional[DeviceConfigBinder] = None):
        self._binder = binder or DeviceConfigBinder()
        self._devices: Dict[str, DeviceConfig] = {}

    @classmethod
    def load(cls, path: str | Path, *, binder: Optional[DeviceConfigBinder] = None) -> "DeviceRegistry":
        path = Path(path)
        binder = binder or DeviceConfigBinder()

        loader = DeviceConfigLoader(path, binder=binder)
        try:
            loader.load_all()
        except DeviceConfigError as e:
            raise DeviceConfigError(
                f"Invalid device configuration in {path.name}: {e.message}",
                hint=e.hint,
                details={"path": str(path), **e.details},
            ) from None
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise DeviceConfigError(
                "Failed to load device configuration.",
                hint=str(e),
                details={"path": str(path)},
            ) from None

        registry = cls(binder=binder)
        for config in loader.devices.values():
            registry.register(config)
        _log.info("DEVICES_LOADED path=%s count=%d", path, len(registry))
        return registry

    # --- lifecycle ---
    def register(self, config: DeviceConfig) -> None:
        replaced = config.device_id in self._devices
        self._devices[config.device_id] = config
        if replaced:
            _log.info("DEVICE_RECONFIGURED device_id=%s config=%s", config.device_id, config)
        else:
            _log.info("DEVICE_REGISTERED device_id=%s config=%s", config.device_id, config)

    def reconfigure(self, device_id: str, raw: Mapping[str, Any]) -> DeviceConfig:
        """Bind `raw` on top of the current record and replace it."""
        current = self.get(device_id)
        raw = dict(raw)
        declared = raw.pop("deviceid", None)
        if declared is not None and declared != device_id:
            raise DeviceConfigError(
                f"Cannot change deviceid of '{device_id}' to '{declared}'.",
                hint="Remove the device and register it under the new id.",
                details={"device_id": device_id, "deviceid": declared},
            )

        config = self._binder.bind(raw, base=current)
        self.register(config)
        return config

    def remove(self, device_id: str) -> Optional[DeviceConfig]:
        config = self._devices.pop(device_id, None)
        if config is not None:
            _log.info("DEVICE_REMOVED device_id=%s", device_id)
        return config

    # --- lookup ---
    def get(self, device_id: str) -> DeviceConfig:
        config = self._devices.get(device_id)
        if config is None:
            raise UnknownDeviceError(
                f"Unknown device '{device_id}'.",
                hint="Run: sonoff devices",
                details={"device_id": device_id},
            )
        return config

    def list(self) -> list[DeviceConfig]:
        """Return records ordered by device id."""
        return [self._devices[k] for k in sorted(self._devices.keys())]

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._devices

    def __len__(self) -> int:
        return len(self._devices)
