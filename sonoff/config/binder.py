# sonoff/config/binder.py
from __future__ import annotations

import dataclasses
from typing import Any, Dict, Mapping, Optional

from sonoff.config.device_config import DeviceConfig
from sonoff.core.errors import DeviceConfigError


# external key -> {attr, type, default}
DEVICE_CONFIG_SCHEMA: Dict[str, Dict[str, Any]] = {
    "deviceid": {"attr": "device_id", "type": "str", "default": ""},
    "localPoll": {"attr": "local_poll_s", "type": "int", "default": 60},
    "consumptionPoll": {"attr": "consumption_poll_s", "type": "int", "default": 86400},
    "local": {"attr": "local", "type": "bool", "default": False},
    "consumption": {"attr": "consumption", "type": "bool", "default": False},
    "buttonResetTimeout": {"attr": "button_reset_timeout_ms", "type": "int", "default": 500},
    "motionResetTimeout": {"attr": "motion_reset_timeout_ms", "type": "int", "default": 60000},
}


class DeviceConfigBinder:
    """
    Bind an external configuration mapping onto a DeviceConfig.

    Keys are the external names (see DEVICE_CONFIG_SCHEMA). Absent keys and
    None values keep the default (or the value of `base`).
    """

    def __init__(self, schema: Optional[Mapping[str, Mapping[str, Any]]] = None):
        self._schema = schema or DEVICE_CONFIG_SCHEMA

    def bind(self, raw: Optional[Mapping[str, Any]], *, base: Optional[DeviceConfig] = None) -> DeviceConfig:
        raw = raw or {}

        for key in raw:
            if key not in self._schema:
                raise DeviceConfigError(
                    f"Unknown device config key '{key}'.",
                    hint=f"Valid keys: {sorted(self._schema.keys())}",
                    details={"key": key},
                ) from None

        values: Dict[str, Any] = {}
        for key, spec in self._schema.items():
            value = raw.get(key)
            if value is None:
                continue

            try:
                values[spec["attr"]] = self._cast_value(value, spec.get("type"))
            except (TypeError, ValueError) as e:
                raise DeviceConfigError(
                    f"Invalid value for device config key '{key}'.",
                    hint=str(e),
                    details={
                        "key": key,
                        "value": value,
                        "expected_type": spec.get("type"),
                    },
                ) from None

        if base is None:
            return DeviceConfig(**values)
        return dataclasses.replace(base, **values)

    @staticmethod
    def _cast_value(value: Any, type_name: Any) -> Any:
        if type_name == "str":
            if not isinstance(value, str):
                raise TypeError(f"Expected str, got {type(value).__name__}")
            return value

        if type_name == "int":
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"Expected int, got {type(value).__name__}")
            return value

        if type_name == "bool":
            if isinstance(value, bool):
                return value
            # accept 0/1 int
            if isinstance(value, int) and value in (0, 1):
                return bool(value)
            raise TypeError(f"Expected bool (or 0/1), got {type(value).__name__}")

        # unknown schema type
        raise TypeError(f"Unknown schema type '{type_name}'")
