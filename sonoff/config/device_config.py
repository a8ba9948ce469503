# sonoff/config/device_config.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


def _render(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass
class DeviceConfig:
    """
    Per-device settings of a registered device entity.

    Plain value object: every field has a stable default and nothing is
    validated here. Binding external input (type checks, unknown keys) is
    the job of DeviceConfigBinder.

    Attributes:
        device_id: External device identifier.
        consumption_poll_s: How often energy-consumption data is refreshed.
        local_poll_s: How often local-network status is refreshed.
        consumption: Whether consumption polling is active.
        local: Whether local polling is active.
        button_reset_timeout_ms: Reset window for button-type devices.
        motion_reset_timeout_ms: Reset window for motion-sensor devices.
    """
    device_id: str = ""
    consumption_poll_s: int = 86400
    local_poll_s: int = 60
    consumption: bool = False
    local: bool = False
    button_reset_timeout_ms: int = 500
    motion_reset_timeout_ms: int = 60000

    def as_dict(self) -> Dict[str, Any]:
        """External key -> value, in diagnostic order."""
        return {
            "deviceid": self.device_id,
            "localPoll": self.local_poll_s,
            "consumptionPoll": self.consumption_poll_s,
            "local": self.local,
            "consumption": self.consumption,
            "buttonResetTimeout": self.button_reset_timeout_ms,
            "motionResetTimeout": self.motion_reset_timeout_ms,
        }

    def __str__(self) -> str:
        body = ", ".join(f"{key}={_render(value)}" for key, value in self.as_dict().items())
        return f"[{body}]"
