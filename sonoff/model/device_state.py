# sonoff/model/device_state.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class DeviceState:
    """
    Last known state document of a device, as cached on disk.

    Attributes:
        device_id: Device identifier (`deviceid` in the document).
        name: Display name, if the document carries one.
        params: Device parameters (`params` object), empty when absent.
        raw: The full parsed document.
    """
    device_id: str
    name: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, doc: Dict[str, Any]) -> "DeviceState":
        if not isinstance(doc, dict):
            raise ValueError(f"Device state must be a JSON object, got {type(doc).__name__}")

        device_id = doc.get("deviceid")
        if not isinstance(device_id, str) or not device_id:
            raise ValueError("Device state is missing 'deviceid'")

        name = doc.get("name")
        params = doc.get("params") or {}
        if not isinstance(params, dict):
            raise ValueError(f"Device {device_id} 'params' must be an object")

        return cls(
            device_id=device_id,
            name=str(name) if name is not None else None,
            params=dict(params),
            raw=dict(doc),
        )

    def as_dict(self) -> dict:
        return {
            "device_id": self.device_id,
            "name": self.name,
            "params": self.params,
        }
