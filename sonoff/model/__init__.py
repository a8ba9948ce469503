from .device_state import DeviceState

__all__ = ["DeviceState"]
