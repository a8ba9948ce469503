from .device_config import DeviceConfig
from .binder import DeviceConfigBinder, DEVICE_CONFIG_SCHEMA
from .loader import DeviceConfigLoader

__all__ = ["DeviceConfig",
           "DeviceConfigBinder",
           "DeviceConfigLoader",
           "DEVICE_CONFIG_SCHEMA"]
