# sonoff/core/errors.py
from __future__ import annotations


class SonoffError(Exception):
    """
    Base class for all expected operational errors in the Sonoff host tools.
    """

    #: Stable machine-readable identifier (for CLI exit mapping etc.)
    code: str = "unknown"

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class DeviceConfigError(SonoffError):
    """
    Device configuration input is invalid.

    Examples:
      - unknown configuration key
      - value of the wrong type for a key
      - malformed devices file
      - unknown account mode
    """
    code = "device_config_error"


class UnknownDeviceError(SonoffError):
    """
    No configuration is registered for the requested device id.
    """
    code = "unknown_device"
