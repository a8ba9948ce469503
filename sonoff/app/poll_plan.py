# sonoff/app/poll_plan.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from sonoff.config.device_config import DeviceConfig
from sonoff.core.errors import DeviceConfigError

_log = logging.getLogger(__name__)

INITIAL_DELAY_S = 10


class AccountMode(str, Enum):
    """How the account reaches its devices."""
    LOCAL = "local"
    CLOUD = "cloud"
    MIXED = "mixed"

    @classmethod
    def parse(cls, value: str) -> "AccountMode":
        want = str(value).strip().lower()
        for mode in cls:
            if mode.value == want:
                return mode
        raise DeviceConfigError(
            f"Unknown account mode '{value}'.",
            hint=f"Valid modes: {[m.value for m in cls]}",
            details={"mode": value},
        )


@dataclass(frozen=True)
class PollTask:
    name: str
    device_id: str
    interval_s: int
    initial_delay_s: int = INITIAL_DELAY_S


@dataclass(frozen=True)
class ResetWindows:
    """Button / motion reset windows in seconds."""
    button_s: float
    motion_s: float

    @classmethod
    def from_config(cls, config: DeviceConfig) -> "ResetWindows":
        return cls(
            button_s=config.button_reset_timeout_ms / 1000.0,
            motion_s=config.motion_reset_timeout_ms / 1000.0,
        )


def plan_polls(config: DeviceConfig, *, mode: AccountMode | str, cloud_online: bool = True) -> list[PollTask]:
    """
    Work out the periodic refreshes a device runs for the given account mode.

    - consumption: cloud-only data, needs a non-local mode and `consumption`.
    - local: LAN status poll, needs `local` and either local mode or a mixed
      account whose cloud connection is down.
    """
    if not isinstance(mode, AccountMode):
        mode = AccountMode.parse(mode)

    tasks: list[PollTask] = []

    if mode is not AccountMode.LOCAL and config.consumption:
        tasks.append(PollTask("consumption", config.device_id, config.consumption_poll_s))

    lan_needed = mode is AccountMode.LOCAL or (mode is AccountMode.MIXED and not cloud_online)
    if lan_needed and config.local:
        tasks.append(PollTask("local", config.device_id, config.local_poll_s))

    _log.debug(
        "POLL_PLAN device_id=%s mode=%s cloud_online=%s tasks=%s",
        config.device_id, mode.value, cloud_online, [t.name for t in tasks],
    )
    return tasks
