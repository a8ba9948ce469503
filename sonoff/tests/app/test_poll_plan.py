from __future__ import annotations

import pytest

from sonoff.app.poll_plan import AccountMode, PollTask, ResetWindows, plan_polls
from sonoff.config.device_config import DeviceConfig
from sonoff.core.errors import DeviceConfigError


def _cfg(**kw) -> DeviceConfig:
    return DeviceConfig(device_id="dev", **kw)


def test_parse_mode_case_insensitive() -> None:
    assert AccountMode.parse("LOCAL") is AccountMode.LOCAL
    assert AccountMode.parse(" mixed ") is AccountMode.MIXED


def test_parse_mode_unknown_raises() -> None:
    with pytest.raises(DeviceConfigError):
        AccountMode.parse("lan")


def test_nothing_enabled_plans_nothing() -> None:
    for mode in AccountMode:
        assert plan_polls(_cfg(), mode=mode, cloud_online=False) == []


def test_consumption_needs_non_local_mode() -> None:
    cfg = _cfg(consumption=True, consumption_poll_s=3600)
    assert plan_polls(cfg, mode="local") == []
    assert plan_polls(cfg, mode="cloud") == [PollTask("consumption", "dev", 3600)]
    assert plan_polls(cfg, mode="mixed") == [PollTask("consumption", "dev", 3600)]


def test_local_in_local_mode() -> None:
    cfg = _cfg(local=True, local_poll_s=30)
    assert plan_polls(cfg, mode=AccountMode.LOCAL) == [PollTask("local", "dev", 30)]
    assert plan_polls(cfg, mode=AccountMode.CLOUD, cloud_online=False) == []


def test_local_in_mixed_mode_only_when_cloud_offline() -> None:
    cfg = _cfg(local=True, consumption=True)
    online = plan_polls(cfg, mode="mixed", cloud_online=True)
    offline = plan_polls(cfg, mode="mixed", cloud_online=False)

    assert [t.name for t in online] == ["consumption"]
    assert [t.name for t in offline] == ["consumption", "local"]
    assert offline[1].interval_s == 60
    assert offline[1].initial_delay_s == 10


def test_reset_windows_in_seconds() -> None:
    w = ResetWindows.from_config(_cfg())
    assert w.button_s == pytest.approx(0.5)
    assert w.motion_s == pytest.approx(60.0)

    w = ResetWindows.from_config(_cfg(button_reset_timeout_ms=0, motion_reset_timeout_ms=1500))
    assert w.button_s == 0.0
    assert w.motion_s == pytest.approx(1.5)
