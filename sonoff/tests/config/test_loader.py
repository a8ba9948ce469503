from __future__ import annotations

from pathlib import Path
import textwrap

import pytest

from sonoff.config.loader import DeviceConfigLoader
from sonoff.core.errors import DeviceConfigError


def _write(p: Path, name: str, text: str) -> Path:
    path = p / name
    path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
    return path


def test_load_all_happy_path(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "devices.yml",
        """
        devices:
          1000abc:
            localPoll: 30
            local: true
          1000def:
          "10001234":
            deviceid: "10001234"
            consumption: true
        """,
    )

    loader = DeviceConfigLoader(path)
    loader.load_all()

    assert set(loader.devices) == {"1000abc", "1000def", "10001234"}

    a = loader.get_device("1000abc")
    assert a is not None
    assert a.device_id == "1000abc"
    assert a.local_poll_s == 30
    assert a.local is True
    assert a.consumption_poll_s == 86400

    d = loader.get_device("1000def")
    assert d is not None
    assert d.local is False

    n = loader.get_device("10001234")
    assert n is not None
    assert n.consumption is True

    assert loader.get_device("nope") is None


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        DeviceConfigLoader(tmp_path / "devices.yml").load_all()


def test_requires_devices_root(tmp_path: Path) -> None:
    path = _write(tmp_path, "devices.yml", "nope: 1\n")
    with pytest.raises(ValueError):
        DeviceConfigLoader(path).load_all()


def test_entry_must_be_mapping(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "devices.yml",
        """
        devices:
          1000abc: [1, 2]
        """,
    )
    with pytest.raises(ValueError):
        DeviceConfigLoader(path).load_all()


def test_conflicting_deviceid_raises(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "devices.yml",
        """
        devices:
          1000abc:
            deviceid: other
        """,
    )
    with pytest.raises(ValueError):
        DeviceConfigLoader(path).load_all()


def test_bad_value_propagates_binder_error(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "devices.yml",
        """
        devices:
          1000abc:
            localPoll: often
        """,
    )
    with pytest.raises(DeviceConfigError):
        DeviceConfigLoader(path).load_all()


@pytest.mark.parametrize("key", ["0123", "0x10", "10001234"])
def test_unquoted_numeric_device_id_raises(tmp_path: Path, key: str) -> None:
    path = _write(tmp_path, "devices.yml", f"devices:\n  {key}:\n    local: true\n")
    with pytest.raises(ValueError):
        DeviceConfigLoader(path).load_all()


def test_quoted_numeric_device_id_is_kept_verbatim(tmp_path: Path) -> None:
    path = _write(tmp_path, "devices.yml", 'devices:\n  "0123":\n    local: true\n')
    loader = DeviceConfigLoader(path)
    loader.load_all()
    assert set(loader.devices) == {"0123"}
