# sonoff/core/cache_provider.py
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Dict, List, Optional

from sonoff.common.paths import cache_dir
from sonoff.model.device_state import DeviceState

_log = logging.getLogger(__name__)

CACHE_EXT = ".txt"
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class CacheProvider:
    """
    File-backed device state cache.

    One `<deviceid>.txt` file per device holding the JSON document last seen
    for it. Read and write failures are logged and reported as empty results,
    never raised.
    """

    def __init__(self, base_dir: str | Path | None = None):
        self.base_dir = Path(base_dir) if base_dir is not None else cache_dir()
        self._ensure_dir()

    def _ensure_dir(self) -> bool:
        if self.base_dir.is_dir():
            return True
        _log.debug("CACHE_DIR_CREATE path=%s", self.base_dir)
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            _log.error("CACHE_DIR_CREATE_FAILED path=%s error=%s", self.base_dir, e)
            return False
        return True

    @staticmethod
    def _is_safe_id(device_id: str) -> bool:
        if "/" in device_id or (os.altsep and os.altsep in device_id) or os.sep in device_id:
            return False
        return device_id not in (".", "..")

    def _path_for(self, device_id: str) -> Path:
        return self.base_dir / f"{device_id}{CACHE_EXT}"

    # ---------------- write ----------------

    def new_file(self, device_id: Optional[str], content: Optional[str]) -> None:
        """Write (or overwrite) the cached document of a device."""
        if device_id is None or content is None:
            _log.warning("CACHE_WRITE_SKIPPED reason=missing_device_id_or_content")
            return
        if not self._is_safe_id(device_id):
            _log.warning("CACHE_WRITE_SKIPPED reason=unsafe_device_id device_id=%r", device_id)
            return

        if not self._ensure_dir():
            return

        path = self._path_for(device_id)
        _log.debug("CACHE_WRITE device_id=%s path=%s", device_id, path)
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            _log.error("CACHE_WRITE_FAILED device_id=%s error=%s", device_id, e)

    # ---------------- read ----------------

    def check_file(self, device_id: Optional[str]) -> bool:
        if device_id is None or not self._is_safe_id(device_id):
            return False
        return self._path_for(device_id).is_file()

    def get_file(self, filename: Optional[str]) -> str:
        """
        Return the content of a cache file with line breaks removed.
        Missing or unreadable files give "".
        """
        if filename is None or not self._is_safe_id(filename):
            return ""

        path = self.base_dir / filename
        if not path.is_file():
            _log.debug("CACHE_FILE_MISSING filename=%s", filename)
            return ""

        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                return _LINE_BREAK.sub("", f.read())
        except (OSError, UnicodeDecodeError) as e:
            _log.debug("CACHE_READ_FAILED filename=%s error=%s", filename, e)
            return ""

    def get_files(self) -> List[str]:
        """Contents of every non-empty cache file, ordered by filename."""
        if not self.base_dir.is_dir():
            return []

        names = sorted(
            p.name for p in self.base_dir.iterdir()
            if p.is_file() and p.name.endswith(CACHE_EXT)
        )
        contents: List[str] = []
        for name in names:
            content = self.get_file(name)
            if content:
                contents.append(content)
        return contents

    # ---------------- states ----------------

    def get_states(self) -> Dict[str, DeviceState]:
        states: Dict[str, DeviceState] = {}
        for content in self.get_files():
            try:
                state = DeviceState.from_dict(json.loads(content))
            except ValueError as e:
                _log.warning("CACHE_STATE_PARSE_FAILED error=%s", e)
                continue
            states[state.device_id] = state
            _log.debug("CACHE_STATE_LOADED device_id=%s", state.device_id)
        return states

    def get_state(self, device_id: Optional[str]) -> Optional[DeviceState]:
        if device_id is None:
            return None

        content = self.get_file(f"{device_id}{CACHE_EXT}")
        if not content:
            return None

        try:
            return DeviceState.from_dict(json.loads(content))
        except ValueError as e:
            _log.warning("CACHE_STATE_PARSE_FAILED device_id=%s error=%s", device_id, e)
            return None
