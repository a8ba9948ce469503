# sonoff/cli/args.py
from __future__ import annotations

import argparse
from typing import Any, Mapping, Optional

from sonoff.app.poll_plan import AccountMode
from sonoff.config.binder import DEVICE_CONFIG_SCHEMA


# ---------------- config override helpers (CLI-local) ----------------

def cast_type_name(type_name: Any):
    """
    Cast argparse values based on schema type strings.

    NOTE: This only affects CLI parsing. DeviceConfigBinder still
    validates/casts strictly.
    """
    if type_name == "int":
        return int
    if type_name == "bool":

        def _to_bool(v: str) -> bool:
            s = str(v).strip().lower()
            if s in ("1", "true"):
                return True
            if s in ("0", "false"):
                return False
            raise argparse.ArgumentTypeError(f"Invalid bool literal '{v}' (use true/false)")

        return _to_bool

    return str


def parse_override(
    text: str,
    schema: Mapping[str, Mapping[str, Any]] = DEVICE_CONFIG_SCHEMA,
) -> tuple[str, Any]:
    """Parse one `KEY=VALUE` override, casting VALUE by the key's schema type."""
    key, sep, value = text.partition("=")
    key = key.strip()
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Invalid override '{text}' (use KEY=VALUE)")
    if key not in schema:
        raise argparse.ArgumentTypeError(
            f"Unknown config key '{key}' (valid: {', '.join(sorted(schema.keys()))})"
        )
    try:
        return key, cast_type_name(schema[key].get("type"))(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid value for '{key}': {e}") from None


# ---------------- argparse ----------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sonoff")
    parser.add_argument("--log-file", default=None, help="Append application logs to this file.")
    sub = parser.add_subparsers(dest="cmd", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        default=None,
        help="Devices file (default: $SONOFF_USERDATA/devices.yml).",
    )

    sub.add_parser("devices", parents=[common])

    p_show = sub.add_parser("show", parents=[common])
    p_show.add_argument("device_id")
    p_show.add_argument(
        "--set",
        dest="overrides",
        metavar="KEY=VALUE",
        type=parse_override,
        action="append",
        default=[],
        help="Override a config value, e.g. --set localPoll=30",
    )

    p_polls = sub.add_parser("polls", parents=[common])
    p_polls.add_argument("--mode", required=True, choices=[m.value for m in AccountMode])
    p_polls.add_argument(
        "--cloud-offline",
        action="store_true",
        help="Plan as if the cloud connection is down.",
    )

    p_cache = sub.add_parser("cache")
    p_cache.add_argument("--cache-dir", default=None, help="Cache folder (default: $SONOFF_USERDATA/sonoff).")
    cache_sub = p_cache.add_subparsers(dest="cache_cmd", required=True)
    cache_sub.add_parser("list")
    p_cache_show = cache_sub.add_parser("show")
    p_cache_show.add_argument("device_id")

    return parser


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    args = build_parser().parse_args(argv)
    if getattr(args, "overrides", None) is not None:
        args.overrides = dict(args.overrides)
    return args
