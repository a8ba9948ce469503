# sonoff/cli/main.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

from sonoff.core.errors import SonoffError

from sonoff.cli.args import parse_args
from sonoff.cli.commands import (
    configure_file_logging,
    cmd_devices,
    cmd_show,
    cmd_polls,
    cmd_cache_list,
    cmd_cache_show,
)


def main(argv: Optional[list[str]] = None) -> int:
    try:
        args = parse_args(argv)

        if args.log_file:
            configure_file_logging(Path(args.log_file))

        if args.cmd == "devices":
            return cmd_devices(config_path=args.config)
        if args.cmd == "show":
            return cmd_show(config_path=args.config, device_id=args.device_id, overrides=args.overrides)
        if args.cmd == "polls":
            return cmd_polls(config_path=args.config, mode=args.mode, cloud_online=not args.cloud_offline)
        if args.cmd == "cache":
            if args.cache_cmd == "list":
                return cmd_cache_list(cache_dir=args.cache_dir)
            if args.cache_cmd == "show":
                return cmd_cache_show(cache_dir=args.cache_dir, device_id=args.device_id)

        return 2
    except SonoffError as e:
        print(f"ERROR: {e.message}")
        if e.hint:
            print(f"Hint: {e.hint}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
