import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from logentries_hook.config import load_settings
from logentries_hook.errors import LogentriesError
from logentries_hook.hook import new_logentries_hook


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Send one log line to Logentries over UDP.")
    parser.add_argument("message")
    parser.add_argument("--config", default=None, help="optional logentries.yaml path")
    parser.add_argument("--level", default="INFO")
    parser.add_argument("--field", action="append", default=[], help="key=value, repeatable")
    return parser.parse_args(argv)


def _parse_fields(raw_fields: list[str]) -> dict[str, str]:
    fields: dict[str, str] = {}
    for raw in raw_fields:
        if "=" not in raw:
            raise ValueError(f"Field '{raw}' must look like key=value.")
        key, value = raw.split("=", 1)
        fields[key.strip()] = value
    return fields


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        settings = load_settings(args.config)
        fields = _parse_fields(args.field)
        hook = new_logentries_hook(settings.token, host=settings.host, port=settings.port)
    except (ValueError, LogentriesError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    level = logging.getLevelName(args.level.upper())
    if not isinstance(level, int):
        print(f"error: unknown level '{args.level}'", file=sys.stderr)
        hook.close()
        return 1

    record = logging.makeLogRecord(
        {"name": "send_log_line", "levelno": level, "levelname": args.level.upper(), "msg": args.message, **fields}
    )
    try:
        hook.fire(record)
    except LogentriesError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        hook.close()
    print(f"sent to {settings.host}:{settings.port}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
