"""Read bytes from stdin (or files) and print the digest in hex.

If running interactively, press CTRL+D to stop input or CTRL+C to exit.
"""

import argparse
import logging
import sys
from pathlib import Path

from mx3 import DigestConfig, digest_file, digest_stream, get_logger


def main() -> int:
    parser = argparse.ArgumentParser(description="mx3 stream digest")
    parser.add_argument("paths", type=Path, nargs="*", help="Files to digest (default: stdin)")
    parser.add_argument("--config", type=Path, default=None, help="YAML digest config")
    parser.add_argument("--revision", type=str, default=None)
    parser.add_argument("--mode", type=str, default=None, choices=["oneshot", "aligned", "chunked"])
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true")

    args = parser.parse_args()

    logger = get_logger("mx3", level=logging.DEBUG if args.verbose else logging.INFO)

    settings = DigestConfig.from_yaml(args.config).to_dict() if args.config else {}
    for key in ("revision", "mode", "seed"):
        value = getattr(args, key)
        if value is not None:
            settings[key] = value
    config = DigestConfig.from_dict(settings)
    logger.debug(f"Config: {config}")

    if not args.paths:
        print(f"{digest_stream(sys.stdin.buffer, config):016x}")
        return 0

    for path in args.paths:
        print(f"{digest_file(path, config):016x}  {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
