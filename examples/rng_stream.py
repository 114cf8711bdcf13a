"""Write generator output to stdout as raw little-endian bytes.

Useful for piping into statistical test suites, e.g.
    python examples/rng_stream.py | RNG_test stdin64
"""

import argparse
import sys

from mx3 import get_revision


def main() -> int:
    parser = argparse.ArgumentParser(description="mx3 random byte stream")
    parser.add_argument("--revision", type=str, default="3")
    parser.add_argument("--seed", type=int, default=1)
    parser.add_argument("--count", type=int, default=None, help="Words to emit (default: forever)")
    parser.add_argument("--batch", type=int, default=8192, help="Words per write")

    args = parser.parse_args()

    rng = get_revision(args.revision).Mx3Rng(args.seed)
    out = sys.stdout.buffer
    remaining = args.count

    try:
        while remaining is None or remaining > 0:
            n = args.batch if remaining is None else min(args.batch, remaining)
            out.write(rng.draw(n).astype("<u8").tobytes())
            if remaining is not None:
                remaining -= n
        out.flush()
    except BrokenPipeError:
        # Reader closed the pipe
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())
