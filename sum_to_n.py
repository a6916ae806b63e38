#!/usr/bin/env python3
"""
Print 1 + 2 + ... + n computed three ways.

Usage:
    python sum_to_n.py 100
"""

import argparse
import sys

from crud_api.app.services.summation import sum_to_n_a, sum_to_n_b, sum_to_n_c


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Sum the integers 1..n (closed form, recursion, loop).")
    ap.add_argument("n", type=int, nargs="?", default=100, help="Non-negative upper bound (default: 100)")
    args = ap.parse_args(argv)

    if args.n < 0:
        print(f"[!] n must be non-negative: {args.n}", file=sys.stderr)
        return 1

    for func in (sum_to_n_a, sum_to_n_b, sum_to_n_c):
        print(f"{func.__name__}({args.n}) = {func(args.n)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
