"""Parsers built with `argparse` can be converted to command models. Subparsers become
subcommands, and `choices` and path types are used to complete option values.

Usage:
`python ./02_argparse.py --help`
`python ./02_argparse.py run --count 3`
`tabgen 02_argparse.get_parser -w`
"""

import argparse
import pathlib


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="runner", description="Run some jobs.")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--config", type=pathlib.Path, help="config file to load")

    subparsers = parser.add_subparsers(dest="command", required=True)
    run = subparsers.add_parser("run", help="Run the jobs.")
    run.add_argument("--count", type=int, default=1)
    run.add_argument("--priority", choices=["low", "normal", "high"])

    status = subparsers.add_parser("status", help="Print job status.")
    status.add_argument("--format", choices=["text", "json"], default="text")
    return parser


if __name__ == "__main__":
    print(get_parser().parse_args())
