# ----- main.py -----
import argparse
import logging
import sys

from tabulate import tabulate

import config
from shareweave.field import check_modulus
from shareweave.recovery import recover_sources

# --- Helper Functions ---
def print_header(title):
    print("\n" + "="*50)
    print(f"{title}")
    print("="*50)

def configure_logging(verbose=False):
    level = logging.DEBUG if verbose else config.Config.LOG_LEVEL
    logging.basicConfig(level=level, format=config.Config.LOG_FORMAT, stream=sys.stderr)

def build_parser():
    parser = argparse.ArgumentParser(
        description="Recover Shamir-shared secrets from JSON share batches."
    )
    parser.add_argument(
        "sources", nargs="*",
        help="batch files or http(s) URLs (default: the configured batch files)"
    )
    parser.add_argument(
        "--modulus", type=int, default=config.Config.FIELD_PRIME,
        help=f"prime field modulus (default: {config.Config.FIELD_PRIME})"
    )
    parser.add_argument(
        "--quorum-key", default=config.Config.QUORUM_KEY,
        help="reserved key holding the quorum size (default: %(default)s)"
    )
    parser.add_argument("--summary", action="store_true", help="print a table of all batches")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser

def summary_rows(outcomes):
    rows = []
    for outcome in outcomes:
        report = outcome.report
        rows.append([
            outcome.name,
            report.k if report else "-",
            len(report.shares) if report else "-",
            len(report.rejected) if report else "-",
            len(report.duplicates) if report else "-",
            outcome.secret if outcome.ok else outcome.error.kind,
        ])
    return rows

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        modulus = check_modulus(args.modulus)
    except ValueError as e:
        parser.error(str(e))
    configure_logging(args.verbose)

    sources = args.sources or config.Config.batch_paths()
    outcomes = recover_sources(sources, modulus=modulus, quorum_key=args.quorum_key)

    for outcome in outcomes:
        print(outcome.describe())

    if args.summary:
        print_header("Batch Summary")
        print(tabulate(
            summary_rows(outcomes),
            headers=["Batch", "k", "Valid", "Rejected", "Duplicates", "Secret / Error"],
        ))

    return 0 if all(outcome.ok for outcome in outcomes) else 1

if __name__ == "__main__":
    sys.exit(main())
