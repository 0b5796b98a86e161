"""Command-line interface for the chain analyser."""

import argparse
import logging
import sys
import time
from pathlib import Path

from hassechain.api import HasseChain
from hassechain.config import AnalysisConfig, DEFAULT_CONFIG
from hassechain.rendering.mermaid import write_mermaid
from hassechain.report import format_report

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Class decomposition and Hasse diagram of a Markov chain")
    parser.add_argument("path", type=Path, help="Edge file (.txt, .csv or .parquet)")
    parser.add_argument(
        "--mermaid-dir",
        type=Path,
        default=None,
        help="Write <stem>.mmd and <stem>_hasse.mmd into this directory",
    )
    parser.add_argument(
        "--tolerance", type=float, default=DEFAULT_CONFIG.convergence_tolerance, help="Convergence tolerance (default: %(default)s)"
    )
    parser.add_argument(
        "--max-iterations", type=int, default=DEFAULT_CONFIG.max_iterations, help="Power iteration bound (default: %(default)s)"
    )
    parser.add_argument(
        "--no-validate", action="store_true", help="Skip the row-sum check"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Print detailed progress"
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = AnalysisConfig(convergence_tolerance=args.tolerance, max_iterations=args.max_iterations)
    except ValueError as e:
        log.error("%s", e)
        return 1

    start_time = time.time()
    with HasseChain(config=config) as chain:
        try:
            chain.load(args.path)
            if not args.no_validate and not chain.is_markov():
                log.warning("%s is not a Markov graph; results describe its structure only", args.path)
            report = chain.analyze()
        except (ValueError, OSError) as e:
            log.error("Cannot analyse %s: %s", args.path, e)
            return 1

        print(format_report(report))

        if args.mermaid_dir is not None:
            stem = args.path.stem
            write_mermaid(chain.mermaid(), args.mermaid_dir / f"{stem}.mmd")
            write_mermaid(chain.hasse_mermaid(), args.mermaid_dir / f"{stem}_hasse.mmd")

    elapsed = time.time() - start_time
    print(f"\nCompleted in {elapsed:.2f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())
