"""Command-line interface for temporal sequential pattern mining."""
import argparse
import sys
from pathlib import Path

from .miner import TemporalPatternMiner
from .factory import AlgorithmRegistry
from .config import config
from .algorithms.trend import THETA_SCOPES


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='grosso-mine',
        description='Stable, emerging and descending sequential patterns with statistical guarantees',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List available algorithms
  grosso-mine --list

  # Emerging patterns over three quarters
  grosso-mine emerging q1.txt q2.txt q3.txt --epsilon 0.01

  # Stable patterns, results written in the text format
  grosso-mine stable q1.txt q2.txt --theta 0.2 --alpha 0.1 --output sp.txt

  # Observed-frequency baseline, bounds estimated on all cores
  grosso-mine ep-freq q1.txt q2.txt --n-jobs -1

  # Compare the capacity strategies on one dataset
  grosso-mine --compare-capacities q1.txt
        """
    )

    parser.add_argument('--list', action='store_true',
                        help='List available algorithms and exit')
    parser.add_argument('--version', action='store_true',
                        help='Show version and exit')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable verbose output')
    parser.add_argument('--compare-capacities', metavar='DATASET',
                        help='Report the average capacity gaps of a dataset and exit')
    parser.add_argument('algorithm', nargs='?',
                        help='Algorithm name (use --list to see available)')
    parser.add_argument('datasets', nargs='*',
                        help='Dataset files in the SPMF sequence format, oldest first')
    parser.add_argument('--delta', '-d', type=float, default=0.1,
                        help='Confidence parameter in (0, 1) (default: 0.1)')
    parser.add_argument('--alpha', '-a', type=float,
                        help='Maximum frequency variation of stable patterns (default: 0.1)')
    parser.add_argument('--epsilon', '-e', type=float,
                        help='Minimum frequency step of emerging/descending patterns (default: 0.01)')
    parser.add_argument('--theta', '-t', type=float,
                        help='Minimum frequency threshold in [0, 1]')
    parser.add_argument('--theta-scope', choices=THETA_SCOPES,
                        help='Apply theta to the anchor dataset only or to all datasets')
    parser.add_argument('--n-jobs', '-j', type=int,
                        help='Number of parallel jobs (-1 for all cores, default: GROSSO_N_JOBS or 1)')
    parser.add_argument('--spmf-path', type=str,
                        help='Directory containing spmf.jar')
    parser.add_argument('--output', '-o', type=str,
                        help='Output file path (text format)')
    parser.add_argument('--json', type=str,
                        help='Output file path (JSON format)')
    parser.add_argument('--csv', type=str,
                        help='Output file path (CSV format)')
    parser.add_argument('--no-print', action='store_true',
                        help='Don\'t print patterns to stdout')
    return parser


def _algorithm_params(args) -> dict:
    params = {'delta': args.delta}
    for name in ('n_jobs', 'alpha', 'epsilon', 'theta', 'theta_scope'):
        value = getattr(args, name)
        if value is not None:
            params[name] = value
    return params


def _compare_capacities(path: str):
    from .bounds.capacity import compare_capacities
    from .core.dataset import SequenceDataset

    dataset = SequenceDataset(path)
    print(compare_capacities(dataset, name=dataset.name).to_string())


def main(argv=None):
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from . import __version__
        print(f"grosso version {__version__}")
        sys.exit(0)

    if args.list:
        algorithms = AlgorithmRegistry.list_algorithms()
        print("Available algorithms:")
        for algo in algorithms:
            print(f"  - {algo}")
        sys.exit(0)

    if args.verbose:
        config.verbose = True
        config.suppress_prints = False
        config.log_level = "INFO"
        config.setup_logging()

    if args.spmf_path:
        config.spmf_path = args.spmf_path

    if args.compare_capacities:
        try:
            _compare_capacities(args.compare_capacities)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        sys.exit(0)

    if not args.algorithm:
        parser.error("algorithm is required (use --list to see available)")
    if not args.datasets:
        parser.error("at least one dataset file is required")

    for data in args.datasets:
        if not Path(data).exists():
            print(f"Error: File not found: {data}", file=sys.stderr)
            sys.exit(1)

    try:
        print(f"Mining {args.algorithm} patterns in {len(args.datasets)} datasets (delta={args.delta})...")

        miner = TemporalPatternMiner(args.algorithm, args.datasets, **_algorithm_params(args))
        result = miner.mine_and_get_result()

        print(result.summary())

        if not args.no_print:
            print("\nPatterns:")
            for i, line in enumerate(result.to_lines(), 1):
                print(f"  {i}. {line}")

        if args.output:
            result.save_text(args.output)
            print(f"\nResults saved to: {args.output}")

        if args.json:
            result.save_json(args.json)
            print(f"Results saved to: {args.json}")

        if args.csv:
            result.save_csv(args.csv)
            print(f"Results saved to: {args.csv}")

        sys.exit(0)

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
