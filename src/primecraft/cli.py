"""Command-line interface for primecraft."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from primecraft.errors import AttemptBudgetExhausted, PrimecraftError

EXIT_OK = 0
EXIT_BUDGET = 1
EXIT_INVALID = 2


def setup_logging(verbose: bool = False, log_path: Path | None = None) -> logging.Logger:
    """Console logging, plus a file log when a run is being recorded."""
    logger = logging.getLogger("primecraft")
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(console_handler)

    if log_path is not None:
        file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    return logger


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate a prime set and print it as JSON."""
    from primecraft.config import GeneratorConfig
    from primecraft.core.entropy import SeededEntropy
    from primecraft.generation.api import generate_prime_set, validate_request
    from primecraft.utils.run_store import GenerationRequest, RunStore

    try:
        validate_request(args.count, args.bits, args.strategy)
        config = GeneratorConfig.load(args.config) if args.config else GeneratorConfig()
    except (PrimecraftError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID

    entropy = None
    if args.seed is not None:
        entropy = SeededEntropy(args.seed)

    store = record = None
    if args.save:
        store = RunStore(args.runs_dir)
        request = GenerationRequest(args.count, args.bits, args.strategy, args.seed)
        record = store.start(request, config)
    logger = setup_logging(args.verbose, store.log_path(record) if record else None)

    try:
        result = generate_prime_set(args.count, args.bits, args.strategy, entropy, config)
    except AttemptBudgetExhausted as e:
        logger.error(str(e))
        if record:
            store.fail(record, e)
        return EXIT_BUDGET

    payload = result.to_json()
    if args.output:
        Path(args.output).write_text(payload + "\n")
        logger.info(f"Saved to {args.output}")
    else:
        print(payload)

    if record:
        store.complete(record, result)
        logger.info(f"Recorded run {record.run_id}")

    return EXIT_OK


def cmd_runs(args: argparse.Namespace) -> int:
    """List or prune recorded runs."""
    from primecraft.utils.run_store import RunStore

    store = RunStore(args.runs_dir)

    if args.cleanup:
        print(f"Cleaning up runs, keeping {args.keep} most recent...")
        deleted = store.prune(keep=args.keep, strategy=args.strategy, dry_run=not args.force)
        if deleted:
            action = "Deleted" if args.force else "Would delete"
            print(f"{action} {len(deleted)} runs:")
            for run_id in deleted:
                print(f"  - {run_id}")
        else:
            print("No runs to clean up")
        return EXIT_OK

    records = store.list_runs(strategy=args.strategy, limit=args.limit)

    if not records:
        print("No runs found")
        return EXIT_OK

    print(f"{'Run ID':<45} {'Strategy':<10} {'Status':<10}")
    print("-" * 67)
    for record in records:
        print(f"{record.run_id:<45} {record.request.strategy:<10} {record.status:<10}")
        print(f"  -> {record.summary}")

    print()
    print(f"Total: {len(records)} runs shown")
    return EXIT_OK


def cmd_check(args: argparse.Namespace) -> int:
    """Report primality facts about an integer."""
    from primecraft.core.primality import is_probable_prime, is_safe_prime, is_strong_prime
    from primecraft.core.sieve import small_factor

    try:
        n = int(args.number, 0)
    except ValueError:
        print(f"error: not an integer: {args.number!r}", file=sys.stderr)
        return EXIT_INVALID
    if n < 0:
        print("error: number must be non-negative", file=sys.stderr)
        return EXIT_INVALID

    prime = is_probable_prime(n)
    print(f"n = {n}")
    print(f"  bits:   {n.bit_length()}")
    print(f"  prime:  {prime}")
    if prime:
        print(f"  safe:   {is_safe_prime(n)}")
        print(f"  strong: {is_strong_prime(n)}")
    else:
        factor = small_factor(n)
        if factor is not None:
            print(f"  small factor: {factor}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="primecraft",
        description="Generate verified cryptographic primes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    gen_parser = subparsers.add_parser("generate", help="Generate a prime set")
    gen_parser.add_argument("--count", "-n", type=int, default=1, help="Number of primes (1-10)")
    gen_parser.add_argument("--bits", "-b", type=int, default=512, help="Bits per prime (16-4096)")
    gen_parser.add_argument("--strategy", "-s", default="rsa-multi", help="rsa-multi or strong")
    gen_parser.add_argument("--seed", type=int, default=None,
                            help="Deterministic seed (testing only, not secure)")
    gen_parser.add_argument("--config", default=None, help="Generator config JSON file")
    gen_parser.add_argument("--output", "-o", default=None, help="Write JSON result to file")
    gen_parser.add_argument("--save", action="store_true", help="Record the run on disk")
    gen_parser.add_argument("--runs-dir", default=None, help="Base directory for run records")
    gen_parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    runs_parser = subparsers.add_parser("runs", help="List and manage recorded runs")
    runs_parser.add_argument("--strategy", "-s", default=None, help="Filter by strategy")
    runs_parser.add_argument("--limit", type=int, default=20, help="Maximum runs to show")
    runs_parser.add_argument("--cleanup", action="store_true", help="Clean up old runs")
    runs_parser.add_argument("--keep", type=int, default=10, help="Runs to keep when cleaning")
    runs_parser.add_argument("--force", action="store_true", help="Actually delete (default is dry-run)")
    runs_parser.add_argument("--runs-dir", default=None, help="Base directory for run records")

    check_parser = subparsers.add_parser("check", help="Test an integer for primality")
    check_parser.add_argument("number", help="Integer (decimal, or 0x/0o/0b prefixed)")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_INVALID

    commands = {
        "generate": cmd_generate,
        "runs": cmd_runs,
        "check": cmd_check,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
