"""Main entry point for typoledger package."""

import sys

from loguru import logger

from typoledger.capabilities import WordfreqOracle
from typoledger.cli import create_parser
from typoledger.core import Config, EntryListing, InvalidCorrectionError, load_config
from typoledger.export import export_espanso
from typoledger.ledger import CorrectionLedger
from typoledger.utils.logging import setup_logger


def format_listing(listing: EntryListing) -> str:
    """Render one entry as a line of `list` output."""
    parts = []
    for corrected, manual, auto in zip(
        listing.corrections, listing.manual_counts, listing.auto_counts
    ):
        if corrected:
            parts.append(f"{corrected} ({manual}/{auto})")
        else:
            parts.append("<ignored>")

    flags = [listing.tier.value]
    if listing.ambiguous:
        flags.append("ambiguous")
    if listing.ignored:
        flags.append("ignored")

    return f"{listing.misspelling} -> {', '.join(parts)} [{', '.join(flags)}]"


def _print_config_summary(config: Config) -> None:
    """Print configuration summary if verbose."""
    if config.verbose:
        logger.info("Configuration:")
        logger.info(f"  Record file: {config.record_file}")
        logger.info(
            f"  Thresholds: all-time {config.all_time_threshold}, "
            f"session {config.session_threshold}"
        )
        logger.info(f"  Case folding: {config.case_folding}")
        logger.info("")


def run_command(args, ledger: CorrectionLedger) -> int:
    """Run one CLI command against an open ledger.

    Returns:
        Process exit status
    """
    if args.command == "record":
        ledger.record_correction(args.misspelling, args.corrected)
    elif args.command == "add":
        ledger.add_correction(args.misspelling, args.corrected)
    elif args.command == "remove":
        if not ledger.remove_correction(args.misspelling, args.corrected):
            logger.warning(f"No correction '{args.misspelling} -> {args.corrected}' to remove")
    elif args.command == "ignore":
        ledger.ignore_word(args.word)
    elif args.command == "correct":
        replacement = ledger.autocorrect(args.word)
        if replacement is None:
            return 1
        print(replacement)
    elif args.command == "list":
        for listing in ledger.list_entries():
            print(format_listing(listing))
    elif args.command == "compact":
        ledger.save()
    elif args.command == "export":
        export_espanso(ledger.active_corrections(), args.output)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Load configuration
    config = load_config(args.config, args, parser)

    # Setup logging
    setup_logger(verbose=config.verbose, debug=config.debug)
    _print_config_summary(config)

    oracle = WordfreqOracle(config.spelling_language, config.min_word_frequency)
    try:
        ledger = CorrectionLedger.open(config, oracle=oracle)
        return run_command(args, ledger)
    except InvalidCorrectionError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"Cannot access correction record: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("⚠️  Interrupted by user")
        raise


if __name__ == "__main__":
    sys.exit(main())
