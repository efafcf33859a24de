"""Command-line interface."""

import argparse


def _add_pair_arguments(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument("misspelling", help="The word as it was typed")
    subparser.add_argument("corrected", help="The correction (may contain spaces if quoted)")


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        description="Track recurring typing corrections and promote them to autocorrect rules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Record a correction (three of them make it permanent by default)
  %(prog)s record teh the

  # Never autocorrect a word
  %(prog)s ignore colour

  # Show what is tracked
  %(prog)s list -v

  # Export active corrections for Espanso
  %(prog)s export -o ~/.config/espanso/match/typoledger.yml

  # Use a JSON config file (CLI args override JSON values)
  %(prog)s --config config.json list

Example config.json:
{
  "record_file": "~/.config/typoledger/corrections",
  "all_time_threshold": 3,
  "session_threshold": 2,
  "case_folding": true,
  "spelling_language": "en",
  "verbose": true
}
        """,
    )

    # Configuration
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        help="JSON configuration file (CLI args override JSON values)",
    )
    parser.add_argument("--record-file", type=str, help="Shared correction record")

    # Parameters
    parser.add_argument(
        "--all-time-threshold",
        type=int,
        help="Manual corrections needed for a permanent rule (default: 3)",
    )
    parser.add_argument(
        "--session-threshold",
        type=int,
        help="Manual corrections needed for a rule in this run only (default: 2)",
    )
    parser.add_argument("--spelling-language", type=str, help="wordfreq language code")
    parser.add_argument(
        "--min-word-frequency",
        type=float,
        help="Frequency a word needs to count as correctly spelled",
    )
    parser.add_argument(
        "--no-case-folding",
        dest="case_folding",
        action="store_false",
        default=None,
        help="Store corrections with their typed capitalization",
    )

    # Flags
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=None, help="Verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", default=None, help="Debug output (implies --verbose)"
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    _add_pair_arguments(commands.add_parser("record", help="Record one manual correction"))
    _add_pair_arguments(
        commands.add_parser("add", help="Add a correction that is active immediately")
    )
    _add_pair_arguments(commands.add_parser("remove", help="Remove a correction"))

    ignore = commands.add_parser("ignore", help="Never autocorrect a word")
    ignore.add_argument("word")

    correct = commands.add_parser("correct", help="Print the autocorrection for a word")
    correct.add_argument("word")

    commands.add_parser("list", help="List tracked misspellings")
    commands.add_parser("compact", help="Reload and rewrite the record")

    export = commands.add_parser("export", help="Write active corrections as Espanso YAML")
    export.add_argument("-o", "--output", type=str, help="Output file (default: stdout)")

    return parser
