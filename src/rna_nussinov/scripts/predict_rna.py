#!/usr/bin/env python3
"""
Predict a maximum-pairing RNA secondary structure from the command line.

Folds the sequence with the Nussinov algorithm (Watson-Crick pairs only,
minimum loop of 4 unpaired positions) and prints the pair count, the pair list
and the dot-bracket string.

Examples:
  - predict-rna "GGGAAAUCCC"
  - predict-rna --json "GAAAAC"
  - predict-rna -v --show-table --mirror "GGGAAAUCCCAGCUAGC"
  - python -m rna_nussinov --plot structure.png "GGGGAAAACCCC"
"""

# --- Standard Library Imports ---
from __future__ import annotations
import argparse
import json
import sys
import logging
import time
from typing import Optional

# --- Local Application Imports ---
from rna_nussinov.api import NussinovPrediction, fold
from rna_nussinov.folding import NussinovFoldingConfig, NussinovFoldState
from rna_nussinov.rules import MIN_LOOP_UNPAIRED
from rna_nussinov.utils.base_utils import normalize_sequence
from rna_nussinov.utils.logging_utils import (
    DEFAULT_LOG_DIR,
    cleanup_old_logs,
    set_log_level,
    setup_logger,
    verbosity_to_level,
)
from rna_nussinov.utils.table_utils import format_score_table

# Set up module logger
logger = logging.getLogger(__name__)

RECOGNISED_BASES = frozenset("ACGU")

# Timestamped logs under var/log/ are kept for this many days.
LOG_RETENTION_DAYS = 7


# --------------------------
# Logging Configuration
# --------------------------
CLI_LOGGERS = [
    __name__,
    "rna_nussinov.api",
    "rna_nussinov.folding.recurrences",
    "rna_nussinov.folding.traceback",
]


def setup_cli_logging(verbose_level: int, log_file: Optional[str] = None, quiet: bool = False) -> None:
    """
    Configures logging for the CLI and the folding modules.

    Parameters
    ----------
    verbose_level : int
        0 for WARNING, 1 for INFO, 2 for DEBUG.
    log_file : Optional[str]
        Explicit log file. Without it, a timestamped file under `var/log/` is
        written whenever verbosity is above 0, and files there older than
        `LOG_RETENTION_DAYS` are removed first.
    quiet : bool, optional
        Raise every configured logger to ERROR so only the result is printed.
    """
    # Map the `-v` count onto a logging level (0 WARNING, 1 INFO, 2+ DEBUG).
    log_level = verbosity_to_level(verbose_level)

    # Determine if file logging should be enabled.
    should_log_to_file = (verbose_level > 0) or (log_file is not None)

    # Prune stale timestamped logs before adding a new one to the directory.
    removed = 0
    if should_log_to_file and log_file is None:
        removed = cleanup_old_logs(DEFAULT_LOG_DIR, days_to_keep=LOG_RETENTION_DAYS)

    # Configure each logger with the determined levels and file path.
    for logger_name in CLI_LOGGERS:
        configured = setup_logger(
            logger_name,
            level=log_level,
            log_file=log_file,
            enable_file_logging=should_log_to_file,
        )
        # --quiet silences warnings as well, on the console and in any file.
        if quiet:
            set_log_level(configured, logging.ERROR)

    # Inform the user where the logs are being saved if a default file was created.
    if should_log_to_file and log_file is None:
        logger.info(f"Logs will be saved to: {DEFAULT_LOG_DIR.resolve()}")
        if removed:
            logger.info(f"Removed {removed} log file(s) older than {LOG_RETENTION_DAYS} days")


# --------------------------
# Helpers
# --------------------------
def read_sequence(raw_sequence: str) -> str:
    """
    Normalizes a sequence typed on the command line.

    Whitespace is stripped, bases are upper-cased and T becomes U. Symbols
    outside {A, C, G, U} are kept (they never pair) but reported as a warning.

    Raises
    ------
    ValueError
        If nothing is left after stripping.
    """
    logger.debug(f"Reading sequence: {raw_sequence[:50]}{'...' if len(raw_sequence) > 50 else ''}")
    # Normalize the sequence to upper-case RNA (T becomes U).
    sequence = normalize_sequence(raw_sequence)

    # Check if the sequence is empty after normalization.
    if not sequence:
        logger.error("Sequence is empty")
        raise ValueError("Sequence is empty.")

    # Symbols outside {A, C, G, U} are allowed through; they simply never pair.
    unknown = sorted({base for base in sequence if base not in RECOGNISED_BASES})
    if unknown:
        logger.warning(f"Sequence contains symbols that never pair: {', '.join(unknown)}")

    logger.info(f"Sequence read: length={len(sequence)}")
    return sequence


def render_text(prediction: NussinovPrediction) -> str:
    """Human-readable report of a prediction."""
    # Pairs in discovery order, or a dash when the structure is empty.
    pair_text = " ".join(f"({pr.base_i}, {pr.base_j})" for pr in prediction.pairs) or "-"
    return "\n".join([
        f"Sequence Length : {len(prediction.sequence)}",
        f"Sequence : {prediction.sequence}",
        f"Base Pairs : {prediction.score}",
        f"Pairs : {pair_text}",
        f"Dot-Bracket Notation: {prediction.dot_bracket}",
    ])


def render_table(prediction: NussinovPrediction, state: NussinovFoldState, mirror: bool) -> str:
    """Score table report used by `--show-table`."""
    header = "Score table (mirrored)" if mirror else "Score table"
    return f"{header}:\n{format_score_table(state.score_matrix, prediction.sequence, mirror=mirror)}"


# --------------------------
# Command-Line Interface
# --------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Predict a maximum-pairing RNA structure (dot-bracket).")
    # Folding and output arguments
    parser.add_argument("sequence", help="RNA sequence (A,C,G,U; T will be converted to U)")
    parser.add_argument("--min-loop", type=int, default=MIN_LOOP_UNPAIRED,
                        help=f"Minimum unpaired positions inside a pair (default: {MIN_LOOP_UNPAIRED}).")
    parser.add_argument("--json", action="store_true",
                        help="Emit JSON instead of human-readable text.")
    parser.add_argument("--show-table", action="store_true",
                        help="Also print the filled score table.")
    parser.add_argument("--mirror", action="store_true",
                        help="With --show-table, mirror the upper triangle into the lower one.")
    parser.add_argument("--plot", default=None,
                        help="Save a node-link diagram of the structure to this image path.")

    # Logging arguments
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase verbosity (-v=INFO, -vv=DEBUG)")
    parser.add_argument("--log-file", default=None,
                        help="Path to log file (default: var/log/<logger>_TIMESTAMP.log if verbose)")
    parser.add_argument("--quiet", action="store_true",
                        help="Suppress all output except final result")
    return parser


def main(argv=None) -> int:
    """
    Parses command-line arguments and runs the prediction.

    Returns
    -------
    int
        0 on success, 1 if prediction fails, 2 for bad input.
    """
    # --- Argument Parsing ---
    cli_args = build_parser().parse_args(argv)

    # --- Setup ---
    # Configure logging from the verbosity and log-file flags.
    verbose_level = 0 if cli_args.quiet else cli_args.verbose
    setup_cli_logging(verbose_level, cli_args.log_file, quiet=cli_args.quiet)

    logger.info("=" * 60)
    logger.info("RNA Nussinov Structure Prediction CLI")
    logger.info("=" * 60)

    # --- Input Validation ---
    try:
        sequence = read_sequence(cli_args.sequence)
        # The progress bar follows the CLI verbosity.
        config = NussinovFoldingConfig(
            min_loop_unpaired=cli_args.min_loop,
            verbose=logger.isEnabledFor(logging.INFO),
        )
    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 2

    # --- Prediction ---
    start_time = time.perf_counter()
    try:
        prediction, state = fold(sequence, config)
    except Exception as e:
        logger.error(f"Prediction failed: {e}", exc_info=True)
        print(f"Prediction failed: {e}", file=sys.stderr)
        return 1
    logger.info(f"Prediction successful in {time.perf_counter() - start_time:.3f}s")

    # --- Plot ---
    if cli_args.plot:
        # Imported lazily so plain text runs don't pay for matplotlib.
        from rna_nussinov.visualization import save_structure_plot
        plot_path = save_structure_plot(prediction.sequence, prediction.pairs, cli_args.plot)
        logger.info(f"Structure plot saved to: {plot_path}")

    # --- Output ---
    if cli_args.json:
        payload = prediction.as_dict()
        # The table goes out as nested lists; mirrored on request only.
        if cli_args.show_table:
            table = state.score_matrix.mirrored() if cli_args.mirror else state.score_matrix.as_array()
            payload["score_table"] = table.tolist()
        print(json.dumps(payload, indent=2))
    else:
        print(render_text(prediction))
        if cli_args.show_table:
            print(render_table(prediction, state, cli_args.mirror))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
