"""CLI entry point for swf2pdf.

Render the first frame of each SWF (Flash) file as one page of a single
PDF document.

Usage::

    swf2pdf movie.swf
    swf2pdf -o book.pdf intro.swf chapter*.swf
    find . -name '*.swf' | swf2pdf --stdin -e skip -v
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from collections.abc import Sequence
from functools import partial
from pathlib import Path
from typing import IO, NoReturn

import colorlog
import pymupdf

from swf2pdf import __version__
from swf2pdf.config import (
    DEFAULT_EXPORTER,
    DEFAULT_OUTPUT,
    DEFAULT_TIMEOUT,
    EXPORTER_ENV_VAR,
    Config,
    ErrorMode,
)
from swf2pdf.errors import ConversionAborted
from swf2pdf.inputs import InputEnumerator
from swf2pdf.player import ExporterPlayer
from swf2pdf.renderer import PageRenderer, RenderStats


_log = logging.getLogger("swf2pdf")

_SUMMARY_SEP = "=" * 78
"""Separator line for the conversion summary block."""

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def setup_colorized_logging(level: int = logging.ERROR) -> None:
    """Configure colorized logging output on standard output."""
    handler = colorlog.StreamHandler(sys.stdout)
    handler.setFormatter(
        colorlog.ColoredFormatter(
            "%(log_color)s%(levelname)-8s%(reset)s %(blue)s%(name)-8s%(reset)s: "
            "%(message)s",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "red,bg_white",
            },
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


def _setup_logging(verbose: bool) -> None:
    """Initialize logging: progress lines only when *verbose* is set."""
    setup_colorized_logging(logging.DEBUG if verbose else logging.ERROR)


def _silence_engines() -> None:
    """Stop MuPDF from printing its own errors and warnings."""
    pymupdf.TOOLS.mupdf_display_errors(False)
    pymupdf.TOOLS.mupdf_display_warnings(False)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


class _UsageParser(argparse.ArgumentParser):
    """ArgumentParser whose errors end with a hint to use ``--help``."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(
            EXIT_USAGE,
            f"{self.prog}: error: {message}\n"
            f"Try '{self.prog} --help' for more information.\n",
        )


class _ErrorModeAction(argparse.Action):
    """Select an :class:`ErrorMode` by the first letter of the value.

    Unrecognized values leave the previous mode untouched and are
    collected in ``namespace.ignored_error_modes`` so the CLI can warn
    about them once logging is up.
    """

    def __call__(self, parser, namespace, values, option_string=None):
        mode = ErrorMode.from_string(values)
        if mode is None:
            namespace.ignored_error_modes.append(values)
        else:
            setattr(namespace, self.dest, mode)


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value!r}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = _UsageParser(
        prog="swf2pdf",
        description="Render the first frame of each SWF file as one page "
                    "of a single PDF document.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Error modes (chosen by first letter, case-insensitive):
  fail    stop at the first file that cannot be loaded (exit status 1)
  skip    leave the file out of the PDF
  blank   insert an empty page in its place (default)

Examples:
  %(prog)s movie.swf                        Write output.pdf with one page
  %(prog)s -o book.pdf a.swf b.swf          Two pages into book.pdf
  %(prog)s -e skip *.swf                    Omit files that fail to load
  find . -name '*.swf' | %(prog)s -s -v     Read file names from stdin

Frames are rendered by the Ruffle 'exporter' tool; set ${EXPORTER_ENV_VAR}
or pass --exporter if it is not on PATH.
        """,
    )
    parser.set_defaults(ignored_error_modes=[])
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=DEFAULT_OUTPUT,
        metavar="FILE",
        help="Output PDF file (default: %(default)s)",
    )
    parser.add_argument(
        "-e", "--error-mode",
        action=_ErrorModeAction,
        default=ErrorMode.BLANK,
        metavar="fail|skip|blank",
        help="What to do with files that cannot be loaded (default: blank)",
    )
    parser.add_argument(
        "-s", "--stdin",
        dest="read_stdin",
        action="store_true",
        help="Also read SWF file names from standard input, one per line",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--exporter",
        default=os.environ.get(EXPORTER_ENV_VAR) or DEFAULT_EXPORTER,
        metavar="PATH",
        help=f"SWF frame exporter executable "
             f"(default: ${EXPORTER_ENV_VAR} or '{DEFAULT_EXPORTER}')",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=DEFAULT_TIMEOUT,
        metavar="SECONDS",
        help="Time limit for rendering one file (default: %(default)g)",
    )
    parser.add_argument(
        "inputs",
        nargs="*",
        metavar="SWF_FILE",
        help="SWF file(s) to convert, one page each, in order",
    )
    return parser


def parse_config(
    argv: Sequence[str] | None = None,
) -> tuple[Config, list[str]]:
    """Parse *argv* into a :class:`Config`.

    Returns:
        ``(config, ignored_error_modes)`` where the second item lists
        ``--error-mode`` values whose first letter matched no mode.

    Raises:
        SystemExit: ``--help``/``--version`` (status 0) or a usage error
            (status 2), including when no input source is configured.
    """
    parser = _build_parser()
    argv = list(sys.argv[1:] if argv is None else argv)
    trailing: list[str] = []
    if "--" in argv:
        # parse_intermixed_args rejects anything after "--", so take it
        # verbatim as file names.
        cut = argv.index("--")
        argv, trailing = argv[:cut], argv[cut + 1:]
    args = parser.parse_intermixed_args(argv)

    config = Config(
        output=args.output,
        error_mode=args.error_mode,
        verbose=args.verbose,
        read_stdin=args.read_stdin,
        inputs=(*args.inputs, *trailing),
        exporter=args.exporter,
        timeout=args.timeout,
    )
    if not config.has_input_source:
        parser.error("no input files (give SWF_FILE arguments or use --stdin)")
    return config, list(args.ignored_error_modes)


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------


def _log_summary(stats: RenderStats, total: int, elapsed: float) -> None:
    """Print the final conversion summary block."""
    _log.info(_SUMMARY_SEP)
    _log.info("Total time: %.1fs", elapsed)
    _log.info(
        "Processed %d file(s): %d rendered, %d blank, %d skipped",
        total, stats.rendered, stats.blank, stats.skipped,
    )
    _log.info(_SUMMARY_SEP)


def convert(config: Config, stdin: IO | None = None) -> int:
    """Run a full conversion for *config* and return the exit status."""
    if config.output.suffix.lower() != ".pdf":
        _log.warning("Output file %s has no .pdf extension", config.output)

    _log.info("swf2pdf %s", __version__)
    _log.info("Output: %s", config.output)
    _log.info("Error mode: %s", config.error_mode.value)
    _log.debug("Exporter: %s (timeout %gs)", config.exporter, config.timeout)

    enumerator = InputEnumerator(config, stdin)
    player_factory = partial(
        ExporterPlayer, exporter=config.exporter, timeout=config.timeout,
    )

    start = time.time()
    try:
        with PageRenderer(
            config.output, config.error_mode, player_factory,
        ) as renderer:
            stats = renderer.render_all(enumerator)
    except ConversionAborted as e:
        _log.error("Aborted after %d file(s): %s", enumerator.count, e)
        return EXIT_FAILURE

    _log_summary(stats, enumerator.count, time.time() - start)
    return EXIT_OK


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    config, ignored_modes = parse_config(argv)

    _setup_logging(config.verbose)
    _silence_engines()
    for value in ignored_modes:
        _log.warning(
            "Unrecognized error mode %r ignored, keeping %s",
            value, config.error_mode.value,
        )

    # Raw bytes so undecodable file names still reach the error policy.
    stdin = getattr(sys.stdin, "buffer", sys.stdin) if config.read_stdin else None
    try:
        return convert(config, stdin)
    except Exception as e:
        _log.error("Fatal error: %s", e)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
