import argparse
import logging
import os
import sys
import traceback
from typing import Any, Dict, Iterator, List, Optional, TextIO, Tuple

from . import __version__
from .config import COLOR_MODES, load_config
from .errors import HiliteError, InputError
from .logger import setup_logging
from .render import render_line
from .scanner import PatternSet, Scanner
from .utils import Colors, build_palette, colorize, use_color

logger = logging.getLogger(__name__)

LINE_ENDINGS = ("\r\n", "\n")


def build_parser() -> argparse.ArgumentParser:
    # -h belongs to --no-highlight, so help is long-form only.
    parser = argparse.ArgumentParser(prog="hilite", description="hilite: command line multicolor regexp highlighter", add_help=False)
    parser.add_argument("--help", action="help", help="Show help")
    parser.add_argument("--version", action="version", version=f"hilite v{__version__}")
    parser.add_argument("--debug", action="store_true", help="More verbose output on errors")

    highlight = parser.add_mutually_exclusive_group()
    highlight.add_argument("-h", "--no-highlight", action="store_true", default=None, help="Do not color by changing the background color")
    highlight.add_argument("-H", "--only-highlight", action="store_true", default=None, help="Only color by changing the background color")

    parser.add_argument("-i", "--ignore-case", action="store_true", default=None, help="Perform case-insensitive matching")

    groups = parser.add_mutually_exclusive_group()
    groups.add_argument("-g", "--vary-group-colors", dest="vary_group_colors", action="store_const", const=True, help="Give each capture group its own color")
    groups.add_argument("-G", "--no-vary-group-colors", dest="vary_group_colors", action="store_const", const=False, help="Color all groups of a pattern alike")

    parser.add_argument("-f", "--full-match", action="store_true", default=None, help="Color the whole match even if the pattern has groups")
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--color", choices=COLOR_MODES, help="When to emit color (default: always)")
    parser.add_argument("patterns", nargs="+", metavar="PATTERN", help="Patterns")
    return parser


def resolve_settings(args: argparse.Namespace, config: Dict[str, Any]) -> Dict[str, Any]:
    """Merges command line flags over config file values."""
    settings = dict(config)
    for key in ("ignore_case", "no_highlight", "only_highlight", "full_match", "vary_group_colors", "color"):
        value = getattr(args, key)
        if value is not None:
            settings[key] = value

    # A palette flag on the command line beats the opposite one from the file.
    if args.no_highlight:
        settings["only_highlight"] = False
    if args.only_highlight:
        settings["no_highlight"] = False

    for key in ("ignore_case", "no_highlight", "only_highlight", "full_match"):
        settings.setdefault(key, False)
    settings.setdefault("vary_group_colors", None)
    settings.setdefault("color", "always")
    return settings


def split_line_ending(raw: str) -> Tuple[str, str]:
    for ending in LINE_ENDINGS:
        if raw.endswith(ending):
            return raw[:-len(ending)], ending
    return raw, ""


def read_lines(stream: TextIO) -> Iterator[Tuple[str, str]]:
    """Yields (text, line_ending) pairs, turning decode and I/O faults into InputError."""
    lines = iter(stream)
    lineno = 0
    while True:
        lineno += 1
        try:
            raw = next(lines)
        except StopIteration:
            return
        except UnicodeDecodeError as e:
            raise InputError(f"Could not decode input line {lineno}") from e
        except OSError as e:
            raise InputError(f"Could not read input line {lineno}") from e
        yield split_line_ending(raw)


def run(args: argparse.Namespace, stdin: TextIO, stdout: TextIO) -> int:
    config = load_config(args.config)
    settings = resolve_settings(args, config)
    logger.debug("Settings: %s", settings)

    # Compile everything before the first line is read.
    patterns = PatternSet(args.patterns, ignore_case=settings["ignore_case"])
    scanner = Scanner(patterns, vary_group_colors=settings["vary_group_colors"],
                      full_match_highlight=settings["full_match"])
    palette = build_palette(
        no_highlight=settings["no_highlight"],
        only_highlight=settings["only_highlight"],
        foreground=settings.get("foreground"),
        background=settings.get("background"),
        **{k: settings[k] for k in ("reset_foreground", "reset_background") if k in settings},
    )
    mode = settings["color"]
    colored = mode == "always" or (mode == "auto" and use_color(stdout))

    for text, ending in read_lines(stdin):
        if colored:
            text = render_line(text, scanner.scan(text), palette)
        stdout.write(text + ending)
        stdout.flush()
    return 0


def report_error(err: BaseException, debug: bool = False, stream: Optional[TextIO] = None) -> None:
    """Prints `err` and its cause chain; the full traceback when `debug` is set."""
    stream = stream or sys.stderr
    if debug:
        traceback.print_exception(type(err), err, err.__traceback__, file=stream)
        return
    print(f"{colorize('error:', Colors.RED, stream)} {err}", file=stream)
    cause = err.__cause__
    while cause is not None:
        print(f"  Caused by: {cause}", file=stream)
        cause = cause.__cause__


def _silence_stdout() -> None:
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


def _prepare_std_streams() -> None:
    # Strict UTF-8 in, line endings passed through untouched both ways.
    if hasattr(sys.stdin, "reconfigure"):
        sys.stdin.reconfigure(encoding="utf-8", errors="strict", newline="\n")
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(newline="")


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(debug=args.debug)
    _prepare_std_streams()

    try:
        exit_code = run(args, sys.stdin, sys.stdout)
    except HiliteError as e:
        report_error(e, debug=args.debug)
        sys.exit(1)
    except BrokenPipeError:
        # Reader went away (e.g. `| head`); silence the flush at interpreter exit.
        _silence_stdout()
        sys.exit(0)
    except KeyboardInterrupt:
        sys.exit(130)
    sys.exit(exit_code)
