"""Command-line interface for progbar."""
from __future__ import annotations

import argparse
import sys
import time
from typing import Callable, List, Optional

from loguru import logger

from .config import DEFAULT_DELAY, DEFAULT_STEP, DEFAULT_TICK_GLYPH, DEFAULT_WIDTH, LOG_LEVEL
from .exceptions import InvalidConfigurationError, TerminalError
from .logging_config import configure_logging
from .ui import AnsiTerminal, DisplayOptions, ProgressRenderer, Terminal, run_tui


def build_options(args: argparse.Namespace) -> DisplayOptions:
    """Translate command-line flags into display options."""
    options = DisplayOptions.NONE
    if not args.no_bookend:
        options |= DisplayOptions.BOOKEND
    if not args.no_percentage:
        options |= DisplayOptions.DISPLAY_PERCENTAGE
    if args.label:
        options |= DisplayOptions.DISPLAY_LABEL
    if args.same_line:
        options |= DisplayOptions.START_SAME_LINE
    if args.remove_when_done:
        options |= DisplayOptions.REMOVE_WHEN_DONE
    if args.hide_cursor:
        options |= DisplayOptions.HIDE_CURSOR
    if args.options:
        options |= DisplayOptions.from_names(args.options.split(","))
    return options


def run_demo(
    renderer: ProgressRenderer,
    step: int = DEFAULT_STEP,
    delay: float = DEFAULT_DELAY,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Tick ``renderer`` by ``step`` every ``delay`` seconds until it is done.

    Returns the number of ticks issued.
    """
    if step <= 0:
        raise InvalidConfigurationError(f"step must be positive, got {step}")
    if delay < 0:
        raise InvalidConfigurationError(f"delay must not be negative, got {delay}")

    ticks = 0
    while not renderer.is_done:
        sleep(delay)
        renderer.tick(step)
        ticks += 1
    logger.info("Progress bar completed after {} ticks", ticks)
    return ticks


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="progbar",
        description="Draw a single-line progress bar that fills from 0 to 100%.",
        epilog="Example: progbar --width 40 --label Copying --hide-cursor"
    )
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help=f"Number of increments in the bar (default: {DEFAULT_WIDTH})")
    parser.add_argument("--glyph", default=DEFAULT_TICK_GLYPH, help=f"Character drawn per increment (default: '{DEFAULT_TICK_GLYPH}')")
    parser.add_argument("--label", default="", help="Caption shown to the left of the bar")
    parser.add_argument("--initial", type=int, default=0, help="Percentage complete when first drawn (default: 0)")
    parser.add_argument("--step", type=int, default=DEFAULT_STEP, help=f"Percentage points per tick (default: {DEFAULT_STEP})")
    parser.add_argument("--delay", type=float, default=DEFAULT_DELAY, help=f"Seconds between ticks (default: {DEFAULT_DELAY})")
    parser.add_argument("--same-line", action="store_true", help="Start on the current line instead of a new one")
    parser.add_argument("--remove-when-done", action="store_true", help="Erase the bar when it reaches 100%%")
    parser.add_argument("--hide-cursor", action="store_true", help="Hide the cursor while drawing")
    parser.add_argument("--no-bookend", action="store_true", help="Do not frame the bar with brackets")
    parser.add_argument("--no-percentage", action="store_true", help="Do not show the percentage")
    parser.add_argument("--options", default="", help="Extra display options by name, comma separated (e.g. hide-cursor,remove-when-done)")
    parser.add_argument("--curses", action="store_true", help="Draw in a full-screen curses window")
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        type=str.upper,
        choices=["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"],
        help=f"Log level for messages on stderr (default: {LOG_LEVEL})",
    )
    return parser


def main(argv: Optional[List[str]] = None, terminal: Optional[Terminal] = None) -> int:
    """Main CLI entry point."""
    args = create_parser().parse_args(argv)
    configure_logging(args.log_level)
    try:
        options = build_options(args)
    except InvalidConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    def draw(term: Terminal) -> ProgressRenderer:
        renderer = ProgressRenderer(
            term,
            width=args.width,
            options=options,
            tick_glyph=args.glyph,
            label=args.label,
            initial_percent=args.initial,
        )
        run_demo(renderer, step=args.step, delay=args.delay)
        return renderer

    if args.step <= 0:
        print(f"Error: step must be positive, got {args.step}", file=sys.stderr)
        return 2
    if args.delay < 0:
        print(f"Error: delay must not be negative, got {args.delay}", file=sys.stderr)
        return 2

    term = None
    try:
        if args.curses:
            # curses.wrapper restores the screen and cursor on the way out
            run_tui(draw)
            return 0

        term = terminal if terminal is not None else AnsiTerminal()
        renderer = draw(term)

        # Leave the cursor below a bar that is still on screen
        if not options & DisplayOptions.REMOVE_WHEN_DONE:
            term.set_cursor_position(*renderer.bar_end)
            term.write("\n")
        return 0
    except InvalidConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except TerminalError as e:
        logger.error("Terminal failure: {}", e)
        return 1
    except KeyboardInterrupt:
        if term is not None and options & DisplayOptions.HIDE_CURSOR:
            term.set_cursor_visible(True)
        print(file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
