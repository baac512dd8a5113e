"""Command-line entry point: play or watch a game in the terminal."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from typing import TextIO

from broadside.app.engine import TurnEngine
from broadside.app.state import GameState
from broadside.core.models import Coord, GamePhase, Orientation, ShipId, ShotMark
from broadside.infra.config import load_default_env_files, load_engine_settings
from broadside.infra.logging import setup_logging
from broadside.runtime.clock import RealTimeDriver
from broadside.runtime.logging import shutdown_logging
from broadside.runtime.scheduler import Scheduler
from broadside.ui.text_view import render_state

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  select <ship>   carrier | battleship | destroyer | submarine | patrol
  rotate | h | v  change placement orientation
  place <A1>      place the selected ship with its anchor at a cell
  fire <A1>       fire at the enemy board
  autopilot       let two computer fleets play each other
  stop            stop autopilot
  reset           start a new game
  show            print the boards
  quit            exit"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="broadside", description="Terminal Battleship.")
    parser.add_argument("--autopilot", action="store_true", help="watch two computer fleets play")
    parser.add_argument("--seed", type=int, default=None, help="random seed for reproducible games")
    parser.add_argument(
        "--speed", type=float, default=1.0, help="playback speed multiplier for turn delays"
    )
    parser.add_argument(
        "--no-log-file", action="store_true", help="log to the console only"
    )
    return parser


class SnapshotPrinter:
    """Prints a snapshot whenever something visible changed."""

    def __init__(self, out: TextIO) -> None:
        self._out = out
        self._last_key: tuple[object, ...] | None = None

    def __call__(self, state: GameState) -> None:
        key = (
            state.phase,
            state.message,
            state.player_shots.count(ShotMark.UNSHOT),
            state.computer_shots.count(ShotMark.UNSHOT),
        )
        if key == self._last_key:
            return
        self._last_key = key
        self.print_state(state)

    def print_state(self, state: GameState) -> None:
        self._out.write(render_state(state) + "\n\n")
        self._out.flush()


def run_cli(
    argv: Sequence[str] | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    sleep: Callable[[float], None] | None = None,
    time_source: Callable[[], float] | None = None,
) -> int:
    """Run a terminal session and return the process exit code."""
    return run_session(
        build_parser().parse_args(argv),
        stdin=stdin,
        stdout=stdout,
        sleep=sleep,
        time_source=time_source,
    )


def run_session(
    args: argparse.Namespace,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    sleep: Callable[[float], None] | None = None,
    time_source: Callable[[], float] | None = None,
) -> int:
    """Run a terminal session for already parsed arguments."""
    if args.speed <= 0.0:
        raise SystemExit("--speed must be > 0")
    source = stdin or sys.stdin
    out = stdout or sys.stdout

    scheduler = Scheduler()
    engine = TurnEngine(scheduler, settings=load_engine_settings(seed=args.seed))
    driver = RealTimeDriver(scheduler, time_scale=args.speed, time_source=time_source, sleep=sleep)
    printer = SnapshotPrinter(out)
    engine.subscribe(printer)
    logger.info("session_started autopilot=%s seed=%s speed=%.2f", args.autopilot, args.seed, args.speed)

    try:
        if args.autopilot:
            engine.start_autopilot()
            driver.run_until_idle()
            return 0 if engine.state.phase is GamePhase.GAME_OVER else 1

        printer.print_state(engine.state)
        out.write(HELP_TEXT + "\n")
        for raw_line in source:
            line = raw_line.strip()
            if not line:
                continue
            if line.lower() in {"quit", "exit"}:
                break
            if not _handle_command(engine, printer, out, line):
                out.write(f"Rejected: {line}\n")
            driver.run_until_idle()
        return 0
    except KeyboardInterrupt:
        return 130
    finally:
        engine.close()
        logger.info("session_closed phase=%s", engine.state.phase)


def _handle_command(engine: TurnEngine, printer: SnapshotPrinter, out: TextIO, line: str) -> bool:
    verb, _, argument = line.partition(" ")
    verb = verb.lower()
    argument = argument.strip()

    if verb == "help":
        out.write(HELP_TEXT + "\n")
        return True
    if verb == "show":
        printer.print_state(engine.state)
        return True
    if verb == "select":
        ship_id = _parse_ship(argument)
        return ship_id is not None and engine.select_ship(ship_id)
    if verb == "rotate":
        return engine.rotate()
    if verb in {"h", "horizontal"}:
        return engine.set_orientation(Orientation.HORIZONTAL)
    if verb in {"v", "vertical"}:
        return engine.set_orientation(Orientation.VERTICAL)
    if verb in {"place", "fire"}:
        try:
            coord = Coord.parse(argument)
        except ValueError as exc:
            out.write(f"{exc}\n")
            return False
        return engine.place_at(coord) if verb == "place" else engine.fire_at(coord)
    if verb == "autopilot":
        return engine.start_autopilot()
    if verb == "stop":
        return engine.stop_autopilot()
    if verb == "reset":
        return engine.reset()
    return False


def _parse_ship(text: str) -> ShipId | None:
    value = text.strip().lower()
    for ship_id in ShipId:
        if value in {ship_id.value, ship_id.display_name.lower()}:
            return ship_id
    return None


def main() -> None:
    """Run the Broadside terminal application."""
    load_default_env_files()
    args = build_parser().parse_args()
    setup_logging(file_logging=not args.no_log_file)
    try:
        code = run_session(args)
    finally:
        shutdown_logging()
    sys.exit(code)


if __name__ == "__main__":
    main()
