import argparse
import logging
import os
import signal
import sys
from pathlib import Path

from . import __version__
from . import timecalc
from .clock import Phase, phase_minutes
from .config import Settings, ensure_config_file, get_config_path, load_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def setup_logging(level: str, log_path: Path) -> logging.Logger:
    """Log to a file next to the config; the terminal belongs to curses."""
    handlers = []
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    except OSError:
        handlers.append(logging.NullHandler())
    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )
    return logging.getLogger("pomoclock")


def _cycle_schedule(settings: Settings) -> list:
    phases = []
    for _ in range(settings.cycles_before_long_break - 1):
        phases.extend([Phase.WORK, Phase.SHORT_BREAK])
    phases.extend([Phase.WORK, Phase.LONG_BREAK])
    return phases


def _headless_snapshot(settings: Settings, config_path: Path) -> str:
    schedule = _cycle_schedule(settings)
    total = sum(phase_minutes(settings, phase) * 60 for phase in schedule)
    lines = [
        f"config: {config_path}",
        f"theme: {settings.theme.value}",
        f"work: {timecalc.format_mmss(settings.work_minutes * 60)}",
        f"short break: {timecalc.format_mmss(settings.short_break_minutes * 60)}",
        f"long break: {timecalc.format_mmss(settings.long_break_minutes * 60)}",
        f"cycles before long break: {settings.cycles_before_long_break}",
        "cycle: " + " -> ".join(phase.label for phase in schedule),
        f"full cycle: {timecalc.format_hms_seconds(total)}",
    ]
    return "\n".join(lines)


def parse_args(argv=None):
    epilog = (
        "Controls: space start/pause, r reset phase, R restart session, s skip, "
        "c settings, q quit. In settings: j/k select, h/l change, q save, esc cancel."
    )
    parser = argparse.ArgumentParser(
        prog="pomoclock",
        description="Full-screen terminal pomodoro timer",
        epilog=epilog,
    )
    parser.add_argument("--headless", action="store_true", help="print settings and the cycle schedule, then exit")
    parser.add_argument("--config", type=Path, default=None, help="config file to use instead of the per-user one")
    parser.add_argument("--no-bell", action="store_true", help="do not ring the terminal bell when a phase ends")
    parser.add_argument(
        "--pause-between-phases",
        action="store_true",
        help="pause when a phase ends instead of starting the next one",
    )
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="INFO")
    parser.add_argument("--version", action="version", version=f"pomoclock {__version__}")
    return parser.parse_args(argv)


def _handle_sigterm(signum, frame) -> None:
    # unwinds through ui.run so the terminal is restored
    raise SystemExit(0)


def main(argv=None) -> int:
    args = parse_args(argv)
    config_path: Path = args.config or get_config_path()

    if args.headless:
        settings = load_settings(config_path)
        print(_headless_snapshot(settings, config_path))
        return 0

    level = "DEBUG" if os.environ.get("POMOCLOCK_KEYDEBUG") == "1" else args.log_level
    log = setup_logging(level, config_path.parent / "pomoclock.log")
    settings = ensure_config_file(config_path)
    log.info("Starting pomoclock %s with %s", __version__, settings)

    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        log.error("stdin/stdout is not a terminal")
        print("pomoclock: needs an interactive terminal (try --headless)", file=sys.stderr)
        return 1

    signal.signal(signal.SIGTERM, _handle_sigterm)

    import curses

    from .app import App
    from .ui import run

    app = App(
        settings,
        config_path=config_path,
        auto_continue=not args.pause_between_phases,
        bell=not args.no_bell,
    )
    try:
        run(app)
    except KeyboardInterrupt:
        log.info("Interrupted")
        return 0
    except curses.error as exc:
        log.error("Terminal error: %s", exc)
        print(f"pomoclock: cannot use this terminal: {exc}", file=sys.stderr)
        return 1
    log.info("Exited normally")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
