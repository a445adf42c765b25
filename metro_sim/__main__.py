"""Entry point: ``python -m metro_sim``.

Supports two modes:
  - ``python -m metro_sim``            → Launch FastAPI server with the engine ticking
  - ``python -m metro_sim cli``        → Headless simulation with scripted anomalies
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Metro Shuttle Simulation")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--journal-dir", type=str, default=None, help="Directory for the event journal")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a headless simulation")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--ticks", type=int, default=2000)
    cli.add_argument("--journal-dir", type=str, default=None, help="Directory for the event journal")
    cli.add_argument("--mining-at", type=int, action="append", default=[], metavar="TICK",
                     help="Toggle mining before this tick (repeatable)")
    cli.add_argument("--fall-at", type=int, action="append", default=[], metavar="TICK",
                     help="Drop or clear a fallen man before this tick (repeatable)")
    cli.add_argument("--break-at", type=int, action="append", default=[], metavar="TICK",
                     help="Break or repair carriages before this tick (repeatable)")
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from metro_sim.api.app import create_app
    from metro_sim.config import SimulationConfig

    config = SimulationConfig(
        seed=args.seed,
        journal_dir=args.journal_dir,
        log_level=args.log_level,
    )
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from metro_sim.config import SimulationConfig
    from metro_sim.engine.simulation import Simulation
    from metro_sim.utils.journal import JournalWriter
    from metro_sim.utils.logging import setup_logging

    config = SimulationConfig(
        seed=args.seed,
        max_ticks=args.ticks,
        journal_dir=args.journal_dir,
        log_level=args.log_level,
    )
    setup_logging(config.log_level)

    sim = Simulation(config)
    journal = JournalWriter(config.journal_dir, config.journal_file) if config.journal_dir else None

    script: dict[int, list] = {}
    for tick in args.mining_at:
        script.setdefault(tick, []).append(sim.toggle_mining)
    for tick in args.fall_at:
        script.setdefault(tick, []).append(sim.drop_or_clear_fallen_man)
    for tick in args.break_at:
        script.setdefault(tick, []).append(sim.toggle_break)

    logger.info("=== Simulation started (seed=%d) ===", config.seed)
    total_events = 0
    while sim.state.tick < config.max_ticks:
        emitted = [e for command in script.get(sim.state.tick, []) if (e := command()) is not None]
        snapshot, events = sim.tick()
        emitted.extend(events)
        total_events += len(emitted)
        if journal is not None:
            journal.write_events(emitted)

        if snapshot.tick % 500 == 0:
            logger.info("Tick %d: %d carriages on track", snapshot.tick, len(snapshot.carriages))

    logger.info("=== Simulation finished at tick %d (%d events) ===", sim.state.tick, total_events)
    if journal is not None:
        logger.info("Journal written to %s", journal.path)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            # Re-parse with serve defaults
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
