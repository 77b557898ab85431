"""chrono-engine — Chrono-Energy puzzle rule engine.

This is the application entry point.  It wires the EnergyModel,
PatternMatcher, FragmentGenerator, PuzzleSession and SessionRunner
together from configuration.
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from chrono_engine.config import Settings, settings
from chrono_engine.core.energy import EnergyConfig, EnergyModel
from chrono_engine.core.generator import FragmentGenerator
from chrono_engine.core.matcher import PatternMatcher
from chrono_engine.domain.board import Board
from chrono_engine.domain.snapshot import SessionSnapshot
from chrono_engine.session.puzzle_session import PuzzleSession
from chrono_engine.session.runner import SessionRunner

logger = logging.getLogger(__name__)


# ── Logging ──────────────────────────────────────────────────────────────────

def configure_logging(cfg: Settings = settings) -> None:
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


# ── Wiring ───────────────────────────────────────────────────────────────────

def build_session(cfg: Settings = settings) -> PuzzleSession:
    """Construct a fresh PuzzleSession from *cfg*."""
    energy_model = EnergyModel(
        EnergyConfig(
            base_capacity=cfg.base_capacity,
            base_regen_rate=cfg.base_regen_rate,
            low_energy_threshold=cfg.low_energy_threshold,
        )
    )
    return PuzzleSession(
        board=Board(width=cfg.board_width, height=cfg.board_height),
        energy_model=energy_model,
        matcher=PatternMatcher(),
        generator=FragmentGenerator(seed=cfg.rng_seed),
        initial_energy=cfg.initial_energy,
        initial_level=cfg.initial_level,
        upgrades=cfg.upgrades,
        strict_contracts=cfg.strict_contracts,
    )


def build_runner(cfg: Settings = settings) -> SessionRunner:
    return SessionRunner(
        build_session(cfg),
        tick_interval=cfg.regen_tick_seconds,
        min_gain=cfg.regen_min_gain,
    )


# ── Headless play ────────────────────────────────────────────────────────────

async def run_headless(runner: SessionRunner, duration: float) -> SessionSnapshot:
    """Start a session, let energy regenerate for *duration* seconds, stop."""
    runner.session.subscribe(lambda event: logger.info("Notification: %s", event.message))
    await runner.start()
    runner.start_background()
    try:
        await asyncio.sleep(duration)
    finally:
        await runner.stop()
    snapshot = await runner.snapshot()
    logger.info("Final state: %s", snapshot.summary())
    return snapshot


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="chrono-engine", description=__doc__)
    parser.add_argument(
        "--duration",
        type=float,
        default=5.0,
        help="Seconds to run the headless session for",
    )
    args = parser.parse_args(argv)

    configure_logging(settings)
    logger.info("Starting %s", settings.app_name)
    asyncio.run(run_headless(build_runner(settings), args.duration))


if __name__ == "__main__":
    main()
