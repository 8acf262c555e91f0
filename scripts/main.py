# scripts/main.py

from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path

from asteroid_arena.core import GameConfig, run_game
from asteroid_arena.presets.basic import PILOTS, load_config, make_game
from asteroid_arena.render.plotting import save_frame
from asteroid_arena.utils.cli import build_parser
from asteroid_arena.utils.random import seed_all, rng

PROJECT_ROOT = Path(__file__).parent.parent

logger = logging.getLogger("asteroid_arena.main")


def main():
    parser = build_parser()
    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    seed_all(args.seed)

    # 1. Build config and game
    config = GameConfig.from_args(args, base=load_config(args.preset))
    game = make_game(config, seed=args.seed)
    pilot = PILOTS[args.pilot]()
    if args.pilot == "random":
        pilot.rng = rng("pilot")

    # 2. Run headless and record
    recording = run_game(game, args.frames, inputs=pilot, log_interval=args.log_interval)
    recording.meta = {
        "config": asdict(config),
        "seed": args.seed,
        "pilot": args.pilot,
    }

    # 3. Summary
    counts = recording.event_counts()
    logger.info(
        "finished %d frames: phase=%s score=%d wave=%d lives=%d",
        game.frame, game.phase.value, game.score, game.wave, game.lives,
    )
    for name, n in sorted(counts.items()):
        logger.info("  %-16s %d", name, n)

    # 4. Optional final-frame image
    if args.plot_path is not None and recording.frames:
        out = save_frame(recording.frames[-1], config.width, config.height, PROJECT_ROOT / args.plot_path)
        logger.info("final frame saved to %s", out)


if __name__ == "__main__":
    main()
