from __future__ import annotations

import argparse
import logging
import math
from typing import Optional

import pygame

from clusters_puzzle.data import SAMPLE_PUZZLE, load_puzzle
from clusters_puzzle.game import ClustersGame, GameConfig, Puzzle
from .renderer import PreviewTarget, Renderer


logger = logging.getLogger(__name__)

# How long the shake plays after a failed merge; clicks are ignored meanwhile
SHAKE_DURATION_MS = 400

SHAKE_AMPLITUDE_PX = 6


def run(puzzle: Optional[Puzzle] = None, seed: Optional[int] = None) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = ClustersGame(puzzle or SAMPLE_PUZZLE, GameConfig(random_seed=seed))
        renderer = Renderer()

        screen = pygame.display.set_mode(renderer.window_size(game))
        pygame.display.set_caption("Clusters - Human Play")
        font = pygame.font.SysFont(None, 20)

        shake_started: Optional[int] = None
        # Cluster or trophy whose items are listed in a modal panel
        preview: Optional[PreviewTarget] = None

        running = True
        while running:
            now = pygame.time.get_ticks()
            if shake_started is not None and now - shake_started >= SHAKE_DURATION_MS:
                game.clear_shake()
                shake_started = None

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif preview is not None:
                    if event.type in (pygame.KEYDOWN, pygame.MOUSEBUTTONDOWN):
                        preview = None
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        game.reset()
                        shake_started = None
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 3:
                    preview = renderer.preview_target(game, event.pos)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    if shake_started is not None:
                        continue
                    square_id = renderer.hit_test(game, event.pos)
                    if square_id is None:
                        continue
                    result = game.select_square(square_id)
                    if result is not None and not result.success:
                        shake_started = now
                    elif result is not None and result.solved_category is not None:
                        logger.info(f"Revealed {result.solved_category.name}")

            offset = 0
            if shake_started is not None:
                offset = int(SHAKE_AMPLITUDE_PX * math.sin((now - shake_started) / 25.0))
            renderer.draw(screen, game, font, shake_offset=offset, preview=preview)

            clock.tick(60)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Clusters with the mouse")
    p.add_argument("--seed", type=int, default=None, help="Seed for the grid shuffle")
    p.add_argument("--puzzle", type=str, default=None, help="Path to a puzzle JSON file")
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    puzzle = load_puzzle(args.puzzle) if args.puzzle else SAMPLE_PUZZLE
    run(puzzle, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
