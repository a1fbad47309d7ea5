"""Command-line entry point that runs the game loop at a fixed frame rate."""

from __future__ import annotations

import argparse

import pygame

from thebeast.game import WINDOW_SIZE, Game

FPS = 60
FRAME_DELAY = 1000 // FPS


def main(argv=None) -> int:
    """Run the game until its window is closed."""
    parser = argparse.ArgumentParser(prog="thebeast", description="Play The Beast.")
    parser.parse_args(argv)

    game = Game()
    game.init("The Beast", None, None, *WINDOW_SIZE, False)

    while game.running():
        frame_start = pygame.time.get_ticks()
        game.handle_events()
        game.update()
        game.render()
        frame_time = pygame.time.get_ticks() - frame_start
        if FRAME_DELAY > frame_time:
            pygame.time.delay(FRAME_DELAY - frame_time)

    game.clean()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())