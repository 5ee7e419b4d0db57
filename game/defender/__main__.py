"""Play Wave Defender with the keyboard: python -m game.defender"""

import argparse

from .render import run_human_game


def main():
    parser = argparse.ArgumentParser(description="Play Wave Defender")
    parser.add_argument("--width", type=int, default=800, help="Canvas width (default: 800)")
    parser.add_argument("--height", type=int, default=600, help="Canvas height (default: 600)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: none)")
    args = parser.parse_args()

    run_human_game(width=args.width, height=args.height, seed=args.seed)


if __name__ == "__main__":
    main()
