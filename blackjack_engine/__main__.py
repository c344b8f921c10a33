"""
Demo runner: auto-plays rounds on one shoe and prints them.

    python -m blackjack_engine --players 2 --bet 100 --decks 1 --seed 7
"""

import argparse
import logging
import sys

from blackjack_engine.config import GameConfig, config
from blackjack_engine.console import ConsoleView
from blackjack_engine.errors import BlackjackError
from blackjack_engine.game.engine import RoundEngine
from blackjack_engine.game.state import RoundState

logger = logging.getLogger(__name__)

# Simple player strategy: hit until 17 or more
STAND_ON = 17


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    game = config.game
    parser = argparse.ArgumentParser(description="Auto-play blackjack rounds")

    parser.add_argument("--decks", type=int, default=game.num_decks, help="Decks in the shoe")
    parser.add_argument(
        "--penetration",
        type=float,
        default=game.penetration,
        help="Fraction of the shoe dealt before a reshuffle",
    )
    parser.add_argument(
        "--h17",
        action=argparse.BooleanOptionalAction,
        default=game.dealer_hits_soft_17,
        help="Dealer hits soft 17",
    )
    parser.add_argument("--players", type=int, default=config.num_players, help="Player seats")
    parser.add_argument("--bet", type=float, default=config.default_bet, help="Wager per seat")
    parser.add_argument("--seed", type=int, default=game.seed, help="Shuffle seed")
    parser.add_argument("--rounds", type=int, default=1, help="Rounds to play on the same shoe")
    parser.add_argument("--log-level", default=config.log_level, help="Logging level")

    return parser.parse_args(argv)


def autoplay(engine: RoundEngine) -> None:
    """Play every player hand: hit below STAND_ON, otherwise stand."""
    while engine.state == RoundState.PLAYER_TURN:
        hand = engine.active_hand
        shoe_empty = engine.shoe.cards_remaining == 0 and engine.shoe.discard_count == 0
        if hand.total < STAND_ON and not shoe_empty:
            engine.player_hit()
        else:
            engine.player_stand()


def run(args: argparse.Namespace) -> float:
    """Run the demo; returns the combined net result of every round."""
    game_config = GameConfig(
        num_decks=args.decks,
        penetration=args.penetration,
        dealer_hits_soft_17=args.h17,
        seed=args.seed,
    )
    engine = RoundEngine(game_config)
    ConsoleView().attach(engine)

    print("=== Blackjack Demo ===")
    print(f"Players: {args.players}  |  Bet: {args.bet:g}  |  Decks: {args.decks}")

    total_net = 0.0
    for round_number in range(1, args.rounds + 1):
        if round_number > 1:
            engine.new_round()
        logger.info("Round %d, %d cards live", round_number, engine.shoe.cards_remaining)
        engine.place_bets([args.bet] * args.players)
        autoplay(engine)
        total_net += sum(result.net for result in engine.results)

    return total_net


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_arguments(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        total_net = run(args)
    except (ValueError, BlackjackError) as exc:
        logger.error("Invalid table configuration: %s", exc)
        sys.exit(2)

    print(f"Net across all seats: {total_net:+g}")


if __name__ == "__main__":
    main()
