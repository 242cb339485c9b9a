import argparse
import logging
import random
import sys

from game_logic import GameError
from game_manager import NUM_TURNS, GameManager
from odds import category_odds, format_odds
from scoring_rules import ScoringError

logger = logging.getLogger(__name__)


def get_player_input(prompt, allowed_values=None):
    """Generic function to get and validate player input."""
    while True:
        user_input = input(prompt).strip()
        if not user_input:
            print("Input cannot be empty.")
            continue
        if allowed_values is not None and user_input not in allowed_values:
            print(f"Input must be one of: {', '.join(map(str, allowed_values))}")
            continue
        return user_input


def show_dice(dice):
    for i, die in enumerate(dice.dice):
        print(f"  Die {i + 1}: {die.value} {'[Locked]' if die.is_locked else ''}".rstrip())


def choose_locks(game):
    """Asks which dice to toggle; returns False once the player decides to score."""
    while True:
        show_dice(game.dice)
        action = get_player_input(
            f"Rolls left: {game.dice.rolls_left}. Enter dice numbers (1-5, comma-separated) to "
            "toggle their lock, 'r' to roll again or 's' to score: "
        ).lower()
        if action == 'r':
            return True
        if action == 's':
            return False
        try:
            indices = [int(x.strip()) - 1 for x in action.split(',') if x.strip()]
        except ValueError:
            print("Please enter die numbers, 'r' or 's'.")
            continue
        for index in indices:
            try:
                game.toggle_lock(index)
            except IndexError:
                print(f"Invalid die number: {index + 1}. Must be between 1 and {len(game.dice.dice)}.")


def choose_category(game):
    """Shows the preview and records the player's chosen category."""
    preview = game.preview_scores()
    print(game.scoresheet.format_scoresheet(preview))
    while True:
        category = get_player_input("Choose a category: ", allowed_values=list(preview))
        try:
            return category, game.score_turn(category)
        except (ScoringError, GameError) as e:
            print(f"Error: {e}")


def play_turn(game):
    """Manages a single turn: up to three rolls, then scoring."""
    print(f"\n--- Turn {game.turn_number} of {NUM_TURNS} ---")
    game.roll()
    while game.dice.rolls_left > 0 and choose_locks(game):
        game.roll()
    if game.dice.rolls_left == 0:
        print("No rolls left.")
        show_dice(game.dice)
    category, recorded = choose_category(game)
    print(f"Score of {recorded} recorded for {category}.")


def play_game(rng=None):
    game = GameManager(rng=rng)
    print("Welcome to Yahtzee!")
    while not game.is_game_over():
        play_turn(game)
    print()
    print(game.scoresheet.format_scoresheet())
    print(f"Final score: {game.final_score()}")
    return game.final_score()


def main(argv=None):
    parser = argparse.ArgumentParser(description='Play a single-player game of Yahtzee in the terminal')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for the dice, for a reproducible game')
    parser.add_argument('--odds', action='store_true',
                        help='Print the odds of scoring in each category with a single roll and exit')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level')
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level))

    if args.odds:
        print(format_odds(category_odds()))
        return 0

    logger.info("Starting game with seed %s", args.seed)
    try:
        play_game(random.Random(args.seed))
    except (KeyboardInterrupt, EOFError):
        print("\nGame aborted.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
