import logging
import random

from game_logic import Dice, GameError, ScoreSheet
from scoring_rules import ALL_CATEGORIES

logger = logging.getLogger(__name__)

NUM_TURNS = len(ALL_CATEGORIES)


class GameOverError(GameError):
    """Raised when an action is attempted after the last turn."""


class GameManager:
    """Manages a single-player game: thirteen turns of roll, lock and score."""

    def __init__(self, rng=None):
        self.rng = rng or random.Random()
        self.dice = Dice(rng=self.rng)
        self.scoresheet = ScoreSheet()
        self.turn_number = 1

    def _check_not_over(self):
        if self.is_game_over():
            raise GameOverError("The game is over, all categories are scored.")

    def roll(self):
        """Rolls the unlocked dice and returns the new values."""
        self._check_not_over()
        return self.dice.roll()

    def toggle_lock(self, index):
        """Toggles the lock on a die (0-based). Returns the new lock state."""
        self._check_not_over()
        return self.dice.toggle_lock(index)

    def preview_scores(self):
        """Returns the candidate score of the current dice for every open category."""
        self._check_not_over()
        if self.dice.roll_count == 0:
            raise GameError("Roll the dice before previewing scores.")
        values = self.dice.get_values()
        return {
            category: self.scoresheet.get_potential_score(category, values)
            for category in self.scoresheet.get_available_categories()
        }

    def score_turn(self, category_name):
        """
        Records the current dice in a category and advances to the next turn.
        Returns the recorded score.
        """
        self._check_not_over()
        if self.dice.roll_count == 0:
            raise GameError("Roll the dice before scoring.")
        recorded = self.scoresheet.record_score(category_name, self.dice.get_values())
        logger.debug("Turn %d: scored %d in %s", self.turn_number, recorded, category_name)
        self.dice.reset_turn()
        if not self.scoresheet.is_complete():
            self.turn_number += 1
        return recorded

    def is_game_over(self):
        return self.scoresheet.is_complete()

    def final_score(self):
        """Returns the grand total once the game is over."""
        if not self.is_game_over():
            raise GameError("The game is not over yet.")
        return self.scoresheet.get_grand_total()
