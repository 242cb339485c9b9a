import logging
import random

from scoring_rules import (
    ALL_CATEGORIES, LOWER_SECTION_CATEGORIES, MAX_FACE, MIN_FACE, NUM_DICE,
    UPPER_SECTION_CATEGORIES, UnknownCategoryError, score, validate_hand,
)

logger = logging.getLogger(__name__)

MAX_ROLLS = 3
UPPER_BONUS_THRESHOLD = 63
UPPER_BONUS = 35


class GameError(Exception):
    """Base class for errors in the flow of a game."""


class NoRollsLeftError(GameError):
    """Raised when the dice are rolled more than three times in a turn."""


class CategoryAlreadyScoredError(GameError):
    """Raised when a category that already has a score is scored again."""


class Die:
    """Represents a single die."""
    def __init__(self, rng=None):
        self._rng = rng or random
        self.value = self._rng.randint(MIN_FACE, MAX_FACE)
        self.is_locked = False

    def roll(self):
        """Rolls the die and updates its value if not locked."""
        if not self.is_locked:
            self.value = self._rng.randint(MIN_FACE, MAX_FACE)
        return self.value

    def __str__(self):
        return str(self.value)


class Dice:
    """Represents the five dice of a turn, with lock state and roll count."""
    def __init__(self, num_dice=NUM_DICE, rng=None):
        self.dice = [Die(rng) for _ in range(num_dice)]
        self.roll_count = 0

    @property
    def rolls_left(self):
        return MAX_ROLLS - self.roll_count

    def roll(self):
        """Rolls all dice that are not locked and returns the new values."""
        if self.roll_count >= MAX_ROLLS:
            raise NoRollsLeftError(f"You have already rolled {MAX_ROLLS} times this turn.")
        for die in self.dice:
            die.roll()
        self.roll_count += 1
        logger.debug("Roll %d: %s", self.roll_count, self.get_values())
        return self.get_values()

    def toggle_lock(self, index):
        """Toggles the locked status of a die (0-based index)."""
        if not 0 <= index < len(self.dice):
            raise IndexError(f"Invalid die index {index}, must be between 0 and {len(self.dice) - 1}")
        if self.roll_count == 0:
            raise GameError("Roll the dice before locking any of them.")
        die = self.dice[index]
        die.is_locked = not die.is_locked
        return die.is_locked

    def get_values(self):
        """Returns the current face values as a tuple."""
        return tuple(die.value for die in self.dice)

    def get_locked(self):
        return tuple(die.is_locked for die in self.dice)

    def reset_turn(self):
        """Resets the roll count and unlocks all dice for a new turn."""
        self.roll_count = 0
        for die in self.dice:
            die.is_locked = False

    def __str__(self):
        return " ".join(str(die) for die in self.dice)


class ScoreSheet:
    """Manages the scoresheet, section totals and recording scores."""
    def __init__(self):
        self.scores = {category: None for category in ALL_CATEGORIES}

    def get_potential_score(self, category_name, dice_values):
        """Calculates the potential score for a given category and dice values."""
        return score(category_name, dice_values)

    def record_score(self, category_name, dice_values):
        """Records the score for a category if it's not already scored.

        Returns the recorded score. The sheet is left untouched when the
        category is unknown, already scored, or the hand is malformed.
        """
        if category_name not in self.scores:
            raise UnknownCategoryError(category_name)
        if self.scores[category_name] is not None:
            raise CategoryAlreadyScoredError(
                f"Category '{category_name}' has already been scored ({self.scores[category_name]})."
            )
        dice_values = validate_hand(dice_values)
        score_to_record = self.get_potential_score(category_name, dice_values)
        self.scores[category_name] = score_to_record
        logger.debug("Recorded %d for %s", score_to_record, category_name)
        return score_to_record

    def get_upper_section_subtotal(self):
        """Calculates the subtotal for the upper section."""
        return sum(self.scores[cat] or 0 for cat in UPPER_SECTION_CATEGORIES)

    def get_upper_section_bonus(self):
        """Returns 35 if upper section subtotal is 63 or more, else 0."""
        return UPPER_BONUS if self.get_upper_section_subtotal() >= UPPER_BONUS_THRESHOLD else 0

    def get_total_upper_score(self):
        return self.get_upper_section_subtotal() + self.get_upper_section_bonus()

    def get_lower_section_score(self):
        return sum(self.scores[cat] or 0 for cat in LOWER_SECTION_CATEGORIES)

    def get_grand_total(self):
        return self.get_total_upper_score() + self.get_lower_section_score()

    def get_available_categories(self):
        """Returns a list of categories that have not yet been scored."""
        return [cat for cat, recorded in self.scores.items() if recorded is None]

    def is_complete(self):
        """Checks if all categories have been scored."""
        return all(recorded is not None for recorded in self.scores.values())

    def format_scoresheet(self, preview=None):
        """Returns a printable scoresheet.

        preview maps open categories to candidate scores, shown in
        parentheses next to the category.
        """
        preview = preview or {}

        def row(cat):
            if self.scores[cat] is not None:
                shown = str(self.scores[cat])
            elif cat in preview:
                shown = f"({preview[cat]})"
            else:
                shown = "-"
            return f"  {cat:<15}: {shown:>4}"

        lines = ["--- Scoresheet ---", "Upper Section:"]
        lines.extend(row(cat) for cat in UPPER_SECTION_CATEGORIES)
        lines.append(f"  {'Upper Subtotal':<15}: {self.get_upper_section_subtotal():>4}")
        lines.append(f"  {'Bonus (>=63)':<15}: {self.get_upper_section_bonus():>4}")
        lines.append(f"  {'Total Upper':<15}: {self.get_total_upper_score():>4}")
        lines.append("Lower Section:")
        lines.extend(row(cat) for cat in LOWER_SECTION_CATEGORIES)
        lines.append(f"  {'Total Lower':<15}: {self.get_lower_section_score():>4}")
        lines.append(f"  {'GRAND TOTAL':<15}: {self.get_grand_total():>4}")
        lines.append("------------------")
        return "\n".join(lines)
