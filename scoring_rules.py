import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from numbers import Integral
from types import MappingProxyType
from typing import Dict, Sequence, Tuple

logger = logging.getLogger(__name__)

NUM_DICE = 5
MIN_FACE = 1
MAX_FACE = 6

# Constants for scoring categories
ONES = "ones"
TWOS = "twos"
THREES = "threes"
FOURS = "fours"
FIVES = "fives"
SIXES = "sixes"
THREE_OF_A_KIND = "threeOfKind"
FOUR_OF_A_KIND = "fourOfKind"
FULL_HOUSE = "fullHouse"
SMALL_STRAIGHT = "smallStraight"
LARGE_STRAIGHT = "largeStraight"
YAHTZEE = "yahtzee"
CHANCE = "chance"

UPPER_SECTION_CATEGORIES = [ONES, TWOS, THREES, FOURS, FIVES, SIXES]
LOWER_SECTION_CATEGORIES = [THREE_OF_A_KIND, FOUR_OF_A_KIND, FULL_HOUSE, SMALL_STRAIGHT, LARGE_STRAIGHT, YAHTZEE, CHANCE]
ALL_CATEGORIES = UPPER_SECTION_CATEGORIES + LOWER_SECTION_CATEGORIES


class ScoringError(Exception):
    """Base class for rule engine errors."""


class InvalidHandError(ScoringError, ValueError):
    """Raised when a hand is not exactly five dice valued 1-6."""


class UnknownCategoryError(ScoringError, KeyError):
    """Raised when a category name is not in the registry."""

    def __str__(self):
        return f"Unknown category: {self.args[0]!r}"


class RuleKind(Enum):
    SINGLE_VALUE = "single_value"
    DISTRIBUTION = "distribution"
    FULL_HOUSE = "full_house"
    SMALL_STRAIGHT = "small_straight"
    LARGE_STRAIGHT = "large_straight"
    ALL_SAME = "all_same"


@dataclass(frozen=True)
class Rule:
    """A configured scoring policy.

    Only the parameter its kind reads is set: ``value`` for single-value
    totals, ``threshold`` for distribution totals, ``payout`` for the
    flat-payout kinds.
    """
    kind: RuleKind
    value: int = 0
    threshold: int = 0
    payout: int = 0


def validate_hand(hand: Sequence[int]) -> Tuple[int, ...]:
    """Checks the shape of a hand and returns it as a tuple."""
    try:
        dice = tuple(hand)
    except TypeError:
        raise InvalidHandError(f"Hand must be a sequence of {NUM_DICE} dice, got {hand!r}") from None
    if len(dice) != NUM_DICE:
        raise InvalidHandError(f"Hand must contain exactly {NUM_DICE} dice, got {len(dice)}")
    for die in dice:
        if isinstance(die, bool) or not isinstance(die, Integral) or not MIN_FACE <= die <= MAX_FACE:
            raise InvalidHandError(f"Die values must be integers between {MIN_FACE} and {MAX_FACE}, got {die!r}")
    return tuple(int(die) for die in dice)


# --- Shared helpers ---

def dice_sum(hand):
    """Sum of all dice."""
    return sum(hand)


def count(hand, value):
    """Number of times value appears in the hand."""
    return sum(1 for die in hand if die == value)


def frequencies(hand) -> Dict[int, int]:
    """Occurrence count of each face, in first-seen order."""
    return dict(Counter(hand))


# --- Matching policies ---

def total_one_number(rule: Rule, hand) -> int:
    return rule.value * count(hand, rule.value)


def sum_distribution(rule: Rule, hand) -> int:
    # threshold 0 always matches, which is how chance is scored
    if any(c >= rule.threshold for c in frequencies(hand).values()):
        return dice_sum(hand)
    return 0


def full_house(rule: Rule, hand) -> int:
    return rule.payout if sorted(frequencies(hand).values()) == [2, 3] else 0


def small_straight(rule: Rule, hand) -> int:
    """2-3-4 or 3-4-5, unless both faces flanking that run are present."""
    faces = set(hand)
    if {2, 3, 4} <= faces and not {1, 5} <= faces:
        return rule.payout
    if {3, 4, 5} <= faces and not {2, 6} <= faces:
        return rule.payout
    return 0


def large_straight(rule: Rule, hand) -> int:
    faces = set(hand)
    return rule.payout if len(faces) == NUM_DICE and not {1, 6} <= faces else 0


def all_same(rule: Rule, hand) -> int:
    return rule.payout if list(frequencies(hand).values()) == [NUM_DICE] else 0


_POLICIES = {
    RuleKind.SINGLE_VALUE: total_one_number,
    RuleKind.DISTRIBUTION: sum_distribution,
    RuleKind.FULL_HOUSE: full_house,
    RuleKind.SMALL_STRAIGHT: small_straight,
    RuleKind.LARGE_STRAIGHT: large_straight,
    RuleKind.ALL_SAME: all_same,
}


def evaluate(rule: Rule, hand: Sequence[int]) -> int:
    """Scores a hand against a single rule."""
    return _POLICIES[rule.kind](rule, validate_hand(hand))


RULES = MappingProxyType({
    # ones, twos, etc score as sum of that value
    ONES: Rule(RuleKind.SINGLE_VALUE, value=1),
    TWOS: Rule(RuleKind.SINGLE_VALUE, value=2),
    THREES: Rule(RuleKind.SINGLE_VALUE, value=3),
    FOURS: Rule(RuleKind.SINGLE_VALUE, value=4),
    FIVES: Rule(RuleKind.SINGLE_VALUE, value=5),
    SIXES: Rule(RuleKind.SINGLE_VALUE, value=6),
    # three/four of kind score as sum of all dice
    THREE_OF_A_KIND: Rule(RuleKind.DISTRIBUTION, threshold=3),
    FOUR_OF_A_KIND: Rule(RuleKind.DISTRIBUTION, threshold=4),
    FULL_HOUSE: Rule(RuleKind.FULL_HOUSE, payout=25),
    SMALL_STRAIGHT: Rule(RuleKind.SMALL_STRAIGHT, payout=30),
    LARGE_STRAIGHT: Rule(RuleKind.LARGE_STRAIGHT, payout=40),
    YAHTZEE: Rule(RuleKind.ALL_SAME, payout=50),
    CHANCE: Rule(RuleKind.DISTRIBUTION, threshold=0),
})


def get_rule(category_name: str) -> Rule:
    """Returns the configured rule for a category name."""
    try:
        return RULES[category_name]
    except KeyError:
        raise UnknownCategoryError(category_name) from None


def score(category_name: str, hand: Sequence[int]) -> int:
    """Calculates the score of a hand in the given category."""
    rule = get_rule(category_name)
    dice = validate_hand(hand)
    result = evaluate(rule, dice)
    logger.debug("Scored %s for %s: %d", dice, category_name, result)
    return result


def score_all(hand: Sequence[int]) -> Dict[str, int]:
    """Calculates the score of a hand in every category, in sheet order."""
    dice = validate_hand(hand)
    return {category: evaluate(rule, dice) for category, rule in RULES.items()}
