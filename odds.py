import itertools
import logging
from typing import Dict, List, NamedTuple, Optional

import numpy as np

from scoring_rules import ALL_CATEGORIES, MAX_FACE, MIN_FACE, NUM_DICE, evaluate, get_rule

logger = logging.getLogger(__name__)


class CategoryOdds(NamedTuple):
    category: str
    hit_probability: float
    mean_score: float
    max_score: int


def all_hands() -> np.ndarray:
    """Every ordered hand of five dice, shape (6**5, 5)."""
    faces = range(MIN_FACE, MAX_FACE + 1)
    return np.array(list(itertools.product(faces, repeat=NUM_DICE)), dtype=np.int64)


def category_odds(categories: Optional[List[str]] = None) -> Dict[str, CategoryOdds]:
    """
    Scores every possible single roll in each category.

    Since every ordered hand is equally likely, the hit probability is the
    share of hands scoring above zero and the mean score is the expected
    score of one roll with no re-rolls.
    """
    categories = ALL_CATEGORIES if categories is None else categories
    rules = {category: get_rule(category) for category in categories}
    hands = all_hands()
    logger.debug("Enumerating %d hands for %d categories", len(hands), len(rules))

    odds = {}
    for category, rule in rules.items():
        scores = np.array([evaluate(rule, hand) for hand in hands])
        odds[category] = CategoryOdds(
            category=category,
            hit_probability=float(np.count_nonzero(scores)) / len(scores),
            mean_score=float(scores.mean()),
            max_score=int(scores.max()),
        )
    return odds


def format_odds(odds: Dict[str, CategoryOdds]) -> str:
    """Formats category odds as a text table."""
    lines = [f"{'Category':<15} {'Hit %':>8} {'Mean':>7} {'Max':>4}"]
    for entry in odds.values():
        lines.append(
            f"{entry.category:<15} {entry.hit_probability * 100:>7.2f}% {entry.mean_score:>7.2f} {entry.max_score:>4}"
        )
    return "\n".join(lines)
