"""Technical rating aggregation.

Folds a signal set into one consensus rating: the share of BUY actions among
all signals, mapped onto five labelled bands.
"""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from stockta.analysis.signals import Action, Signal
from stockta.config.constants import (
    RATING_BUY,
    RATING_COLORS,
    RATING_DEFAULT_SCORE,
    RATING_NEUTRAL,
    RATING_SELL,
    RATING_STRONG_BUY,
)


class RatingLabel(str, Enum):
    STRONG_BUY = "Strong Buy"
    BUY = "Buy"
    NEUTRAL = "Neutral"
    SELL = "Sell"
    STRONG_SELL = "Strong Sell"


@dataclass(frozen=True)
class TechnicalRating:
    """
    Aggregate rating across all signals.

    Attributes:
        label: Rating band
        score: Percentage of signals recommending BUY (0-100)
        color: Display color for the band
        buy_count: Number of BUY signals
        sell_count: Number of SELL signals
        hold_count: Number of HOLD signals
        total: Number of signals rated
    """

    label: RatingLabel
    score: float
    color: str
    buy_count: int = 0
    sell_count: int = 0
    hold_count: int = 0
    total: int = 0

    def to_dict(self) -> dict:
        """Convert rating to a JSON-friendly dictionary."""
        return {
            "rating": self.label.value,
            "score": round(self.score, 2),
            "color": self.color,
            "buy": self.buy_count,
            "sell": self.sell_count,
            "hold": self.hold_count,
            "total": self.total,
        }

    def __repr__(self) -> str:
        return f"TechnicalRating({self.label.value}, score={self.score:.1f}, signals={self.total})"


def label_for_score(score: float) -> RatingLabel:
    """Map a 0-100 BUY share onto its rating band."""
    if score >= RATING_STRONG_BUY:
        return RatingLabel.STRONG_BUY
    if score >= RATING_BUY:
        return RatingLabel.BUY
    if score >= RATING_NEUTRAL:
        return RatingLabel.NEUTRAL
    if score >= RATING_SELL:
        return RatingLabel.SELL
    return RatingLabel.STRONG_SELL


def rate(signals: Iterable[Signal]) -> TechnicalRating:
    """Aggregate signals into a technical rating.

    ``score = BUY count / signal count * 100``. The result depends only on the
    multiset of actions, not on signal order. An empty signal set rates
    Neutral with score 50.

    Args:
        signals: Signals to aggregate

    Returns:
        TechnicalRating
    """
    actions = Counter(signal.action for signal in signals)
    total = sum(actions.values())

    if total == 0:
        label = RatingLabel.NEUTRAL
        return TechnicalRating(
            label=label, score=RATING_DEFAULT_SCORE, color=RATING_COLORS[label.value]
        )

    score = actions[Action.BUY] / total * 100
    label = label_for_score(score)
    return TechnicalRating(
        label=label,
        score=score,
        color=RATING_COLORS[label.value],
        buy_count=actions[Action.BUY],
        sell_count=actions[Action.SELL],
        hold_count=actions[Action.HOLD],
        total=total,
    )
