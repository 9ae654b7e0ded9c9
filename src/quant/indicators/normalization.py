"""Score normalization and weight redistribution.

Maps raw indicator values onto a 0-100 score with a logistic curve and
combines scored components into a weighted average whose weights are
renormalized over the components actually present.

CRITICAL: All computations use Decimal. Never use float.
"""

from dataclasses import dataclass
from decimal import Decimal

_HUNDRED = Decimal("100")
_NEUTRAL = Decimal("50")

#: Exponent clamp for the logistic curve. exp(+-60) already saturates the
#: score to 0/100 at 12 decimal places.
_MAX_EXPONENT = Decimal("60")


@dataclass(frozen=True)
class ScoreComponent:
    """One input to a weighted composite.

    Only present components are ever constructed; an absent input is
    simply left out of the list.
    """

    score: Decimal
    weight: Decimal
    label: str


def clamp(value: Decimal, low: Decimal, high: Decimal) -> Decimal:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def linear_scale(
    value: Decimal, low: Decimal, high: Decimal, invert: bool = False
) -> Decimal:
    """Map value from [low, high] onto 0-100, clamped.

    With ``invert`` the mapping runs the other way (low -> 100, high -> 0).
    """
    span = high - low
    if span == 0:
        return _NEUTRAL
    if invert:
        scaled = (high - value) / span * _HUNDRED
    else:
        scaled = (value - low) / span * _HUNDRED
    return clamp(scaled, Decimal("0"), _HUNDRED)


def sigmoid_normalize(
    value: Decimal, average: Decimal, k: Decimal = Decimal("3.0")
) -> Decimal:
    """Rescale a raw value to 0-100 around a reference level.

    Formula (average != 0):  100 / (1 + exp(-k * (value / average - 1)))
    Formula (average == 0):  100 / (1 + exp(-k * value))

    The zero-average form serves zero-centered inputs such as funding
    rates. A value equal to its average (or zero, for zero-centered
    inputs) scores exactly 50, and the score is monotonically
    non-decreasing in value for positive averages.

    Args:
        value: Raw observation.
        average: Reference level that maps to 50. Zero selects the
            zero-centered form.
        k: Steepness of the curve.

    Returns:
        Score in [0, 100].
    """
    if average == 0:
        x = value
    else:
        x = value / average - Decimal("1")

    exponent = clamp(-k * x, -_MAX_EXPONENT, _MAX_EXPONENT)
    score = _HUNDRED / (Decimal("1") + exponent.exp())
    return clamp(score, Decimal("0"), _HUNDRED)


def redistribute_weights(components: list[ScoreComponent]) -> list[ScoreComponent]:
    """Renormalize component weights so the present weights sum to 1.

    Weight that would have belonged to absent inputs is spread
    proportionally over the components supplied. Returns an empty list
    when the supplied weights sum to zero.
    """
    total = sum((c.weight for c in components), Decimal("0"))
    if total <= 0:
        return []
    return [
        ScoreComponent(score=c.score, weight=c.weight / total, label=c.label)
        for c in components
    ]


def weighted_average(components: list[ScoreComponent]) -> tuple[Decimal, list[str]]:
    """Weighted average of 0-100 scores over the present components.

    Args:
        components: Present components only.

    Returns:
        Tuple of (score clamped to [0, 100], component labels in input order).
        Neutral (50, []) when the weights sum to zero.
    """
    normalized = redistribute_weights(components)
    if not normalized:
        return _NEUTRAL, []

    score = sum((c.score * c.weight for c in normalized), Decimal("0"))
    return clamp(score, Decimal("0"), _HUNDRED), [c.label for c in normalized]
