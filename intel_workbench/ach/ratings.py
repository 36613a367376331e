from dataclasses import dataclass, field
from typing import Dict, Optional

# ─── Weight Tables ─────────────────────────────────────────
RATING_WEIGHTS: Dict[str, float] = {
    "C": -1,   # Consistent, supports the hypothesis
    "I": 2,    # Inconsistent, contradicts the hypothesis
    "N": 0,    # Neutral
    "NA": 0,   # Not applicable
}

CREDIBILITY_WEIGHTS: Dict[str, float] = {
    "High": 3,
    "Medium": 2,
    "Low": 1,
}

RELEVANCE_WEIGHTS: Dict[str, float] = {
    "High": 1.5,
    "Medium": 1.0,
    "Low": 0.5,
}

# Multipliers used when an evidence row carries an unknown level
CREDIBILITY_FALLBACK = 1
RELEVANCE_FALLBACK = 1.0

RATING_LABELS = {
    "C": "Consistent",
    "I": "Inconsistent",
    "N": "Neutral",
    "NA": "N/A",
}

RATING_CYCLE = ("NA", "C", "I", "N")


@dataclass(frozen=True)
class WeightProfile:
    """
    The three lookup tables that drive ACH scoring.

    A profile is immutable once built; alternative profiles come from
    `intel_workbench.config.weights_loader.load_weight_profile`.
    """
    rating: Dict[str, float] = field(default_factory=lambda: dict(RATING_WEIGHTS))
    credibility: Dict[str, float] = field(default_factory=lambda: dict(CREDIBILITY_WEIGHTS))
    relevance: Dict[str, float] = field(default_factory=lambda: dict(RELEVANCE_WEIGHTS))
    credibility_fallback: float = CREDIBILITY_FALLBACK
    relevance_fallback: float = RELEVANCE_FALLBACK

    def rating_weight(self, rating: Optional[str]) -> float:
        return self.rating.get(rating, 0) if rating else 0

    def credibility_weight(self, level: Optional[str]) -> float:
        return self.credibility.get(level, self.credibility_fallback)

    def relevance_weight(self, level: Optional[str]) -> float:
        return self.relevance.get(level, self.relevance_fallback)


DEFAULT_WEIGHT_PROFILE = WeightProfile()


def rating_label(rating: Optional[str]) -> str:
    return RATING_LABELS.get(rating or "NA", RATING_LABELS["NA"])


def cycle_rating(current: Optional[str]) -> str:
    """
    Advance a cell rating one step: NA → C → I → N → NA.

    Unset cells start from NA; any other unrecognised value resets to NA.
    """
    if not current:
        current = "NA"
    if current not in RATING_CYCLE:
        return "NA"
    idx = RATING_CYCLE.index(current)
    return RATING_CYCLE[(idx + 1) % len(RATING_CYCLE)]
