import math
from pathlib import Path
from typing import Dict, List, Optional
from intel_workbench.ach.ratings import WeightProfile, DEFAULT_WEIGHT_PROFILE
from intel_workbench.config.weights_loader import load_weight_profile
from intel_workbench.reports.models import AchMatrix, HypothesisScore
from intel_workbench.utils.logger import get_logger

logger = get_logger()


class AchScoringEngine:
    """
    Weighted-inconsistency scoring for an ACH matrix.

    Each rated cell contributes ``rating × credibility × relevance``. Lower
    totals mean a hypothesis is better supported; positive totals mean it is
    contradicted by the evidence. Missing ratings contribute nothing.
    """
    NEUTRAL_NORMALIZED = 50

    def __init__(self, profile: Optional[WeightProfile] = None, profile_path: Optional[Path] = None):
        if profile is not None:
            self.profile = profile
        elif profile_path is not None:
            self.profile = self._load_profile(profile_path)
        else:
            self.profile = DEFAULT_WEIGHT_PROFILE

    @staticmethod
    def _load_profile(path: Path) -> WeightProfile:
        try:
            return load_weight_profile(path)
        except Exception as ex:
            logger.warning(f"[AchScoringEngine] Failed to load weight profile: {ex}. Using default weights.")
            return DEFAULT_WEIGHT_PROFILE

    def score(self, matrix: AchMatrix, hypothesis_id: str) -> float:
        total = 0
        for evidence in matrix.evidence:
            rating = matrix.ratings.get(evidence.id, {}).get(hypothesis_id)
            if not rating:
                continue
            total += (
                self.profile.rating_weight(rating)
                * self.profile.credibility_weight(evidence.credibility)
                * self.profile.relevance_weight(evidence.relevance)
            )
        return total

    def score_all(self, matrix: AchMatrix) -> Dict[str, float]:
        return {h.id: self.score(matrix, h.id) for h in matrix.hypotheses}

    def find_preferred(self, matrix: AchMatrix) -> Optional[str]:
        # Strict less-than keeps the earliest hypothesis on ties
        preferred_id, min_score = None, math.inf
        for hypothesis_id, value in self.score_all(matrix).items():
            if value < min_score:
                min_score = value
                preferred_id = hypothesis_id
        return preferred_id

    def normalize(self, matrix: AchMatrix) -> Dict[str, int]:
        scores = self.score_all(matrix)
        if not scores:
            return {}

        low, high = min(scores.values()), max(scores.values())
        spread = high - low
        if spread == 0:
            return {hypothesis_id: self.NEUTRAL_NORMALIZED for hypothesis_id in scores}

        return {
            hypothesis_id: _round_half_up((value - low) / spread * 100)
            for hypothesis_id, value in scores.items()
        }

    def rank(self, matrix: AchMatrix) -> List[HypothesisScore]:
        """Hypotheses ordered from most to least supported; ties keep matrix order."""
        scores = self.score_all(matrix)
        normalized = self.normalize(matrix)
        preferred_id = self.find_preferred(matrix)
        ranked = [
            HypothesisScore(
                hypothesis_id=h.id,
                name=h.name,
                score=scores[h.id],
                normalized=normalized[h.id],
                preferred=h.id == preferred_id,
            )
            for h in matrix.hypotheses
        ]
        return sorted(ranked, key=lambda s: s.score)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


_default_engine = AchScoringEngine()


def score(matrix: AchMatrix, hypothesis_id: str) -> float:
    return _default_engine.score(matrix, hypothesis_id)


def score_all(matrix: AchMatrix) -> Dict[str, float]:
    return _default_engine.score_all(matrix)


def find_preferred(matrix: AchMatrix) -> Optional[str]:
    return _default_engine.find_preferred(matrix)


def normalize(matrix: AchMatrix) -> Dict[str, int]:
    return _default_engine.normalize(matrix)


def rank(matrix: AchMatrix) -> List[HypothesisScore]:
    return _default_engine.rank(matrix)
