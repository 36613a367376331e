import yaml
from pathlib import Path
from typing import Any, Dict, Iterable
from intel_workbench.ach.ratings import (
    WeightProfile,
    RATING_WEIGHTS,
    CREDIBILITY_WEIGHTS,
    RELEVANCE_WEIGHTS,
    CREDIBILITY_FALLBACK,
    RELEVANCE_FALLBACK,
)
from intel_workbench.utils.logger import get_logger

logger = get_logger()


def validate_section(section_name: str, section: Any, allowed_keys: Iterable[str]) -> Dict[str, float]:
    if not isinstance(section, dict):
        raise ValueError(f"[WeightsLoader] '{section_name}' must be a dict, got {type(section).__name__}")

    allowed = set(allowed_keys)
    normalized = {}
    for key, value in section.items():
        if not isinstance(key, str):
            raise ValueError(f"[WeightsLoader] Invalid key in '{section_name}': {key} (must be str)")
        key = key.strip()
        if key not in allowed:
            raise ValueError(f"[WeightsLoader] Unknown key '{key}' in '{section_name}' (expected one of {sorted(allowed)})")
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"[WeightsLoader] Invalid weight for key '{key}' in '{section_name}': {value} (must be a number)")
        normalized[key] = value

    return normalized


def _fallback_value(fallback: Dict[str, Any], key: str, default: float) -> float:
    value = fallback.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"[WeightsLoader] Invalid fallback for '{key}': {value} (must be a number)")
    return value


def load_weight_profile(path: Path) -> WeightProfile:
    """
    Load an ACH weighting profile from YAML.

    Sections missing from the file keep their default tables; keys present in a
    section override the matching defaults.
    """
    try:
        with path.open("r", encoding="utf-8") as f:
            config = yaml.safe_load(f)

        if not isinstance(config, dict):
            raise ValueError("[WeightsLoader] YAML root must be a dictionary")

        rating = {**RATING_WEIGHTS, **validate_section("rating", config.get("rating", {}), RATING_WEIGHTS)}
        credibility = {**CREDIBILITY_WEIGHTS,
                       **validate_section("credibility", config.get("credibility", {}), CREDIBILITY_WEIGHTS)}
        relevance = {**RELEVANCE_WEIGHTS,
                     **validate_section("relevance", config.get("relevance", {}), RELEVANCE_WEIGHTS)}

        fallback = config.get("fallback", {})
        if not isinstance(fallback, dict):
            raise ValueError(f"[WeightsLoader] 'fallback' must be a dict, got {type(fallback).__name__}")

        profile = WeightProfile(
            rating=rating,
            credibility=credibility,
            relevance=relevance,
            credibility_fallback=_fallback_value(fallback, "credibility", CREDIBILITY_FALLBACK),
            relevance_fallback=_fallback_value(fallback, "relevance", RELEVANCE_FALLBACK),
        )
        logger.info(f"[WeightsLoader] Weight profile loaded from {path}")
        return profile

    except Exception as ex:
        logger.error(f"[WeightsLoader] Failed to load or validate weight profile: {ex}")
        raise
