"""Transfer Probability Score – single source of truth.

This module provides the **only** computation of the transfer probability.
The CLI, the FastAPI endpoints and the MCP server all call
``compute_transfer_probability`` – nothing else recombines factor risks.

Scoring rule (v1)
-----------------
Seven signals are mapped to a 0–1 *risk* (1 = most likely to transfer),
weighted, and averaged.  An unknown signal is **not** excluded: it maps to a
neutral risk of 0.5.  Only a zero (or absent) weight removes a factor from
the weighted sum.

Default weights (sum = 1.0, but the sum is never assumed):
    playingTime       0.22    Fraction of team usage
    recruitingRank    0.18    Recruit pedigree combined with usage
    distanceFromHome  0.15    Miles from high school
    teamPerformance   0.15    Team season win rate
    snapsPlayed       0.12    Raw snap count, saturating at 800
    nilCollectives    0.10    NIL strength (manual)
    socialSentiment   0.08    Public sentiment negativity (manual)

Weight resolution (later wins, per key):
    DEFAULT_WEIGHTS  <  SignalRecord.weights  <  explicit ``weights`` argument

Combination:
    probability = round(100 * Σ(weight * risk) / Σ(weight), 1)
    probability = 50.0 when no factor carries a positive weight

**IMPORTANT**: This score is a *heuristic estimate* from fixed rules.  The
weights are not trained and the normalisations are not calibrated.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

# ---------------------------------------------------------------------------
# Version – bump when weights or risk functions change
# ---------------------------------------------------------------------------
SCORING_VERSION = "v1"

# ---------------------------------------------------------------------------
# Weights – fixed factor order, immutable
# ---------------------------------------------------------------------------
FACTORS: tuple[str, ...] = (
    "playingTime",
    "distanceFromHome",
    "recruitingRank",
    "teamPerformance",
    "nilCollectives",
    "snapsPlayed",
    "socialSentiment",
)

DEFAULT_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "playingTime": 0.22,
        "distanceFromHome": 0.15,
        "recruitingRank": 0.18,
        "teamPerformance": 0.15,
        "nilCollectives": 0.10,
        "snapsPlayed": 0.12,
        "socialSentiment": 0.08,
    }
)

NEUTRAL_RISK = 0.5

# Per-factor weight ceiling; keeps Σweight and Σweight×risk finite
MAX_WEIGHT = 1e6

# Saturation bounds
DISTANCE_SATURATION_MILES = 1500.0
SNAPS_SATURATION = 800.0

DISCLAIMERS: list[str] = [
    "This is a heuristic estimate, not a prediction with accuracy guarantees.",
    "Weights are fixed rules, not trained on transfer outcomes.",
    "Unknown signals count as neutral risk (0.5).",
]


def coerce_number(value: Any) -> float | None:
    """Coerce *value* to a float, or ``None`` when it is not a usable number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


# ===================================================================
# Pydantic models
# ===================================================================


class SignalRecord(BaseModel):
    """Normalised inputs consumed by the scorer.

    Every field is optional.  Malformed values are coerced to ``None`` at
    construction time, so building a record never fails.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    playingTime: float | None = None  # noqa: N815
    distanceFromHighSchoolMiles: float | None = None  # noqa: N815
    recruitingRank: float | None = None  # noqa: N815
    teamWinRate: float | None = None  # noqa: N815
    nilScore: float | None = None  # noqa: N815
    snapsPlayed: float | None = None  # noqa: N815
    socialSentiment: float | None = None  # noqa: N815
    weights: dict[str, float] | None = None

    @field_validator(
        "playingTime",
        "distanceFromHighSchoolMiles",
        "recruitingRank",
        "teamWinRate",
        "nilScore",
        "snapsPlayed",
        "socialSentiment",
        mode="before",
    )
    @classmethod
    def _coerce_number(cls, value: Any) -> float | None:
        return coerce_number(value)

    @field_validator("weights", mode="before")
    @classmethod
    def _coerce_weights(cls, value: Any) -> dict[str, float] | None:
        if not isinstance(value, Mapping):
            return None
        cleaned: dict[str, float] = {}
        for key, raw in value.items():
            number = coerce_number(raw)
            if isinstance(key, str) and number is not None:
                cleaned[key] = number
        return cleaned


class FactorBreakdown(BaseModel):
    """Per-factor breakdown entry."""

    risk: float
    weight: float
    contribution: float


class TransferProbabilityResult(BaseModel):
    """Canonical result returned by ``compute_transfer_probability``."""

    probability: float
    breakdown: dict[str, FactorBreakdown]
    factors: dict[str, float]
    totalWeight: float  # noqa: N815
    scoringVersion: str  # noqa: N815
    disclaimers: list[str]


# ===================================================================
# Per-factor risk functions (each returns 0..1, None → 0.5)
# ===================================================================


def risk_from_playing_time(usage: Any) -> float:
    """0 usage → 1.0 risk, full usage → 0.0.  Out-of-range values are clamped."""
    u = coerce_number(usage)
    if u is None:
        return NEUTRAL_RISK
    return 1.0 - _clamp(u, 0.0, 1.0)


def risk_from_distance(miles: Any) -> float:
    """Linear over 0–1500 miles; 1500+ saturates at 1.0."""
    m = coerce_number(miles)
    if m is None:
        return NEUTRAL_RISK
    return _clamp(m, 0.0, DISTANCE_SATURATION_MILES) / DISTANCE_SATURATION_MILES


def normalize_recruiting_rank(rank: Any) -> float | None:
    """Map a raw rank onto 0–1: values ≤ 1 are already normalised, else /100."""
    r = coerce_number(rank)
    if r is None:
        return None
    if r > 1:
        r = r / 100.0
    return _clamp(r, 0.0, 1.0)


def risk_from_recruiting(rank: Any, playing_time: Any) -> float:
    """Underutilisation: high pedigree with low usage is the riskiest case.

    ``risk = normalized_rank * (1 - usage)``.  A missing usage counts as 0.5;
    a missing rank gives the neutral 0.5 regardless of usage.
    """
    r = normalize_recruiting_rank(rank)
    if r is None:
        return NEUTRAL_RISK
    u = coerce_number(playing_time)
    usage = _clamp(u, 0.0, 1.0) if u is not None else NEUTRAL_RISK
    return r * (1.0 - usage)


def risk_from_team_performance(win_rate: Any) -> float:
    w = coerce_number(win_rate)
    if w is None:
        return NEUTRAL_RISK
    return 1.0 - _clamp(w, 0.0, 1.0)


def risk_from_nil(nil_score: Any) -> float:
    n = coerce_number(nil_score)
    if n is None:
        return NEUTRAL_RISK
    return 1.0 - _clamp(n, 0.0, 1.0)


def risk_from_snaps(snaps: Any) -> float:
    """Few snaps → high risk; 800 snaps is treated as "heavily used"."""
    s = coerce_number(snaps)
    if s is None:
        return NEUTRAL_RISK
    return 1.0 - _clamp(s, 0.0, SNAPS_SATURATION) / SNAPS_SATURATION


def risk_from_social(sentiment: Any) -> float:
    """Sentiment is already risk-oriented (1 = unhappy)."""
    s = coerce_number(sentiment)
    if s is None:
        return NEUTRAL_RISK
    return _clamp(s, 0.0, 1.0)


# ===================================================================
# Weights
# ===================================================================


def merge_weights(*layers: Mapping[str, Any] | None) -> dict[str, float]:
    """Merge weight mappings, later layers winning per key.

    Only the known factor names are kept.  Non-numeric values are skipped
    and the rest are clamped to ``[0, MAX_WEIGHT]``.
    """
    merged: dict[str, float] = dict.fromkeys(FACTORS, 0.0)
    for layer in layers:
        if not isinstance(layer, Mapping):
            continue
        for key, raw in layer.items():
            if key not in merged:
                continue
            number = coerce_number(raw)
            if number is None:
                continue
            merged[key] = _clamp(number, 0.0, MAX_WEIGHT)
    return merged


def _coerce_record(signals: Any) -> SignalRecord:
    if isinstance(signals, SignalRecord):
        return signals
    if isinstance(signals, Mapping):
        return SignalRecord.model_validate(dict(signals))
    return SignalRecord()


def compute_factor_risks(record: SignalRecord) -> dict[str, float]:
    """Return ``{factor: risk}`` in the fixed factor order."""
    return {
        "playingTime": risk_from_playing_time(record.playingTime),
        "distanceFromHome": risk_from_distance(record.distanceFromHighSchoolMiles),
        "recruitingRank": risk_from_recruiting(record.recruitingRank, record.playingTime),
        "teamPerformance": risk_from_team_performance(record.teamWinRate),
        "nilCollectives": risk_from_nil(record.nilScore),
        "snapsPlayed": risk_from_snaps(record.snapsPlayed),
        "socialSentiment": risk_from_social(record.socialSentiment),
    }


# ===================================================================
# Main function
# ===================================================================


def compute_transfer_probability(
    signals: SignalRecord | Mapping[str, Any] | None = None,
    weights: Mapping[str, Any] | None = None,
    *,
    base_weights: Mapping[str, float] = DEFAULT_WEIGHTS,
) -> TransferProbabilityResult:
    """Compute the transfer probability (0–100) for one signal record.

    Parameters
    ----------
    signals:
        A ``SignalRecord`` or any mapping with the same keys.  Anything
        else is scored as an empty record.
    weights:
        Explicit per-factor weight overrides.  They win over ``weights``
        embedded in *signals*, which win over *base_weights*.
    base_weights:
        Starting weight table, ``DEFAULT_WEIGHTS`` unless given.

    Returns
    -------
    TransferProbabilityResult
        Deterministic: the same inputs always give the same output.
    """
    record = _coerce_record(signals)
    effective = merge_weights(base_weights, record.weights, weights)
    factors = compute_factor_risks(record)

    total_weight = 0.0
    weighted_sum = 0.0
    for name, risk in factors.items():
        weight = effective[name]
        if weight > 0:
            total_weight += weight
            weighted_sum += weight * risk

    probability = weighted_sum / total_weight * 100 if total_weight > 0 else 50.0

    breakdown = {
        name: FactorBreakdown(
            risk=round(risk, 2),
            weight=effective[name],
            contribution=round(effective[name] * risk, 2),
        )
        for name, risk in factors.items()
    }

    return TransferProbabilityResult(
        probability=round(probability, 1),
        breakdown=breakdown,
        factors=factors,
        totalWeight=total_weight,
        scoringVersion=SCORING_VERSION,
        disclaimers=list(DISCLAIMERS),
    )
