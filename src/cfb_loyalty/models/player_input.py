"""Pydantic models for aggregated player input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cfb_loyalty.scoring.transfer_probability import SignalRecord, coerce_number


class SignalOverrides(BaseModel):
    """Manual values that always win over anything derived from the API."""

    model_config = ConfigDict(frozen=True)

    playingTime: float | None = Field(None, description="Usage fraction 0–1.")  # noqa: N815
    distanceFromHighSchoolMiles: float | None = Field(  # noqa: N815
        None, description="Miles from high school to current school."
    )
    recruitingRank: float | None = Field(  # noqa: N815
        None, description="Recruit quality, 0–1 or 0–100."
    )
    teamWinRate: float | None = Field(None, description="Season win fraction 0–1.")  # noqa: N815
    nilScore: float | None = Field(None, description="NIL strength 0–1 (1 = strong).")  # noqa: N815
    snapsPlayed: float | None = Field(None, description="Raw snap count.")  # noqa: N815
    socialSentiment: float | None = Field(  # noqa: N815
        None, description="Public sentiment 0–1 (1 = unhappy)."
    )

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> float | None:
        return coerce_number(value)

    def provided(self) -> dict[str, Any]:
        """Return only the overrides that were actually given."""
        return self.model_dump(exclude_none=True)


class PlayerContext(BaseModel):
    """Contextual metadata – never seen by the scorer."""

    playerName: str | None = None  # noqa: N815
    team: str
    year: int


class AggregatedInput(BaseModel):
    """Aggregator output: scoring signals plus separate context metadata."""

    signals: SignalRecord
    meta: PlayerContext

    def to_payload(self) -> dict[str, Any]:
        """Flatten into the ``{...signals, "_meta": {...}}`` shape used by the API."""
        payload = self.signals.model_dump(exclude={"weights"})
        payload["_meta"] = self.meta.model_dump()
        return payload
