"""CFB Loyalty Index – FastAPI web application.

JSON API that estimates the likelihood of a college football athlete
transferring within 12 months, from College Football Data API statistics
combined with optional manual signals.
"""

import datetime
import logging
from typing import Any

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from cfb_loyalty import __version__
from cfb_loyalty.scoring.transfer_probability import (
    SignalRecord,
    compute_transfer_probability,
)
from cfb_loyalty.services import aggregator
from cfb_loyalty.services.aggregator import InputError, ResolutionError

SERVICE_NAME = "cfb-loyalty-index"

app = FastAPI(
    title="CFB Loyalty Index API",
    version=__version__,
    description=(
        "Transfer probability (0–100) for college football athletes. "
        "Signals come from the College Football Data API and can be "
        "overridden manually.  The score is a heuristic estimate."
    ),
    license_info={"name": "MIT", "url": "https://opensource.org/licenses/MIT"},
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Colored logging (reuse uvicorn's formatter)
# ---------------------------------------------------------------------------


def _setup_logging(level: int = logging.WARNING) -> None:
    """Configure the root ``cfb_loyalty`` logger with uvicorn-style colours."""
    from uvicorn.logging import DefaultFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(
        DefaultFormatter(fmt="%(levelprefix)s %(name)s - %(message)s", use_colors=True)
    )
    app_logger = logging.getLogger("cfb_loyalty")
    app_logger.handlers = [handler]
    app_logger.setLevel(level)
    app_logger.propagate = False

    # Silence noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)


_setup_logging()
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class ScoreRequest(BaseModel):
    """POST body: lookup keys, manual signals and optional weights.

    Signal values are left untyped; the scorer treats malformed values as
    unknown instead of rejecting the request.
    """

    model_config = ConfigDict(extra="ignore")

    year: int | None = None
    team: str | None = None
    playerName: str | None = None  # noqa: N815
    playingTime: Any = None  # noqa: N815
    distanceFromHighSchoolMiles: Any = None  # noqa: N815
    recruitingRank: Any = None  # noqa: N815
    teamWinRate: Any = None  # noqa: N815
    nilScore: Any = None  # noqa: N815
    snapsPlayed: Any = None  # noqa: N815
    socialSentiment: Any = None  # noqa: N815
    weights: dict[str, Any] | None = None

    def signals(self) -> dict[str, Any]:
        """Signal fields present in the body (``None`` dropped)."""
        fields = [name for name in SignalRecord.model_fields if name != "weights"]
        return {k: v for k in fields if (v := getattr(self, k)) is not None}

    def has_lookup(self) -> bool:
        return bool((self.team or "").strip() or (self.playerName or "").strip())

    def has_raw_score(self) -> bool:
        return any(
            v is not None for v in (self.playingTime, self.teamWinRate, self.recruitingRank)
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _current_year() -> int:
    return datetime.date.today().year


def _error(exc: Exception) -> JSONResponse:
    """Map aggregation failures to a JSON error response."""
    if isinstance(exc, InputError):
        return JSONResponse({"error": str(exc)}, status_code=400)
    if isinstance(exc, ResolutionError):
        return JSONResponse({"error": str(exc)}, status_code=404)
    logger.exception("Failed to score transfer probability")
    return JSONResponse({"error": str(exc)}, status_code=500)


async def _aggregate_and_score(
    year: int,
    team: str | None,
    player_name: str | None,
    overrides: dict[str, Any],
    weights: dict[str, Any] | None = None,
) -> dict[str, Any]:
    aggregated = await aggregator.aggregate_player_input(year, team, player_name, overrides)
    result = compute_transfer_probability(aggregated.signals, weights)
    return {"input": aggregated.to_payload(), **result.model_dump()}


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/health", tags=["Service"], summary="Liveness probe")
async def health() -> JSONResponse:
    return JSONResponse({"status": "ok", "service": SERVICE_NAME})


@app.get("/api/score", tags=["Scoring"], summary="Score a player or team from the API")
async def score_from_api(
    team: str | None = Query(None, description="School name as the API spells it."),
    player: str | None = Query(None, description="Player name; resolves the team if omitted."),
    year: int | None = Query(None, description="Season year (default: current year)."),
    nil: float | None = Query(None, description="NIL strength 0–1 (1 = strong)."),
    social: float | None = Query(None, description="Social sentiment 0–1 (1 = unhappy)."),
    distance: float | None = Query(None, description="Miles from high school."),
) -> JSONResponse:
    """Aggregate College Football Data API signals and score them."""
    overrides = {
        "nilScore": nil,
        "socialSentiment": social,
        "distanceFromHighSchoolMiles": distance,
    }
    try:
        payload = await _aggregate_and_score(
            year if year is not None else _current_year(),
            team,
            player,
            {k: v for k, v in overrides.items() if v is not None},
        )
    except Exception as exc:
        return _error(exc)
    return JSONResponse(payload)


@app.post("/api/score", tags=["Scoring"], summary="Score from a JSON body")
@app.post("/score", include_in_schema=False)
async def score_from_body(body: ScoreRequest) -> JSONResponse:
    """Score raw signals directly, or aggregate when a team/player is given.

    Without ``team``/``playerName`` but with ``playingTime``, ``teamWinRate``
    or ``recruitingRank``, the body is scored as-is with no API calls.
    Otherwise every non-null signal in the body overrides the aggregated one.
    """
    signals = body.signals()
    if not body.has_lookup() and body.has_raw_score():
        result = compute_transfer_probability(signals, body.weights)
        return JSONResponse(result.model_dump())

    try:
        payload = await _aggregate_and_score(
            body.year if body.year is not None else _current_year(),
            body.team,
            body.playerName,
            signals,
            body.weights,
        )
    except Exception as exc:
        return _error(exc)
    return JSONResponse(payload)
