"""MCP server for the CFB Loyalty Index.

Exposes transfer probability scoring as MCP tools so that AI agents can
score caller-supplied signals or look a player up in the College Football
Data API.

Run with:
    cfb-loyalty mcp            # stdio transport (default)
    cfb-loyalty mcp --sse      # SSE transport on port 8080
"""

import json
import logging
from typing import Annotated

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from cfb_loyalty.scoring.transfer_probability import compute_transfer_probability
from cfb_loyalty.services import aggregator

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "cfb-loyalty",
    instructions=(
        "College football transfer risk tools. "
        "Use score_transfer_signals when you already know the signals, or "
        "estimate_transfer_probability to look a player or team up in the "
        "College Football Data API (requires CFBD_API_KEY). "
        "Scores are heuristic estimates, not predictions."
    ),
)


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@mcp.tool()
def score_transfer_signals(
    playing_time: Annotated[float | None, Field(description="Usage fraction 0–1.")] = None,
    distance_miles: Annotated[
        float | None, Field(description="Miles from high school to current school.")
    ] = None,
    recruiting_rank: Annotated[
        float | None, Field(description="Recruit quality 0–1 or 0–100 (higher = better).")
    ] = None,
    team_win_rate: Annotated[float | None, Field(description="Season win fraction 0–1.")] = None,
    nil_score: Annotated[float | None, Field(description="NIL strength 0–1 (1 = strong).")] = None,
    snaps_played: Annotated[float | None, Field(description="Raw snap count.")] = None,
    social_sentiment: Annotated[
        float | None, Field(description="Public sentiment 0–1 (1 = unhappy).")
    ] = None,
    weights: Annotated[
        dict[str, float] | None,
        Field(description="Optional per-factor weight overrides, e.g. {'playingTime': 0.3}."),
    ] = None,
) -> str:
    """Score transfer probability from known signals, without any lookups.

    Unknown signals count as neutral risk (0.5).  Returns the probability
    (0–100) and a seven-factor breakdown.
    """
    signals = {
        "playingTime": playing_time,
        "distanceFromHighSchoolMiles": distance_miles,
        "recruitingRank": recruiting_rank,
        "teamWinRate": team_win_rate,
        "nilScore": nil_score,
        "snapsPlayed": snaps_played,
        "socialSentiment": social_sentiment,
    }
    result = compute_transfer_probability(signals, weights)
    return json.dumps(result.model_dump(), indent=2)


@mcp.tool()
async def estimate_transfer_probability(
    year: Annotated[int, Field(description="Season year, e.g. 2024.")],
    team: Annotated[str | None, Field(description="School name (optional with player).")] = None,
    player_name: Annotated[
        str | None, Field(description="Player name; resolves the team when team is omitted.")
    ] = None,
    nil_score: Annotated[float | None, Field(description="NIL strength 0–1 (1 = strong).")] = None,
    social_sentiment: Annotated[
        float | None, Field(description="Public sentiment 0–1 (1 = unhappy).")
    ] = None,
    distance_miles: Annotated[
        float | None, Field(description="Miles from high school (overrides heuristic).")
    ] = None,
) -> str:
    """Look a player/team up in the College Football Data API and score it.

    Returns the aggregated input (with player context under ``_meta``), the
    probability and the breakdown, or ``{"error": ...}`` when the player
    cannot be resolved.
    """
    overrides = {
        "nilScore": nil_score,
        "socialSentiment": social_sentiment,
        "distanceFromHighSchoolMiles": distance_miles,
    }
    try:
        aggregated = await aggregator.aggregate_player_input(year, team, player_name, overrides)
    except (aggregator.InputError, aggregator.ResolutionError) as exc:
        return json.dumps({"error": str(exc)})
    result = compute_transfer_probability(aggregated.signals)
    return json.dumps({"input": aggregated.to_payload(), **result.model_dump()}, indent=2)
