"""Player endpoints – search, usage, portal and season stats."""

from __future__ import annotations

from typing import Any

from cfb_loyalty.cfbd_api._http import cfbd_get


async def search_players(year: int | None, name: str, team: str | None = None) -> Any:
    """GET /player/search – candidates ``{id, name, team, ...}`` for *name*."""
    return await cfbd_get("/player/search", {"searchTerm": name, "year": year, "team": team})


async def get_player_usage(year: int, team: str) -> Any:
    """GET /player/usage – per-player usage rates for a team season."""
    return await cfbd_get("/player/usage", {"year": year, "team": team})


async def get_transfer_portal(year: int) -> Any:
    """GET /player/portal – transfer portal entries for a season."""
    return await cfbd_get("/player/portal", {"year": year})


async def get_player_season_stats(year: int, team: str) -> Any:
    return await cfbd_get("/stats/player/season", {"year": year, "team": team})
