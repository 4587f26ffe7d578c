"""Team endpoints – roster, games, season records, talent and recruiting."""

from __future__ import annotations

from typing import Any

from cfb_loyalty.cfbd_api._http import cfbd_get


async def get_roster(team: str, year: int) -> Any:
    """GET /roster – roster entries, including hometown fields when known."""
    return await cfbd_get("/roster", {"team": team, "year": year})


async def get_team_games(year: int, team: str, season_type: str = "regular") -> Any:
    """GET /games – individual game results for a team season."""
    return await cfbd_get("/games", {"year": year, "team": team, "seasonType": season_type})


async def get_team_records(year: int, team: str) -> Any:
    """GET /records – season win/loss totals."""
    return await cfbd_get("/records", {"year": year, "team": team})


async def get_recruiting_players(year: int, team: str, position: str | None = None) -> Any:
    """GET /recruiting/players – recruit ratings and star counts."""
    return await cfbd_get("/recruiting/players", {"year": year, "team": team, "position": position})


async def get_talent(year: int) -> Any:
    return await cfbd_get("/talent", {"year": year})
