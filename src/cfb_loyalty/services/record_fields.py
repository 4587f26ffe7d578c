"""Ordered accessor keys for loosely-typed College Football Data records.

API responses vary between endpoints, API versions and individual entries.
Rather than probing keys inline, each field lists the key paths to try, in
order; the first path yielding a usable value wins.  A path is a tuple so
nested values (``{"usage": {"overall": 0.31}}``) are reachable.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from cfb_loyalty.scoring.transfer_probability import coerce_number

KeyPath = tuple[str, ...]

# -- /player/search ----------------------------------------------------------
SEARCH_NAME: list[KeyPath] = [("name",), ("player",)]
SEARCH_TEAM: list[KeyPath] = [("team",), ("school",)]

# -- /player/usage -----------------------------------------------------------
USAGE_NAME: list[KeyPath] = [("player",), ("name",)]
USAGE_OVERALL: list[KeyPath] = [
    ("usg_overall",),
    ("usage_overall",),
    ("usageOverall",),
    ("usage", "overall"),
    ("usage",),
]
USAGE_SNAP_COUNTS: list[KeyPath] = [("snap_counts",), ("snapCounts",)]
USAGE_SNAPS: list[KeyPath] = [("snaps",), ("snap_count",), ("totalSnaps",)]

# -- /roster -----------------------------------------------------------------
ROSTER_NAME: list[KeyPath] = [("name",), ("player",)]
ROSTER_FIRST_NAME: list[KeyPath] = [("first_name",), ("firstName",)]
ROSTER_LAST_NAME: list[KeyPath] = [("last_name",), ("lastName",)]
ROSTER_HOME_STATE: list[KeyPath] = [("home_state",), ("homeState",), ("stateProvince",)]
ROSTER_HOMETOWN: list[KeyPath] = [("hometown",), ("home_town",), ("city",)]

# -- /recruiting/players -----------------------------------------------------
RECRUIT_NAME: list[KeyPath] = [("name",), ("player",)]
RECRUIT_RATING: list[KeyPath] = [("rating",), ("rank",), ("overall",)]
RECRUIT_STARS: list[KeyPath] = [("stars",)]

# -- /records ----------------------------------------------------------------
RECORD_SEASON: list[KeyPath] = [("season",), ("year",)]
RECORD_TEAM: list[KeyPath] = [("team",)]
RECORD_WINS: list[KeyPath] = [("total", "wins"), ("total_wins",), ("wins",)]
RECORD_LOSSES: list[KeyPath] = [("total", "losses"), ("total_losses",), ("losses",)]
RECORD_GAMES: list[KeyPath] = [("total", "games"), ("total_games",), ("games",)]

# -- /games ------------------------------------------------------------------
GAME_HOME_TEAM: list[KeyPath] = [("home_team",), ("homeTeam",)]
GAME_AWAY_TEAM: list[KeyPath] = [("away_team",), ("awayTeam",)]
GAME_HOME_POINTS: list[KeyPath] = [("home_points",), ("homePoints",)]
GAME_AWAY_POINTS: list[KeyPath] = [("away_points",), ("awayPoints",)]


def _resolve(record: Any, path: KeyPath) -> Any:
    value = record
    for key in path:
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
    return value


def pick_number(record: Any, paths: Sequence[KeyPath]) -> float | None:
    """First numeric value found along *paths*."""
    for path in paths:
        number = coerce_number(_resolve(record, path))
        if number is not None:
            return number
    return None


def pick_str(record: Any, paths: Sequence[KeyPath]) -> str | None:
    """First non-blank string value found along *paths* (stripped)."""
    for path in paths:
        value = _resolve(record, path)
        if value is None or isinstance(value, (Mapping, list)):
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def pick_raw(record: Any, paths: Sequence[KeyPath]) -> Any:
    """First non-``None`` value found along *paths*, untouched."""
    for path in paths:
        value = _resolve(record, path)
        if value is not None:
            return value
    return None
