"""Player input aggregation – College Football Data API → ``SignalRecord``.

Resolution protocol
-------------------
1. No team but a player name → resolve the team with ``/player/search``
   (exact case-insensitive name first, then first substring match).
   Nothing found, or a match without a team → ``ResolutionError``.
2. Neither team nor player name → ``InputError``.
3. Usage, roster, recruiting and season records are fetched concurrently.
   A failing source degrades to an empty list; it never aborts the request.
4. Win rate: season record totals → completed game results → 0.5.
5. Within each source the named player is matched (exact, then substring
   in either direction); without a match the first record is used.
6. Manual overrides are merged last and always win.

The distance signal is a coarse heuristic, **not** a geocoded distance:
same state as the school → 100 miles, anything else → 800 miles.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

from cfb_loyalty import cfbd_api
from cfb_loyalty.models.player_input import AggregatedInput, PlayerContext, SignalOverrides
from cfb_loyalty.scoring.transfer_probability import SignalRecord, coerce_number
from cfb_loyalty.services import record_fields as rf
from cfb_loyalty.services.team_states import infer_team_state

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Heuristic constants
# ---------------------------------------------------------------------------

SNAPS_PER_GAME = 70
GAMES_PER_SEASON = 12
SEASON_SNAP_CEILING = SNAPS_PER_GAME * GAMES_PER_SEASON

IN_STATE_DISTANCE_MILES = 100.0
STATE_DISTANCE_APPROXIMATE_MILES = 800.0

NEUTRAL_WIN_RATE = 0.5

# Recruiting scales, checked top-down: (inclusive upper bound, divisor).
# The API mixes 0–1 composites, star counts, 0–100 scores and 0–255
# composites; a value that merely *looks* like another scale is
# misclassified (e.g. a 0–100 score of 4 is read as 4 stars).
RECRUITING_SCALES: tuple[tuple[float, float], ...] = (
    (1.0, 1.0),
    (5.0, 5.0),
    (100.0, 100.0),
    (255.0, 255.0),
)
RECRUITING_FALLBACK_DIVISOR = 300.0
STARS_MAX = 5.0


class InputError(ValueError):
    """Neither a team nor a player name was supplied."""


class ResolutionError(LookupError):
    """A player name could not be resolved to a team."""


Record = Mapping[str, Any]


# ===================================================================
# Name matching
# ===================================================================


def _clean(text: str | None) -> str | None:
    if text is None:
        return None
    stripped = str(text).strip()
    return stripped or None


def _usage_name(record: Record) -> str | None:
    return rf.pick_str(record, rf.USAGE_NAME)


def _recruit_name(record: Record) -> str | None:
    return rf.pick_str(record, rf.RECRUIT_NAME)


def _roster_name(record: Record) -> str | None:
    name = rf.pick_str(record, rf.ROSTER_NAME)
    if name:
        return name
    parts = [
        rf.pick_str(record, rf.ROSTER_FIRST_NAME),
        rf.pick_str(record, rf.ROSTER_LAST_NAME),
    ]
    joined = " ".join(p for p in parts if p)
    return joined or None


def _match_by_name(
    records: Sequence[Record],
    name: str,
    name_of: Callable[[Record], str | None],
    *,
    either_direction: bool = True,
) -> Record | None:
    """Exact case-insensitive match first, then the first substring match."""
    target = name.lower()
    named = [(record, (name_of(record) or "").lower()) for record in records]
    for record, candidate in named:
        if candidate == target:
            return record
    for record, candidate in named:
        if not candidate:
            continue
        if target in candidate or (either_direction and candidate in target):
            return record
    return None


def select_player_record(
    records: Sequence[Record],
    player_name: str | None,
    name_of: Callable[[Record], str | None],
) -> Record | None:
    """Pick the record for *player_name*, else the first record."""
    if not records:
        return None
    if player_name:
        match = _match_by_name(records, player_name, name_of)
        if match is not None:
            return match
        logger.debug("No record matches %r; using the first of %d", player_name, len(records))
    return records[0]


async def resolve_player_by_name(year: int, player_name: str) -> tuple[str, str] | None:
    """Resolve *player_name* to ``(team, display_name)`` via player search.

    Returns ``None`` when no candidate matches or the match has no team.
    """
    name = _clean(player_name)
    if name is None:
        return None
    candidates = _as_records(await cfbd_api.search_players(year, name))
    if not candidates:
        return None
    match = _match_by_name(
        candidates,
        name,
        lambda r: rf.pick_str(r, rf.SEARCH_NAME),
        either_direction=False,
    )
    if match is None:
        return None
    team = rf.pick_str(match, rf.SEARCH_TEAM)
    if team is None:
        return None
    return team, rf.pick_str(match, rf.SEARCH_NAME) or name


# ===================================================================
# Fetching
# ===================================================================


def _as_records(data: Any) -> list[Record]:
    if not isinstance(data, list):
        return []
    return [item for item in data if isinstance(item, Mapping)]


async def _fetch_or_empty(
    label: str,
    fetch: Callable[..., Awaitable[Any]],
    *args: Any,
) -> list[Record]:
    """Await one source; any failure degrades to ``[]``."""
    try:
        data = await fetch(*args)
    except Exception as exc:
        logger.warning("CFBD %s lookup failed, continuing without it: %s", label, exc)
        return []
    records = _as_records(data)
    if data and not records:
        logger.warning("CFBD %s lookup returned an unexpected payload; ignoring it", label)
    return records


# ===================================================================
# Win rate
# ===================================================================


def _find_team_record(records: Sequence[Record], year: int, team: str) -> Record | None:
    target = team.lower()

    def team_of(record: Record) -> str:
        return (rf.pick_str(record, rf.RECORD_TEAM) or "").lower()

    for record in records:
        season = coerce_number(rf.pick_raw(record, rf.RECORD_SEASON))
        if season == year and team_of(record) in (target, ""):
            return record
    for record in records:
        if team_of(record) == target:
            return record
    return None


def win_rate_from_records(records: Sequence[Record], year: int, team: str) -> float | None:
    """wins / games from season totals, else wins / (wins + losses)."""
    record = _find_team_record(records, year, team)
    if record is None:
        return None
    wins = rf.pick_number(record, rf.RECORD_WINS)
    if wins is None:
        return None
    games = rf.pick_number(record, rf.RECORD_GAMES)
    if games is not None and games > 0:
        return wins / games
    losses = rf.pick_number(record, rf.RECORD_LOSSES)
    if losses is not None and wins + losses > 0:
        return wins / (wins + losses)
    return None


def win_rate_from_games(games: Sequence[Record], team: str) -> float | None:
    """Share of completed games in which *team* outscored its opponent."""
    target = team.lower()
    played = 0
    wins = 0
    for game in games:
        home_points = rf.pick_number(game, rf.GAME_HOME_POINTS)
        away_points = rf.pick_number(game, rf.GAME_AWAY_POINTS)
        if home_points is None or away_points is None:
            continue
        if (rf.pick_str(game, rf.GAME_HOME_TEAM) or "").lower() == target:
            ours, theirs = home_points, away_points
        elif (rf.pick_str(game, rf.GAME_AWAY_TEAM) or "").lower() == target:
            ours, theirs = away_points, home_points
        else:
            continue
        played += 1
        if ours > theirs:
            wins += 1
    return wins / played if played else None


async def derive_win_rate(year: int, team: str, records: Sequence[Record]) -> float:
    rate = win_rate_from_records(records, year, team)
    if rate is not None:
        return rate
    games = await _fetch_or_empty("games", cfbd_api.get_team_games, year, team, "regular")
    rate = win_rate_from_games(games, team)
    if rate is not None:
        return rate
    return NEUTRAL_WIN_RATE


# ===================================================================
# Per-source normalisation
# ===================================================================


def _sum_snap_counts(raw: Any) -> float:
    if isinstance(raw, Mapping):
        values: list[Any] = list(raw.values())
    elif isinstance(raw, list):
        values = raw
    else:
        values = [raw]
    return sum(coerce_number(v) or 0.0 for v in values)


def usage_signals(record: Record | None) -> tuple[float | None, float | None]:
    """Return ``(playingTime, snapsPlayed)`` from a usage record.

    An explicit overall usage wins (rescaled from 0–100 when > 1); otherwise
    usage is estimated from snaps over a 70 × 12 snap season, capped at 1.
    """
    if record is None:
        return None, None
    usage = rf.pick_number(record, rf.USAGE_OVERALL)
    if usage is not None and usage > 1:
        usage = usage / 100.0

    raw_counts = rf.pick_raw(record, rf.USAGE_SNAP_COUNTS)
    if raw_counts is not None:
        snaps: float | None = _sum_snap_counts(raw_counts)
    else:
        snaps = rf.pick_number(record, rf.USAGE_SNAPS)

    if usage is None and snaps is not None:
        usage = min(1.0, snaps / SEASON_SNAP_CEILING)
    return usage, snaps


def normalize_recruiting_rating(rating: Any) -> float | None:
    """Map a rating on any of the known scales onto 0–1."""
    r = coerce_number(rating)
    if r is None:
        return None
    for upper, divisor in RECRUITING_SCALES:
        if r <= upper:
            return r / divisor
    return min(1.0, r / RECRUITING_FALLBACK_DIVISOR)


def recruiting_signal(record: Record | None) -> float | None:
    if record is None:
        return None
    rating = rf.pick_number(record, rf.RECRUIT_RATING)
    if rating is None:
        stars = rf.pick_number(record, rf.RECRUIT_STARS)
        rating = stars / STARS_MAX if stars is not None else None
    return normalize_recruiting_rating(rating)


def hometown_state(record: Record) -> str | None:
    """Two-letter state guess, ``""`` if unparseable, ``None`` if no hometown."""
    state = rf.pick_str(record, rf.ROSTER_HOME_STATE)
    if state:
        return state[:2].upper()
    hometown = rf.pick_str(record, rf.ROSTER_HOMETOWN)
    if hometown is None:
        return None
    return hometown.split(",")[-1].strip()[:2].upper()


def estimate_distance(record: Record | None, team: str) -> float | None:
    """Same-state → 100 miles, otherwise 800.  Not a geocoded distance."""
    if record is None:
        return None
    home = hometown_state(record)
    if home is None:
        return None
    team_state = infer_team_state(team)
    if team_state and home and team_state == home:
        return IN_STATE_DISTANCE_MILES
    return STATE_DISTANCE_APPROXIMATE_MILES


# ===================================================================
# Main function
# ===================================================================


def _coerce_overrides(overrides: SignalOverrides | Mapping[str, Any] | None) -> SignalOverrides:
    if isinstance(overrides, SignalOverrides):
        return overrides
    if isinstance(overrides, Mapping):
        return SignalOverrides.model_validate(dict(overrides))
    return SignalOverrides()


async def aggregate_player_input(
    year: int,
    team: str | None = None,
    player_name: str | None = None,
    overrides: SignalOverrides | Mapping[str, Any] | None = None,
) -> AggregatedInput:
    """Fetch and merge every available signal for a player/team/season.

    Raises
    ------
    InputError
        Neither *team* nor *player_name* was given.
    ResolutionError
        Only *player_name* was given and it could not be tied to a team.
    """
    team = _clean(team)
    player_name = _clean(player_name)
    manual = _coerce_overrides(overrides)

    if team is None and player_name is None:
        raise InputError("Provide either a player name or a team (or both).")

    if team is None:
        try:
            resolved = await resolve_player_by_name(year, player_name)
        except cfbd_api.CfbdApiError as exc:
            raise ResolutionError(f'Player search for "{player_name}" failed: {exc}') from exc
        if resolved is None:
            raise ResolutionError(
                f'No player found for "{player_name}". Try a different name or year.'
            )
        team, player_name = resolved
        logger.info("Resolved %s to %s", player_name, team)

    usage_list, roster, recruiting, records = await asyncio.gather(
        _fetch_or_empty("usage", cfbd_api.get_player_usage, year, team),
        _fetch_or_empty("roster", cfbd_api.get_roster, team, year),
        _fetch_or_empty("recruiting", cfbd_api.get_recruiting_players, year, team),
        _fetch_or_empty("records", cfbd_api.get_team_records, year, team),
    )

    if manual.teamWinRate is None:
        win_rate: float | None = await derive_win_rate(year, team, records)
    else:
        win_rate = None

    player_usage = select_player_record(usage_list, player_name, _usage_name)
    player_roster = select_player_record(roster, player_name, _roster_name)
    player_recruit = select_player_record(recruiting, player_name, _recruit_name)

    playing_time, snaps = usage_signals(player_usage)

    derived: dict[str, Any] = {
        "playingTime": playing_time,
        "distanceFromHighSchoolMiles": estimate_distance(player_roster, team),
        "recruitingRank": recruiting_signal(player_recruit),
        "teamWinRate": win_rate,
        "snapsPlayed": snaps,
    }
    derived.update(manual.provided())

    display_name = _usage_name(player_usage) if player_usage is not None else None
    if display_name is None and player_roster is not None:
        display_name = _roster_name(player_roster)

    return AggregatedInput(
        signals=SignalRecord(**derived),
        meta=PlayerContext(playerName=display_name or player_name, team=team, year=year),
    )
