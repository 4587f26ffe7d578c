"""Async College Football Data API helpers.

Every public function returns the decoded JSON body (usually a list of
loosely-typed dicts) and raises ``CfbdApiError`` on failure.  Nothing is
cached and nothing is retried.

This package re-exports all public names so that callers can use
``from cfb_loyalty import cfbd_api`` and tests can patch
``cfb_loyalty.cfbd_api.<function>``.
"""

# -- HTTP plumbing -----------------------------------------------------------
from cfb_loyalty.cfbd_api._http import (  # noqa: F401
    KEY_URL,
    CfbdApiError,
    _build_client,
    _clean_params,
    _get_headers,
    cfbd_get,
)

# -- Players -----------------------------------------------------------------
from cfb_loyalty.cfbd_api.players import (  # noqa: F401
    get_player_season_stats,
    get_player_usage,
    get_transfer_portal,
    search_players,
)

# -- Teams -------------------------------------------------------------------
from cfb_loyalty.cfbd_api.teams import (  # noqa: F401
    get_recruiting_players,
    get_roster,
    get_talent,
    get_team_games,
    get_team_records,
)
