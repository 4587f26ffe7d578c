"""Approximate school → state table for the distance heuristic.

Covers the programs users ask about most.  Unknown teams return ``None``
and the aggregator treats that as an out-of-state match.
"""

from __future__ import annotations

TEAM_STATE: dict[str, str] = {
    "Alabama": "AL",
    "Arizona": "AZ",
    "Arizona State": "AZ",
    "Arkansas": "AR",
    "Auburn": "AL",
    "Baylor": "TX",
    "California": "CA",
    "Clemson": "SC",
    "Colorado": "CO",
    "Florida": "FL",
    "Florida State": "FL",
    "Georgia": "GA",
    "Houston": "TX",
    "Illinois": "IL",
    "Indiana": "IN",
    "Iowa": "IA",
    "Kansas": "KS",
    "Kansas State": "KS",
    "Kentucky": "KY",
    "LSU": "LA",
    "Maryland": "MD",
    "Miami": "FL",
    "Michigan": "MI",
    "Michigan State": "MI",
    "Minnesota": "MN",
    "Mississippi State": "MS",
    "Missouri": "MO",
    "Nebraska": "NE",
    "North Carolina": "NC",
    "Northwestern": "IL",
    "Notre Dame": "IN",
    "Ohio State": "OH",
    "Oklahoma": "OK",
    "Oklahoma State": "OK",
    "Ole Miss": "MS",
    "Oregon": "OR",
    "Penn State": "PA",
    "Purdue": "IN",
    "Rutgers": "NJ",
    "SMU": "TX",
    "South Carolina": "SC",
    "Stanford": "CA",
    "TCU": "TX",
    "Tennessee": "TN",
    "Texas": "TX",
    "Texas A&M": "TX",
    "Texas Tech": "TX",
    "Tulane": "LA",
    "UCLA": "CA",
    "USC": "CA",
    "Utah": "UT",
    "Virginia Tech": "VA",
    "Washington": "WA",
    "West Virginia": "WV",
    "Wisconsin": "WI",
}

_TEAM_STATE_LOWER = {name.lower(): state for name, state in TEAM_STATE.items()}


def infer_team_state(team: str) -> str | None:
    """Return the two-letter state for *team* (case-insensitive), if known."""
    return _TEAM_STATE_LOWER.get(team.strip().lower())
