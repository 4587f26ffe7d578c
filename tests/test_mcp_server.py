"""Tests for the MCP server tools."""

import json
from unittest.mock import AsyncMock, patch

import pytest

from cfb_loyalty.mcp_server import estimate_transfer_probability, score_transfer_signals
from cfb_loyalty.models.player_input import AggregatedInput, PlayerContext
from cfb_loyalty.scoring.transfer_probability import SignalRecord
from cfb_loyalty.services.aggregator import InputError, ResolutionError

AGGREGATE = "cfb_loyalty.services.aggregator.aggregate_player_input"


class TestScoreTransferSignals:
    def test_empty_signals_are_neutral(self):
        data = json.loads(score_transfer_signals())
        assert data["probability"] == 50.0
        assert set(data["breakdown"]) == {
            "playingTime",
            "distanceFromHome",
            "recruitingRank",
            "teamPerformance",
            "nilCollectives",
            "snapsPlayed",
            "socialSentiment",
        }

    def test_signals_and_weights(self):
        data = json.loads(
            score_transfer_signals(
                playing_time=0.1,
                weights={
                    "playingTime": 1,
                    "distanceFromHome": 0,
                    "recruitingRank": 0,
                    "teamPerformance": 0,
                    "nilCollectives": 0,
                    "snapsPlayed": 0,
                    "socialSentiment": 0,
                },
            )
        )
        assert data["probability"] == 90.0
        assert data["totalWeight"] == 1.0


class TestEstimateTransferProbability:
    @pytest.mark.anyio()
    async def test_returns_input_and_score(self):
        aggregated = AggregatedInput(
            signals=SignalRecord(playingTime=0.3, nilScore=0.2),
            meta=PlayerContext(playerName="Travis Hunter", team="Colorado", year=2024),
        )
        with patch(AGGREGATE, new_callable=AsyncMock) as agg:
            agg.return_value = aggregated
            data = json.loads(
                await estimate_transfer_probability(2024, player_name="Travis Hunter", nil_score=0.2)
            )

        assert data["input"]["_meta"]["team"] == "Colorado"
        assert data["input"]["nilScore"] == 0.2
        assert "probability" in data
        agg.assert_awaited_once_with(
            2024,
            None,
            "Travis Hunter",
            {"nilScore": 0.2, "socialSentiment": None, "distanceFromHighSchoolMiles": None},
        )

    @pytest.mark.anyio()
    @pytest.mark.parametrize(
        "error",
        [InputError("Provide either a player name or a team (or both)."), ResolutionError("nope")],
    )
    async def test_lookup_errors_are_reported(self, error):
        with patch(AGGREGATE, new_callable=AsyncMock) as agg:
            agg.side_effect = error
            data = json.loads(await estimate_transfer_probability(2024))
        assert data == {"error": str(error)}
