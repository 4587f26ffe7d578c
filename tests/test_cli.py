"""Tests for the cfb-loyalty command line."""

import json
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from cfb_loyalty.cli import cli
from cfb_loyalty.models.player_input import AggregatedInput, PlayerContext
from cfb_loyalty.scoring.transfer_probability import SignalRecord
from cfb_loyalty.services.aggregator import ResolutionError

AGGREGATE = "cfb_loyalty.services.aggregator.aggregate_player_input"


def _aggregated() -> AggregatedInput:
    return AggregatedInput(
        signals=SignalRecord(playingTime=0.8, teamWinRate=0.9, recruitingRank=0.95),
        meta=PlayerContext(playerName="Jeremiah Smith", team="Ohio State", year=2024),
    )


class TestScoreCommand:
    def test_json_output(self):
        runner = CliRunner()
        with patch(AGGREGATE, new_callable=AsyncMock) as agg:
            agg.return_value = _aggregated()
            result = runner.invoke(
                cli, ["score", "--player", "Jeremiah Smith", "--year", "2024", "--json"]
            )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["input"]["_meta"]["playerName"] == "Jeremiah Smith"
        assert 0 <= data["probability"] <= 100
        assert data["scoringVersion"] == "v1"
        assert "Fetching" not in result.output

    def test_overrides_passed_through(self):
        runner = CliRunner()
        with patch(AGGREGATE, new_callable=AsyncMock) as agg:
            agg.return_value = _aggregated()
            runner.invoke(
                cli,
                ["score", "--team", "Ohio State", "--year", "2024", "--nil", "0.7", "--json"],
            )

        agg.assert_awaited_once_with(
            2024,
            "Ohio State",
            None,
            {"nilScore": 0.7, "socialSentiment": None, "distanceFromHighSchoolMiles": None},
        )

    def test_human_output(self):
        runner = CliRunner()
        with patch(AGGREGATE, new_callable=AsyncMock) as agg:
            agg.return_value = _aggregated()
            result = runner.invoke(cli, ["score", "--team", "Ohio State", "--year", "2024"])

        assert result.exit_code == 0, result.output
        assert "Probability to transfer" in result.output
        assert "Jeremiah Smith @ Ohio State (2024)" in result.output
        assert "playingTime: risk=" in result.output

    def test_requires_team_or_player(self):
        runner = CliRunner()
        with patch(AGGREGATE, new_callable=AsyncMock) as agg:
            result = runner.invoke(cli, ["score", "--year", "2024"])
        assert result.exit_code == 2
        assert "--player" in result.output
        agg.assert_not_awaited()

    def test_resolution_error_exits_nonzero(self):
        runner = CliRunner()
        with patch(AGGREGATE, new_callable=AsyncMock) as agg:
            agg.side_effect = ResolutionError('No player found for "Ghost".')
            result = runner.invoke(cli, ["score", "--player", "Ghost", "--json"])
        assert result.exit_code == 1
        assert "No player found" in result.output


class TestVersion:
    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "cfb-loyalty" in result.output
