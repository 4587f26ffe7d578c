"""Tests for the team home-state table."""

import pytest

from cfb_loyalty.services.team_states import infer_team_state


class TestInferTeamState:
    @pytest.mark.parametrize(
        ("team", "state"),
        [("Ohio State", "OH"), ("ohio state", "OH"), (" Texas A&M ", "TX"), ("USC", "CA")],
    )
    def test_known(self, team, state):
        assert infer_team_state(team) == state

    def test_unknown(self):
        assert infer_team_state("Nowhere Tech") is None
