"""Tests for the standalone percent placeholder table."""

import pytest
from mut.lib.expansion import Expansion
from mut.lib.placeholders import PlaceholderTable
from mut.models.dataModel import PlayerContext


@pytest.fixture
def table(clock_at):
    table = PlaceholderTable({"server_name": "Lobby"})
    table.register(Expansion(clock=clock_at(2026, 10, 19, 10, 0, 0), placeholders=table))
    return table


def test_static_definition(table):
    assert table.expand("Welcome to %server_name%!") == "Welcome to Lobby!"


def test_expansion_routing(table):
    assert table.expand("Today is %mut_getTheWeek%") == "Today is Monday"


def test_expansion_identifier_case_insensitive(table):
    assert table.expand("%MUT_getTheWeek%") == "Monday"


def test_quoted_arguments_with_spaces(table):
    assert table.expand('%mut_diffDays.minute."12:00:00".false% minutes') == "120 minutes"


def test_unknown_placeholders_left_as_written(table):
    assert table.expand("%nope% and %other_thing%") == "%nope% and %other_thing%"


def test_single_percent_sign_untouched(table):
    assert table.expand("100% sure") == "100% sure"


def test_define(table):
    table.define("vip_expiry", "1w")
    assert table.expand('%mut_luckPermsExpiryTime."{vip_expiry}"%') == "7"


def test_player_passed_to_expansion(clock_at):
    seen = []

    class Recorder:
        identifier = "rec"

        def evaluate(self, raw_args, player=None):
            seen.append((raw_args, player))
            return "ok"

    table = PlaceholderTable()
    table.register(Recorder())
    steve = PlayerContext(name="Steve")
    assert table("%rec_a.b%", player=steve) == "ok"
    assert seen == [("a.b", steve)]
