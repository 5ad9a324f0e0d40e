"""Tests for selector dispatch through the expansion."""

from unittest.mock import Mock
import pytest
from mut.config.settings import UNSUPPORTED_MESSAGE
from mut.lib.expansion import Expansion
from mut.lib.handlers import BaseHandler
from mut.lib.router import Router
from mut.models.dataModel import EvalResult, Outcome, PlayerContext

STEVE = PlayerContext(name="Steve", address="10.0.0.7")


@pytest.fixture
def placeholders():
    values = {"%luckperms_expiry_time_vip%": "1mo 2d 12h", "%rank%": "vip"}
    return Mock(side_effect=lambda text, player=None: values.get(text, text))


@pytest.fixture
def expansion(clock_at, placeholders):
    return Expansion(clock=clock_at(2026, 10, 19, 10, 0, 0), placeholders=placeholders)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('diffDays.minute."12:00:00".false', "120"),
        ('diffDays.hour."08:00:00".TRUE', "22"),
        ('DIFFDAYS.second."08:00:00".false', str(13 * 3600 + 59 * 60 + 59)),
        ('diffDays.hour."08:00:00".yes', "13"),
        ('diffWeeks.day."10:00:00".1', "7"),
        ('diffWeeks.hour."10:00:00".2', "24"),
        ('diffWeeks.day."10:00:00".friday', "7"),
        ('diffMonths.day."12:00:00".31', "42"),
        ('diffMonths.day."12:00:00".last', "42"),
        ('diffMonths.day."10:00:00".1', "13"),
        ('diffDays.decade."12:00:00".false', "-1"),
        ("getTheWeek", "Monday"),
        ("GETTHEWEEK.extra", "Monday"),
    ],
)
def test_evaluate(expansion, raw, expected):
    assert expansion.evaluate(raw) == expected


def test_expiry_time_resolves_then_folds(expansion, placeholders):
    assert expansion.evaluate('luckPermsExpiryTime."{luckperms_expiry_time_vip}"', STEVE) == "33"
    placeholders.assert_called_with("%luckperms_expiry_time_vip%", player=STEVE)


def test_expiry_time_nested_placeholders(clock_at):
    values = {"%rank%": "vip", "%expiry_vip%": "2w"}
    expansion = Expansion(
        clock=clock_at(2026, 10, 19), placeholders=lambda text, player=None: values[text]
    )
    assert expansion.evaluate('luckPermsExpiryTime."{expiry_{rank}}"') == "14"


def test_expiry_time_unresolvable_is_minus_one(clock_at):
    def placeholders(text, player=None):
        raise RuntimeError("no such placeholder")

    expansion = Expansion(clock=clock_at(2026, 10, 19), placeholders=placeholders)
    assert expansion.evaluate('luckPermsExpiryTime."{missing}"') == "-1"


def test_expiry_time_without_duration(expansion):
    assert expansion.evaluate('luckPermsExpiryTime."never"') == "-1"


def test_expiry_time_without_placeholder_system(clock_at):
    expansion = Expansion(clock=clock_at(2026, 10, 19))
    assert expansion.evaluate('luckPermsExpiryTime."3d"') == "3"


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "nothing",
        "diffDays",
        "diffDays.hour",
        'diffDays.hour."08:00:00"',
        'diffWeeks.hour."08:00:00"',
        "diffMonths.day",
        "luckPermsExpiryTime",
        "authMe",
        "authMe.registrationDate",
        "bukkit.itemInHandColor",
    ],
)
def test_unsupported_requests(expansion, raw):
    assert expansion.evaluate(raw) == UNSUPPORTED_MESSAGE


def test_insufficient_args_does_not_fall_through(expansion):
    result = expansion.dispatch("diffDays.hour.true")
    assert result.outcome == Outcome.INSUFFICIENT_ARGS


def test_collaborators_are_used(clock_at):
    registry = Mock()
    registry.is_registered.return_value = True
    inventory = Mock()
    inventory.empty_slot_count.return_value = 5
    presence = Mock()
    presence.is_online.return_value = True
    expansion = Expansion(
        clock=clock_at(2026, 10, 19),
        registry=registry,
        inventory=inventory,
        presence=presence,
    )
    assert expansion.evaluate("authMe.registered", STEVE) == "true"
    assert expansion.evaluate("bukkit.emptySlots", STEVE) == "5"
    assert expansion.evaluate("bukkit.playerOnline.Alex", STEVE) == "true"
    presence.is_online.assert_called_once_with("Alex")


def test_handler_exception_becomes_unsupported(expansion):
    expansion.router._routes["GETTHEWEEK"].handle = Mock(side_effect=RuntimeError("boom"))
    assert expansion.evaluate("getTheWeek") == UNSUPPORTED_MESSAGE


def test_registered_selectors(expansion):
    assert expansion.router.selectors() == [
        "AUTHME",
        "BUKKIT",
        "DIFFDAYS",
        "DIFFMONTHS",
        "DIFFWEEKS",
        "GETTHEWEEK",
        "LUCKPERMSEXPIRYTIME",
    ]


# Router


class EchoHandler:
    min_args = 2

    def handle(self, args, player):
        return EvalResult(text=args[1])


def test_router_dispatch_is_case_insensitive():
    router = Router()
    router.register("echo", EchoHandler())
    assert router.dispatch(["ECHO", "hi"]).text == "hi"


def test_router_rejects_duplicates():
    router = Router()
    router.register("echo", EchoHandler())
    with pytest.raises(ValueError, match="already registered"):
        router.register("Echo", EchoHandler())


def test_router_outcomes():
    router = Router()
    router.register("echo", EchoHandler())
    assert router.dispatch(["echo"]).outcome == Outcome.INSUFFICIENT_ARGS
    assert router.dispatch(["other", "x"]).outcome == Outcome.UNKNOWN_SELECTOR
    assert router.dispatch([]).outcome == Outcome.UNKNOWN_SELECTOR


def test_base_handler_requires_handle():
    with pytest.raises(TypeError):
        BaseHandler()


def test_base_handler_reply_renders_lower_case_booleans():
    class Constant(BaseHandler):
        def handle(self, args, player=None):
            return self.reply(True)

    assert Constant().handle(["constant"]).text == "true"
    assert Constant().reply(False).text == "false"
    assert Constant().reply(3).text == "3"
