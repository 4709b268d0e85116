from __future__ import annotations

import pytest

from conftest import make_player, make_roster
from strategy.opponents import normalize_champion_name, resolve, resolve_opponents


@pytest.mark.parametrize(
    ("display", "key"),
    [
        ("Kai'Sa", "Kaisa"),
        ("Dr. Mundo", "DrMundo"),
        ("Cho'Gath", "Chogath"),
        ("Kha'Zix", "Khazix"),
        ("Lee Sin", "LeeSin"),
        ("Ahri", "Ahri"),
    ],
)
def test_normalize_champion_name(display: str, key: str) -> None:
    assert normalize_champion_name(display) == key


def test_resolve_returns_other_team_in_roster_order() -> None:
    roster = make_roster(level=7)
    tracked = make_player("Pulsar", "Orianna", "ORDER")

    assert resolve(tracked, roster) == [("Ahri", 7), ("Kaisa", 7), ("DrMundo", 7)]


def test_resolve_uses_roster_team_not_snapshot_team() -> None:
    roster = make_roster()
    # The active-player section carries no team; the roster entry decides
    tracked = make_player("Pulsar", "", "")

    assert [name for name, _ in resolve(tracked, roster)] == ["Ahri", "Kaisa", "DrMundo"]


def test_resolve_is_empty_when_tracked_player_missing() -> None:
    tracked = make_player("Nobody", "Orianna", "ORDER")

    assert resolve(tracked, make_roster()) == []


def test_resolve_opponents_scales_resistances(champions) -> None:
    tracked = make_player("Pulsar", "Orianna", "ORDER")

    records = resolve_opponents(tracked, make_roster(level=10), champions)

    ahri = records[0]
    assert ahri.champion_id == "Ahri"
    assert ahri.level == 10
    assert ahri.scaled_armor == pytest.approx(21 + 4.7 * 9)
    assert ahri.scaled_magic_resist == pytest.approx(30 + 1.3 * 9)
    assert [r.champion_id for r in records] == ["Ahri", "Kaisa", "DrMundo"]


def test_unknown_champion_gets_zero_resistances(champions, caplog) -> None:
    tracked = make_player("Pulsar", "Orianna", "ORDER")
    roster = (tracked, make_player("Mystery", "Newchamp", "CHAOS", 5))

    records = resolve_opponents(tracked, roster, champions)

    assert len(records) == 1
    assert (records[0].scaled_armor, records[0].scaled_magic_resist) == (0.0, 0.0)
    assert "Newchamp" in caplog.text
