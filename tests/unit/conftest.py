"""Shared fixtures: fighter snapshots and a scripted RNG."""
import pytest

from ethrpg.game.constants import CharacterClass
from ethrpg.game.models import CharacterSnapshot, CharacterStats

WARRIOR_ADDRESS = "0x" + "a" * 40
ROGUE_ADDRESS = "0x" + "b" * 40


class ScriptedRng:
    """Returns queued values in order; fails the test if drawn past the script."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def __call__(self) -> float:
        if not self.values:
            raise AssertionError("unexpected PRNG draw")
        self.calls += 1
        return self.values.pop(0)


def _make_fighter(
    class_id=CharacterClass.WARRIOR,
    address=WARRIOR_ADDRESS,
    ens_name=None,
    **stats,
) -> CharacterSnapshot:
    base = dict(level=30, hp=400, mp=200, str=200, int=100, dex=250, luck=120, power=40000)
    base.update(stats)
    return CharacterSnapshot(
        address=address,
        class_id=CharacterClass(class_id),
        stats=CharacterStats(**base),
        ens_name=ens_name,
    )


@pytest.fixture
def make_fighter():
    return _make_fighter


@pytest.fixture
def scripted_rng():
    return ScriptedRng


@pytest.fixture
def warrior():
    return _make_fighter(
        CharacterClass.WARRIOR,
        WARRIOR_ADDRESS,
        level=30, hp=400, mp=200, str=200, int=100, dex=250, luck=120, power=40000,
    )


@pytest.fixture
def rogue():
    return _make_fighter(
        CharacterClass.ROGUE,
        ROGUE_ADDRESS,
        level=28, hp=350, mp=180, str=180, int=110, dex=320, luck=140, power=35000,
    )
