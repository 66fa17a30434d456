"""Class advantage rings.

Ring A (circular): warrior -> rogue -> merchant -> priest -> elder_wizard -> warrior
Ring B (circular): hunter -> summoner -> guardian -> hunter
Each class beats the next one in its ring. Cross-ring, same class and
non-adjacent pairs are neutral.
"""

from __future__ import annotations

from dataclasses import dataclass

from ethrpg.game.constants import (
    DAMAGE_DEALT_MODIFIERS,
    DAMAGE_RECEIVED_MODIFIERS,
    CharacterClass,
    MatchupAdvantage,
)

RING_A: tuple[CharacterClass, ...] = (
    CharacterClass.WARRIOR,
    CharacterClass.ROGUE,
    CharacterClass.MERCHANT,
    CharacterClass.PRIEST,
    CharacterClass.ELDER_WIZARD,
)
RING_B: tuple[CharacterClass, ...] = (
    CharacterClass.HUNTER,
    CharacterClass.SUMMONER,
    CharacterClass.GUARDIAN,
)
RINGS = (RING_A, RING_B)

_OPPOSITE = {
    MatchupAdvantage.ADVANTAGED: MatchupAdvantage.DISADVANTAGED,
    MatchupAdvantage.DISADVANTAGED: MatchupAdvantage.ADVANTAGED,
    MatchupAdvantage.NEUTRAL: MatchupAdvantage.NEUTRAL,
}


@dataclass(frozen=True)
class BattleMatchup:
    fighter0_advantage: MatchupAdvantage
    fighter1_advantage: MatchupAdvantage

    def advantage_of(self, index: int) -> MatchupAdvantage:
        return self.fighter0_advantage if index == 0 else self.fighter1_advantage


@dataclass(frozen=True)
class MatchupInfo:
    strong_vs: tuple[CharacterClass, ...]
    weak_vs: tuple[CharacterClass, ...]


def _ring_advantage(
    ring: tuple[CharacterClass, ...], class1: CharacterClass, class2: CharacterClass
) -> MatchupAdvantage:
    if class1 not in ring or class2 not in ring:
        return MatchupAdvantage.NEUTRAL
    idx1 = ring.index(class1)
    idx2 = ring.index(class2)
    if (idx1 + 1) % len(ring) == idx2:
        return MatchupAdvantage.ADVANTAGED
    if (idx2 + 1) % len(ring) == idx1:
        return MatchupAdvantage.DISADVANTAGED
    return MatchupAdvantage.NEUTRAL


def resolve_matchup(class1: CharacterClass, class2: CharacterClass) -> BattleMatchup:
    """Advantage labels for fighter 0 (class1) and fighter 1 (class2)."""
    class1 = CharacterClass(class1)
    class2 = CharacterClass(class2)
    if class1 != class2:
        for ring in RINGS:
            advantage = _ring_advantage(ring, class1, class2)
            if advantage is not MatchupAdvantage.NEUTRAL:
                return BattleMatchup(advantage, _OPPOSITE[advantage])
    return BattleMatchup(MatchupAdvantage.NEUTRAL, MatchupAdvantage.NEUTRAL)


def get_damage_modifier(advantage: MatchupAdvantage) -> float:
    return DAMAGE_DEALT_MODIFIERS[advantage]


def get_receive_modifier(advantage: MatchupAdvantage) -> float:
    return DAMAGE_RECEIVED_MODIFIERS[advantage]


def _compute_matchup_info(class_id: CharacterClass) -> MatchupInfo:
    strong: list[CharacterClass] = []
    weak: list[CharacterClass] = []
    for other in RING_A + RING_B:
        if other == class_id:
            continue
        advantage = resolve_matchup(class_id, other).fighter0_advantage
        if advantage is MatchupAdvantage.ADVANTAGED:
            strong.append(other)
        elif advantage is MatchupAdvantage.DISADVANTAGED:
            weak.append(other)
    return MatchupInfo(strong_vs=tuple(strong), weak_vs=tuple(weak))


# Precomputed at import for class cards
MATCHUP_INFO: dict[CharacterClass, MatchupInfo] = {
    class_id: _compute_matchup_info(class_id) for class_id in RING_A + RING_B
}


def get_matchup_info(class_id: CharacterClass) -> MatchupInfo:
    return MATCHUP_INFO[CharacterClass(class_id)]
