"""Static class skills and passives, one pair per class.

Skills are pure: they read the two fighter states and return a SkillOutcome
(result + requested deltas). The turn engine applies the deltas.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ethrpg.game.constants import ANCIENT_SPELL_DEFENSE_FACTOR, CRIT_MULTIPLIER, CharacterClass
from ethrpg.game.formulas import calculate_crit_chance, round_half_up
from ethrpg.game.models import FighterState, SkillOutcome, SkillResult, StateDelta

Rng = Callable[[], float]
SkillExecutor = Callable[[FighterState, FighterState, Rng], SkillOutcome]


@dataclass(frozen=True)
class SkillDefinition:
    name: str
    mp_cost: int
    cooldown: int
    execute: SkillExecutor
    # False for skills with their own crit rules; the Keen Eye re-roll skips those
    uses_generic_crit_model: bool = True
    # multiplier on the target defense while resolving this skill
    defense_factor: float = 1.0


@dataclass(frozen=True)
class PassiveDefinition:
    name: str
    battle_start_hp_bonus: float = 0.0
    battle_start_heal_percent: float = 0.0
    turn_end_heal_percent: float = 0.0
    crit_chance_bonus: float = 0.0
    dodge_chance_bonus: float = 0.0
    defense_multiplier: float = 0.0
    mp_cost_reduction: float = 0.0
    bonus_damage_per_turn: float = 0.0
    mp_recovery_interval: int = 0
    mp_recovery_percent: float = 0.0
    anti_burst_threshold: float = 0.0


def _roll_hit(base_damage: float, crit_chance: float, rng: Rng) -> tuple[float, bool]:
    is_crit = rng() < crit_chance
    return (base_damage * CRIT_MULTIPLIER if is_crit else base_damage), is_crit


# --- Skills ---


def _heavy_strike(actor: FighterState, target: FighterState, rng: Rng) -> SkillOutcome:
    damage, is_crit = _roll_hit(actor.stats.str * 0.5, calculate_crit_chance(actor.stats.luck), rng)
    is_stun = rng() < 0.15
    return SkillOutcome(SkillResult(damage=round_half_up(damage), is_crit=is_crit, is_stun=is_stun))


def _arbitrage(actor: FighterState, target: FighterState, rng: Rng) -> SkillOutcome:
    hit = actor.stats.str * 0.25
    first, first_crit = _roll_hit(hit, calculate_crit_chance(actor.stats.luck), rng)
    second, second_crit = _roll_hit(hit, 0.35, rng)
    return SkillOutcome(
        SkillResult(damage=round_half_up(first + second), is_crit=first_crit or second_crit)
    )


def _nft_snipe(actor: FighterState, target: FighterState, rng: Rng) -> SkillOutcome:
    crit_chance = 0.80 if actor.stats.luck > target.stats.luck else 0.25
    damage, is_crit = _roll_hit(actor.stats.luck * 0.4 + actor.stats.str * 0.1, crit_chance, rng)
    return SkillOutcome(SkillResult(damage=round_half_up(damage), is_crit=is_crit))


def _hostile_takeover(actor: FighterState, target: FighterState, rng: Rng) -> SkillOutcome:
    damage, is_crit = _roll_hit(actor.stats.str * 0.25, calculate_crit_chance(actor.stats.luck), rng)
    return SkillOutcome(
        SkillResult(damage=round_half_up(damage), is_crit=is_crit),
        actor=StateDelta(damage_dealt_factor=1.15),
        target=StateDelta(damage_dealt_factor=0.75),
    )


def _divine_shield(actor: FighterState, target: FighterState, rng: Rng) -> SkillOutcome:
    healed = min(round_half_up(actor.stats.int * 0.3), actor.max_hp - actor.current_hp)
    return SkillOutcome(
        SkillResult(healed=healed),
        actor=StateDelta(hp=healed, damage_received_factor=0.8),
    )


def _ancient_spell(actor: FighterState, target: FighterState, rng: Rng) -> SkillOutcome:
    # the engine halves target defense through defense_factor
    damage, is_crit = _roll_hit(actor.stats.int * 0.45, calculate_crit_chance(actor.stats.luck), rng)
    return SkillOutcome(SkillResult(damage=round_half_up(damage), is_crit=is_crit))


def _counter_stance(actor: FighterState, target: FighterState, rng: Rng) -> SkillOutcome:
    return SkillOutcome(SkillResult(), actor=StateDelta(set_reflecting=True))


def _portal_strike(actor: FighterState, target: FighterState, rng: Rng) -> SkillOutcome:
    damage, is_crit = _roll_hit(
        (actor.stats.str + actor.stats.int) * 0.2, calculate_crit_chance(actor.stats.luck), rng
    )
    drained = max(0, min(10, target.current_mp))
    return SkillOutcome(
        SkillResult(damage=round_half_up(damage), is_crit=is_crit, mp_drained=drained),
        target=StateDelta(mp=-drained),
    )


HEAVY_STRIKE = "Heavy Strike"
ARBITRAGE = "Arbitrage"
NFT_SNIPE = "NFT Snipe"
HOSTILE_TAKEOVER = "Hostile Takeover"
DIVINE_SHIELD = "Divine Shield"
ANCIENT_SPELL = "Ancient Spell"
COUNTER_STANCE = "Counter Stance"
PORTAL_STRIKE = "Portal Strike"

CLASS_SKILLS: dict[CharacterClass, SkillDefinition] = {
    CharacterClass.WARRIOR: SkillDefinition(HEAVY_STRIKE, mp_cost=15, cooldown=2, execute=_heavy_strike),
    CharacterClass.ROGUE: SkillDefinition(
        ARBITRAGE, mp_cost=18, cooldown=3, execute=_arbitrage, uses_generic_crit_model=False
    ),
    CharacterClass.HUNTER: SkillDefinition(
        NFT_SNIPE, mp_cost=18, cooldown=2, execute=_nft_snipe, uses_generic_crit_model=False
    ),
    CharacterClass.MERCHANT: SkillDefinition(
        HOSTILE_TAKEOVER, mp_cost=20, cooldown=3, execute=_hostile_takeover
    ),
    CharacterClass.PRIEST: SkillDefinition(
        DIVINE_SHIELD, mp_cost=18, cooldown=3, execute=_divine_shield, uses_generic_crit_model=False
    ),
    CharacterClass.ELDER_WIZARD: SkillDefinition(
        ANCIENT_SPELL,
        mp_cost=35,
        cooldown=3,
        execute=_ancient_spell,
        defense_factor=ANCIENT_SPELL_DEFENSE_FACTOR,
    ),
    CharacterClass.GUARDIAN: SkillDefinition(
        COUNTER_STANCE, mp_cost=15, cooldown=2, execute=_counter_stance, uses_generic_crit_model=False
    ),
    CharacterClass.SUMMONER: SkillDefinition(PORTAL_STRIKE, mp_cost=22, cooldown=3, execute=_portal_strike),
}


# --- Passives ---

CLASS_PASSIVES: dict[CharacterClass, PassiveDefinition] = {
    CharacterClass.WARRIOR: PassiveDefinition("Iron Will", battle_start_hp_bonus=0.10),
    CharacterClass.ROGUE: PassiveDefinition("Evasion", dodge_chance_bonus=0.10),
    CharacterClass.HUNTER: PassiveDefinition("Keen Eye", crit_chance_bonus=0.15),
    CharacterClass.MERCHANT: PassiveDefinition(
        "Compound Interest", mp_recovery_interval=4, mp_recovery_percent=0.15
    ),
    CharacterClass.PRIEST: PassiveDefinition(
        "Blessing", battle_start_heal_percent=0.05, turn_end_heal_percent=0.015
    ),
    CharacterClass.ELDER_WIZARD: PassiveDefinition("Mana Well", mp_cost_reduction=0.15),
    CharacterClass.GUARDIAN: PassiveDefinition(
        "Unbreakable", defense_multiplier=0.20, anti_burst_threshold=0.20
    ),
    CharacterClass.SUMMONER: PassiveDefinition("Summon Familiar", bonus_damage_per_turn=0.05),
}


def get_skill(class_id: CharacterClass) -> SkillDefinition:
    return CLASS_SKILLS[CharacterClass(class_id)]


def get_passive(class_id: CharacterClass) -> PassiveDefinition:
    return CLASS_PASSIVES[CharacterClass(class_id)]


def effective_mp_cost(class_id: CharacterClass) -> int:
    """Skill cost after the class mp-cost passive."""
    skill = get_skill(class_id)
    return round_half_up(skill.mp_cost * (1 - get_passive(class_id).mp_cost_reduction))
