"""PvP battle simulation engine.

Pure and deterministic: the whole battle is a function of the two snapshots
and the nonce, through the seeded PRNG in ``ethrpg.game.rng``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Optional

from ethrpg.game.constants import (
    ANTI_BURST_EXCESS_FACTOR,
    CRIT_MULTIPLIER,
    MAX_ROUNDS,
    REFLECT_RATIO,
    ActionType,
    CharacterClass,
)
from ethrpg.game.formulas import (
    calculate_basic_attack,
    calculate_crit_chance,
    calculate_defense,
    calculate_dodge_chance,
    calculate_hp_fraction,
    calculate_hp_percent,
    calculate_initiative,
    round_half_up,
)
from ethrpg.game.matchups import BattleMatchup, get_damage_modifier, get_receive_modifier, resolve_matchup
from ethrpg.game.models import (
    BattleAction,
    BattleResult,
    CharacterSnapshot,
    FighterState,
    SkillResult,
)
from ethrpg.game.narrative import NarrativeInput, Narrator, generate_narrative
from ethrpg.game.rng import generate_battle_seed, rng_from_seed
from ethrpg.game.skills import Rng, SkillDefinition, effective_mp_cost, get_passive, get_skill

logger = logging.getLogger(__name__)


def init_fighter_state(fighter: CharacterSnapshot) -> FighterState:
    """Fresh per-battle state with battle-start passives applied."""
    passive = get_passive(fighter.class_id)
    max_hp = round_half_up(fighter.stats.hp * (1 + passive.battle_start_hp_bonus))
    state = FighterState(
        current_hp=max_hp,
        max_hp=max_hp,
        current_mp=fighter.stats.mp,
        max_mp=fighter.stats.mp,
        stats=fighter.stats,
        class_id=CharacterClass(fighter.class_id),
    )
    state.heal(round_half_up(max_hp * passive.battle_start_heal_percent))
    return state


def determine_first_mover(fighter0: CharacterSnapshot, fighter1: CharacterSnapshot, rng: Rng) -> int:
    """Higher LUCK + DEX*0.3 acts first; then lower address; then one PRNG draw."""
    score0 = calculate_initiative(fighter0.stats.luck, fighter0.stats.dex)
    score1 = calculate_initiative(fighter1.stats.luck, fighter1.stats.dex)
    if score0 != score1:
        return 0 if score0 > score1 else 1

    addr0 = fighter0.address.lower()
    addr1 = fighter1.address.lower()
    if addr0 != addr1:
        return 0 if addr0 < addr1 else 1

    return 0 if rng() < 0.5 else 1


def apply_anti_burst(damage: int, target: FighterState) -> int:
    """Guardian passive: halve the part of a hit above the max-HP threshold."""
    threshold_ratio = get_passive(target.class_id).anti_burst_threshold
    if threshold_ratio <= 0:
        return damage
    threshold = target.max_hp * threshold_ratio
    if damage > threshold:
        return round_half_up(threshold + (damage - threshold) * ANTI_BURST_EXCESS_FACTOR)
    return damage


def apply_turn_end_passives(actor: FighterState) -> None:
    passive = get_passive(actor.class_id)

    # Priest: heal at the end of each own turn
    if passive.turn_end_heal_percent > 0:
        actor.heal(round_half_up(actor.max_hp * passive.turn_end_heal_percent))

    # Merchant: MP recovery every N own turns
    if passive.mp_recovery_interval > 0 and actor.turns_elapsed % passive.mp_recovery_interval == 0:
        actor.restore_mp(round_half_up(actor.max_mp * passive.mp_recovery_percent))


def determine_winner(
    states: tuple[FighterState, FighterState],
    fighters: tuple[CharacterSnapshot, CharacterSnapshot],
) -> int:
    """KO, then HP fraction, then Power; fighter 0 on a full tie."""
    if states[0].is_defeated and not states[1].is_defeated:
        return 1
    if states[1].is_defeated and not states[0].is_defeated:
        return 0

    fraction0 = calculate_hp_fraction(states[0].current_hp, states[0].max_hp)
    fraction1 = calculate_hp_fraction(states[1].current_hp, states[1].max_hp)
    if fraction0 != fraction1:
        return 0 if fraction0 > fraction1 else 1

    power0 = fighters[0].stats.power
    power1 = fighters[1].stats.power
    if power0 != power1:
        return 0 if power0 > power1 else 1

    return 0


def _use_skill(
    skill: SkillDefinition, actor: FighterState, target: FighterState, rng: Rng
) -> SkillResult:
    actor.current_mp -= effective_mp_cost(actor.class_id)
    actor.skill_cooldown = skill.cooldown

    outcome = skill.execute(actor, target, rng)
    actor.apply(outcome.actor)
    target.apply(outcome.target)
    result = outcome.result

    # Keen Eye: one extra crit roll against the passive bonus alone
    crit_bonus = get_passive(actor.class_id).crit_chance_bonus
    if skill.uses_generic_crit_model and crit_bonus > 0 and not result.is_crit:
        if rng() < crit_bonus:
            result = replace(result, damage=round_half_up(result.damage * CRIT_MULTIPLIER), is_crit=True)
    return result


def _basic_attack(actor: FighterState, rng: Rng) -> SkillResult:
    stats = actor.stats
    damage = calculate_basic_attack(stats.str, stats.luck, stats.dex, rng)
    crit_chance = calculate_crit_chance(stats.luck, get_passive(actor.class_id).crit_chance_bonus)
    is_crit = rng() < crit_chance
    if is_crit:
        damage = round_half_up(damage * CRIT_MULTIPLIER)
    return SkillResult(damage=damage, is_crit=is_crit)


def _mitigate(
    raw_damage: int,
    actor: FighterState,
    target: FighterState,
    actor_index: int,
    matchup: BattleMatchup,
    defense_factor: float,
) -> int:
    """Matchup -> one-shot modifiers -> defense -> anti-burst -> flat bonus."""
    damage = round_half_up(raw_damage * get_damage_modifier(matchup.advantage_of(actor_index)))
    damage = round_half_up(damage * get_receive_modifier(matchup.advantage_of(1 - actor_index)))
    damage = round_half_up(damage * actor.damage_dealt_modifier)
    damage = round_half_up(damage * target.damage_received_modifier)

    defense = calculate_defense(target.max_hp, get_passive(target.class_id).defense_multiplier)
    defense = math.floor(defense * defense_factor)
    damage = max(1, damage - defense)

    damage = apply_anti_burst(damage, target)

    bonus_ratio = get_passive(actor.class_id).bonus_damage_per_turn
    if bonus_ratio > 0:
        damage += round_half_up(actor.stats.int * bonus_ratio)
    return damage


def resolve_action(
    turn: int,
    actor_index: int,
    states: tuple[FighterState, FighterState],
    fighters: tuple[CharacterSnapshot, CharacterSnapshot],
    matchup: BattleMatchup,
    rng: Rng,
    narrator: Narrator = generate_narrative,
) -> BattleAction:
    """Resolve one non-stunned action of the acting fighter and return its log record."""
    actor = states[actor_index]
    target = states[1 - actor_index]

    skill = get_skill(actor.class_id)
    skill_name: Optional[str] = None
    defense_factor = 1.0
    if actor.current_mp >= effective_mp_cost(actor.class_id) and actor.skill_cooldown <= 0:
        action_type = ActionType.SKILL
        skill_name = skill.name
        defense_factor = skill.defense_factor
        result = _use_skill(skill, actor, target, rng)
    else:
        action_type = ActionType.BASIC_ATTACK
        result = _basic_attack(actor, rng)

    dodge_chance = calculate_dodge_chance(target.stats.dex, get_passive(target.class_id).dodge_chance_bonus)
    is_dodge = result.damage > 0 and rng() < dodge_chance

    if is_dodge:
        # skill effects on the caster or the target's MP already landed
        event = NarrativeInput(
            action_type=action_type,
            skill_name=skill_name,
            damage=0,
            is_crit=False,
            is_stun=False,
            is_dodge=True,
            healed=result.healed or None,
            mp_drained=result.mp_drained or None,
        )
    else:
        damage = _mitigate(result.damage, actor, target, actor_index, matchup, defense_factor)
        target.take_damage(damage)
        if result.is_stun:
            target.is_stunned = True

        reflected = 0
        if target.is_reflecting and damage > 0:
            reflected = round_half_up(damage * REFLECT_RATIO)
            actor.take_damage(reflected)
            target.is_reflecting = False

        actor.damage_dealt_modifier = 1.0
        target.damage_received_modifier = 1.0

        event = NarrativeInput(
            action_type=action_type,
            skill_name=skill_name,
            damage=damage,
            is_crit=result.is_crit,
            is_stun=result.is_stun,
            is_dodge=False,
            healed=result.healed or None,
            reflected=reflected or None,
            mp_drained=result.mp_drained or None,
        )

    return BattleAction(
        turn=turn,
        actor_index=actor_index,
        action_type=event.action_type,
        skill_name=event.skill_name,
        damage=event.damage,
        healed=event.healed,
        reflected=event.reflected,
        mp_drained=event.mp_drained,
        is_crit=event.is_crit,
        is_stun=event.is_stun,
        is_dodge=event.is_dodge,
        actor_hp_after=actor.current_hp,
        target_hp_after=target.current_hp,
        narrative=narrator(
            event,
            fighters[actor_index].display_name,
            fighters[1 - actor_index].display_name,
            actor.class_id,
        ),
    )


def _stunned_turn(
    turn: int,
    actor_index: int,
    states: tuple[FighterState, FighterState],
    fighters: tuple[CharacterSnapshot, CharacterSnapshot],
    narrator: Narrator,
) -> BattleAction:
    event = NarrativeInput(
        action_type=ActionType.BASIC_ATTACK,
        damage=0,
        is_crit=False,
        is_stun=False,
        is_dodge=False,
        lost_to_stun=True,
    )
    return BattleAction(
        turn=turn,
        actor_index=actor_index,
        action_type=ActionType.BASIC_ATTACK,
        damage=0,
        is_crit=False,
        is_stun=False,
        is_dodge=False,
        actor_hp_after=states[actor_index].current_hp,
        target_hp_after=states[1 - actor_index].current_hp,
        narrative=narrator(
            event,
            fighters[actor_index].display_name,
            fighters[1 - actor_index].display_name,
            states[actor_index].class_id,
        ),
    )


def simulate_battle(
    fighter0: CharacterSnapshot,
    fighter1: CharacterSnapshot,
    nonce: str,
    narrator: Narrator = generate_narrative,
) -> BattleResult:
    """Run a full battle; identical inputs always produce an identical result."""
    battle_seed = generate_battle_seed(fighter0.address, fighter1.address, nonce)
    rng = rng_from_seed(battle_seed)

    fighters = (fighter0, fighter1)
    states = (init_fighter_state(fighter0), init_fighter_state(fighter1))
    matchup = resolve_matchup(fighter0.class_id, fighter1.class_id)

    first = determine_first_mover(fighter0, fighter1, rng)
    turn_order = (first, 1 - first)

    turns: list[BattleAction] = []
    turn_number = 0

    for _ in range(MAX_ROUNDS):
        for actor_index in turn_order:
            actor = states[actor_index]
            target = states[1 - actor_index]
            if actor.is_defeated or target.is_defeated:
                break

            turn_number += 1
            actor.turns_elapsed += 1

            if actor.is_stunned:
                actor.is_stunned = False
                turns.append(_stunned_turn(turn_number, actor_index, states, fighters, narrator))
                apply_turn_end_passives(actor)
                continue

            turns.append(resolve_action(turn_number, actor_index, states, fighters, matchup, rng, narrator))

            if actor.skill_cooldown > 0:
                actor.skill_cooldown -= 1

            if actor.is_defeated or target.is_defeated:
                break

            apply_turn_end_passives(actor)

        if states[0].is_defeated or states[1].is_defeated:
            break

    winner = determine_winner(states, fighters)
    winner_state = states[winner]
    logger.debug(
        "battle seed=%s nonce=%s winner=%s turns=%s", battle_seed, nonce, winner, turn_number
    )

    return BattleResult(
        fighters=fighters,
        winner=winner,
        turns=tuple(turns),
        total_turns=turn_number,
        winner_hp_remaining=winner_state.current_hp,
        winner_hp_percent=calculate_hp_percent(winner_state.current_hp, winner_state.max_hp),
        matchup=matchup,
        nonce=nonce,
        battle_seed=battle_seed,
    )
