"""Game formulas and calculations."""
import math

from ethrpg.game.constants import (
    BASE_CRIT_CHANCE,
    BASIC_ATTACK_DEX_COEFFICIENT,
    BASIC_ATTACK_LUCK_COEFFICIENT,
    BASIC_ATTACK_STR_COEFFICIENT,
    DEFENSE_HP_COEFFICIENT,
    DEX_DODGE_SCALING,
    INITIATIVE_DEX_COEFFICIENT,
    LUCK_CRIT_SCALING,
)


def round_half_up(value: float) -> int:
    """Round .5 upward, as the battle log and cached replays expect (not banker's rounding)."""
    return math.floor(value + 0.5)


def calculate_crit_chance(luck: int, bonus: float = 0.0) -> float:
    """Base crit chance: 8% + LUCK*0.03% (+ passive bonus)."""
    return BASE_CRIT_CHANCE + luck * LUCK_CRIT_SCALING + bonus


def calculate_dodge_chance(dex: int, bonus: float = 0.0) -> float:
    """Dodge chance: DEX*0.03% (+ passive bonus)."""
    return dex * DEX_DODGE_SCALING + bonus


def calculate_basic_attack(strength: int, luck: int, dex: int, rng) -> int:
    """Basic attack: STR*0.3 + rand(0, LUCK*0.1) + rand(0, DEX*0.05), floored."""
    return math.floor(
        strength * BASIC_ATTACK_STR_COEFFICIENT
        + rng() * luck * BASIC_ATTACK_LUCK_COEFFICIENT
        + rng() * dex * BASIC_ATTACK_DEX_COEFFICIENT
    )


def calculate_defense(max_hp: int, defense_multiplier: float = 0.0) -> int:
    """Defense: floor(max_hp * 2%) boosted by the class defense passive."""
    base = math.floor(max_hp * DEFENSE_HP_COEFFICIENT)
    return round_half_up(base * (1 + defense_multiplier))


def calculate_initiative(luck: int, dex: int) -> float:
    """First mover score: LUCK + DEX*0.3."""
    return luck + dex * INITIATIVE_DEX_COEFFICIENT


def calculate_hp_fraction(current_hp: int, max_hp: int) -> float:
    if max_hp <= 0:
        return 0.0
    return current_hp / max_hp


def calculate_hp_percent(current_hp: int, max_hp: int) -> int:
    return round_half_up(calculate_hp_fraction(current_hp, max_hp) * 100)
