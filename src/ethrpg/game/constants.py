"""Game constants and configuration."""
from enum import Enum


class CharacterClass(str, Enum):
    """Closed set of character classes produced by the wallet classifier."""

    WARRIOR = "warrior"
    ROGUE = "rogue"
    HUNTER = "hunter"
    MERCHANT = "merchant"
    PRIEST = "priest"
    ELDER_WIZARD = "elder_wizard"
    GUARDIAN = "guardian"
    SUMMONER = "summoner"


class MatchupAdvantage(str, Enum):
    ADVANTAGED = "advantaged"
    NEUTRAL = "neutral"
    DISADVANTAGED = "disadvantaged"


class ActionType(str, Enum):
    SKILL = "skill"
    BASIC_ATTACK = "basic_attack"


CLASS_NAMES = {
    CharacterClass.WARRIOR: "Warrior",
    CharacterClass.ROGUE: "Rogue",
    CharacterClass.HUNTER: "Hunter",
    CharacterClass.MERCHANT: "Merchant",
    CharacterClass.PRIEST: "Priest",
    CharacterClass.ELDER_WIZARD: "Elder Wizard",
    CharacterClass.GUARDIAN: "Guardian",
    CharacterClass.SUMMONER: "Summoner",
}

# Battle length
MAX_ROUNDS = 20  # each round = one action per fighter

# Crit / dodge
BASE_CRIT_CHANCE = 0.08
LUCK_CRIT_SCALING = 0.0003  # +0.03% crit per LUCK point
CRIT_MULTIPLIER = 1.8
DEX_DODGE_SCALING = 0.0003  # +0.03% dodge per DEX point

# Basic attack: STR * 0.3 + rand * LUCK * 0.1 + rand * DEX * 0.05
BASIC_ATTACK_STR_COEFFICIENT = 0.3
BASIC_ATTACK_LUCK_COEFFICIENT = 0.1
BASIC_ATTACK_DEX_COEFFICIENT = 0.05

# First mover score: LUCK + DEX * 0.3
INITIATIVE_DEX_COEFFICIENT = 0.3

# Defense: floor(max_hp * 2%)
DEFENSE_HP_COEFFICIENT = 0.02
ANCIENT_SPELL_DEFENSE_FACTOR = 0.5

# Guardian Counter Stance
REFLECT_RATIO = 0.5
# Guardian anti-burst: excess above threshold is halved
ANTI_BURST_EXCESS_FACTOR = 0.5

# Matchup multipliers
DAMAGE_DEALT_MODIFIERS = {
    MatchupAdvantage.ADVANTAGED: 1.15,
    MatchupAdvantage.NEUTRAL: 1.0,
    MatchupAdvantage.DISADVANTAGED: 0.80,
}
DAMAGE_RECEIVED_MODIFIERS = {
    MatchupAdvantage.ADVANTAGED: 0.80,
    MatchupAdvantage.NEUTRAL: 1.0,
    MatchupAdvantage.DISADVANTAGED: 1.15,
}

# Seeding (32-bit FNV-1a)
FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193
