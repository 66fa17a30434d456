"""Battle log sentences.

Pure formatting over the structured action fields; the engine calls it once per
emitted action and never reads the text back.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ethrpg.game.constants import CLASS_NAMES, ActionType, CharacterClass


@dataclass(frozen=True)
class NarrativeInput:
    action_type: ActionType
    damage: int
    is_crit: bool
    is_stun: bool
    is_dodge: bool
    skill_name: Optional[str] = None
    healed: Optional[int] = None
    reflected: Optional[int] = None
    mp_drained: Optional[int] = None
    # the actor was stunned and lost the turn
    lost_to_stun: bool = False


Narrator = Callable[[NarrativeInput, str, str, CharacterClass], str]

DODGE_VARIANTS = {
    CharacterClass.WARRIOR: ("Warrior sidesteps with raw instinct", "Warrior braces and rolls aside"),
    CharacterClass.ROGUE: ("Rogue vanishes into shadow", "Rogue slips away like smoke", "Rogue flickers out of reach"),
    CharacterClass.HUNTER: ("Hunter leaps aside", "Hunter ducks beneath the strike", "Hunter rolls to safety"),
    CharacterClass.MERCHANT: ("Merchant deftly sidesteps", "Merchant dodges with practiced ease"),
    CharacterClass.PRIEST: ("Priest is shielded by divine grace", "Priest fades behind a holy ward"),
    CharacterClass.ELDER_WIZARD: ("Elder Wizard blinks through space", "Elder Wizard phases out of existence"),
    CharacterClass.GUARDIAN: ("Guardian deflects with a raised shield", "Guardian absorbs the blow harmlessly"),
    CharacterClass.SUMMONER: ("Summoner warps behind a portal", "Summoner phases through the rift"),
}

BASIC_ATTACK_VARIANTS = {
    CharacterClass.WARRIOR: ("swings a heavy blade", "strikes with steel resolve", "delivers a crushing blow"),
    CharacterClass.ROGUE: ("slashes from the shadows", "delivers a quick cut", "strikes with lethal precision"),
    CharacterClass.HUNTER: ("releases a precise arrow", "fires a swift bolt", "lets fly a deadly shot"),
    CharacterClass.MERCHANT: ("throws weighted coins", "hurls a bag of gold", "flings a gilded dagger"),
    CharacterClass.PRIEST: ("channels divine light", "strikes with holy force", "unleashes sacred energy"),
    CharacterClass.ELDER_WIZARD: ("casts a flickering spell", "weaves arcane energy", "hurls a crackling bolt"),
    CharacterClass.GUARDIAN: ("bashes with a shield", "delivers a heavy shove", "slams with iron force"),
    CharacterClass.SUMMONER: ("commands a spirit to attack", "sends a phantom strike", "directs a spectral assault"),
}

SKILL_VARIANTS = {
    "Heavy Strike": (
        "brings down a devastating blow",
        "channels fury into a crushing strike",
        "slams the ground with earth-shaking force",
    ),
    "Arbitrage": (
        "exploits an opening with twin slashes",
        "strikes twice in rapid succession",
        "finds the gap and cuts deep, then deeper",
    ),
    "NFT Snipe": (
        "locks on and fires a lethal snipe",
        "takes aim at the rarest weak point",
        "releases a precision bolt infused with fortune",
    ),
    "Hostile Takeover": (
        "launches a ruthless corporate assault",
        "overwhelms the opponent with market force",
        "executes a leveraged strike on the enemy",
    ),
    "Divine Shield": (
        "calls upon holy light for protection",
        "invokes a radiant barrier of faith",
        "wraps in divine energy, mending wounds",
    ),
    "Ancient Spell": (
        "channels millennia of arcane knowledge",
        "unleashes a spell older than the blockchain",
        "weaves forbidden magic from the ancient ledger",
    ),
    "Counter Stance": (
        "braces behind an impenetrable wall",
        "raises a mirrored shield of retribution",
        "assumes an iron counter stance",
    ),
    "Portal Strike": (
        "tears open a rift and strikes through it",
        "summons a creature from beyond the veil",
        "channels spirit and steel through a portal",
    ),
}


def _select_variant(variants: tuple[str, ...], actor_name: str, damage: int) -> str:
    # stable pick so replays render the same text
    return variants[(len(actor_name) + damage) % len(variants)]


def _build_suffix(action: NarrativeInput) -> str:
    parts = [f"CRIT! {action.damage} damage!" if action.is_crit else f"{action.damage} damage."]
    if action.is_stun:
        parts.append("Target stunned!")
    if action.reflected:
        parts.append(f"{action.reflected} damage reflected!")
    if action.mp_drained:
        parts.append(f"Drained {action.mp_drained} MP!")
    if action.healed:
        parts.append(f"Recovered {action.healed} HP!")
    return " ".join(parts)


def generate_narrative(
    action: NarrativeInput,
    actor_name: str,
    target_name: str,
    actor_class: CharacterClass,
) -> str:
    """Human-readable sentence for one battle action."""
    actor_class = CharacterClass(actor_class)
    if action.lost_to_stun:
        return generate_stunned_narrative(actor_name)
    if action.is_dodge:
        dodge_text = _select_variant(DODGE_VARIANTS[actor_class], actor_name, action.damage)
        return f"{dodge_text} -- DODGE!"

    class_name = CLASS_NAMES[actor_class]
    if action.action_type == ActionType.SKILL and action.skill_name in SKILL_VARIANTS:
        text = _select_variant(SKILL_VARIANTS[action.skill_name], actor_name, action.damage)
        return f"{class_name} {text}! {_build_suffix(action)}"

    text = _select_variant(BASIC_ATTACK_VARIANTS[actor_class], actor_name, action.damage)
    return f"{class_name} {text}. {_build_suffix(action)}"


def generate_stunned_narrative(actor_name: str) -> str:
    return f"{actor_name} is stunned and cannot act!"
