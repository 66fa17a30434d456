"""Unit tests: battle log sentences."""
from ethrpg.game.constants import ActionType
from ethrpg.game.constants import CharacterClass as C
from ethrpg.game.narrative import (
    BASIC_ATTACK_VARIANTS,
    DODGE_VARIANTS,
    SKILL_VARIANTS,
    NarrativeInput,
    generate_narrative,
    generate_stunned_narrative,
)
from ethrpg.game.skills import CLASS_SKILLS


def _event(action_type=ActionType.BASIC_ATTACK, damage=0, **kwargs):
    fields = dict(is_crit=False, is_stun=False, is_dodge=False)
    fields.update(kwargs)
    return NarrativeInput(action_type=action_type, damage=damage, **fields)


def test_every_class_and_skill_has_variants():
    for class_id in C:
        assert DODGE_VARIANTS[class_id]
        assert BASIC_ATTACK_VARIANTS[class_id]
    for skill in CLASS_SKILLS.values():
        assert SKILL_VARIANTS[skill.name]


def test_basic_attack_sentence():
    # (len("Alice") + 10) % 3 == 0
    text = generate_narrative(_event(damage=10), "Alice", "Bob", C.WARRIOR)
    assert text == "Warrior swings a heavy blade. 10 damage."


def test_skill_sentence_with_crit_and_stun():
    event = _event(ActionType.SKILL, damage=90, is_crit=True, is_stun=True, skill_name="Heavy Strike")
    text = generate_narrative(event, "Bob", "Alice", C.WARRIOR)
    assert text == "Warrior brings down a devastating blow! CRIT! 90 damage! Target stunned!"


def test_dodge_sentence():
    event = _event(ActionType.SKILL, damage=0, is_dodge=True, skill_name="Arbitrage")
    text = generate_narrative(event, "Alice", "Bob", C.ROGUE)
    assert text == "Rogue flickers out of reach -- DODGE!"


def test_suffix_order():
    event = _event(
        ActionType.SKILL,
        damage=1,
        skill_name="Divine Shield",
        healed=30,
    )
    text = generate_narrative(event, "Alice", "Bob", C.PRIEST)
    assert text == "Priest calls upon holy light for protection! 1 damage. Recovered 30 HP!"

    event = _event(damage=48, reflected=24, mp_drained=10)
    text = generate_narrative(event, "Alice", "Bob", C.SUMMONER)
    assert text.endswith("48 damage. 24 damage reflected! Drained 10 MP!")


def test_same_input_same_sentence():
    event = _event(ActionType.SKILL, damage=77, skill_name="Portal Strike", mp_drained=10)
    first = generate_narrative(event, "0x1234...abcd", "vitalik.eth", C.SUMMONER)
    second = generate_narrative(event, "0x1234...abcd", "vitalik.eth", C.SUMMONER)
    assert first == second
    assert first.startswith("Summoner ")


def test_variant_depends_on_actor_name_and_damage():
    texts = {generate_narrative(_event(damage=d), "Alice", "Bob", C.HUNTER) for d in range(3)}
    assert len(texts) == 3


def test_stunned_sentence():
    assert generate_stunned_narrative("vitalik.eth") == "vitalik.eth is stunned and cannot act!"


def test_lost_turn_uses_stunned_sentence():
    event = _event(damage=0, lost_to_stun=True)
    text = generate_narrative(event, "vitalik.eth", "Bob", C.GUARDIAN)
    assert text == generate_stunned_narrative("vitalik.eth")
