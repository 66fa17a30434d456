"""Battle data records: snapshots in, per-battle state, log records out."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ethrpg.game.constants import ActionType, CharacterClass
from ethrpg.game.matchups import BattleMatchup


@dataclass(frozen=True)
class CharacterStats:
    level: int
    hp: int
    mp: int
    str: int
    int: int
    dex: int
    luck: int
    power: int


@dataclass(frozen=True)
class CharacterSnapshot:
    """Immutable fighter input supplied by the stat/classification pipeline."""

    address: str
    class_id: CharacterClass
    stats: CharacterStats
    ens_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.ens_name:
            return self.ens_name
        return f"{self.address[:6]}...{self.address[-4:]}"


@dataclass(frozen=True)
class StateDelta:
    """Change a skill requests on one fighter; applied by the turn engine."""

    hp: int = 0
    mp: int = 0
    damage_dealt_factor: float = 1.0
    damage_received_factor: float = 1.0
    set_reflecting: bool = False


@dataclass(frozen=True)
class SkillResult:
    damage: int = 0
    healed: int = 0
    is_crit: bool = False
    is_stun: bool = False
    mp_drained: int = 0
    reflected: int = 0


@dataclass(frozen=True)
class SkillOutcome:
    result: SkillResult
    actor: StateDelta = field(default_factory=StateDelta)
    target: StateDelta = field(default_factory=StateDelta)


@dataclass
class FighterState:
    """Mutable per-battle state. Only the turn engine writes to it."""

    current_hp: int
    max_hp: int
    current_mp: int
    max_mp: int
    stats: CharacterStats
    class_id: CharacterClass
    skill_cooldown: int = 0
    is_stunned: bool = False
    # one-shot multipliers, reset to 1.0 once consumed by a hit
    damage_dealt_modifier: float = 1.0
    damage_received_modifier: float = 1.0
    is_reflecting: bool = False
    turns_elapsed: int = 0

    @property
    def is_defeated(self) -> bool:
        return self.current_hp <= 0

    def take_damage(self, amount: int) -> None:
        self.current_hp = max(0, self.current_hp - amount)

    def heal(self, amount: int) -> int:
        """Heal up to max HP; returns the amount actually restored."""
        before = self.current_hp
        self.current_hp = min(self.max_hp, self.current_hp + amount)
        return self.current_hp - before

    def restore_mp(self, amount: int) -> None:
        self.current_mp = min(self.max_mp, self.current_mp + amount)

    def apply(self, delta: StateDelta) -> None:
        self.current_hp = max(0, min(self.max_hp, self.current_hp + delta.hp))
        self.current_mp = max(0, min(self.max_mp, self.current_mp + delta.mp))
        self.damage_dealt_modifier *= delta.damage_dealt_factor
        self.damage_received_modifier *= delta.damage_received_factor
        if delta.set_reflecting:
            self.is_reflecting = True


@dataclass(frozen=True)
class BattleAction:
    turn: int
    actor_index: int
    action_type: ActionType
    damage: int
    is_crit: bool
    is_stun: bool
    is_dodge: bool
    actor_hp_after: int
    target_hp_after: int
    narrative: str
    skill_name: Optional[str] = None
    healed: Optional[int] = None
    reflected: Optional[int] = None
    mp_drained: Optional[int] = None


@dataclass(frozen=True)
class BattleResult:
    fighters: tuple[CharacterSnapshot, CharacterSnapshot]
    winner: int
    turns: tuple[BattleAction, ...]
    total_turns: int
    winner_hp_remaining: int
    winner_hp_percent: int
    matchup: BattleMatchup
    nonce: str
    battle_seed: str
