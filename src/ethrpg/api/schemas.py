"""Pydantic schemas for API responses/requests."""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ethrpg.game.constants import ActionType, CharacterClass, MatchupAdvantage
from ethrpg.game.matchups import BattleMatchup
from ethrpg.game.models import BattleAction, BattleResult, CharacterSnapshot, CharacterStats
from ethrpg.services.battle_cache import BattleRecord


class CharacterStatsSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    level: int = Field(..., ge=0)
    hp: int = Field(..., ge=0)
    mp: int = Field(..., ge=0)
    strength: int = Field(..., ge=0, alias="str")
    intelligence: int = Field(..., ge=0, alias="int")
    dex: int = Field(..., ge=0)
    luck: int = Field(..., ge=0)
    power: int = Field(..., ge=0)

    def to_stats(self) -> CharacterStats:
        return CharacterStats(
            level=self.level,
            hp=self.hp,
            mp=self.mp,
            str=self.strength,
            int=self.intelligence,
            dex=self.dex,
            luck=self.luck,
            power=self.power,
        )

    @classmethod
    def from_stats(cls, stats: CharacterStats) -> "CharacterStatsSchema":
        return cls(
            level=stats.level,
            hp=stats.hp,
            mp=stats.mp,
            strength=stats.str,
            intelligence=stats.int,
            dex=stats.dex,
            luck=stats.luck,
            power=stats.power,
        )


class FighterSchema(BaseModel):
    address: str = Field(..., min_length=1)
    ens_name: Optional[str] = None
    class_id: CharacterClass
    stats: CharacterStatsSchema

    def to_snapshot(self) -> CharacterSnapshot:
        return CharacterSnapshot(
            address=self.address.strip().lower(),
            ens_name=self.ens_name,
            class_id=self.class_id,
            stats=self.stats.to_stats(),
        )

    @classmethod
    def from_snapshot(cls, snapshot: CharacterSnapshot) -> "FighterSchema":
        return cls(
            address=snapshot.address,
            ens_name=snapshot.ens_name,
            class_id=snapshot.class_id,
            stats=CharacterStatsSchema.from_stats(snapshot.stats),
        )


class BattleRequest(BaseModel):
    fighter1: FighterSchema
    fighter2: FighterSchema
    nonce: Optional[str] = None


class BattleActionOut(BaseModel):
    turn: int
    actor_index: int
    action_type: ActionType
    skill_name: Optional[str] = None
    damage: int
    healed: Optional[int] = None
    reflected: Optional[int] = None
    mp_drained: Optional[int] = None
    is_crit: bool
    is_stun: bool
    is_dodge: bool
    actor_hp_after: int
    target_hp_after: int
    narrative: str

    @classmethod
    def from_action(cls, action: BattleAction) -> "BattleActionOut":
        return cls(
            turn=action.turn,
            actor_index=action.actor_index,
            action_type=action.action_type,
            skill_name=action.skill_name,
            damage=action.damage,
            healed=action.healed,
            reflected=action.reflected,
            mp_drained=action.mp_drained,
            is_crit=action.is_crit,
            is_stun=action.is_stun,
            is_dodge=action.is_dodge,
            actor_hp_after=action.actor_hp_after,
            target_hp_after=action.target_hp_after,
            narrative=action.narrative,
        )


class MatchupOut(BaseModel):
    fighter0_advantage: MatchupAdvantage
    fighter1_advantage: MatchupAdvantage

    @classmethod
    def from_matchup(cls, matchup: BattleMatchup) -> "MatchupOut":
        return cls(
            fighter0_advantage=matchup.fighter0_advantage,
            fighter1_advantage=matchup.fighter1_advantage,
        )


class BattleResultOut(BaseModel):
    fighters: List[FighterSchema]
    winner: int
    turns: List[BattleActionOut]
    total_turns: int
    winner_hp_remaining: int
    winner_hp_percent: int
    matchup: MatchupOut
    nonce: str
    battle_seed: str

    @classmethod
    def from_result(cls, result: BattleResult) -> "BattleResultOut":
        return cls(
            fighters=[FighterSchema.from_snapshot(f) for f in result.fighters],
            winner=result.winner,
            turns=[BattleActionOut.from_action(a) for a in result.turns],
            total_turns=result.total_turns,
            winner_hp_remaining=result.winner_hp_remaining,
            winner_hp_percent=result.winner_hp_percent,
            matchup=MatchupOut.from_matchup(result.matchup),
            nonce=result.nonce,
            battle_seed=result.battle_seed,
        )


class BattleResponse(BaseModel):
    result: BattleResultOut
    share_url: str
    cached: bool = False

    @classmethod
    def from_record(cls, record: BattleRecord) -> "BattleResponse":
        return cls(
            result=BattleResultOut.from_result(record.result),
            share_url=record.share_url,
            cached=record.cached,
        )


class SkillOut(BaseModel):
    name: str
    mp_cost: int
    effective_mp_cost: int
    cooldown: int


class PassiveOut(BaseModel):
    name: str


class ClassInfoOut(BaseModel):
    id: CharacterClass
    name: str
    skill: SkillOut
    passive: PassiveOut
    strong_vs: List[CharacterClass]
    weak_vs: List[CharacterClass]


class ClassListResponse(BaseModel):
    classes: List[ClassInfoOut]
