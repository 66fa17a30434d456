"""Battle result cache keyed by (lower-cased address pair, nonce).

Backed by Redis when a client is configured, otherwise by an in-process dict
with TTL and oldest-first batch eviction. Battles are pure, so a miss only
costs a recomputation.
"""
from __future__ import annotations

import json
import logging
import time
from dataclasses import asdict, dataclass, replace
from typing import Optional

from redis.exceptions import RedisError

from ethrpg.core.config import settings
from ethrpg.game.constants import ActionType, CharacterClass, MatchupAdvantage
from ethrpg.game.matchups import BattleMatchup
from ethrpg.game.models import BattleAction, BattleResult, CharacterSnapshot, CharacterStats

logger = logging.getLogger(__name__)

CACHE_SCHEMA_VERSION = 2
REDIS_BATTLE_PREFIX = "battle:"


@dataclass(frozen=True)
class BattleRecord:
    """A finished battle as the service hands it out."""

    result: BattleResult
    share_url: str
    cached: bool = False


def build_key(addr1: str, addr2: str, nonce: str) -> str:
    return f"{REDIS_BATTLE_PREFIX}{addr1.lower()}:{addr2.lower()}:{nonce}"


def encode_record(record: BattleRecord) -> str:
    data = {"result": asdict(record.result), "share_url": record.share_url}
    return json.dumps({"v": CACHE_SCHEMA_VERSION, "data": data}, ensure_ascii=False)


def _decode_result(data: dict) -> BattleResult:
    fighters = tuple(
        CharacterSnapshot(
            address=f["address"],
            class_id=CharacterClass(f["class_id"]),
            stats=CharacterStats(**f["stats"]),
            ens_name=f.get("ens_name"),
        )
        for f in data["fighters"]
    )
    turns = tuple(
        BattleAction(**{**a, "action_type": ActionType(a["action_type"])}) for a in data["turns"]
    )
    matchup = BattleMatchup(
        fighter0_advantage=MatchupAdvantage(data["matchup"]["fighter0_advantage"]),
        fighter1_advantage=MatchupAdvantage(data["matchup"]["fighter1_advantage"]),
    )
    return BattleResult(**{**data, "fighters": fighters, "turns": turns, "matchup": matchup})


def decode_record(raw: str) -> Optional[BattleRecord]:
    """Parse a cached payload; None for anything stale or malformed."""
    try:
        envelope = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Battle cache entry is not valid JSON, dropping")
        return None
    if not isinstance(envelope, dict) or envelope.get("v") != CACHE_SCHEMA_VERSION:
        return None
    try:
        data = envelope["data"]
        return BattleRecord(result=_decode_result(data["result"]), share_url=data["share_url"])
    except (KeyError, TypeError, ValueError):
        logger.warning("Battle cache entry has an unexpected shape, dropping")
        return None


class BattleCache:
    """Cache for finished battles."""

    def __init__(
        self,
        redis_client=None,
        ttl_seconds: int | None = None,
        max_entries: int | None = None,
        eviction_batch: int | None = None,
    ):
        self.redis = redis_client
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.battle_cache_ttl_seconds
        self.max_entries = max_entries if max_entries is not None else settings.battle_cache_max_entries
        self.eviction_batch = eviction_batch if eviction_batch is not None else settings.battle_cache_eviction_batch
        # key -> (stored_at, payload)
        self._entries: dict[str, tuple[float, str]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, addr1: str, addr2: str, nonce: str) -> Optional[BattleRecord]:
        key = build_key(addr1, addr2, nonce)
        if self.redis is not None:
            try:
                raw = await self.redis.get(key)
            except RedisError as e:
                logger.warning("Battle cache read failed for %s: %s", key, e)
                return None
        else:
            raw = self._get_local(key)

        if raw is None:
            return None
        record = decode_record(raw)
        if record is None:
            await self.delete(key)
            return None
        logger.debug("Battle cache hit: %s", key)
        return record

    async def set(self, addr1: str, addr2: str, nonce: str, record: BattleRecord) -> None:
        key = build_key(addr1, addr2, nonce)
        payload = encode_record(replace(record, cached=False))
        if self.redis is not None:
            try:
                await self.redis.set(key, payload, ex=self.ttl_seconds)
            except RedisError as e:
                logger.warning("Battle cache write failed for %s: %s", key, e)
            return

        if key not in self._entries and len(self._entries) >= self.max_entries:
            self._evict_oldest()
        self._entries[key] = (time.time(), payload)

    async def delete(self, key: str) -> None:
        if self.redis is not None:
            try:
                await self.redis.delete(key)
            except RedisError as e:
                logger.warning("Battle cache delete failed for %s: %s", key, e)
            return
        self._entries.pop(key, None)

    def _get_local(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, payload = entry
        if time.time() - stored_at > self.ttl_seconds:
            del self._entries[key]
            return None
        return payload

    def _evict_oldest(self) -> None:
        oldest = sorted(self._entries.items(), key=lambda item: item[1][0])[: self.eviction_batch]
        for key, _ in oldest:
            del self._entries[key]
        logger.debug("Battle cache evicted %s entries", len(oldest))
