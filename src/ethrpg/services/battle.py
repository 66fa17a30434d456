"""Battle service: simulate, attach the share link, cache."""
import logging
import uuid
from dataclasses import replace
from typing import Optional

from ethrpg.core.config import settings
from ethrpg.game.battle import simulate_battle
from ethrpg.game.models import CharacterSnapshot
from ethrpg.services.battle_cache import BattleCache, BattleRecord

logger = logging.getLogger(__name__)


def build_share_url(addr1: str, addr2: str, nonce: str) -> str:
    return f"{settings.site_url}/battle/{addr1}/{addr2}?n={nonce}"


class BattleService:
    """Service for PvP battles."""

    def __init__(self, cache: BattleCache):
        self.cache = cache

    async def get_cached_battle(self, addr1: str, addr2: str, nonce: str) -> Optional[BattleRecord]:
        """Return a previously computed battle, flagged as cached."""
        record = await self.cache.get(addr1, addr2, nonce)
        if record is None:
            return None
        return replace(record, cached=True)

    async def execute_battle(
        self,
        fighter0: CharacterSnapshot,
        fighter1: CharacterSnapshot,
        nonce: Optional[str] = None,
    ) -> BattleRecord:
        """Run a battle and cache it.

        Without a nonce a fresh one is generated, so every call is a new fight;
        passing a stable nonce replays the same fight.
        """
        battle_nonce = nonce or str(uuid.uuid4())
        result = simulate_battle(fighter0, fighter1, battle_nonce)

        record = BattleRecord(
            result=result,
            share_url=build_share_url(fighter0.address, fighter1.address, battle_nonce),
        )
        await self.cache.set(fighter0.address, fighter1.address, battle_nonce, record)

        logger.info(
            "Battle %s vs %s nonce=%s winner=%s turns=%s",
            fighter0.address,
            fighter1.address,
            battle_nonce,
            result.winner,
            result.total_turns,
        )
        return record
