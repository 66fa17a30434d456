"""FastAPI dependencies and request validation helpers."""
import re

from fastapi import HTTPException, status

from ethrpg.core import redis as redis_core
from ethrpg.services.battle import BattleService
from ethrpg.services.battle_cache import BattleCache

ETH_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")
ENS_RE = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9.-]*\.eth$")
NONCE_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")
MAX_INPUT_LENGTH = 256

_battle_service: BattleService | None = None


def get_redis():
    """Provide Redis client (singleton), None when not configured."""
    return redis_core.get_redis()


def get_battle_service() -> BattleService:
    """Provide the battle service (singleton) with its cache."""
    global _battle_service  # noqa: PLW0603
    if _battle_service is None:
        _battle_service = BattleService(BattleCache(get_redis()))
    return _battle_service


def is_valid_address(value: str) -> bool:
    """0x-prefixed 40-hex address or an ENS name."""
    if len(value) > MAX_INPUT_LENGTH:
        return False
    return bool(ETH_ADDRESS_RE.match(value) or ENS_RE.match(value))


def is_valid_nonce(value: str) -> bool:
    return bool(NONCE_RE.match(value))


def bad_request(code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"code": code, "message": message},
    )
