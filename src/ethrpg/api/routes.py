import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ethrpg.api import schemas
from ethrpg.api.deps import bad_request, get_battle_service, is_valid_address, is_valid_nonce
from ethrpg.game.constants import CLASS_NAMES, CharacterClass
from ethrpg.game.matchups import get_matchup_info
from ethrpg.game.skills import effective_mp_cost, get_passive, get_skill
from ethrpg.services.battle import BattleService

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_ADDRESS = "INVALID_ADDRESS"
INVALID_NONCE = "INVALID_NONCE"
SAME_ADDRESS = "SAME_ADDRESS"
NOT_FOUND = "NOT_FOUND"


def _validated_nonce(nonce: Optional[str]) -> Optional[str]:
    if nonce is None or not nonce.strip():
        return None
    nonce = nonce.strip()
    if not is_valid_nonce(nonce):
        raise bad_request(INVALID_NONCE, "Invalid battle nonce format.")
    return nonce


# --- Battles ---


@router.post("/battle", response_model=schemas.BattleResponse, tags=["battle"])
async def create_battle(
    payload: schemas.BattleRequest,
    service: BattleService = Depends(get_battle_service),
):
    fighter0 = payload.fighter1.to_snapshot()
    fighter1 = payload.fighter2.to_snapshot()

    if not is_valid_address(fighter0.address):
        raise bad_request(INVALID_ADDRESS, "Please enter a valid first Ethereum address.")
    if not is_valid_address(fighter1.address):
        raise bad_request(INVALID_ADDRESS, "Please enter a valid second Ethereum address.")
    if fighter0.address == fighter1.address:
        raise bad_request(SAME_ADDRESS, "Cannot battle yourself. Please enter two different addresses.")

    nonce = _validated_nonce(payload.nonce)

    # replay only makes sense for a caller-supplied nonce
    if nonce:
        cached = await service.get_cached_battle(fighter0.address, fighter1.address, nonce)
        if cached is not None:
            return schemas.BattleResponse.from_record(cached)

    record = await service.execute_battle(fighter0, fighter1, nonce)
    return schemas.BattleResponse.from_record(record)


@router.get("/battle/{address1}/{address2}", response_model=schemas.BattleResponse, tags=["battle"])
async def get_battle(
    address1: str,
    address2: str,
    n: str = Query(..., description="battle nonce"),
    service: BattleService = Depends(get_battle_service),
):
    address1 = address1.strip().lower()
    address2 = address2.strip().lower()
    if not is_valid_address(address1) or not is_valid_address(address2):
        raise bad_request(INVALID_ADDRESS, "Please enter a valid Ethereum address.")
    nonce = _validated_nonce(n)
    if nonce is None:
        raise bad_request(INVALID_NONCE, "Battle nonce is required.")

    cached = await service.get_cached_battle(address1, address2, nonce)
    if cached is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": NOT_FOUND, "message": "Battle not found or expired."},
        )
    return schemas.BattleResponse.from_record(cached)


# --- Classes ---


def _class_info(class_id: CharacterClass) -> schemas.ClassInfoOut:
    skill = get_skill(class_id)
    info = get_matchup_info(class_id)
    return schemas.ClassInfoOut(
        id=class_id,
        name=CLASS_NAMES[class_id],
        skill=schemas.SkillOut(
            name=skill.name,
            mp_cost=skill.mp_cost,
            effective_mp_cost=effective_mp_cost(class_id),
            cooldown=skill.cooldown,
        ),
        passive=schemas.PassiveOut(name=get_passive(class_id).name),
        strong_vs=list(info.strong_vs),
        weak_vs=list(info.weak_vs),
    )


@router.get("/classes", response_model=schemas.ClassListResponse, tags=["classes"])
async def list_classes():
    return schemas.ClassListResponse(classes=[_class_info(c) for c in CharacterClass])


@router.get("/classes/{class_id}", response_model=schemas.ClassInfoOut, tags=["classes"])
async def get_class(class_id: str):
    try:
        resolved = CharacterClass(class_id.lower())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": NOT_FOUND, "message": f"Unknown class: {class_id}"},
        )
    return _class_info(resolved)
