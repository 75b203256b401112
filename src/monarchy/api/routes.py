"""HTTP routes for the Monarchy combat API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from monarchy.config import get_settings
from monarchy.database import check_database_health, get_db
from monarchy.domain.enums import ErrorCode
from monarchy.domain.rules_config import DEFAULT_RULES
from monarchy.factory import create_combat_service
from monarchy.schemas import (
    AttackRequestIn,
    CombatErrorOut,
    CombatPreviewOut,
    CombatResultOut,
)
from monarchy.services import CombatRejected, CombatService

router = APIRouter()

ERROR_STATUS: dict[ErrorCode, int] = {
    ErrorCode.MISSING_PARAMS: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PARAM: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INSUFFICIENT_RESOURCES: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.WAR_REQUIRED: status.HTTP_409_CONFLICT,
    ErrorCode.RESTORATION_ACTIVE: status.HTTP_409_CONFLICT,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

SessionDep = Annotated[Session, Depends(get_db)]


def get_combat_service(db: SessionDep) -> CombatService:
    return create_combat_service(db)


CombatServiceDep = Annotated[CombatService, Depends(get_combat_service)]

_ERROR_RESPONSES = {
    code: {"model": CombatErrorOut} for code in sorted(set(ERROR_STATUS.values()))
}


def _error_response(rejected: CombatRejected) -> JSONResponse:
    body = CombatErrorOut(error_code=rejected.error_code, error=rejected.error)
    return JSONResponse(
        status_code=ERROR_STATUS.get(rejected.error_code, status.HTTP_400_BAD_REQUEST),
        content=body.model_dump(mode="json"),
    )


@router.get("/health")
def health(db: SessionDep) -> dict[str, object]:
    healthy = check_database_health(db)
    return {"status": "ok" if healthy else "degraded", "database": healthy}


@router.post("/combat/attack", response_model=CombatResultOut, responses=_ERROR_RESPONSES)
def attack(payload: AttackRequestIn, service: CombatServiceDep):
    result = service.resolve_combat(payload.to_domain())
    if isinstance(result, CombatRejected):
        return _error_response(result)
    return CombatResultOut.model_validate(result.to_dict())


@router.post("/combat/preview", response_model=CombatPreviewOut, responses=_ERROR_RESPONSES)
def preview(payload: AttackRequestIn, service: CombatServiceDep):
    result = service.preview_combat(payload.to_domain())
    if isinstance(result, CombatRejected):
        return _error_response(result)
    return CombatPreviewOut.model_validate(result.to_dict())


@router.get("/rules")
def rules_overview() -> dict[str, object]:
    """Snapshot of the combat constants clients may display."""

    rules = DEFAULT_RULES
    return {
        "rules_version": get_settings().rules_version,
        "combat": {
            "with_ease_ratio": rules.combat.with_ease_ratio,
            "good_fight_ratio": rules.combat.good_fight_ratio,
            "turn_cost": rules.combat.turn_cost,
            "land_floor": rules.combat.land_floor,
            "gold_per_acre": rules.combat.gold_per_acre,
        },
        "war": {"attacks_before_declaration": rules.war.attacks_before_declaration},
        "restoration": {
            "land_loss_threshold": rules.restoration.land_loss_threshold,
            "damage_based_hours": rules.restoration.damage_based_hours,
            "death_based_hours": rules.restoration.death_based_hours,
        },
    }
