from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ventura.core.db.session import get_db
from ventura.core.security.auth import Actor
from ventura.core.security.dependencies import get_actor
from ventura.modules.deals import service
from ventura.modules.deals.schemas import (
    DealCloseOut,
    DealCloseRequest,
    DealCreate,
    DealLoseRequest,
    DealOut,
    DealStagePatch,
)
from ventura.shared.enums import DealStage
from ventura.shared.exceptions import Conflict, NotFound, ValidationError
from ventura.shared.schemas import MessageOut

router = APIRouter(prefix="/deals", tags=["deals"])


@router.get("", response_model=list[DealOut])
def list_deals(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    archived: bool | None = Query(default=None),
    stage: DealStage | None = Query(default=None),
) -> list[DealOut]:
    return service.list_deals(db, organization_id=actor.organization_id, archived=archived, stage=stage)


@router.post("", response_model=DealOut, status_code=status.HTTP_201_CREATED)
def create_deal(
    payload: DealCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> DealOut:
    return service.create_deal(db, actor=actor, data=payload)


@router.patch("/{deal_id}/stage", response_model=DealOut)
def patch_deal_stage(
    deal_id: int,
    payload: DealStagePatch,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> DealOut:
    try:
        return service.patch_stage(db, actor=actor, deal_id=deal_id, patch=payload)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=f"{e.entity} not found")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Conflict as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/{deal_id}/close", response_model=DealCloseOut)
def close_deal(
    deal_id: int,
    payload: DealCloseRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> DealCloseOut:
    try:
        _, company = service.close_deal(db, actor=actor, deal_id=deal_id, payload=payload)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=f"{e.entity} not found")
    except Conflict as e:
        raise HTTPException(status_code=409, detail=str(e))

    if company is None:
        return DealCloseOut(message="Deal closed")
    return DealCloseOut(message="Deal closed and converted to portfolio company", company_id=company.id)


@router.post("/{deal_id}/lose", response_model=MessageOut)
def lose_deal(
    deal_id: int,
    payload: DealLoseRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> MessageOut:
    try:
        service.lose_deal(db, actor=actor, deal_id=deal_id, payload=payload)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=f"{e.entity} not found")
    except Conflict as e:
        raise HTTPException(status_code=409, detail=str(e))
    return MessageOut(message="Deal marked as lost and archived")
