from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ventura.core.db.session import get_db
from ventura.core.security.auth import Actor
from ventura.core.security.dependencies import get_actor
from ventura.modules.monthly_updates import service
from ventura.modules.monthly_updates.schemas import MonthlyUpdateIn, MonthlyUpdateOut
from ventura.shared.exceptions import NotFound, ValidationError
from ventura.shared.schemas import MessageOut

router = APIRouter(tags=["monthly-updates"])


@router.get("/monthly-updates", response_model=list[MonthlyUpdateOut])
def list_updates(db: Session = Depends(get_db), actor: Actor = Depends(get_actor)) -> list[MonthlyUpdateOut]:
    return service.list_updates(db, organization_id=actor.organization_id)


@router.get("/monthly-updates/{update_id}", response_model=MonthlyUpdateOut)
def get_update(
    update_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> MonthlyUpdateOut:
    try:
        return service.get_update(db, organization_id=actor.organization_id, update_id=update_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=f"{e.entity} not found")


@router.put("/monthly-updates/{update_id}", response_model=MonthlyUpdateOut)
def replace_update(
    update_id: int,
    payload: MonthlyUpdateIn,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> MonthlyUpdateOut:
    try:
        return service.replace_update(db, organization_id=actor.organization_id, update_id=update_id, data=payload)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=f"{e.entity} not found")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/monthly-updates/{update_id}", response_model=MessageOut)
def delete_update(
    update_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> MessageOut:
    try:
        service.delete_update(db, organization_id=actor.organization_id, update_id=update_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=f"{e.entity} not found")
    return MessageOut(message="Monthly update deleted successfully")


@router.get("/portfolio/companies/{company_id}/updates", response_model=list[MonthlyUpdateOut])
def list_company_updates(
    company_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> list[MonthlyUpdateOut]:
    try:
        return service.list_updates(db, organization_id=actor.organization_id, company_id=company_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=f"{e.entity} not found")


@router.post(
    "/portfolio/companies/{company_id}/updates",
    response_model=MonthlyUpdateOut,
    status_code=status.HTTP_201_CREATED,
)
def create_update(
    company_id: int,
    payload: MonthlyUpdateIn,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> MonthlyUpdateOut:
    try:
        return service.create_update(db, organization_id=actor.organization_id, company_id=company_id, data=payload)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=f"{e.entity} not found")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
