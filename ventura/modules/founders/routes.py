from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ventura.core.db.session import get_db
from ventura.core.security.auth import Actor
from ventura.core.security.dependencies import get_actor
from ventura.modules.founders import service
from ventura.modules.founders.schemas import FounderCreate, FounderOut, FounderUpdate
from ventura.shared.exceptions import Conflict, NotFound
from ventura.shared.schemas import MessageOut

router = APIRouter(tags=["founders"])


@router.get("/founders", response_model=list[FounderOut])
def list_founders(db: Session = Depends(get_db), actor: Actor = Depends(get_actor)) -> list[FounderOut]:
    return service.list_founders(db, organization_id=actor.organization_id)


@router.get("/founders/{founder_id}", response_model=FounderOut)
def get_founder(
    founder_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> FounderOut:
    try:
        return service.get_founder(db, organization_id=actor.organization_id, founder_id=founder_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=f"{e.entity} not found")


@router.put("/founders/{founder_id}", response_model=FounderOut)
def update_founder(
    founder_id: int,
    payload: FounderUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> FounderOut:
    try:
        return service.update_founder(db, organization_id=actor.organization_id, founder_id=founder_id, data=payload)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=f"{e.entity} not found")
    except Conflict as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/founders/{founder_id}", response_model=MessageOut)
def delete_founder(
    founder_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> MessageOut:
    try:
        service.delete_founder(db, organization_id=actor.organization_id, founder_id=founder_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=f"{e.entity} not found")
    return MessageOut(message="Founder deleted successfully")


@router.get("/portfolio/companies/{company_id}/founders", response_model=list[FounderOut])
def list_company_founders(
    company_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> list[FounderOut]:
    try:
        return service.list_founders(db, organization_id=actor.organization_id, company_id=company_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=f"{e.entity} not found")


@router.post(
    "/portfolio/companies/{company_id}/founders",
    response_model=FounderOut,
    status_code=status.HTTP_201_CREATED,
)
def create_founder(
    company_id: int,
    payload: FounderCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> FounderOut:
    try:
        return service.create_founder(db, organization_id=actor.organization_id, company_id=company_id, data=payload)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=f"{e.entity} not found")
    except Conflict as e:
        raise HTTPException(status_code=409, detail=str(e))
