from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ventura.core.db.session import get_db
from ventura.core.security.auth import Actor
from ventura.core.security.dependencies import get_actor
from ventura.modules.portfolio import service
from ventura.modules.portfolio.schemas import PortfolioCompanyCreate, PortfolioCompanyOut, PortfolioCompanyUpdate
from ventura.shared.exceptions import NotFound
from ventura.shared.schemas import MessageOut

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("/companies", response_model=list[PortfolioCompanyOut])
def list_companies(db: Session = Depends(get_db), actor: Actor = Depends(get_actor)) -> list[PortfolioCompanyOut]:
    return service.list_companies(db, organization_id=actor.organization_id)


@router.post("/companies", response_model=PortfolioCompanyOut, status_code=status.HTTP_201_CREATED)
def create_company(
    payload: PortfolioCompanyCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> PortfolioCompanyOut:
    return service.create_company(db, organization_id=actor.organization_id, data=payload)


@router.get("/companies/{company_id}", response_model=PortfolioCompanyOut)
def get_company(
    company_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> PortfolioCompanyOut:
    try:
        return service.get_company(db, organization_id=actor.organization_id, company_id=company_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=f"{e.entity} not found")


@router.put("/companies/{company_id}", response_model=PortfolioCompanyOut)
def update_company(
    company_id: int,
    payload: PortfolioCompanyUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> PortfolioCompanyOut:
    try:
        return service.update_company(db, organization_id=actor.organization_id, company_id=company_id, data=payload)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=f"{e.entity} not found")


@router.delete("/companies/{company_id}", response_model=MessageOut)
def delete_company(
    company_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> MessageOut:
    try:
        service.delete_company(db, organization_id=actor.organization_id, company_id=company_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=f"{e.entity} not found")
    return MessageOut(message="Company deleted successfully")
