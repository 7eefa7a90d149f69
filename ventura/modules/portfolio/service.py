from __future__ import annotations

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from ventura.modules.deals.models import Deal
from ventura.modules.deals.schemas import DealCloseRequest
from ventura.modules.founders.models import Founder
from ventura.modules.monthly_updates.models import MonthlyUpdate
from ventura.modules.portfolio.models import PortfolioCompany
from ventura.modules.portfolio.schemas import PortfolioCompanyCreate, PortfolioCompanyUpdate
from ventura.shared.exceptions import NotFound
from ventura.shared.utils import utcnow

log = structlog.get_logger()


def list_companies(db: Session, *, organization_id: int) -> list[PortfolioCompany]:
    stmt = (
        select(PortfolioCompany)
        .where(PortfolioCompany.organization_id == organization_id)
        .order_by(PortfolioCompany.invested_at.desc(), PortfolioCompany.id.desc())
    )
    return list(db.execute(stmt).scalars().all())


def get_company(db: Session, *, organization_id: int, company_id: int) -> PortfolioCompany:
    stmt = select(PortfolioCompany).where(
        PortfolioCompany.organization_id == organization_id,
        PortfolioCompany.id == company_id,
    )
    company = db.execute(stmt).scalar_one_or_none()
    if company is None:
        raise NotFound("Company", company_id)
    return company


def create_company(db: Session, *, organization_id: int, data: PortfolioCompanyCreate) -> PortfolioCompany:
    values = data.model_dump()
    if values["invested_at"] is None:
        values["invested_at"] = utcnow()
    values["name"] = values["name"].strip()
    values["sector"] = values["sector"].strip()

    company = PortfolioCompany(organization_id=organization_id, **values)
    db.add(company)
    db.commit()
    db.refresh(company)

    log.info("portfolio.company_created", company_id=company.id, name=company.name)
    return company


def update_company(
    db: Session,
    *,
    organization_id: int,
    company_id: int,
    data: PortfolioCompanyUpdate,
) -> PortfolioCompany:
    company = get_company(db, organization_id=organization_id, company_id=company_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in changes.items():
        setattr(company, field, value)
    db.commit()
    db.refresh(company)

    log.info("portfolio.company_updated", company_id=company.id, fields=sorted(changes))
    return company


def delete_company(db: Session, *, organization_id: int, company_id: int) -> None:
    """Remove a company with its founders and monthly updates.

    Deals converted into it keep their archive entry; only the link is cleared.
    """
    company = get_company(db, organization_id=organization_id, company_id=company_id)

    db.execute(delete(Founder).where(Founder.company_id == company.id))
    db.execute(delete(MonthlyUpdate).where(MonthlyUpdate.company_id == company.id))
    db.execute(update(Deal).where(Deal.converted_company_id == company.id).values(converted_company_id=None))
    db.delete(company)
    db.commit()

    log.info("portfolio.company_deleted", company_id=company_id)


def create_company_from_deal(db: Session, *, deal: Deal, payload: DealCloseRequest) -> PortfolioCompany:
    """
    A closed deal becomes a portfolio company.

    The deal's ask is taken as the invested amount unless the close payload
    states what was actually wired. Flushes only; the caller owns the commit.
    """
    amount_invested = payload.amount_invested if payload.amount_invested is not None else deal.requested_amount

    company = PortfolioCompany(
        organization_id=deal.organization_id,
        name=deal.company_name,
        sector=deal.sector,
        amount_invested=amount_invested,
        current_valuation=deal.valuation,
        round_stage=deal.round_stage,
        invested_at=utcnow(),
        cash_remaining=payload.cash_remaining,
        monthly_burn_rate=payload.monthly_burn_rate,
        monthly_revenue=payload.monthly_revenue,
    )
    db.add(company)
    db.flush()
    return company
