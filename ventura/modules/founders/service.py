from __future__ import annotations

import structlog
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ventura.modules.founders.models import Founder
from ventura.modules.founders.schemas import FounderCreate, FounderUpdate
from ventura.modules.portfolio import service as portfolio_service
from ventura.shared.exceptions import Conflict, NotFound

log = structlog.get_logger()


def _ensure_email_free(db: Session, *, organization_id: int, email: str, exclude_id: int | None = None) -> None:
    stmt = select(Founder.id).where(
        Founder.organization_id == organization_id,
        func.lower(Founder.email) == email.lower(),
    )
    if exclude_id is not None:
        stmt = stmt.where(Founder.id != exclude_id)
    if db.execute(stmt).first() is not None:
        raise Conflict(f"A founder with email {email} already exists")


def list_founders(db: Session, *, organization_id: int, company_id: int | None = None) -> list[Founder]:
    stmt = select(Founder).where(Founder.organization_id == organization_id)
    if company_id is not None:
        portfolio_service.get_company(db, organization_id=organization_id, company_id=company_id)
        stmt = stmt.where(Founder.company_id == company_id)
    return list(db.execute(stmt.order_by(Founder.name, Founder.id)).scalars().all())


def get_founder(db: Session, *, organization_id: int, founder_id: int) -> Founder:
    stmt = select(Founder).where(Founder.organization_id == organization_id, Founder.id == founder_id)
    founder = db.execute(stmt).scalar_one_or_none()
    if founder is None:
        raise NotFound("Founder", founder_id)
    return founder


def create_founder(db: Session, *, organization_id: int, company_id: int, data: FounderCreate) -> Founder:
    company = portfolio_service.get_company(db, organization_id=organization_id, company_id=company_id)
    email = str(data.email)
    _ensure_email_free(db, organization_id=organization_id, email=email)

    founder = Founder(
        organization_id=organization_id,
        company_id=company.id,
        name=data.name.strip(),
        email=email,
        role=data.role,
        linkedin_url=data.linkedin_url,
    )
    db.add(founder)
    db.commit()
    db.refresh(founder)

    log.info("founder.created", founder_id=founder.id, company_id=company.id)
    return founder


def update_founder(db: Session, *, organization_id: int, founder_id: int, data: FounderUpdate) -> Founder:
    founder = get_founder(db, organization_id=organization_id, founder_id=founder_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in changes:
        changes["email"] = str(changes["email"])
        _ensure_email_free(db, organization_id=organization_id, email=changes["email"], exclude_id=founder.id)

    for field, value in changes.items():
        setattr(founder, field, value)
    db.commit()
    db.refresh(founder)

    log.info("founder.updated", founder_id=founder.id, fields=sorted(changes))
    return founder


def delete_founder(db: Session, *, organization_id: int, founder_id: int) -> None:
    founder = get_founder(db, organization_id=organization_id, founder_id=founder_id)
    db.delete(founder)
    db.commit()
    log.info("founder.deleted", founder_id=founder_id)
