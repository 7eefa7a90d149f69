from __future__ import annotations

import datetime as dt

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from ventura.modules.monthly_updates.models import MonthlyUpdate
from ventura.modules.monthly_updates.schemas import MonthlyUpdateIn
from ventura.modules.portfolio import service as portfolio_service
from ventura.shared.exceptions import NotFound, ValidationError
from ventura.shared.utils import utcnow

log = structlog.get_logger()

MONTH_NOT_ENDED = "Cannot submit update for current or future month. Please wait until the month has ended."


def first_of_month(value: dt.date) -> dt.date:
    return value.replace(day=1)


def ensure_month_ended(report_month: dt.date, *, today: dt.date | None = None) -> dt.date:
    """Normalize to the first of the month and reject months that are not over yet."""
    month = first_of_month(report_month)
    current = first_of_month(today or utcnow().date())
    if month >= current:
        raise ValidationError(MONTH_NOT_ENDED)
    return month


def list_updates(db: Session, *, organization_id: int, company_id: int | None = None) -> list[MonthlyUpdate]:
    stmt = select(MonthlyUpdate).where(MonthlyUpdate.organization_id == organization_id)
    if company_id is not None:
        portfolio_service.get_company(db, organization_id=organization_id, company_id=company_id)
        stmt = stmt.where(MonthlyUpdate.company_id == company_id)
    stmt = stmt.order_by(MonthlyUpdate.report_month.desc(), MonthlyUpdate.id.desc())
    return list(db.execute(stmt).scalars().all())


def get_update(db: Session, *, organization_id: int, update_id: int) -> MonthlyUpdate:
    stmt = select(MonthlyUpdate).where(
        MonthlyUpdate.organization_id == organization_id,
        MonthlyUpdate.id == update_id,
    )
    update = db.execute(stmt).scalar_one_or_none()
    if update is None:
        raise NotFound("Monthly update", update_id)
    return update


def create_update(db: Session, *, organization_id: int, company_id: int, data: MonthlyUpdateIn) -> MonthlyUpdate:
    """
    Record a company's report for a finished month.

    The company's cash, burn and revenue are overwritten with the reported
    figures in the same transaction, so runway and health follow the latest
    submission.
    """
    company = portfolio_service.get_company(db, organization_id=organization_id, company_id=company_id)
    values = data.model_dump()
    values["report_month"] = ensure_month_ended(data.report_month)

    update = MonthlyUpdate(organization_id=organization_id, company_id=company.id, **values)
    db.add(update)

    company.cash_remaining = update.cash_in_bank
    company.monthly_burn_rate = update.burn_rate
    company.monthly_revenue = update.mrr

    db.commit()
    db.refresh(update)

    log.info(
        "monthly_update.created",
        update_id=update.id,
        company_id=company.id,
        report_month=update.report_month.isoformat(),
    )
    return update


def replace_update(db: Session, *, organization_id: int, update_id: int, data: MonthlyUpdateIn) -> MonthlyUpdate:
    update = get_update(db, organization_id=organization_id, update_id=update_id)
    values = data.model_dump()
    values["report_month"] = ensure_month_ended(data.report_month)
    for field, value in values.items():
        setattr(update, field, value)
    db.commit()
    db.refresh(update)

    log.info("monthly_update.updated", update_id=update.id)
    return update


def delete_update(db: Session, *, organization_id: int, update_id: int) -> None:
    update = get_update(db, organization_id=organization_id, update_id=update_id)
    db.delete(update)
    db.commit()
    log.info("monthly_update.deleted", update_id=update_id)
