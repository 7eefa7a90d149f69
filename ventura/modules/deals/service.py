from __future__ import annotations

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from ventura.core.security.auth import Actor
from ventura.modules.deals.models import Deal
from ventura.modules.deals.schemas import DealCloseRequest, DealCreate, DealLoseRequest, DealStagePatch
from ventura.modules.portfolio import service as portfolio_service
from ventura.modules.portfolio.models import PortfolioCompany
from ventura.shared.enums import ACTIVE_STAGES, DealStage
from ventura.shared.exceptions import Conflict, NotFound, ValidationError
from ventura.shared.utils import utcnow

log = structlog.get_logger()


def list_deals(
    db: Session,
    *,
    organization_id: int,
    archived: bool | None = None,
    stage: DealStage | None = None,
) -> list[Deal]:
    stmt = select(Deal).where(Deal.organization_id == organization_id)
    if archived is True:
        stmt = stmt.where(Deal.archived_at.is_not(None)).order_by(Deal.archived_at.desc(), Deal.id.desc())
    elif archived is None and stage is not None:
        stmt = stmt.where(Deal.stage == stage.value).order_by(Deal.created_at.desc(), Deal.id.desc())
    else:
        # Active pipeline is the default view.
        stmt = stmt.where(Deal.archived_at.is_(None)).order_by(Deal.created_at.desc(), Deal.id.desc())
    return list(db.execute(stmt).scalars().all())


def get_deal(db: Session, *, organization_id: int, deal_id: int) -> Deal:
    stmt = select(Deal).where(Deal.organization_id == organization_id, Deal.id == deal_id)
    deal = db.execute(stmt).scalar_one_or_none()
    if deal is None:
        raise NotFound("Deal", deal_id)
    return deal


def create_deal(db: Session, *, actor: Actor, data: DealCreate) -> Deal:
    deal = Deal(
        organization_id=actor.organization_id,
        company_name=data.company_name.strip(),
        sector=data.sector.strip(),
        stage=DealStage.incoming.value,
        requested_amount=data.requested_amount,
        valuation=data.valuation,
        round_stage=data.round_stage,
        team_score=data.team_score,
        product_score=data.product_score,
        market_score=data.market_score,
        traction_score=data.traction_score,
        founder_name=data.founder_name,
        founder_email=str(data.founder_email),
        notes=data.notes,
    )
    db.add(deal)
    db.commit()
    db.refresh(deal)

    log.info("deal.created", deal_id=deal.id, company_name=deal.company_name)
    return deal


def _require_active(deal: Deal) -> None:
    if deal.is_archived:
        raise Conflict(f"Deal {deal.id} is archived")


def patch_stage(db: Session, *, actor: Actor, deal_id: int, patch: DealStagePatch) -> Deal:
    deal = get_deal(db, organization_id=actor.organization_id, deal_id=deal_id)
    _require_active(deal)
    if patch.stage not in ACTIVE_STAGES:
        raise ValidationError(f"Stage '{patch.stage.value}' must be set through the close or lose operation")

    from_stage = deal.stage
    deal.stage = patch.stage.value
    db.commit()
    db.refresh(deal)

    log.info("deal.stage_changed", deal_id=deal.id, from_stage=from_stage, to_stage=deal.stage)
    return deal


def close_deal(db: Session, *, actor: Actor, deal_id: int, payload: DealCloseRequest) -> tuple[Deal, PortfolioCompany | None]:
    deal = get_deal(db, organization_id=actor.organization_id, deal_id=deal_id)
    _require_active(deal)

    company: PortfolioCompany | None = None
    if payload.convert_to_portfolio:
        company = portfolio_service.create_company_from_deal(db, deal=deal, payload=payload)
        deal.converted_company_id = company.id

    deal.stage = DealStage.closed.value
    deal.archived_at = utcnow()
    db.commit()
    db.refresh(deal)

    log.info(
        "deal.closed",
        deal_id=deal.id,
        converted=company is not None,
        company_id=company.id if company is not None else None,
    )
    return deal, company


def lose_deal(db: Session, *, actor: Actor, deal_id: int, payload: DealLoseRequest) -> Deal:
    deal = get_deal(db, organization_id=actor.organization_id, deal_id=deal_id)
    _require_active(deal)

    deal.stage = DealStage.lost.value
    deal.loss_reason = payload.reason.value
    deal.archived_at = utcnow()
    db.commit()
    db.refresh(deal)

    log.info("deal.lost", deal_id=deal.id, reason=deal.loss_reason)
    return deal
