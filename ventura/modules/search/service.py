from __future__ import annotations

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from ventura.modules.deals.models import Deal
from ventura.modules.portfolio.models import PortfolioCompany
from ventura.modules.search.schemas import SearchResponse, SearchResult

MAX_RESULTS_PER_GROUP = 5

STATIC_PAGES: tuple[SearchResult, ...] = (
    SearchResult(type="page", name="Dashboard", description="Home dashboard", url="/"),
    SearchResult(type="page", name="Portfolio", description="Portfolio companies", url="/portfolio"),
    SearchResult(type="page", name="Deals", description="Deal flow pipeline", url="/deals"),
    SearchResult(type="page", name="Admin Panel", description="User management & audit logs", url="/admin"),
    SearchResult(type="page", name="Documentation", description="Platform documentation", url="/docs"),
    SearchResult(type="page", name="API Reference", description="API documentation", url="/api-reference"),
)


def _matching_pages(needle: str) -> list[SearchResult]:
    if not needle:
        return list(STATIC_PAGES)
    return [p for p in STATIC_PAGES if needle in p.name.lower() or needle in p.description.lower()]


def global_search(db: Session, *, organization_id: int, query: str) -> SearchResponse:
    needle = query.strip().lower()
    if not needle:
        return SearchResponse(companies=[], deals=[], pages=_matching_pages(""))

    companies = db.execute(
        select(PortfolioCompany)
        .where(
            PortfolioCompany.organization_id == organization_id,
            or_(
                func.lower(PortfolioCompany.name).contains(needle, autoescape=True),
                func.lower(PortfolioCompany.sector).contains(needle, autoescape=True),
            ),
        )
        .order_by(PortfolioCompany.name)
        .limit(MAX_RESULTS_PER_GROUP)
    ).scalars()

    deals = db.execute(
        select(Deal)
        .where(
            Deal.organization_id == organization_id,
            or_(
                func.lower(Deal.company_name).contains(needle, autoescape=True),
                func.lower(Deal.sector).contains(needle, autoescape=True),
            ),
        )
        .order_by(Deal.created_at.desc(), Deal.id.desc())
        .limit(MAX_RESULTS_PER_GROUP)
    ).scalars()

    return SearchResponse(
        companies=[
            SearchResult(
                id=c.id,
                type="company",
                name=c.name,
                description=f"{c.sector} • {c.round_stage}",
                url=f"/portfolio/{c.id}",
            )
            for c in companies
        ],
        deals=[
            SearchResult(
                id=d.id,
                type="deal",
                name=d.company_name,
                description=f"{d.sector} • {d.stage}",
                url="/deals",
            )
            for d in deals
        ],
        pages=_matching_pages(needle),
    )
