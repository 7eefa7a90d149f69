from __future__ import annotations

from decimal import Decimal

from sqlalchemy.orm import Session

from ventura.modules.deals.models import Deal
from ventura.shared.enums import DealStage

# (company, sector, stage, requested, valuation, round, team, product, market, traction, founder, email)
SAMPLE_DEALS: tuple[tuple, ...] = (
    ("TechFlow AI", "AI/ML", DealStage.incoming, 2_000_000, 10_000_000, "Seed", 8, 7, 9, 6, "Sarah Chen", "sarah@techflow.ai"),
    ("GreenEnergy Solutions", "CleanTech", DealStage.incoming, 1_500_000, 6_000_000, "Pre-Seed", 7, 8, 8, 5, "Michael Green", "michael@greenenergy.io"),
    ("FinanceBot", "Fintech", DealStage.screening, 3_000_000, 15_000_000, "Series A", 9, 8, 7, 8, "David Kim", "david@financebot.com"),
    ("HealthTrack Pro", "HealthTech", DealStage.screening, 1_000_000, 5_000_000, "Seed", 7, 9, 8, 6, "Dr. Emily Watson", "emily@healthtrack.pro"),
    ("CloudSecurity Inc", "Cybersecurity", DealStage.due_diligence, 5_000_000, 25_000_000, "Series A", 9, 9, 9, 7, "Alex Rodriguez", "alex@cloudsec.io"),
    ("EduLearn Platform", "EdTech", DealStage.due_diligence, 2_500_000, 12_000_000, "Seed", 8, 8, 7, 8, "Jennifer Liu", "jen@edulearn.com"),
    ("LogiChain", "Supply Chain", DealStage.term_sheet, 4_000_000, 20_000_000, "Series A", 8, 9, 8, 9, "Robert Park", "robert@logichain.io"),
)


def seed_sample_deals(db: Session, *, organization_id: int) -> list[Deal]:
    """Add the sample pipeline to an organization. Flushes only."""
    deals: list[Deal] = []
    for (name, sector, stage, requested, valuation, round_stage, team, product, market, traction, founder, email) in SAMPLE_DEALS:
        deal = Deal(
            organization_id=organization_id,
            company_name=name,
            sector=sector,
            stage=stage.value,
            requested_amount=Decimal(requested),
            valuation=Decimal(valuation),
            round_stage=round_stage,
            team_score=team,
            product_score=product,
            market_score=market,
            traction_score=traction,
            founder_name=founder,
            founder_email=email,
            notes="",
        )
        db.add(deal)
        deals.append(deal)
    db.flush()
    return deals
