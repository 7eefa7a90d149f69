from __future__ import annotations

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ventura.core.db.base import Base, IdMixin, OrganizationScopedMixin, TimestampMixin


class Founder(Base, IdMixin, OrganizationScopedMixin, TimestampMixin):
    __tablename__ = "founders"

    company_id: Mapped[int] = mapped_column(
        ForeignKey("portfolio_companies.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(200))
    email: Mapped[str] = mapped_column(String(320))
    role: Mapped[str] = mapped_column(String(120), default="")
    linkedin_url: Mapped[str] = mapped_column(String(500), default="")

    __table_args__ = (UniqueConstraint("organization_id", "email", name="uq_founders_org_email"),)
