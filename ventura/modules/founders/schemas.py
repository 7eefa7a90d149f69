from __future__ import annotations

import datetime as dt

from pydantic import EmailStr, Field

from ventura.shared.schemas import ApiModel


class FounderCreate(ApiModel):
    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    role: str = Field(default="", max_length=120)
    linkedin_url: str = Field(default="", max_length=500)


class FounderUpdate(ApiModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    email: EmailStr | None = None
    role: str | None = Field(default=None, max_length=120)
    linkedin_url: str | None = Field(default=None, max_length=500)


class FounderOut(ApiModel):
    id: int
    company_id: int
    name: str
    email: str
    role: str
    linkedin_url: str
    created_at: dt.datetime
    updated_at: dt.datetime
