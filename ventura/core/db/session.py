from __future__ import annotations

from collections.abc import Generator
from functools import lru_cache
import importlib

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from ventura.core.config import settings
from ventura.core.db.base import Base

MODEL_MODULES = (
    "ventura.core.db.models",
    "ventura.modules.deals.models",
    "ventura.modules.portfolio.models",
    "ventura.modules.founders.models",
    "ventura.modules.monthly_updates.models",
)


def import_model_modules() -> None:
    for module_name in MODEL_MODULES:
        importlib.import_module(module_name)


@lru_cache(maxsize=1)
def get_engine():
    connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
    engine = create_engine(settings.database_url, pool_pre_ping=True, connect_args=connect_args)
    import_model_modules()
    Base.metadata.create_all(bind=engine)
    return engine


def get_session_local() -> sessionmaker[Session]:
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, class_=Session)


def get_db() -> Generator[Session, None, None]:
    db = get_session_local()()
    try:
        yield db
    finally:
        db.close()
