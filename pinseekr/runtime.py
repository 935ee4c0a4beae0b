from __future__ import annotations

from functools import lru_cache

from pinseekr.config import load_settings
from pinseekr.service import CupService
from pinseekr.storage.database import create_db_engine, init_db, make_session_factory
from pinseekr.storage.repository import CupRepository


@lru_cache(maxsize=1)
def cup_service() -> CupService:
    settings = load_settings()
    engine = create_db_engine(settings.database_url)
    init_db(engine)
    repo = CupRepository(make_session_factory(engine))
    return CupService(repo, default_name=settings.cup_name)
