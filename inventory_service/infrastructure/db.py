from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from inventory_service.core_settings import Settings
from inventory_service.domain.models import Base

def create_engine_for_url(url: str, pool_size: int = 10, max_overflow: int = 20) -> Engine:
    if url.startswith("sqlite"):
        # One shared connection so in-memory databases survive across sessions
        return create_engine(
            url,
            echo=False,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        url,
        echo=False,
        future=True,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,
    )

def create_engine_from_settings(settings: Settings) -> Engine:
    return create_engine_for_url(settings.database_url, settings.DB_POOL_SIZE, settings.DB_MAX_OVERFLOW)

def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)

def init_models(engine: Engine) -> None:
    Base.metadata.create_all(engine)
