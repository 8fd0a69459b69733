from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from services.config import get_config_for_service

# sqlite:///./recipes.db locally, a postgresql:// URL in deployments
DATABASE_URL = get_config_for_service("recipes").db


def make_engine(url: str, **kwargs):
    """
    Create an engine for `url`. SQLite connections are shared across the
    threads FastAPI runs sync work on, so the same-thread check is disabled.
    """
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True, **kwargs)


engine = make_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db(bind=None):
    """
    Create any missing tables.
    """
    # models must be imported so their tables are registered on Base.metadata
    from services.recipes import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
