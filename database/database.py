from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.config_loader import load_config


def create_db_engine(url: str):
    return create_engine(url, pool_pre_ping=True)


def create_session_factory(bind) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


DATABASE_URL = load_config().database.url

engine = create_db_engine(DATABASE_URL)
SessionLocal = create_session_factory(engine)
