from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from tracker.models.base import Base
import tracker.models


def create_session_factory(database_url: str, **engine_kwargs) -> sessionmaker:
    engine = create_engine(database_url, pool_pre_ping=True, **engine_kwargs)
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def get_base_metadata():
    return Base.metadata
