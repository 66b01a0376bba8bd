from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def is_memory_database(url: str) -> bool:
    return url in {"sqlite://", "sqlite:///:memory:"}


def build_engine(database_url: str):
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # one shared connection, or every session would see its own empty db
        if is_memory_database(database_url):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True)


def build_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
