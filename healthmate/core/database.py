from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from .config import settings


def _normalized_database_url(raw_url: str) -> str:
    """
    DATABASE_URL normalisation:
    - postgres:// or postgresql:// without a driver is rewritten to the psycopg3 dialect.
    - Everything else (SQLite etc.) is left as is.
    """
    if not raw_url:
        return "sqlite:///./healthmate.db"
    raw_url = raw_url.strip()
    if raw_url.startswith("postgres://"):
        return "postgresql+psycopg://" + raw_url[len("postgres://") :]
    if raw_url.startswith("postgresql://") and "+psycopg" not in raw_url.split("://", 1)[0]:
        return "postgresql+psycopg://" + raw_url[len("postgresql://") :]
    return raw_url


DATABASE_URL = _normalized_database_url(settings.database_url)


def make_engine(url: str):
    # In-memory SQLite: one shared connection so tables created by init_db are visible to every session
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    use_static_pool = url.startswith("sqlite") and ":memory:" in url
    return create_engine(
        url,
        connect_args=connect_args,
        poolclass=StaticPool if use_static_pool else None,
    )


engine = make_engine(DATABASE_URL)


def get_db():
    with Session(engine) as session:
        yield session


def init_db(bind=None):
    # Import registers the tables on SQLModel.metadata
    from healthmate import models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)
