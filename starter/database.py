from contextlib import contextmanager
from datetime import datetime
from typing import Generator, Union

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import create_engine, Column, Integer, String, DateTime, text
from sqlalchemy.engine import URL
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()

# --- Database Models ---

class UserDB(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# --- Data access ---

class Database:
    """
    Owns the engine and session factory for one process.

    Constructed explicitly at startup and handed to the router as a
    dependency; nothing in the application reaches for a module-level engine.
    """

    def __init__(self, url: Union[str, URL], **engine_kwargs):
        # Fix postgres:// to postgresql:// for SQLAlchemy compatibility
        if isinstance(url, str) and url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        if str(url).startswith("sqlite"):
            # Sessions are used from the threadpool, not the thread that opened them
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
        engine_kwargs.setdefault("pool_pre_ping", True)

        self.engine = create_engine(url, **engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Yield a session that is always closed afterwards"""
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def authenticate(self) -> None:
        """Round-trip a trivial query; raises if the database is unreachable"""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def sync(self) -> None:
        """Create any missing tables"""
        Base.metadata.create_all(bind=self.engine)

    async def verify(self, sync_schema: bool = False) -> None:
        await run_in_threadpool(self.authenticate)
        if sync_schema:
            await run_in_threadpool(self.sync)

    def dispose(self) -> None:
        self.engine.dispose()
