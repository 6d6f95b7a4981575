from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool
from fastapi import Request

import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """
    Owns the engine and session factory for one application instance.

    Created by ``create_app``; ``open`` runs on startup and ``close`` on shutdown.
    """

    def __init__(self, database_url: str):
        self.database_url = database_url
        self.engine = None
        self.SessionLocal = None

    def open(self):
        if self.engine is not None:
            return
        if self.database_url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            # in-memory databases only live as long as their single connection
            if ":memory:" in self.database_url or self.database_url == "sqlite://":
                kwargs["poolclass"] = StaticPool
        else:
            kwargs = {
                "pool_pre_ping": True,
                "pool_recycle": 3600,
                "pool_size": 10,
                "max_overflow": 20,
            }
        self.engine = create_engine(self.database_url, **kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database connected: %s", self.engine.url.render_as_string(hide_password=True))

    def close(self):
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database connection closed")
        self.engine = None
        self.SessionLocal = None

    def session(self) -> Session:
        if self.SessionLocal is None:
            self.open()
        return self.SessionLocal()


def get_db(request: Request) -> Session:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
