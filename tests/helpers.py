from datetime import datetime, timedelta

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base
from create_tables import create_tables
from modules.documents.services.registry_service import DocumentRegistry

ADMIN = "registry-admin"
ADMIN_PASSWORD = "admin-secret"
FINGERPRINT = "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08"


class FakeClock:
    def __init__(self, start=datetime(2025, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now = self.now + timedelta(seconds=seconds)


def make_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def reset_schema(engine):
    Base.metadata.drop_all(bind=engine)
    create_tables(bind=engine)


def make_registry(session_factory: sessionmaker, clock=None, administrator=ADMIN) -> DocumentRegistry:
    registry = DocumentRegistry(session_factory, administrator, clock=clock or FakeClock())
    registry.initialize()
    return registry
