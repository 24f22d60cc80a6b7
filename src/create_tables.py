import logging

from database import engine, Base
# Import every model so it registers with Base
from modules.documents.models import (  # noqa: F401
    Document, DocumentSignatory, RegistryState, Signature, User, UserDocumentIndex
)
from modules.events.models.domain_event import DomainEvent  # noqa: F401

logger = logging.getLogger(__name__)


def create_tables(bind=None):
    """Creates every registry table that does not exist yet"""
    logger.info("Creating tables", extra={"tables": list(Base.metadata.tables.keys())})
    Base.metadata.create_all(bind=bind or engine)


if __name__ == "__main__":
    create_tables()
