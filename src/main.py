import logging
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from config import settings
from create_tables import create_tables
from database import SessionLocal
from logging_config import setup_json_logging

from modules.auth.services.auth_service import AuthService
from modules.documents.services import DocumentRegistry
from modules.events.controllers.event_controller import router as event_router
from modules.documents.controllers.document_controller import router as document_router
from modules.documents.controllers.signature_controller import router as signature_router
from modules.auth.controllers.auth_controller import router as auth_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- Startup logic ---
    setup_json_logging()
    create_tables()
    registry = DocumentRegistry(SessionLocal, settings.REGISTRY_ADMINISTRATOR)
    registry.initialize()
    app.state.registry = registry
    _seed_administrator_account(registry.administrator)
    logger.info("Registry ready", extra={"administrator": registry.administrator})
    yield
    # --- Shutdown logic ---
    logger.info("Application stopped")


def _seed_administrator_account(identity: str):
    """Creates the administrator login once; later starts leave it untouched"""
    with SessionLocal() as session:
        if AuthService.seed_account(session, identity, settings.ADMINISTRATOR_NAME, settings.ADMINISTRATOR_PASSWORD):
            logger.info("Administrator account created", extra={"identity": identity})
        else:
            logger.info("Administrator account already exists", extra={"identity": identity})


app = FastAPI(
    title="Legal Document Signing Registry",
    description="Registers document fingerprints and collects signatures from designated signatories",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=[
        "Accept",
        "Accept-Language",
        "Content-Language",
        "Content-Type",
        "Authorization",
        "X-Requested-With",
        "Origin",
    ],
    max_age=86400,
)
# Routers
app.include_router(auth_router)
app.include_router(event_router, prefix="/events", tags=["events"])
app.include_router(document_router, prefix="/documents", tags=["documents"])
app.include_router(signature_router, prefix="/documents", tags=["documents"])


@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
