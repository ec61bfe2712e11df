"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ticketstream.config import get_settings
from ticketstream.infrastructure.database import engine, Base, SessionLocal
from ticketstream.core.logging import configure_logging
from ticketstream.application.services.auth_service import register_user
from ticketstream.core.middleware import setup_middleware
from ticketstream.core.exceptions import AppError, app_error_handler, global_exception_handler

# Import all models so SQLAlchemy knows about them
from ticketstream.domain.models.user import User
from ticketstream.domain.models.demande import Demande  # noqa: F401
from ticketstream.domain.models.commentaire import Commentaire  # noqa: F401
from ticketstream.domain.enums import UserRole
from ticketstream.domain.schemas.auth import UserCreate
from ticketstream.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

# Import routers
from ticketstream.interfaces.api.auth import router as auth_router
from ticketstream.interfaces.api.users import router as users_router
from ticketstream.interfaces.api.demandes import router as demandes_router
from ticketstream.interfaces.api.commentaires import router as commentaires_router

settings = get_settings()

configure_logging()
logger = structlog.get_logger(__name__)


def bootstrap_agent() -> None:
    """Create the configured agent account if it does not exist yet."""
    if not settings.BOOTSTRAP_AGENT_EMAIL or not settings.BOOTSTRAP_AGENT_PASSWORD:
        return

    db = SessionLocal()
    try:
        repo = SQLAlchemyUserRepository(db, User)
        if repo.get_by_email(settings.BOOTSTRAP_AGENT_EMAIL) is None:
            register_user(
                repo,
                UserCreate(
                    name="Agent",
                    email=settings.BOOTSTRAP_AGENT_EMAIL,
                    password=settings.BOOTSTRAP_AGENT_PASSWORD,
                    role=UserRole.AGENT,
                ),
            )
            logger.info("Bootstrap agent created", email=settings.BOOTSTRAP_AGENT_EMAIL)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting TicketStream API...", env=settings.ENVIRONMENT)

    # Dev convenience; production schemas are managed by migrations
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    bootstrap_agent()

    yield

    logger.info("TicketStream API stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title="TicketStream API",
        description="API for internal ticket management",
        version="1.0.0",
        lifespan=lifespan,
    )

    setup_middleware(app)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(demandes_router)
    app.include_router(commentaires_router)

    @app.get("/")
    def root():
        return {
            "name": "TicketStream",
            "version": "1.0.0",
            "status": "running",
            "docs": "/docs",
        }

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app


app = create_app()
