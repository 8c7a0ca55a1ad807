import logging

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .database import Base, engine
from .deps import get_db
from .logging_setup import setup_logging
from .routers import cabinets, queue
from .settings import settings

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    setup_logging(settings)
    Base.metadata.create_all(bind=engine)

    app = FastAPI(
        title="Arcade Queue",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(cabinets.router, prefix=settings.api_prefix)
    app.include_router(queue.router, prefix=settings.api_prefix)

    @app.get(f"{settings.api_prefix}/health")
    def health(db: Session = Depends(get_db)):
        """Liveness probe that round-trips to the store."""
        try:
            db.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.exception("Health check failed")
            return JSONResponse(status_code=500, content={"status": "error", "message": str(e)})
        return {"status": "ok"}

    logger.info("Arcade queue API configured (prefix=%r)", settings.api_prefix)
    return app


app = create_app()
