"""FastAPI main application."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from scorerelay.routes import games, submit_score
from scorerelay.settings import settings
import logging

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the relay application."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    
    fastapi_app = FastAPI(
        title="Score Relay API",
        description="Relays arcade score submissions to the Google Sheets webhook",
        version="1.0.0",
    )
    
    # CORS middleware
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    # Include routers
    fastapi_app.include_router(submit_score.router)
    fastapi_app.include_router(games.router)
    
    @fastapi_app.get("/")
    async def root():
        """Root endpoint."""
        return {"message": "Score Relay API", "docs": "/docs"}
    
    @fastapi_app.get("/health")
    async def health():
        """Health check."""
        return {"status": "ok", "configured": settings.relay_config().is_configured}
    
    if not settings.relay_config().is_configured:
        logger.warning("[APP] Sheets webhook not configured; submissions will answer 500")
    
    return fastapi_app


app = create_app()
