import logging
import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from noteai.api.v1.router import api_router
from noteai.config import settings
from noteai.core.view_invalidation import ViewInvalidator
from noteai.services.ai_gateway import GeminiGateway
from noteai.services.ai_service import AIService
from noteai.services.api_call_logger import ApiCallLogger
from noteai.services.note_service import NoteService
from noteai.services.profile_service import ProfileService

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s | %(levelname)-8s | %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(gateway: GeminiGateway = None) -> FastAPI:
    app = FastAPI(title="NoteAI API", version="1.0.0", docs_url="/docs")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Process-lifetime services, shared by all requests of this app instance
    app.state.api_logger = ApiCallLogger()
    app.state.views = ViewInvalidator()
    app.state.ai_service = AIService(
        gateway=gateway or GeminiGateway.from_settings(),
        api_logger=app.state.api_logger,
    )
    app.state.note_service = NoteService(
        views=app.state.views,
        ai_service=app.state.ai_service,
    )
    app.state.profile_service = ProfileService()

    app.include_router(api_router)

    @app.get("/healthz", tags=["health"])
    async def health_check():
        return {"status": "healthy"}

    @app.on_event("startup")
    async def startup_event():
        """Create database tables on startup with retry logic"""
        from noteai.db.base import Base
        from noteai.db.session import engine

        if not app.state.ai_service.gateway.has_api_key():
            logger.warning("GEMINI_API_KEY is not configured; AI features return placeholder results")

        max_retries = 5
        retry_delay = 2

        for attempt in range(max_retries):
            try:
                Base.metadata.create_all(bind=engine)
                logger.info("Database tables created successfully")
                break
            except Exception as e:
                logger.warning(f"Database connection attempt {attempt + 1} failed: {e}")
                if attempt < max_retries - 1:
                    time.sleep(retry_delay)
                else:
                    logger.error("Failed to connect to database after all retries")
                    raise

    return app


app = create_app()
