"""
Image Translation Studio - Main FastAPI Application
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Add parent directory to path
sys.path.append(str(Path(__file__).parent))

from api.exceptions import register_exception_handlers  # noqa: E402

# Import routers  # noqa: E402
from api.routers import gallery, image, system, translation  # noqa: E402

# Import configuration  # noqa: E402
from config import get_settings  # noqa: E402

# Import core components  # noqa: E402
from core.gallery_buffer import GalleryBuffer  # noqa: E402
from core.image_manager import ImageManager  # noqa: E402
from core.session import TranslationSession  # noqa: E402
from schemas import OutputSettings  # noqa: E402
from services.credentials import SettingsCredentialProvider  # noqa: E402
from services.translation_client import TranslationClient  # noqa: E402
from services.translation_service import TranslationService  # noqa: E402

# Get configuration
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.system.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Suppress watchfiles and SDK transport debug messages
logging.getLogger("watchfiles").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    # Startup
    logger.info("Starting Image Translation Studio server...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.system.debug}")

    image_manager = ImageManager(
        max_size_mb=settings.image.max_memory_mb,
        max_images=settings.image.max_images,
        thumbnail_width=settings.image.thumbnail_width,
    )
    gallery_buffer = GalleryBuffer()
    session = TranslationSession(OutputSettings(**settings.output.model_dump()))

    credentials = SettingsCredentialProvider(settings.gemini.api_key)
    if not credentials.has_credential():
        logger.warning("No Gemini API key configured; set GEMINI_API_KEY or POST /api/system/credential")

    client = TranslationClient(credentials, model=settings.gemini.model)
    translation_service = TranslationService(
        session=session,
        image_manager=image_manager,
        gallery=gallery_buffer,
        client=client,
        credentials=credentials,
    )

    logger.info("All managers initialized successfully")

    # Store managers in app state for access by routers
    app.state.image_manager = image_manager
    app.state.gallery = gallery_buffer
    app.state.session = session
    app.state.credentials = credentials
    app.state.translation_service = translation_service
    app.state.settings = settings
    app.state.config = settings.to_dict()
    app.state.debug = settings.system.debug

    yield

    # Shutdown
    logger.info("Shutting down Image Translation Studio server...")
    image_manager.cleanup()
    gallery_buffer.clear()
    logger.info("Server shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Image Translation Studio",
    description="Region-aware, multi-language image translation over Gemini image generation",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS for the browser front end
if settings.api.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(image.router, prefix="/api/image", tags=["Image"])
app.include_router(translation.router, prefix="/api/translation", tags=["Translation"])
app.include_router(gallery.router, prefix="/api/gallery", tags=["Gallery"])
app.include_router(system.router, prefix="/api/system", tags=["System"])


# Root endpoint
@app.get("/")
async def root():
    return {
        "name": "Image Translation Studio",
        "status": "running",
        "version": "1.0.0",
        "endpoints": {
            "image": "/api/image",
            "translation": "/api/translation",
            "gallery": "/api/gallery",
            "system": "/api/system",
            "docs": "/docs",
        },
    }


# Health check endpoint
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "services": {
            name: getattr(app.state, name, None) is not None
            for name in ("image_manager", "gallery", "session", "translation_service")
        },
    }


# Error handler
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": f"Internal server error: {str(exc)}"})


if __name__ == "__main__":
    reload_excludes = (
        ["*.log", "*.pyc", "__pycache__", ".git", ".venv", "venv"]
        if settings.system.debug
        else None
    )

    server_config = uvicorn.Config(
        "main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.system.debug,
        reload_excludes=reload_excludes,
        log_level=settings.system.log_level.lower(),
        loop="asyncio",
    )

    server = uvicorn.Server(server_config)

    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
    finally:
        logger.info("Server exiting...")
