from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.logging import logger
from .core.responses import UTF8JSONResponse
from .db.base import Base
from .db.session import engine
from .flows.gallery import GalleryFlow
from .services.directory_client import RemoteDirectoryClient
from .services.image_host import image_host
from .services.reconciler import DirectoryReconciler
from .services.record_store import RecordStore
from .api import gallery, admin


def build_gallery() -> GalleryFlow:
    """Wire the gallery flow to the configured remote directory and record cache."""
    reconciler = DirectoryReconciler(RemoteDirectoryClient(), RecordStore())
    return GalleryFlow(reconciler, image_host)


# Create FastAPI app
app = FastAPI(
    title="Volunteer Directory",
    description="Volunteer ID card gallery with an offline record cache",
    version="1.0.0",
    default_response_class=UTF8JSONResponse,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify allowed origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(gallery.router, prefix="/gallery", tags=["gallery"])
app.include_router(admin.router, prefix="/admin", tags=["admin"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@app.on_event("startup")
async def startup_event():
    """Create the cache table if needed and run the initial directory load."""
    logger.info("Starting volunteer directory...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Directory API: {settings.directory_api_url}")

    if settings.auto_create_db:
        try:
            Base.metadata.create_all(bind=engine)
            logger.info("AUTO_CREATE_DB enabled: tables created via metadata.")
        except Exception as e:
            logger.error(f"Error creating database tables with AUTO_CREATE_DB: {e}")
            raise

    app.state.gallery = build_gallery()
    await app.state.gallery.load()


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown event."""
    logger.info("Shutting down volunteer directory...")
