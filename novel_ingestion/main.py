"""FastAPI application exposing the chapter extraction pipeline."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import chapters_router, health_router
from .core.config import get_settings
from .core.logging import setup_logging

# Configure logging
setup_logging()

# Create FastAPI app
app = FastAPI(
    title="Novel Chapter Ingestion API",
    description="Chapter text and navigation extraction from novel hosting sites",
    version="1.0.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router)
app.include_router(chapters_router)


def run() -> None:
    import uvicorn
    settings = get_settings()
    
    uvicorn.run(
        "novel_ingestion.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
