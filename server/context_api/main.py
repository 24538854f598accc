"""Pawsy Context API - FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .routes import context, facts

settings = get_settings()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Pawsy Context API",
    description="Scores pet health facts and assembles prioritized AI context",
    version="1.0.0",
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Include routers
app.include_router(context.router)
app.include_router(facts.router)


@app.get("/health")
async def health_check():
    """Health check endpoint for the API."""
    return {"status": "healthy", "service": "context-api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "server.context_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
