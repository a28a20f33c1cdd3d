"""FastAPI application."""

from fastapi import FastAPI

from scholargen.api.routes.health import router as health_router
from scholargen.api.routes.metrics import router as metrics_router
from scholargen.api.routes.papers import router as papers_router

app = FastAPI(title="ScholarGen API", version="0.1.0")

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(papers_router, tags=["papers"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "ScholarGen API", "version": "0.1.0"}
