"""
Main application entry point.
"""

import logging
import os

from fastapi import FastAPI

from booklog.api.v1.author_endpoints import router as author_router
from booklog.api.v1.book_endpoints import router as book_router
from booklog.api.v1.library_endpoints import router as library_router
from booklog.api.v1.reading_endpoints import router as reading_router
from booklog.api.v1.series_endpoints import router as series_router

app = FastAPI(
    title="Booklog API",
    description="Catalog authors, books, series and reading sessions.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Include API routers
app.include_router(author_router, prefix="/api/v1", tags=["authors"])
app.include_router(book_router, prefix="/api/v1", tags=["books"])
app.include_router(series_router, prefix="/api/v1", tags=["series"])
app.include_router(reading_router, prefix="/api/v1", tags=["readings"])
app.include_router(library_router, prefix="/api/v1", tags=["library"])


@app.get("/")
def read_root():
    """Root endpoint."""
    return {
        "message": "Welcome to the Booklog API",
        "docs": "/docs",
        "health": "/api/v1/health"
    }


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run("booklog.main:app", host="0.0.0.0", port=8000, reload=True)
