"""FastAPI application entry point for the Resume Builder API."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resume_builder.api.routes import health, resumes, templates
from resume_builder.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize resources on startup and clean up on shutdown."""
    configure_logging()
    yield


app = FastAPI(
    title="Resume Builder API",
    description="API for paginating resumes and exporting them as print-ready PDFs",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(templates.router, prefix="/api")
app.include_router(resumes.router, prefix="/api")


def main() -> None:
    """Start the development server."""
    import uvicorn

    uvicorn.run(
        "resume_builder.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
