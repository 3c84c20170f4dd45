"""
Lead Qualifier: FastAPI service

Lead intake with company enrichment and deterministic qualification scoring.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lead_qualifier.config import settings
from lead_qualifier.db.session import init_db
from lead_qualifier.routes import auth, leads


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and create tables on startup (idempotent)."""
    configure_logging()
    await init_db()
    yield


app = FastAPI(
    title="Lead Qualifier API",
    description="Lead enrichment and sales-qualification scoring.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(leads.router)
app.include_router(auth.router)


@app.get("/health", tags=["health"])
async def health():
    """Health check for load balancers and container orchestration."""
    return {"status": "ok"}
