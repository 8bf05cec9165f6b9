# happydata/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from happydata.routes.dashboard import close_source, router as dashboard_router

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

logger = logging.getLogger("happydata")
logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))


@asynccontextmanager
async def lifespan(_: FastAPI):
    yield
    await close_source()


app = FastAPI(
    title="HappyData API",
    description="World Bank indicators alongside World Happiness Report scores",
    version="2026.10.19",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(dashboard_router)
logger.info("[init] dashboard router mounted")


@app.get("/")
def root():
    return {
        "ok": True,
        "routes": ["/v1/options", "/v1/countries", "/v1/country-view", "/v1/region-view"],
        "sources": ["World Bank WDI", "World Happiness Report"],
    }


@app.get("/healthz")
def healthz():
    # keep this super fast
    return {"status": "ok"}
